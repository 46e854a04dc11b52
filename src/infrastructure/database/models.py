"""SQLAlchemy ORM models."""

from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, DateTime, Integer, LargeBinary, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class RecordModel(Base):
    """A record stored as bytes at its derived address.

    The table is a byte-keyed store: relationships between records are
    recomputed from addresses, never expressed as foreign keys.
    """

    __tablename__ = "records"
    __table_args__ = (
        CheckConstraint("size = length(data)", name="ck_records_size"),
        CheckConstraint("deposit >= 0", name="ck_records_deposit"),
    )

    address: Mapped[bytes] = mapped_column(LargeBinary(32), primary_key=True)
    namespace: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    size: Mapped[int] = mapped_column(Integer, nullable=False)
    deposit: Mapped[int] = mapped_column(BigInteger, nullable=False)
    payer: Mapped[bytes] = mapped_column(LargeBinary(32), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )
