"""SQLAlchemy implementation of the entity store."""

from typing import TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import AddressInUseError, InvalidAccountError, RecordNotFoundError
from domain import layout
from domain.address import Address
from domain.entities.group import Group
from domain.entities.name_record import NameRecord
from domain.entities.post import Post
from domain.entities.profile import Profile
from domain.layout import Record
from domain.repositories.entity_store import Allocation, DepositSchedule
from infrastructure.database.models import RecordModel

R = TypeVar("R", Profile, Group, Post, NameRecord)


class SQLAlchemyEntityStore:
    """SQLAlchemy implementation of IEntityStore."""

    def __init__(
        self,
        session: AsyncSession,
        deposits: DepositSchedule | None = None,
    ) -> None:
        self._session = session
        self._deposits = deposits or DepositSchedule()

    async def get(self, address: Address, for_update: bool = False) -> Record | None:
        """Get whatever record is stored at an address."""
        model = await self._get_model(address, for_update)
        return layout.decode(address, model.data) if model else None

    async def get_profile(self, address: Address, for_update: bool = False) -> Profile:
        """Get a profile."""
        return await self._get_typed(address, Profile, for_update)

    async def get_group(self, address: Address, for_update: bool = False) -> Group:
        """Get a group."""
        return await self._get_typed(address, Group, for_update)

    async def get_post(self, address: Address, for_update: bool = False) -> Post:
        """Get a post."""
        return await self._get_typed(address, Post, for_update)

    async def get_name_record(
        self, address: Address, for_update: bool = False
    ) -> NameRecord | None:
        """Get a name record, or None if nothing is stored there."""
        record = await self.get(address, for_update)
        if record is None:
            return None
        if not isinstance(record, NameRecord):
            raise InvalidAccountError(str(address), "Expected a name record")
        return record

    async def exists(self, address: Address) -> bool:
        """Check whether an address is occupied."""
        stmt = select(func.count()).select_from(RecordModel).where(
            RecordModel.address == address.data
        )
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0

    async def create(
        self, record: Record, payer: Address, prefunded: int = 0
    ) -> Allocation:
        """Store a new record. The payer covers whatever ``prefunded`` does not."""
        address = record.address
        if await self.exists(address):
            raise AddressInUseError(str(address))

        data = layout.encode(record)
        required = self._deposits.required(len(data))
        charged = max(0, required - prefunded)
        deposit = prefunded + charged

        model = RecordModel(
            address=address.data,
            namespace=layout.namespace_of(record).value,
            data=data,
            size=len(data),
            deposit=deposit,
            payer=payer.data,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            # Lost a race for the same address to a concurrent transaction.
            raise AddressInUseError(str(address)) from exc

        return Allocation(address=address, deposit=deposit, charged=charged)

    async def save(self, record: Record) -> None:
        """Persist changes to an existing record."""
        address = record.address
        model = await self._get_model(address)
        if not model:
            raise RecordNotFoundError(str(address))
        if model.namespace != layout.namespace_of(record).value:
            raise InvalidAccountError(str(address))

        model.data = layout.encode(record)
        await self._session.flush()

    async def close(self, address: Address) -> int:
        """Destroy a record and return its released deposit."""
        model = await self._get_model(address, for_update=True)
        if not model:
            raise RecordNotFoundError(str(address))

        released = model.deposit
        await self._session.delete(model)
        await self._session.flush()
        return released

    async def deposit_of(self, address: Address) -> int | None:
        """Get the deposit held by a record."""
        model = await self._get_model(address)
        return model.deposit if model else None

    async def total_deposits(self) -> int:
        """Sum of all deposits currently held."""
        stmt = select(func.coalesce(func.sum(RecordModel.deposit), 0))
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def _get_model(
        self, address: Address, for_update: bool = False
    ) -> RecordModel | None:
        stmt = select(RecordModel).where(RecordModel.address == address.data)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _get_typed(self, address: Address, kind: type[R], for_update: bool) -> R:
        record = await self.get(address, for_update)
        if record is None:
            raise RecordNotFoundError(str(address))
        if not isinstance(record, kind):
            raise InvalidAccountError(
                str(address), f"Expected a {kind.__name__.lower()} record"
            )
        return record
