"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from domain.repositories.entity_store import DepositSchedule
from infrastructure.database.repositories.sqlalchemy_entity_store import (
    SQLAlchemyEntityStore,
)


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        deposits: Optional[DepositSchedule] = None,
    ) -> None:
        self._session_factory = session_factory
        self._deposits = deposits
        self._session: Optional[AsyncSession] = None
        self._records: Optional[SQLAlchemyEntityStore] = None

    @property
    def records(self) -> SQLAlchemyEntityStore:
        """Get the entity store bound to this transaction."""
        if not self._session or not self._records:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._records

    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._session:
            await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        self._records = SQLAlchemyEntityStore(self._session, self._deposits)
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and cleanup."""
        if self._session:
            if exc_type:
                await self.rollback()
            await self._session.close()
            self._session = None
            self._records = None
