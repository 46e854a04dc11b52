"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.entity_store import IEntityStore


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions.

    One operation runs in exactly one unit of work: either every write it
    made becomes visible on commit or none does.
    """

    records: IEntityStore

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
