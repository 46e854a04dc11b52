"""Read-only handle lookups."""

from typing import Callable

from domain.constants import Namespace
from domain.entities.name_record import NameRecord
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.name_registry import NameRegistry


class NameService:
    """Resolve handles to their bound addresses."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def resolve(self, namespace: Namespace, handle: str) -> NameRecord:
        """Get the name record for a handle. Raises if unregistered."""
        async with self._uow_factory() as uow:
            return await NameRegistry(uow).resolve(namespace, handle)
