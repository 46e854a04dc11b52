"""Group service layer with business logic."""

from typing import Callable, Optional

from core.exceptions import InvalidAccountError
from domain.address import Address
from domain.constants import SEED_SIZE, Namespace
from domain.entities.group import Group
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.authority import AuthorityChain
from domain.services.name_registry import NameRegistry
from domain.services.operation import Operation, OperationStage
from domain.services.validation import validate_group_name


class GroupService:
    """Service layer for post groups."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get(self, address: Address) -> Group:
        """Get a group by address."""
        async with self._uow_factory() as uow:
            return await uow.records.get_group(address)

    async def resolve_name(self, name: str) -> Group:
        """Get the group registered under ``name``."""
        async with self._uow_factory() as uow:
            record = await NameRegistry(uow).resolve(Namespace.POST_GROUP, name)
            return await uow.records.get_group(record.target)

    async def create(
        self,
        profile_address: Address,
        seed: bytes,
        name: str,
        proven: Address,
        payer: Optional[Address] = None,
    ) -> Group:
        """Create a group owned by a profile and bind its name.

        The group and its name record both name the profile's address as
        their authority.
        """
        if len(seed) != SEED_SIZE:
            raise InvalidAccountError(seed.hex(), f"Seed must be {SEED_SIZE} bytes")

        with Operation(
            "create_group", profile=str(profile_address), group_name=name
        ) as op:
            async with self._uow_factory() as uow:
                profile = await uow.records.get_profile(profile_address)
                await AuthorityChain(uow.records).require(profile, proven)
                op.advance(OperationStage.AUTHORITY_VERIFIED)

                validate_group_name(name)
                op.advance(OperationStage.VALIDATED)

                payer = payer or proven
                group = Group(seed=seed, authority=profile.address, name=name)
                await uow.records.create(group, payer)
                await NameRegistry(uow).register(
                    Namespace.POST_GROUP,
                    name,
                    target=group.address,
                    authority=profile.address,
                    payer=payer,
                )

                await uow.commit()
                op.advance(OperationStage.APPLIED)
                return group
