"""Profile service layer with business logic."""

from typing import Callable, Optional

from core.exceptions import InvalidAccountError
from domain.address import Address, derive
from domain.constants import SEED_SIZE, Namespace
from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.authority import AuthorityChain
from domain.services.name_registry import NameRegistry
from domain.services.operation import Operation, OperationStage
from domain.services.validation import validate_profile_fields, validate_username


class ProfileService:
    """Service layer for profiles and their usernames."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get(self, address: Address) -> Profile:
        """Get a profile by address."""
        async with self._uow_factory() as uow:
            return await uow.records.get_profile(address)

    async def resolve_username(self, username: str) -> Profile:
        """Get the profile currently holding ``username``."""
        async with self._uow_factory() as uow:
            record = await NameRegistry(uow).resolve(Namespace.PROFILE, username)
            return await uow.records.get_profile(record.target)

    async def create(
        self,
        seed: bytes,
        authority: Address,
        username: str,
        display_name: str = "",
        image_uri: str = "",
        metadata_uri: str = "",
        payer: Optional[Address] = None,
    ) -> Profile:
        """Create a profile and bind its username.

        ``authority`` is the key that signed the request, so there is no
        prior owner to check against.
        """
        if len(seed) != SEED_SIZE:
            raise InvalidAccountError(seed.hex(), f"Seed must be {SEED_SIZE} bytes")

        with Operation(
            "create_profile", profile=str(derive(Namespace.PROFILE, seed))
        ) as op:
            async with self._uow_factory() as uow:
                op.advance(OperationStage.AUTHORITY_VERIFIED)

                validate_username(username)
                validate_profile_fields(display_name, image_uri, metadata_uri)
                op.advance(OperationStage.VALIDATED)

                payer = payer or authority
                profile = Profile(
                    seed=seed,
                    authority=authority,
                    username=username,
                    display_name=display_name,
                    image_uri=image_uri,
                    metadata_uri=metadata_uri,
                )
                await uow.records.create(profile, payer)

                # The profile, not its key, controls the binding.
                await NameRegistry(uow).register(
                    Namespace.PROFILE,
                    username,
                    target=profile.address,
                    authority=profile.address,
                    payer=payer,
                )

                await uow.commit()
                op.advance(OperationStage.APPLIED)
                return profile

    async def update(
        self,
        address: Address,
        proven: Address,
        display_name: Optional[str] = None,
        image_uri: Optional[str] = None,
        metadata_uri: Optional[str] = None,
    ) -> Profile:
        """Update the display fields of a profile. Requires its authority."""
        with Operation("update_profile", profile=str(address)) as op:
            async with self._uow_factory() as uow:
                profile = await uow.records.get_profile(address, for_update=True)
                await AuthorityChain(uow.records).require(profile, proven)
                op.advance(OperationStage.AUTHORITY_VERIFIED)

                if display_name is not None:
                    profile.display_name = display_name
                if image_uri is not None:
                    profile.image_uri = image_uri
                if metadata_uri is not None:
                    profile.metadata_uri = metadata_uri
                validate_profile_fields(
                    profile.display_name, profile.image_uri, profile.metadata_uri
                )
                op.advance(OperationStage.VALIDATED)

                await uow.records.save(profile)
                await uow.commit()
                op.advance(OperationStage.APPLIED)
                return profile

    async def change_username(
        self,
        address: Address,
        new_username: str,
        proven: Address,
        payer: Optional[Address] = None,
    ) -> Profile:
        """Move a profile to a new username via the rename protocol."""
        with Operation(
            "change_username", profile=str(address), new_username=new_username
        ) as op:
            async with self._uow_factory() as uow:
                profile = await uow.records.get_profile(address, for_update=True)
                await AuthorityChain(uow.records).require(profile, proven)
                op.advance(OperationStage.AUTHORITY_VERIFIED)

                validate_username(new_username)
                op.advance(OperationStage.VALIDATED)

                await NameRegistry(uow).rename(
                    Namespace.PROFILE,
                    profile,
                    new_username,
                    proven=proven,
                    payer=payer or proven,
                )

                await uow.commit()
                op.advance(OperationStage.APPLIED)
                return profile

    async def transfer_authority(
        self,
        address: Address,
        new_authority: Address,
        proven: Address,
    ) -> Profile:
        """Hand a profile to a new key.

        Only the profile record changes. Groups, posts and name records owned
        by the profile point at its address and follow automatically.
        """
        with Operation(
            "transfer_authority", profile=str(address), new_authority=str(new_authority)
        ) as op:
            async with self._uow_factory() as uow:
                profile = await uow.records.get_profile(address, for_update=True)
                await AuthorityChain(uow.records).require(profile, proven)
                op.advance(OperationStage.AUTHORITY_VERIFIED)
                op.advance(OperationStage.VALIDATED)

                profile.authority = new_authority
                await uow.records.save(profile)
                await uow.commit()
                op.advance(OperationStage.APPLIED)
                return profile
