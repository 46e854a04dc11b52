"""Handle registry and rename protocol.

A handle is unique because its name record lives at
``derive("lookup", namespace, handle)``: registering a handle that is
already bound targets an occupied address and fails. There is no separate
index to scan or keep in sync.
"""

import structlog

from core.exceptions import (
    AddressInUseError,
    HandleNotFoundError,
    HandleTakenError,
    UnauthorizedError,
)
from domain.address import Address
from domain.constants import Namespace
from domain.entities.group import Group
from domain.entities.name_record import NameRecord, name_record_address
from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.authority import AuthorityChain, owner_of

logger = structlog.get_logger()

# Entity attribute holding the handle, per namespace.
_HANDLE_FIELDS = {
    Namespace.PROFILE: "username",
    Namespace.POST_GROUP: "name",
}


class NameRegistry:
    """Registers, resolves and renames handles within one unit of work."""

    def __init__(self, uow: IUnitOfWork) -> None:
        self._uow = uow
        self._authority = AuthorityChain(uow.records)

    async def register(
        self,
        namespace: Namespace,
        handle: str,
        target: Address,
        authority: Address,
        payer: Address,
    ) -> NameRecord:
        """Bind ``handle`` to ``target``.

        ``authority`` should be the owning entity's address, not a raw key,
        so the binding survives a key rotation of its owner.

        Raises:
            HandleTakenError: The handle is already bound.
        """
        record = NameRecord(
            address=name_record_address(namespace, handle),
            target=target,
            authority=authority,
        )
        try:
            await self._uow.records.create(record, payer)
        except AddressInUseError:
            raise HandleTakenError(namespace, handle) from None
        return record

    async def lookup(self, namespace: Namespace, handle: str) -> NameRecord | None:
        return await self._uow.records.get_name_record(
            name_record_address(namespace, handle)
        )

    async def resolve(self, namespace: Namespace, handle: str) -> NameRecord:
        record = await self.lookup(namespace, handle)
        if record is None:
            raise HandleNotFoundError(namespace, handle)
        return record

    async def rename(
        self,
        namespace: Namespace,
        owner: Profile | Group,
        new_handle: str,
        proven: Address,
        payer: Address,
    ) -> NameRecord:
        """Move ``owner``'s handle to ``new_handle``.

        Creates the new binding, destroys the old one and updates the handle
        stored on ``owner``, as one unit: any failure rolls the unit of work
        back before the error propagates. The old record's released deposit
        funds the new record, so the payer is charged only a shortfall, which
        is zero for same-sized name records.

        Raises:
            UnauthorizedError: ``proven`` does not control ``owner``, or the
                old binding does not belong to ``owner``.
            HandleTakenError: ``new_handle`` is already bound.
        """
        await self._authority.require(owner, proven)

        field = _HANDLE_FIELDS[namespace]
        old_handle: str = getattr(owner, field)
        old_address = name_record_address(namespace, old_handle)
        new_address = name_record_address(namespace, new_handle)
        records = self._uow.records

        try:
            old = await records.get_name_record(old_address, for_update=True)
            if (
                old is None
                or old.target != owner.address
                or old.authority != owner_of(owner)
            ):
                raise UnauthorizedError(
                    str(old_address), "Name record is not controlled by this owner"
                )
            if await records.exists(new_address):
                raise HandleTakenError(namespace, new_handle)

            released = await records.close(old_address)
            new = NameRecord(
                address=new_address,
                target=owner.address,
                authority=old.authority,
            )
            try:
                allocation = await records.create(new, payer, prefunded=released)
            except AddressInUseError:
                raise HandleTakenError(namespace, new_handle) from None

            setattr(owner, field, new_handle)
            await records.save(owner)
        except Exception:
            setattr(owner, field, old_handle)
            await self._uow.rollback()
            raise

        logger.info(
            "handle_renamed",
            namespace=namespace.value,
            old_handle=old_handle,
            new_handle=new_handle,
            target=str(owner.address),
            released=released,
            charged=allocation.charged,
        )
        return new
