"""NameRecord domain entity."""

from dataclasses import dataclass

from domain.address import Address, derive
from domain.constants import Namespace


def name_record_address(namespace: str, handle: str) -> Address:
    """Address of the record binding ``handle`` within ``namespace``."""
    return derive(Namespace.LOOKUP, namespace, handle)


@dataclass
class NameRecord:
    """Binds a handle to a target address.

    The handle itself is not stored; the record's address is derived from it,
    which is what makes a handle unique.
    """

    address: Address
    target: Address
    authority: Address
