"""Entity store protocol."""

from dataclasses import dataclass
from typing import Protocol

from domain.address import Address
from domain.entities.group import Group
from domain.entities.name_record import NameRecord
from domain.entities.post import Post
from domain.entities.profile import Profile
from domain.layout import Record


@dataclass(frozen=True)
class DepositSchedule:
    """Storage deposit owed for a record of a given allocated size."""

    overhead_bytes: int = 128
    per_byte: int = 6960

    def required(self, size: int) -> int:
        return (self.overhead_bytes + size) * self.per_byte


@dataclass(frozen=True)
class Allocation:
    """Outcome of storing a new record."""

    address: Address
    deposit: int
    charged: int


class IEntityStore(Protocol):
    """Typed CRUD over address-keyed records."""

    async def get(self, address: Address, for_update: bool = False) -> Record | None:
        """Get whatever record is stored at an address."""
        ...

    async def get_profile(self, address: Address, for_update: bool = False) -> Profile:
        """Get a profile. Raises if missing or of another kind."""
        ...

    async def get_group(self, address: Address, for_update: bool = False) -> Group:
        """Get a group. Raises if missing or of another kind."""
        ...

    async def get_post(self, address: Address, for_update: bool = False) -> Post:
        """Get a post. Raises if missing or of another kind."""
        ...

    async def get_name_record(
        self, address: Address, for_update: bool = False
    ) -> NameRecord | None:
        """Get a name record, or None if the handle is unregistered."""
        ...

    async def exists(self, address: Address) -> bool:
        """Check whether an address is occupied."""
        ...

    async def create(
        self, record: Record, payer: Address, prefunded: int = 0
    ) -> Allocation:
        """Store a new record at its address, never overwriting."""
        ...

    async def save(self, record: Record) -> None:
        """Persist changes to an existing record."""
        ...

    async def close(self, address: Address) -> int:
        """Destroy a record and return its released deposit."""
        ...

    async def deposit_of(self, address: Address) -> int | None:
        """Get the deposit held by a record."""
        ...

    async def total_deposits(self) -> int:
        """Sum of all deposits currently held."""
        ...
