"""Authority resolution.

Only a Profile stores a raw key. Groups, posts and name records store the
address of the profile that owns them, and the key allowed to act on them is
looked up through that profile at check time. Rotating a profile's key
therefore carries every dependent record along without rewriting any of them.
"""

from core.exceptions import UnauthorizedError
from domain.address import Address
from domain.entities.group import Group
from domain.entities.name_record import NameRecord
from domain.entities.post import Post
from domain.entities.profile import Profile
from domain.layout import Record
from domain.repositories.entity_store import IEntityStore


def owner_of(record: Record) -> Address:
    """Address of the profile a record answers to.

    A profile answers to itself.
    """
    if isinstance(record, Profile):
        return record.address
    if isinstance(record, Post):
        return record.author
    if isinstance(record, (Group, NameRecord)):
        return record.authority
    raise TypeError(f"no authority defined for {type(record).__name__}")


class AuthorityChain:
    """Resolve-then-compare authority checks over an entity store."""

    def __init__(self, records: IEntityStore) -> None:
        self._records = records

    async def resolve(self, record: Record) -> Address:
        """Return the raw key that currently controls ``record``.

        Dependent records are resolved exactly one hop, and the hop must land
        on a Profile.

        Raises:
            InvalidAccountError: The owner address does not hold a profile.
            RecordNotFoundError: Nothing is stored at the owner address.
        """
        if isinstance(record, Profile):
            return record.authority
        owner = await self._records.get_profile(owner_of(record))
        return owner.authority

    async def check(self, record: Record, proven: Address) -> bool:
        return await self.resolve(record) == proven

    async def require(self, record: Record, proven: Address) -> None:
        """Raise UnauthorizedError unless ``proven`` controls ``record``."""
        if not await self.check(record, proven):
            raise UnauthorizedError(str(record.address))
