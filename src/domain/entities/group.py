"""Group domain entity."""

from dataclasses import dataclass

from domain.address import Address, derive
from domain.constants import Namespace


@dataclass
class Group:
    """A named, ordered collection of root posts.

    ``authority`` holds the owning profile's address rather than a raw key,
    so rotating the profile's key never requires touching the group.
    """

    seed: bytes
    authority: Address
    name: str
    post_count: int = 0

    @property
    def address(self) -> Address:
        return derive(Namespace.POST_GROUP, self.seed)
