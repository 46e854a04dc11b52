"""Profile domain entity."""

from dataclasses import dataclass

from domain.address import Address, derive
from domain.constants import Namespace


@dataclass
class Profile:
    """A named identity, addressed by its immutable seed."""

    seed: bytes
    authority: Address
    username: str
    display_name: str = ""
    image_uri: str = ""
    metadata_uri: str = ""

    @property
    def address(self) -> Address:
        return derive(Namespace.PROFILE, self.seed)
