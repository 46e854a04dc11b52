"""Post domain entity."""

from dataclasses import dataclass

from domain.address import Address, derive
from domain.constants import Namespace


def post_address(parent: Address, index: int) -> Address:
    """Address of the ``index``-th child post under ``parent``.

    ``parent`` is a Group for root posts and the replied-to Post for replies.
    """
    return derive(Namespace.POST, parent, str(index))


@dataclass
class Post:
    """A root post (``parent_post is None``) or a reply."""

    group: Address
    index: int
    author: Address
    metadata_uri: str
    parent_post: Address | None = None
    reply_count: int = 0

    @property
    def address(self) -> Address:
        return post_address(self.group, self.index)

    @property
    def is_reply(self) -> bool:
        return self.parent_post is not None
