"""Namespaces and size bounds shared by the addressing engine."""

from enum import StrEnum


class Namespace(StrEnum):
    """Derivation namespaces. The value is the tag fed into ``derive``."""

    PROFILE = "profile"
    POST_GROUP = "post_group"
    POST = "post"
    LOOKUP = "lookup"


# Namespaces in which a human-readable handle can be registered.
HANDLE_NAMESPACES = frozenset({Namespace.PROFILE, Namespace.POST_GROUP})

ADDRESS_SIZE = 32
SEED_SIZE = 32

MAX_LEN_USERNAME = 28
MAX_LEN_NAME = 128
MAX_LEN_URI = 256
MAX_LEN_GROUP_NAME = 32

# Handle charset; see DESIGN.md for the decision on this.
HANDLE_PATTERN = r"^[a-z0-9_-]+$"

U32_MAX = 2**32 - 1
