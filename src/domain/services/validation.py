"""Stateless input checks run before any mutation is applied.

Bounds are byte lengths of the UTF-8 encoding, since that is what the record
layout allocates.
"""

import re

from core.exceptions import (
    HandleTooLongError,
    InvalidHandleError,
    InvalidUriError,
    NameTooLongError,
    UriTooLongError,
)
from domain.constants import (
    HANDLE_PATTERN,
    MAX_LEN_GROUP_NAME,
    MAX_LEN_NAME,
    MAX_LEN_URI,
    MAX_LEN_USERNAME,
)

_HANDLE_RE = re.compile(HANDLE_PATTERN)


def _byte_len(value: str) -> int:
    return len(value.encode("utf-8"))


def validate_handle(value: str, field: str, max_length: int) -> None:
    """Length first, then charset; an empty handle fails the charset check."""
    if _byte_len(value) > max_length:
        raise HandleTooLongError(field, max_length)
    if not _HANDLE_RE.fullmatch(value):
        raise InvalidHandleError(field, value)


def validate_username(username: str) -> None:
    validate_handle(username, "username", MAX_LEN_USERNAME)


def validate_group_name(name: str) -> None:
    validate_handle(name, "group name", MAX_LEN_GROUP_NAME)


def validate_display_name(display_name: str) -> None:
    if _byte_len(display_name) > MAX_LEN_NAME:
        raise NameTooLongError("display name", MAX_LEN_NAME)


def validate_uri(uri: str, field: str, required: bool = False) -> None:
    if _byte_len(uri) > MAX_LEN_URI:
        raise UriTooLongError(field, MAX_LEN_URI)
    if required and not uri:
        raise InvalidUriError(field)


def validate_profile_fields(
    display_name: str,
    image_uri: str,
    metadata_uri: str,
) -> None:
    """Checks shared by profile creation and update."""
    validate_display_name(display_name)
    validate_uri(image_uri, "image uri")
    validate_uri(metadata_uri, "metadata uri")
