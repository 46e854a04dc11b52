"""Unit tests for input validation."""

import pytest

from core.exceptions import (
    HandleTooLongError,
    InvalidHandleError,
    InvalidUriError,
    NameTooLongError,
    UriTooLongError,
)
from domain.services.validation import (
    validate_display_name,
    validate_group_name,
    validate_profile_fields,
    validate_uri,
    validate_username,
)


class TestUsername:
    @pytest.mark.parametrize("username", ["alice", "a", "bob_99", "x-y", "a" * 28])
    def test_accepts(self, username: str):
        validate_username(username)

    def test_rejects_29_bytes(self):
        with pytest.raises(HandleTooLongError):
            validate_username("a" * 29)

    @pytest.mark.parametrize("username", ["", "Alice", "has space", "dot.name", "émile"])
    def test_rejects_charset(self, username: str):
        with pytest.raises(InvalidHandleError):
            validate_username(username)

    def test_length_is_checked_before_charset(self):
        with pytest.raises(HandleTooLongError):
            validate_username("A" * 29)

    def test_bound_is_in_bytes(self):
        # 15 two-byte characters exceed the bound before the charset check runs
        with pytest.raises(HandleTooLongError):
            validate_username("é" * 15)


class TestGroupName:
    def test_accepts_32_bytes(self):
        validate_group_name("g" * 32)

    def test_rejects_33_bytes(self):
        with pytest.raises(HandleTooLongError):
            validate_group_name("g" * 33)

    def test_rejects_uppercase(self):
        with pytest.raises(InvalidHandleError):
            validate_group_name("Blog")


class TestDisplayName:
    def test_accepts_128_bytes(self):
        validate_display_name("n" * 128)

    def test_rejects_129_bytes(self):
        with pytest.raises(NameTooLongError):
            validate_display_name("n" * 129)

    def test_allows_any_characters(self):
        validate_display_name("Alice Ünicode 🙂")


class TestUri:
    def test_accepts_256_bytes(self):
        validate_uri("u" * 256, "metadata uri")

    def test_rejects_257_bytes(self):
        with pytest.raises(UriTooLongError):
            validate_uri("u" * 257, "metadata uri")

    def test_empty_allowed_when_optional(self):
        validate_uri("", "image uri")

    def test_empty_rejected_when_required(self):
        with pytest.raises(InvalidUriError):
            validate_uri("", "metadata uri", required=True)


def test_profile_fields_check_every_field():
    with pytest.raises(UriTooLongError):
        validate_profile_fields("Alice", "", "m" * 257)
