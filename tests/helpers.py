"""Deterministic keys, seeds and deposit schedule shared by tests."""

from domain.address import Address
from domain.repositories.entity_store import DepositSchedule


def make_key(label: str) -> Address:
    """A stable 32-byte key for a named test actor."""
    return Address(label.encode("utf-8").ljust(32, b"\x00"))


def make_seed(label: str) -> bytes:
    """A stable 32-byte seed for a named test record."""
    return label.encode("utf-8").rjust(32, b"\x01")


# Small numbers keep deposit arithmetic readable in assertions
TEST_DEPOSITS = DepositSchedule(overhead_bytes=128, per_byte=10)
