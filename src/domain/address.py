"""Deterministic address derivation.

Every record lives at an address computed from a namespace tag and seed
bytes. Nothing stores a pointer that can be recomputed, and creating a
record at an address that is already occupied is rejected by the store, so
the address space doubles as the uniqueness index.

    derive("profile", seed)
    derive("post", group_address, "0")
    derive("lookup", "profile", "alice")
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from domain.constants import ADDRESS_SIZE

# Domain separation so addresses never coincide with other sha256 uses.
_DERIVE_PREFIX = b"socialgraph/address/v1"


@dataclass(frozen=True, slots=True)
class Address:
    """A 32-byte record address or raw authority key.

    SERIALIZATION: raw bytes, lowercase hex at the API boundary.
    """

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != ADDRESS_SIZE:
            raise ValueError(
                f"Address must be {ADDRESS_SIZE} bytes, got {len(self.data)}"
            )

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return self.data.hex()

    def __repr__(self) -> str:
        return f"Address({self.data.hex()[:16]}...)"

    def hex(self) -> str:
        return self.data.hex()

    @classmethod
    def from_hex(cls, hex_string: str) -> Address:
        return cls(bytes.fromhex(hex_string))

    @classmethod
    def zero(cls) -> Address:
        return cls(bytes(ADDRESS_SIZE))


def _encode_part(part: bytes | str | Address) -> bytes:
    if isinstance(part, Address):
        return part.data
    if isinstance(part, str):
        return part.encode("utf-8")
    return bytes(part)


def derive(namespace: str, *parts: bytes | str | Address) -> Address:
    """Derive the address for ``(namespace, *parts)``.

    Each component is length-prefixed before hashing, so ``("ab", "c")`` and
    ``("a", "bc")`` land on different addresses.
    """
    hasher = hashlib.sha256()
    hasher.update(_DERIVE_PREFIX)
    for component in (namespace, *parts):
        data = _encode_part(component)
        hasher.update(len(data).to_bytes(4, byteorder="big"))
        hasher.update(data)
    return Address(hasher.digest())
