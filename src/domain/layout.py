"""Binary record layout.

Every record is stored as a fixed-size byte string:

    header (32 bytes)
        discriminator   8 bytes   sha256("record:" + namespace)[:8]
        version         1 byte
        reserved       23 bytes   zero
    fields

Strings are u32-length-prefixed and zero-padded to their maximum bound, so
all records of a kind share one size and an update can never outgrow the
allocation. Integers are little-endian.
"""

from __future__ import annotations

import hashlib
import struct

from domain.address import Address
from domain.constants import (
    ADDRESS_SIZE,
    MAX_LEN_GROUP_NAME,
    MAX_LEN_NAME,
    MAX_LEN_URI,
    MAX_LEN_USERNAME,
    SEED_SIZE,
    Namespace,
)
from domain.entities.group import Group
from domain.entities.name_record import NameRecord
from domain.entities.post import Post
from domain.entities.profile import Profile

LAYOUT_VERSION = 1
DISCRIMINATOR_SIZE = 8
HEADER_SIZE = 32
_RESERVED_SIZE = HEADER_SIZE - DISCRIMINATOR_SIZE - 1

_U32 = struct.Struct("<I")

Record = Profile | Group | Post | NameRecord


def discriminator(namespace: str) -> bytes:
    return hashlib.sha256(f"record:{namespace}".encode("utf-8")).digest()[:DISCRIMINATOR_SIZE]


def _string_size(max_len: int) -> int:
    return _U32.size + max_len


RECORD_SIZES: dict[Namespace, int] = {
    Namespace.PROFILE: HEADER_SIZE
    + SEED_SIZE
    + ADDRESS_SIZE
    + _string_size(MAX_LEN_USERNAME)
    + _string_size(MAX_LEN_NAME)
    + _string_size(MAX_LEN_URI) * 2,
    Namespace.POST_GROUP: HEADER_SIZE
    + SEED_SIZE
    + ADDRESS_SIZE
    + _U32.size
    + _string_size(MAX_LEN_GROUP_NAME),
    Namespace.POST: HEADER_SIZE
    + ADDRESS_SIZE
    + _U32.size
    + ADDRESS_SIZE
    + 1
    + ADDRESS_SIZE
    + _U32.size
    + _string_size(MAX_LEN_URI),
    Namespace.LOOKUP: HEADER_SIZE + ADDRESS_SIZE * 2,
}

_BY_DISCRIMINATOR = {discriminator(ns): ns for ns in RECORD_SIZES}


class _Writer:
    def __init__(self, namespace: Namespace) -> None:
        self._buf = bytearray()
        self._buf += discriminator(namespace)
        self._buf.append(LAYOUT_VERSION)
        self._buf += bytes(_RESERVED_SIZE)

    def fixed(self, data: bytes, size: int) -> None:
        if len(data) != size:
            raise ValueError(f"expected {size} bytes, got {len(data)}")
        self._buf += data

    def address(self, value: Address) -> None:
        self._buf += value.data

    def u8(self, value: int) -> None:
        self._buf.append(value)

    def u32(self, value: int) -> None:
        self._buf += _U32.pack(value)

    def string(self, value: str, max_len: int) -> None:
        data = value.encode("utf-8")
        if len(data) > max_len:
            raise ValueError(f"string of {len(data)} bytes exceeds allocation of {max_len}")
        self._buf += _U32.pack(len(data))
        self._buf += data.ljust(max_len, b"\x00")

    def to_bytes(self) -> bytes:
        return bytes(self._buf)


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = HEADER_SIZE

    def fixed(self, size: int) -> bytes:
        chunk = self._data[self._offset : self._offset + size]
        if len(chunk) != size:
            raise ValueError("record truncated")
        self._offset += size
        return chunk

    def address(self) -> Address:
        return Address(self.fixed(ADDRESS_SIZE))

    def u8(self) -> int:
        return self.fixed(1)[0]

    def u32(self) -> int:
        return _U32.unpack(self.fixed(_U32.size))[0]

    def string(self, max_len: int) -> str:
        length = self.u32()
        if length > max_len:
            raise ValueError(f"string length {length} exceeds allocation of {max_len}")
        return self.fixed(max_len)[:length].decode("utf-8")


def namespace_of(record: Record) -> Namespace:
    if isinstance(record, Profile):
        return Namespace.PROFILE
    if isinstance(record, Group):
        return Namespace.POST_GROUP
    if isinstance(record, Post):
        return Namespace.POST
    if isinstance(record, NameRecord):
        return Namespace.LOOKUP
    raise TypeError(f"not a storable record: {type(record).__name__}")


def read_namespace(data: bytes) -> Namespace:
    """Identify the record kind from its header."""
    try:
        return _BY_DISCRIMINATOR[bytes(data[:DISCRIMINATOR_SIZE])]
    except KeyError:
        raise ValueError("unknown record discriminator") from None


def encode(record: Record) -> bytes:
    """Serialize a record into its fixed-size layout."""
    namespace = namespace_of(record)
    w = _Writer(namespace)

    if isinstance(record, Profile):
        w.fixed(record.seed, SEED_SIZE)
        w.address(record.authority)
        w.string(record.username, MAX_LEN_USERNAME)
        w.string(record.display_name, MAX_LEN_NAME)
        w.string(record.image_uri, MAX_LEN_URI)
        w.string(record.metadata_uri, MAX_LEN_URI)
    elif isinstance(record, Group):
        w.fixed(record.seed, SEED_SIZE)
        w.address(record.authority)
        w.u32(record.post_count)
        w.string(record.name, MAX_LEN_GROUP_NAME)
    elif isinstance(record, Post):
        w.address(record.group)
        w.u32(record.index)
        w.address(record.author)
        if record.parent_post is None:
            w.u8(0)
            w.address(Address.zero())
        else:
            w.u8(1)
            w.address(record.parent_post)
        w.u32(record.reply_count)
        w.string(record.metadata_uri, MAX_LEN_URI)
    else:
        w.address(record.target)
        w.address(record.authority)

    data = w.to_bytes()
    if len(data) != RECORD_SIZES[namespace]:
        raise ValueError(
            f"{namespace} record encoded to {len(data)} bytes, expected {RECORD_SIZES[namespace]}"
        )
    return data


def decode(address: Address, data: bytes) -> Record:
    """Deserialize the record stored at ``address``."""
    namespace = read_namespace(data)
    if len(data) != RECORD_SIZES[namespace]:
        raise ValueError(
            f"{namespace} record must be {RECORD_SIZES[namespace]} bytes, got {len(data)}"
        )
    r = _Reader(data)

    if namespace == Namespace.PROFILE:
        return Profile(
            seed=r.fixed(SEED_SIZE),
            authority=r.address(),
            username=r.string(MAX_LEN_USERNAME),
            display_name=r.string(MAX_LEN_NAME),
            image_uri=r.string(MAX_LEN_URI),
            metadata_uri=r.string(MAX_LEN_URI),
        )
    if namespace == Namespace.POST_GROUP:
        return Group(
            seed=r.fixed(SEED_SIZE),
            authority=r.address(),
            post_count=r.u32(),
            name=r.string(MAX_LEN_GROUP_NAME),
        )
    if namespace == Namespace.POST:
        group = r.address()
        index = r.u32()
        author = r.address()
        has_parent = r.u8()
        parent = r.address()
        return Post(
            group=group,
            index=index,
            author=author,
            parent_post=parent if has_parent else None,
            reply_count=r.u32(),
            metadata_uri=r.string(MAX_LEN_URI),
        )
    return NameRecord(address=address, target=r.address(), authority=r.address())
