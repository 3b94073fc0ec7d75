"""Log record type and its binary encoding.

Layout (little-endian):
    [deleted(1)][key_len(4, unsigned)][key][value(4, signed)]
"""
import struct
from dataclasses import dataclass
from typing import BinaryIO, Optional

from ..utils.config import Config

HEADER = struct.Struct(Config.BYTE_ORDER + 'BI')
VALUE = struct.Struct(Config.BYTE_ORDER + 'i')

LIVE = 0
DELETED = 1


@dataclass(frozen=True)
class Record:
    """One entry of the log."""
    key: bytes
    value: int
    deleted: bool = False

    @property
    def size(self) -> int:
        return HEADER.size + len(self.key) + VALUE.size


def encode(record: Record) -> bytes:
    """Serialize a record to its on-disk bytes."""
    flag = DELETED if record.deleted else LIVE
    return HEADER.pack(flag, len(record.key)) + record.key + VALUE.pack(record.value)


def decode(f: BinaryIO) -> Optional[Record]:
    """
    Decode one record from the current position of f.

    Returns None when the bytes there do not form a full record: a short
    header, a key length above Config.MAX_KEY_LEN, or too few bytes left for
    the declared key and value. Any nonzero flag byte reads as deleted.
    """
    header = f.read(HEADER.size)
    if len(header) < HEADER.size:
        return None
    flag, key_len = HEADER.unpack(header)
    if key_len > Config.MAX_KEY_LEN:
        return None

    key = f.read(key_len)
    if len(key) < key_len:
        return None

    raw_value = f.read(VALUE.size)
    if len(raw_value) < VALUE.size:
        return None
    value = VALUE.unpack(raw_value)[0]

    return Record(key, value, deleted=flag != LIVE)
