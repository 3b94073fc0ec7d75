"""Main IndexStore implementation."""
import logging
from typing import List, Optional, Union

from .datafile import DataFile
from .exceptions import IndexStoreError
from .index import Index
from .record import Record
from ..utils.config import Config

logger = logging.getLogger(__name__)

Key = Union[str, bytes]


def _encode_key(key: Key) -> bytes:
    if isinstance(key, str):
        return key.encode('utf-8')
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    raise TypeError(f"Key must be str or bytes, not {type(key).__name__}")


class IndexStore:
    """
    Persistent secondary index: each key maps to a set of 32-bit integers.

    The log file is the only persistent state. Opening a store replays it to
    rebuild the in-memory index; every insert/remove then updates both.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path or Config.DATA_FILENAME
        self.data_file = DataFile(self.path)
        self.index = Index()
        self.running = True

        try:
            self._rebuild()
        except BaseException:
            self.close()
            raise

    def _rebuild(self):
        """Rebuild the index by scanning the log from offset 0."""
        self.index.clear()
        records = live = 0
        end = 0
        for offset, rec in self.data_file.scan():
            records += 1
            end = offset + rec.size
            if not rec.deleted:
                live += 1
                self.index.load(rec.key, rec.value, offset)
        self.index.finish_load()

        if end < self.data_file.size:
            logger.warning(
                "Log %s has %d undecodable bytes after offset %d; ignoring them",
                self.path, self.data_file.size - end, end
            )
        logger.info(
            "Rebuilt index from %s: %d records, %d live, %d keys",
            self.path, records, live, len(self.index)
        )

    def _check_open(self):
        if not self.running:
            raise IndexStoreError(f"Store {self.path} is closed")

    def insert(self, key: Key, value: int) -> bool:
        """
        Add value to key's set.
        Returns False (and writes nothing) if the value is already there.
        """
        self._check_open()
        key = _encode_key(key)
        if len(key) > Config.MAX_KEY_LEN:
            raise ValueError(f"Key is {len(key)} bytes, limit is {Config.MAX_KEY_LEN}")
        if not Config.MIN_VALUE <= value <= Config.MAX_VALUE:
            raise ValueError(f"Value {value} does not fit in a signed 32-bit integer")

        pos, offset = self.index.search(key, value)
        if offset is not None:
            return False

        offset = self.data_file.append(key, value)
        self.index.insert(key, pos, value, offset)
        return True

    def remove(self, key: Key, value: int) -> bool:
        """
        Remove value from key's set.
        Returns False if the key or value is unknown.
        """
        self._check_open()
        key = _encode_key(key)

        pos, offset = self.index.search(key, value)
        if offset is None:
            return False

        self.data_file.tombstone(offset, expected=Record(key, value))
        self.index.remove(key, pos)
        return True

    def find(self, key: Key) -> List[int]:
        """Values for key in ascending order; empty if it has none."""
        self._check_open()
        return self.index.values(_encode_key(key))

    def __len__(self) -> int:
        self._check_open()
        return len(self.index)

    def __contains__(self, key: Key) -> bool:
        self._check_open()
        return _encode_key(key) in self.index

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        """Clean shutdown."""
        if not self.running:
            return  # Already closed

        self.running = False
        self.data_file.close()
