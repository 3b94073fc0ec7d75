"""Append-only log file of (key, value) records with in-place tombstones."""
import logging
import os
from pathlib import Path
from typing import Iterator, Optional, Tuple

from . import record
from .exceptions import LogContractError
from .record import Record
from ..utils.config import Config

logger = logging.getLogger(__name__)


class DataFile:
    """Append-only log file of (key, value) records with in-place tombstones."""

    def __init__(self, path: str):
        self.path = path
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        if not os.path.exists(path):
            open(path, 'wb').close()
        # r+b rather than a+b: tombstones are written in place, not at EOF
        self.file = open(path, 'r+b')
        self.file.seek(0, 2)  # Seek to end
        self.size = self.file.tell()

    @property
    def closed(self) -> bool:
        return self.file.closed

    def _sync(self):
        self.file.flush()
        if Config.FSYNC_ON_WRITE:
            os.fsync(self.file.fileno())

    def append(self, key: bytes, value: int) -> int:
        """
        Append a live record for (key, value).
        Returns the offset the record starts at.
        """
        data = record.encode(Record(key, value))

        # Always the true end of file, even past an undecodable tail
        self.file.seek(0, 2)
        offset = self.file.tell()

        self.file.write(data)
        self._sync()

        self.size = offset + len(data)
        logger.debug("Appended %r=%d at offset %d", key, value, offset)
        return offset

    def read(self, offset: int) -> Optional[Record]:
        """Read the live record at offset, or None if it is deleted or undecodable."""
        if offset < 0 or offset >= self.size:
            return None
        self.file.seek(offset)
        rec = record.decode(self.file)
        if rec is None or rec.deleted:
            return None
        return rec

    def tombstone(self, offset: int, expected: Optional[Record] = None):
        """
        Mark the record starting at offset as deleted.

        Only the flag byte is rewritten. The offset must be the start of a
        live record written by append(); if expected is given, the record
        there must also carry the same key and value. Anything else raises
        LogContractError.
        """
        if offset < 0 or offset >= self.size:
            raise LogContractError(offset, f"outside log of {self.size} bytes")

        self.file.seek(offset)
        current = record.decode(self.file)
        if current is None:
            raise LogContractError(offset, "no decodable record")
        if current.deleted:
            raise LogContractError(offset, "record is already tombstoned")
        if expected is not None and (current.key, current.value) != (expected.key, expected.value):
            raise LogContractError(
                offset,
                f"found {current.key!r}={current.value}, "
                f"expected {expected.key!r}={expected.value}"
            )

        self.file.seek(offset)
        self.file.write(bytes([record.DELETED]))
        self._sync()
        logger.debug("Tombstoned %r=%d at offset %d", current.key, current.value, offset)

    def scan(self) -> Iterator[Tuple[int, Record]]:
        """
        Yield (offset, record) for every record from the start of the file,
        deleted ones included.

        Stops at the first record that does not decode fully; whatever
        follows is never looked at. The file position is owned by the scan
        until the iterator is exhausted.
        """
        self.file.seek(0)
        while True:
            offset = self.file.tell()
            rec = record.decode(self.file)
            if rec is None:
                return
            yield offset, rec

    def close(self):
        """Flush and close the log file."""
        if self.file.closed:
            return
        try:
            self.file.flush()
        finally:
            self.file.close()
