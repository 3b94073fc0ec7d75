"""In-memory secondary index mapping keys to sorted (value, offset) pairs."""
import bisect
import logging
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


class Index:
    """
    In-memory secondary index mapping keys to sorted (value, offset) pairs.

    Each key's pairs are kept ascending by value with no value repeated, and
    every offset points at the live log record holding that value. Keys
    without values are not kept.
    """

    def __init__(self):
        self.index: Dict[bytes, List[Tuple[int, int]]] = {}

    def __len__(self) -> int:
        return len(self.index)

    def __contains__(self, key: bytes) -> bool:
        return key in self.index

    def load(self, key: bytes, value: int, offset: int):
        """Add a pair while rebuilding; order is restored by finish_load()."""
        self.index.setdefault(key, []).append((value, offset))

    def finish_load(self):
        """Sort every key's pairs by value and drop repeated values."""
        for key, pairs in self.index.items():
            pairs.sort()
            unique = [pairs[0]]
            for pair in pairs[1:]:
                if pair[0] == unique[-1][0]:
                    logger.warning(
                        "Duplicate live record %r=%d at offset %d, keeping offset %d",
                        key, pair[0], pair[1], unique[-1][1]
                    )
                    continue
                unique.append(pair)
            self.index[key] = unique

    def search(self, key: bytes, value: int) -> Tuple[int, Optional[int]]:
        """
        Binary-search key's pairs for value.
        Returns (position, offset); offset is None when value is absent and
        position is then where it belongs.
        """
        pairs = self.index.get(key)
        if not pairs:
            return 0, None
        # (value,) sorts before every (value, offset)
        pos = bisect.bisect_left(pairs, (value,))
        if pos < len(pairs) and pairs[pos][0] == value:
            return pos, pairs[pos][1]
        return pos, None

    def insert(self, key: bytes, pos: int, value: int, offset: int):
        """Insert (value, offset) at a position returned by search()."""
        self.index.setdefault(key, []).insert(pos, (value, offset))

    def remove(self, key: bytes, pos: int):
        """Remove the pair at pos, dropping the key once it has no values."""
        pairs = self.index[key]
        del pairs[pos]
        if not pairs:
            del self.index[key]

    def values(self, key: bytes) -> List[int]:
        """Values for key in ascending order (empty if the key is unknown)."""
        return [value for value, _ in self.index.get(key, ())]

    def clear(self):
        self.index.clear()
