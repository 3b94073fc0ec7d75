"""IndexStore - Persistent secondary index over an append-only log."""
__version__ = '1.0.0'

from .core.store import IndexStore
from .core.exceptions import IndexStoreError, LogContractError

__all__ = ['IndexStore', 'IndexStoreError', 'LogContractError']
