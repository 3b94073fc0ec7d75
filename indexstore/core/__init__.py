"""Core storage engine components."""
from .store import IndexStore
from .datafile import DataFile
from .index import Index
from .record import Record
from .exceptions import IndexStoreError, LogContractError

__all__ = ['IndexStore', 'DataFile', 'Index', 'Record', 'IndexStoreError', 'LogContractError']
