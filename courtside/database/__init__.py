from .database import Database
from .store import RecordStore, SQLRecordStore

__all__ = ['Database', 'RecordStore', 'SQLRecordStore']
