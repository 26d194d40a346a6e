"""
Scoped key/value persistence and form-input round-tripping.
"""

from .schema import ALLOWED_INPUT_TYPES, DataRecord, InputRecord
from .storage import IKeyValueStore, InMemoryKeyValueStore, SQLiteKeyValueStore
from .scoped_store import ScopedStore
from .records import dump_record, load_record, parse_inputs, restore_form, save_form

__all__ = [
    'ALLOWED_INPUT_TYPES',
    'DataRecord',
    'InputRecord',
    'IKeyValueStore',
    'InMemoryKeyValueStore',
    'SQLiteKeyValueStore',
    'ScopedStore',
    'dump_record',
    'load_record',
    'parse_inputs',
    'restore_form',
    'save_form'
]
