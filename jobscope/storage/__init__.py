from jobscope.storage.base import BaseKeyValueStore
from jobscope.storage.factory import KeyValueStoreFactory
from jobscope.storage.json_file_store import JsonFileKeyValueStore
from jobscope.storage.memory_store import InMemoryKeyValueStore

__all__ = [
    "BaseKeyValueStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStoreFactory",
]
