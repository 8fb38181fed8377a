from jobscope.config.settings import Settings
from jobscope.storage.base import BaseKeyValueStore
from jobscope.storage.connection import create_pool
from jobscope.storage.json_file_store import JsonFileKeyValueStore
from jobscope.storage.memory_store import InMemoryKeyValueStore
from jobscope.storage.postgres_store import PostgresKeyValueStore


class KeyValueStoreFactory:
    """Creates the key-value backend named by settings.storage_backend."""

    BACKENDS = ("memory", "file", "postgres")

    @classmethod
    def create(cls, settings: Settings) -> BaseKeyValueStore:
        backend = settings.storage_backend.lower()
        if backend == "memory":
            return InMemoryKeyValueStore()
        if backend == "file":
            return JsonFileKeyValueStore(settings.storage_path)
        if backend == "postgres":
            return PostgresKeyValueStore(create_pool(settings))
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
