import os
import uuid
import psycopg
import pytest

from jobscope.config.settings import Settings
from jobscope.storage.connection import build_conninfo


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "jobscope_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def postgres_available(test_settings: Settings) -> None:
    try:
        with psycopg.connect(build_conninfo(test_settings), connect_timeout=3):
            pass
    except psycopg.Error as e:
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a disposable database"
        )


@pytest.fixture
def key_prefix() -> str:
    return f"it-{uuid.uuid4().hex[:12]}-"


@pytest.fixture
def file_settings(tmp_path, monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.setenv("STORAGE_BACKEND", "file")
    monkeypatch.setenv("STORAGE_PATH", str(tmp_path / "storage.json"))
    monkeypatch.setenv("ANALYSIS_PROVIDER", "example")
    monkeypatch.setenv("KDF_ITERATIONS", "1000")
    return Settings()
