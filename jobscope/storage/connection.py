from psycopg_pool import AsyncConnectionPool

from jobscope.config.settings import Settings


def build_conninfo(settings: Settings) -> str:
    return (
        f"host={settings.db_host} "
        f"port={settings.db_port} "
        f"dbname={settings.db_database} "
        f"user={settings.db_username} "
        f"password={settings.db_password}"
    )


def create_pool(settings: Settings) -> AsyncConnectionPool:
    """Create an unopened connection pool. The owner opens and closes it."""
    return AsyncConnectionPool(build_conninfo(settings), min_size=1, max_size=10, open=False)
