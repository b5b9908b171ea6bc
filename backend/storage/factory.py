from backend.core import config
from backend.storage.base import EntityStore
from backend.storage.file_store import FileEntityStore
from backend.storage.sql_store import SqlEntityStore


def build_store(
    backend: str | None = None,
    database_url: str | None = None,
    data_dir: str | None = None,
) -> EntityStore:
    backend = (backend or config.STORAGE_BACKEND).strip().lower()

    if backend == 'sql':
        return SqlEntityStore.from_url(database_url or config.DATABASE_URL)
    if backend == 'file':
        return FileEntityStore(data_dir or config.DATA_DIR)

    raise ValueError(f'Unknown storage backend: {backend!r}')
