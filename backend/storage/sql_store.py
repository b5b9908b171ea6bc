import json
import logging
from collections.abc import Mapping
from datetime import datetime, timezone

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from backend.core.errors import StorageUnavailable
from backend.database import (
    Base,
    build_engine,
    build_session_factory,
    ensure_sqlite_directory,
)
from backend.models.document import Document
from backend.storage.base import EntityStore, Record, decode_payload

logger = logging.getLogger(__name__)


class SqlEntityStore(EntityStore):
    """Keeps each collection as a single row of the ``documents`` table."""

    def __init__(self, engine: Engine):
        super().__init__()
        self.engine = engine
        self.SessionLocal = build_session_factory(engine)

    @classmethod
    def from_url(cls, database_url: str) -> 'SqlEntityStore':
        return cls(build_engine(database_url))

    def initialize(self, seeds: Mapping[str, list[Record]]) -> None:
        try:
            ensure_sqlite_directory(self.engine)
            Base.metadata.create_all(bind=self.engine, tables=[Document.__table__])
        except (OSError, SQLAlchemyError) as exc:
            raise StorageUnavailable('Database initialization failed') from exc

        for collection, records in seeds.items():
            with self._lock_for(collection):
                if self._fetch(collection) is None:
                    logger.info('Seeding %s with %d records', collection, len(records))
                    self._persist(collection, list(records), 0)

    def _fetch(self, collection: str) -> Document | None:
        db = self.SessionLocal()
        try:
            return db.get(Document, collection)
        except SQLAlchemyError as exc:
            raise StorageUnavailable(f'Could not read collection {collection!r}') from exc
        finally:
            db.close()

    def load(self, collection: str) -> list[Record]:
        document = self._fetch(collection)
        if document is None:
            return []
        return decode_payload(collection, document.payload)

    def _read_issued(self, collection: str) -> int:
        document = self._fetch(collection)
        if document is None:
            return 0
        return document.last_id or 0

    def _write(self, collection: str, records: list[Record], issued: int) -> None:
        payload = json.dumps(records, indent=2)
        db = self.SessionLocal()
        try:
            document = db.get(Document, collection)
            if document is None:
                document = Document(name=collection)
                db.add(document)
            document.payload = payload
            document.last_id = issued
            document.updated_at = datetime.now(timezone.utc)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise StorageUnavailable(f'Could not write collection {collection!r}') from exc
        finally:
            db.close()
