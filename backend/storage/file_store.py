import json
import logging
import os
import tempfile
from collections.abc import Mapping
from threading import Lock

from backend.core.errors import StorageCorrupt, StorageUnavailable
from backend.storage.base import EntityStore, Record, decode_payload

logger = logging.getLogger(__name__)

SEQUENCES_FILE = '_sequences.json'


class FileEntityStore(EntityStore):
    """Keeps each collection as ``<name>.json`` inside ``data_dir``."""

    def __init__(self, data_dir: str):
        super().__init__()
        self.data_dir = data_dir
        self._sequences_lock = Lock()

    def _path(self, filename: str) -> str:
        return os.path.join(self.data_dir, filename)

    def _document_path(self, collection: str) -> str:
        return self._path(f'{collection}.json')

    def _replace(self, path: str, content: str) -> None:
        # Write beside the target then swap, so readers never see a partial file.
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, prefix='.tmp-', suffix='.json')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as handle:
                    handle.write(content)
                os.replace(tmp_path, path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as exc:
            raise StorageUnavailable(f'Could not write {path}') from exc

    def initialize(self, seeds: Mapping[str, list[Record]]) -> None:
        try:
            os.makedirs(self.data_dir, exist_ok=True)
        except OSError as exc:
            raise StorageUnavailable(f'Could not create data directory {self.data_dir}') from exc

        for collection, records in seeds.items():
            with self._lock_for(collection):
                if not os.path.exists(self._document_path(collection)):
                    logger.info('Seeding %s with %d records', collection, len(records))
                    self._persist(collection, list(records), 0)

    def load(self, collection: str) -> list[Record]:
        path = self._document_path(collection)
        try:
            with open(path, encoding='utf-8') as handle:
                payload = handle.read()
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise StorageUnavailable(f'Could not read {path}') from exc
        return decode_payload(collection, payload)

    def _read_sequences(self) -> dict[str, int]:
        path = self._path(SEQUENCES_FILE)
        try:
            with open(path, encoding='utf-8') as handle:
                sequences = json.load(handle)
        except FileNotFoundError:
            return {}
        except ValueError as exc:
            raise StorageCorrupt(f'{path} is not valid JSON') from exc
        except OSError as exc:
            raise StorageUnavailable(f'Could not read {path}') from exc

        if not isinstance(sequences, dict):
            raise StorageCorrupt(f'{path} is not a JSON object')
        return sequences

    def _read_issued(self, collection: str) -> int:
        with self._sequences_lock:
            issued = self._read_sequences().get(collection, 0)
        return issued if isinstance(issued, int) else 0

    def _write(self, collection: str, records: list[Record], issued: int) -> None:
        # The high-water mark goes first; replacing the document is the commit point.
        with self._sequences_lock:
            sequences = self._read_sequences()
            if sequences.get(collection) != issued:
                sequences[collection] = issued
                self._replace(self._path(SEQUENCES_FILE), json.dumps(sequences, indent=2, sort_keys=True))

        self._replace(self._document_path(collection), json.dumps(records, indent=2))
