import logging
from collections.abc import Mapping
from typing import Any

from backend.core.errors import InvalidInput, NotFound
from backend.services.validation import describe_fields, is_blank, require_fields, utc_now_iso
from backend.storage.base import Batch, Collection, Record

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('title', 'description', 'category')
NON_BLANK_FIELDS = REQUIRED_FIELDS + ('type',)
EDITABLE_FIELDS = ('title', 'description', 'category', 'content', 'type')
DEFAULT_RESOURCE_TYPE = 'Article'


class ResourceCatalog:
    """Articles and guides, managed by admins and readable by everyone."""

    def __init__(self, collection: Collection):
        self.collection = collection

    def list(self) -> list[Record]:
        return self.collection.load()

    def get(self, resource_id: int) -> Record:
        resource = self.collection.get(resource_id)
        if resource is None:
            raise NotFound('Resource not found')
        return resource

    def create(self, payload: Mapping[str, Any]) -> Record:
        require_fields(payload, REQUIRED_FIELDS, f'Please provide {describe_fields(REQUIRED_FIELDS)}')

        def _create(batch: Batch) -> Record:
            resource = {
                'id': batch.next_id(),
                'title': payload['title'],
                'description': payload['description'],
                'category': payload['category'],
                'content': payload.get('content') or '',
                'type': DEFAULT_RESOURCE_TYPE if is_blank(payload.get('type')) else payload['type'],
                'createdAt': utc_now_iso(),
            }
            batch.records.append(resource)
            return resource

        resource = self.collection.mutate(_create)
        logger.info('Created resource %s', resource['id'])
        return resource

    def update(self, resource_id: int, changes: Mapping[str, Any]) -> Record:
        updates = {field: changes[field] for field in EDITABLE_FIELDS if field in changes and changes[field] is not None}
        blank = [field for field in NON_BLANK_FIELDS if field in updates and is_blank(updates[field])]
        if blank:
            raise InvalidInput(f'{describe_fields(tuple(blank)).capitalize()} cannot be empty')

        def _update(batch: Batch) -> Record:
            index = batch.index_of(resource_id)
            if index is None:
                raise NotFound('Resource not found')
            current = batch.records[index]
            batch.records[index] = {
                **current,
                **updates,
                'id': current['id'],
                'createdAt': current.get('createdAt'),
            }
            return batch.records[index]

        resource = self.collection.mutate(_update)
        logger.info('Updated resource %s (%s)', resource_id, ', '.join(sorted(updates)) or 'no changes')
        return resource

    def delete(self, resource_id: int) -> None:
        def _delete(batch: Batch) -> None:
            index = batch.index_of(resource_id)
            if index is None:
                raise NotFound('Resource not found')
            del batch.records[index]

        self.collection.mutate(_delete)
        logger.info('Deleted resource %s', resource_id)
