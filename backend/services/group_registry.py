import logging
from collections.abc import Mapping
from typing import Any

from backend.core.errors import AlreadyMember, NotFound
from backend.services.validation import describe_fields, require_fields, utc_now_iso
from backend.storage.base import Batch, Collection, Record

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('name', 'description')


def _find_group(batch: Batch, group_id: int) -> Record:
    group = batch.find(group_id)
    if group is None:
        raise NotFound('Group not found')
    return group


class GroupRegistry:
    """Peer support groups; ``members`` holds each user id at most once."""

    def __init__(self, collection: Collection):
        self.collection = collection

    def list(self) -> list[Record]:
        return self.collection.load()

    def get(self, group_id: int) -> Record:
        group = self.collection.get(group_id)
        if group is None:
            raise NotFound('Group not found')
        return group

    def create(self, payload: Mapping[str, Any]) -> Record:
        require_fields(payload, REQUIRED_FIELDS, f'Please provide {describe_fields(REQUIRED_FIELDS)}')

        def _create(batch: Batch) -> Record:
            group = {
                'id': batch.next_id(),
                'name': payload['name'],
                'description': payload['description'],
                'members': [],
                'createdAt': utc_now_iso(),
            }
            batch.records.append(group)
            return group

        group = self.collection.mutate(_create)
        logger.info('Created group %s', group['id'])
        return group

    def delete(self, group_id: int) -> None:
        def _delete(batch: Batch) -> None:
            index = batch.index_of(group_id)
            if index is None:
                raise NotFound('Group not found')
            del batch.records[index]

        self.collection.mutate(_delete)
        logger.info('Deleted group %s', group_id)

    def join(self, group_id: int, user_id: int) -> Record:
        def _join(batch: Batch) -> Record:
            group = _find_group(batch, group_id)
            members = group.setdefault('members', [])
            if user_id in members:
                raise AlreadyMember('Already a member')
            members.append(user_id)
            return group

        group = self.collection.mutate(_join)
        logger.info('User %s joined group %s', user_id, group_id)
        return group

    def leave(self, group_id: int, user_id: int) -> Record:
        def _leave(batch: Batch) -> Record:
            group = _find_group(batch, group_id)
            group['members'] = [member for member in group.get('members', []) if member != user_id]
            return group

        group = self.collection.mutate(_leave)
        logger.info('User %s left group %s', user_id, group_id)
        return group
