import logging
from collections.abc import Mapping
from typing import Any

from backend.auth.identity import Identity
from backend.auth.policy import require_owner_or_admin
from backend.core.errors import InvalidInput, NotFound
from backend.services.validation import describe_fields, require_fields, utc_now_iso
from backend.storage.base import Batch, Collection, Record

logger = logging.getLogger(__name__)

PENDING = 'pending'
CONFIRMED = 'confirmed'
COMPLETED = 'completed'
CANCELLED = 'cancelled'
SESSION_STATUSES = (PENDING, CONFIRMED, COMPLETED, CANCELLED)

# Only consulted in strict mode; completed and cancelled are terminal.
ALLOWED_TRANSITIONS = {
    PENDING: {CONFIRMED, CANCELLED},
    CONFIRMED: {COMPLETED, CANCELLED},
    COMPLETED: set(),
    CANCELLED: set(),
}

REQUIRED_FIELDS = ('date', 'time', 'type')


def is_transition_allowed(current: str, new: str) -> bool:
    return current == new or new in ALLOWED_TRANSITIONS.get(current, set())


class SessionScheduler:
    """Counseling sessions booked by students and managed by admins."""

    def __init__(self, collection: Collection, strict_transitions: bool = False):
        self.collection = collection
        self.strict_transitions = strict_transitions

    def list(self, identity: Identity) -> list[Record]:
        sessions = self.collection.load()
        if identity.is_admin:
            return sessions
        return [session for session in sessions if session.get('userId') == identity.user_id]

    def get(self, session_id: int, identity: Identity) -> Record:
        session = self.collection.get(session_id)
        if session is None:
            raise NotFound('Session not found')
        require_owner_or_admin(identity, session.get('userId'))
        return session

    def create(self, payload: Mapping[str, Any], identity: Identity) -> Record:
        require_fields(payload, REQUIRED_FIELDS, f'Please provide {describe_fields(REQUIRED_FIELDS)}')

        def _create(batch: Batch) -> Record:
            session = {
                'id': batch.next_id(),
                'userId': identity.user_id,
                'userName': identity.email,
                'date': payload['date'],
                'time': payload['time'],
                'type': payload['type'],
                'notes': payload.get('notes') or '',
                'status': PENDING,
                'createdAt': utc_now_iso(),
            }
            batch.records.append(session)
            return session

        session = self.collection.mutate(_create)
        logger.info('User %s booked session %s', identity.user_id, session['id'])
        return session

    def update_status(self, session_id: int, new_status: Any) -> Record:
        if new_status not in SESSION_STATUSES:
            raise InvalidInput('Invalid status')

        def _update(batch: Batch) -> Record:
            session = batch.find(session_id)
            if session is None:
                raise NotFound('Session not found')
            current = session.get('status', PENDING)
            if self.strict_transitions and not is_transition_allowed(current, new_status):
                raise InvalidInput(f'Cannot change session status from {current} to {new_status}')
            session['status'] = new_status
            return session

        session = self.collection.mutate(_update)
        logger.info('Session %s status set to %s', session_id, new_status)
        return session

    def delete(self, session_id: int, identity: Identity) -> None:
        def _delete(batch: Batch) -> None:
            index = batch.index_of(session_id)
            if index is None:
                raise NotFound('Session not found')
            require_owner_or_admin(identity, batch.records[index].get('userId'))
            del batch.records[index]

        self.collection.mutate(_delete)
        logger.info('User %s deleted session %s', identity.user_id, session_id)
