import logging

from backend.auth.identity import ADMIN, STUDENT, Identity
from backend.core.errors import Forbidden

logger = logging.getLogger(__name__)

ROLE_DENIED_MESSAGES = {
    ADMIN: 'Admin access required',
    STUDENT: 'Students only',
}


def require(identity: Identity, required_role: str) -> Identity:
    if identity.role != required_role:
        logger.warning('User %s with role %s denied %s-only operation', identity.user_id, identity.role, required_role)
        raise Forbidden(ROLE_DENIED_MESSAGES.get(required_role, 'Access denied'))
    return identity


def require_owner_or_admin(identity: Identity, owner_id: int) -> Identity:
    if identity.is_admin or identity.user_id == owner_id:
        return identity
    logger.warning('User %s denied access to a record owned by %s', identity.user_id, owner_id)
    raise Forbidden('Access denied')
