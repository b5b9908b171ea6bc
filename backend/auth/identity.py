"""Identity carried by a bearer credential."""

from dataclasses import dataclass

import jwt

from backend.auth import jwt_handler
from backend.core.errors import Unauthenticated

STUDENT = 'student'
ADMIN = 'admin'
ROLES = (STUDENT, ADMIN)


@dataclass(frozen=True)
class Identity:
    user_id: int
    role: str
    email: str = ''

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN


def identity_from_token(token: str | None) -> Identity:
    if not token:
        raise Unauthenticated('No token provided')

    try:
        payload = jwt_handler.decode_access_token(token)
    except jwt.PyJWTError as exc:
        raise Unauthenticated('Invalid token') from exc

    try:
        user_id = int(payload['sub'])
    except (KeyError, TypeError, ValueError) as exc:
        raise Unauthenticated('Invalid token subject') from exc

    role = payload.get('role')
    if role not in ROLES:
        raise Unauthenticated('Invalid token role')

    return Identity(user_id=user_id, role=role, email=payload.get('email') or '')
