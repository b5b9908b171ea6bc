import logging

from backend.auth import jwt_handler
from backend.auth.identity import ADMIN, ROLES, STUDENT
from backend.auth.passwords import hash_password, verify_password
from backend.core.errors import Forbidden, InvalidInput, NotFound, Unauthenticated
from backend.services.validation import utc_now_iso
from backend.storage.base import Batch, Collection, Record

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str | None) -> str:
    return (email or '').strip().lower()


def public_user(user: Record) -> Record:
    return {'id': user['id'], 'email': user['email'], 'role': user['role']}


class UserAccounts:
    """Registration and password login; roles are fixed once a user exists."""

    def __init__(self, collection: Collection, allow_admin_registration: bool = True):
        self.collection = collection
        self.allow_admin_registration = allow_admin_registration

    def find_by_email(self, email: str) -> Record | None:
        normalized = normalize_email(email)
        for user in self.collection.load():
            if user.get('email') == normalized:
                return user
        return None

    def get(self, user_id: int) -> Record:
        user = self.collection.get(user_id)
        if user is None:
            raise NotFound('User not found')
        return user

    def register(self, email: str | None, password: str | None, role: str | None = None) -> Record:
        normalized = normalize_email(email)
        role = (role or STUDENT).strip().lower()

        if not normalized or not password:
            raise InvalidInput('Please provide email and password')
        if '@' not in normalized:
            raise InvalidInput('Invalid email address')
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidInput(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
        if role not in ROLES:
            raise InvalidInput('Invalid role')
        if role == ADMIN and not self.allow_admin_registration:
            raise Forbidden('Admin registration is disabled')

        password_hash = hash_password(password)

        def _register(batch: Batch) -> Record:
            if any(user.get('email') == normalized for user in batch.records):
                raise InvalidInput('User already exists')
            user = {
                'id': batch.next_id(),
                'email': normalized,
                'passwordHash': password_hash,
                'role': role,
                'createdAt': utc_now_iso(),
            }
            batch.records.append(user)
            return user

        user = self.collection.mutate(_register)
        logger.info('Registered user %s with role %s', user['id'], role)
        return user

    def authenticate(self, email: str | None, password: str | None) -> Record:
        user = self.find_by_email(email or '')
        if user is None or not verify_password(password or '', user.get('passwordHash', '')):
            logger.warning('Failed login attempt')
            raise Unauthenticated('Invalid credentials')
        return user

    def login(self, email: str | None, password: str | None) -> tuple[str, Record]:
        user = self.authenticate(email, password)
        token = jwt_handler.create_access_token(user_id=user['id'], role=user['role'], email=user['email'])
        return token, user
