from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from backend.auth.identity import ADMIN, STUDENT, Identity, identity_from_token
from backend.auth.policy import require

# auto_error is off so a missing header surfaces as Unauthenticated, not FastAPI's 403.
security = HTTPBearer(auto_error=False)


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Identity:
    token = credentials.credentials if credentials else None
    return identity_from_token(token)


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    return require(identity, ADMIN)


def require_student(identity: Identity = Depends(get_current_identity)) -> Identity:
    return require(identity, STUDENT)
