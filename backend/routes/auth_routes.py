from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from backend.api.dependencies import get_user_accounts
from backend.auth.dependencies import get_current_identity
from backend.auth.identity import Identity
from backend.core.errors import NotFound, Unauthenticated
from backend.services.user_accounts import UserAccounts, public_user

router = APIRouter(tags=['auth'])


class RegisterRequest(BaseModel):
    email: str | None = None
    password: str | None = None
    role: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    id: int
    email: str
    role: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = 'bearer'
    user: UserResponse


@router.post('/register', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, accounts: UserAccounts = Depends(get_user_accounts)):
    user = accounts.register(data.email, data.password, data.role)
    return public_user(user)


@router.post('/login', response_model=TokenResponse)
def login(data: LoginRequest, accounts: UserAccounts = Depends(get_user_accounts)):
    token, user = accounts.login(data.email, data.password)
    return TokenResponse(access_token=token, user=UserResponse(**public_user(user)))


@router.get('/me', response_model=UserResponse)
def me(
    identity: Identity = Depends(get_current_identity),
    accounts: UserAccounts = Depends(get_user_accounts),
):
    try:
        user = accounts.get(identity.user_id)
    except NotFound as exc:
        raise Unauthenticated('User not found') from exc
    return public_user(user)
