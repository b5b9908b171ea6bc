import pytest

from backend.auth.identity import identity_from_token
from backend.core.errors import Forbidden, InvalidInput, Unauthenticated
from backend.services.user_accounts import UserAccounts
from backend.storage.seeds import USERS


@pytest.fixture
def accounts(sql_store) -> UserAccounts:
    return UserAccounts(sql_store.collection(USERS))


def test_register_normalizes_email_and_hashes_password(accounts: UserAccounts) -> None:
    user = accounts.register(' Kim@Example.EDU ', 'secret123')

    assert user['id'] == 1
    assert user['email'] == 'kim@example.edu'
    assert user['role'] == 'student'
    assert user['passwordHash'] != 'secret123'


def test_register_rejects_duplicate_email(accounts: UserAccounts) -> None:
    accounts.register('kim@example.edu', 'secret123')

    with pytest.raises(InvalidInput) as exception_info:
        accounts.register('KIM@example.edu', 'another123')

    assert exception_info.value.message == 'User already exists'


@pytest.mark.parametrize(
    ('email', 'password', 'role'),
    [
        ('', 'secret123', None),
        ('kim@example.edu', '', None),
        ('not-an-email', 'secret123', None),
        ('kim@example.edu', 'short', None),
        ('kim@example.edu', 'secret123', 'counselor'),
    ],
)
def test_register_validates_input(accounts: UserAccounts, email: str, password: str, role) -> None:
    with pytest.raises(InvalidInput):
        accounts.register(email, password, role)


def test_admin_registration_can_be_disabled(sql_store) -> None:
    accounts = UserAccounts(sql_store.collection(USERS), allow_admin_registration=False)

    with pytest.raises(Forbidden):
        accounts.register('dean@example.edu', 'secret123', 'admin')


def test_login_issues_token_for_registered_user(accounts: UserAccounts) -> None:
    registered = accounts.register('dean@example.edu', 'secret123', 'admin')

    token, user = accounts.login('DEAN@example.edu', 'secret123')
    identity = identity_from_token(token)

    assert user['id'] == registered['id']
    assert (identity.user_id, identity.role, identity.email) == (registered['id'], 'admin', 'dean@example.edu')


@pytest.mark.parametrize(('email', 'password'), [('kim@example.edu', 'wrong-pass'), ('nobody@example.edu', 'secret123')])
def test_login_rejects_bad_credentials(accounts: UserAccounts, email: str, password: str) -> None:
    accounts.register('kim@example.edu', 'secret123')

    with pytest.raises(Unauthenticated) as exception_info:
        accounts.login(email, password)

    assert exception_info.value.message == 'Invalid credentials'
