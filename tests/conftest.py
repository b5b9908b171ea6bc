import pytest
from fastapi.testclient import TestClient

from backend.auth import jwt_handler
from backend.main import create_app
from backend.storage.file_store import FileEntityStore
from backend.storage.seeds import build_seed_data
from backend.storage.sql_store import SqlEntityStore

STUDENT_ID = 101
OTHER_STUDENT_ID = 102
ADMIN_ID = 1


def build_sql_store(directory) -> SqlEntityStore:
    return SqlEntityStore.from_url(f'sqlite:///{directory}/wellness-test.db')


def build_file_store(directory) -> FileEntityStore:
    return FileEntityStore(str(directory / 'data'))


@pytest.fixture
def sql_store(tmp_path):
    store = build_sql_store(tmp_path)
    store.initialize(build_seed_data())
    try:
        yield store
    finally:
        store.engine.dispose()


@pytest.fixture
def file_store(tmp_path):
    store = build_file_store(tmp_path)
    store.initialize(build_seed_data())
    return store


@pytest.fixture(params=['sql', 'file'])
def store(request, tmp_path):
    if request.param == 'sql':
        return request.getfixturevalue('sql_store')
    return request.getfixturevalue('file_store')


@pytest.fixture
def app(sql_store):
    return create_app(store=sql_store)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def bearer(user_id: int, role: str, email: str) -> dict[str, str]:
    token = jwt_handler.create_access_token(user_id=user_id, role=role, email=email)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def student_headers() -> dict[str, str]:
    return bearer(STUDENT_ID, 'student', 'student@example.edu')


@pytest.fixture
def other_student_headers() -> dict[str, str]:
    return bearer(OTHER_STUDENT_ID, 'student', 'other@example.edu')


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return bearer(ADMIN_ID, 'admin', 'counselor@example.edu')
