import pytest
from fastapi.testclient import TestClient

from backend.main import create_app
from backend.storage.seeds import SESSIONS

BOOKING = {'date': '2026-11-02', 'time': '10:00', 'type': 'Individual Counseling', 'notes': 'exam anxiety'}


def _book(client, headers) -> dict:
    response = client.post('/sessions', json=BOOKING, headers=headers)
    assert response.status_code == 201
    return response.json()


def test_book_session(client, student_headers) -> None:
    session = _book(client, student_headers)

    assert session['id'] == 1
    assert session['status'] == 'pending'
    assert session['userId'] == 101
    assert session['userName'] == 'student@example.edu'


def test_book_session_missing_fields(client, student_headers) -> None:
    response = client.post('/sessions', json={'date': '2026-11-02'}, headers=student_headers)

    assert response.status_code == 400
    assert response.json() == {'error': 'Please provide date, time, and type'}


def test_list_sessions_requires_token(client) -> None:
    assert client.get('/sessions').status_code == 401


def test_students_only_see_their_own_sessions(client, student_headers, other_student_headers, admin_headers) -> None:
    _book(client, student_headers)
    _book(client, other_student_headers)

    mine = client.get('/sessions', headers=student_headers).json()
    theirs = client.get('/sessions', headers=other_student_headers).json()
    everything = client.get('/sessions', headers=admin_headers).json()

    assert [session['userId'] for session in mine] == [101]
    assert [session['userId'] for session in theirs] == [102]
    assert len(everything) == 2


def test_get_other_students_session_is_forbidden(client, student_headers, other_student_headers) -> None:
    session = _book(client, student_headers)

    response = client.get(f"/sessions/{session['id']}", headers=other_student_headers)

    assert response.status_code == 403
    assert response.json() == {'error': 'Access denied'}


def test_admin_updates_status(client, student_headers, admin_headers) -> None:
    session = _book(client, student_headers)

    response = client.put(f"/sessions/{session['id']}/status", json={'status': 'confirmed'}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()['status'] == 'confirmed'


def test_student_cannot_update_status(client, sql_store, student_headers) -> None:
    session = _book(client, student_headers)
    before = sql_store.load(SESSIONS)

    response = client.put(f"/sessions/{session['id']}/status", json={'status': 'confirmed'}, headers=student_headers)

    assert response.status_code == 403
    assert sql_store.load(SESSIONS) == before


def test_invalid_status(client, student_headers, admin_headers) -> None:
    session = _book(client, student_headers)

    response = client.put(f"/sessions/{session['id']}/status", json={'status': 'approved'}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json() == {'error': 'Invalid status'}


def test_update_status_of_missing_session(client, admin_headers) -> None:
    response = client.put('/sessions/9/status', json={'status': 'confirmed'}, headers=admin_headers)

    assert response.status_code == 404
    assert response.json() == {'error': 'Session not found'}


def test_delete_session_owner_only(client, student_headers, other_student_headers) -> None:
    session = _book(client, student_headers)

    assert client.delete(f"/sessions/{session['id']}", headers=other_student_headers).status_code == 403

    response = client.delete(f"/sessions/{session['id']}", headers=student_headers)
    assert response.status_code == 200
    assert response.json() == {'message': 'Session deleted successfully'}
    assert client.delete(f"/sessions/{session['id']}", headers=student_headers).status_code == 404


@pytest.fixture
def strict_client(sql_store):
    with TestClient(create_app(store=sql_store, strict_session_transitions=True)) as test_client:
        yield test_client


def test_strict_transitions_reject_reopening_completed_session(strict_client, student_headers, admin_headers) -> None:
    session = _book(strict_client, student_headers)
    path = f"/sessions/{session['id']}/status"

    assert strict_client.put(path, json={'status': 'confirmed'}, headers=admin_headers).status_code == 200
    assert strict_client.put(path, json={'status': 'completed'}, headers=admin_headers).status_code == 200

    response = strict_client.put(path, json={'status': 'pending'}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json() == {'error': 'Cannot change session status from completed to pending'}
