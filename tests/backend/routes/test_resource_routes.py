from backend.core.errors import StorageCorrupt
from backend.storage.seeds import RESOURCES

NEW_RESOURCE = {
    'title': 'Exam Stress Toolkit',
    'description': 'Practical techniques for exam season.',
    'category': 'Self-Help',
}


def test_list_resources_is_public(client) -> None:
    response = client.get('/resources')

    assert response.status_code == 200
    assert [resource['title'] for resource in response.json()] == [
        'Understanding Stress and Anxiety',
        'Mindfulness Meditation Guide',
    ]


def test_get_resource_by_id(client) -> None:
    assert client.get('/resources/2').json()['category'] == 'Wellness'
    assert client.get('/resources/99').status_code == 404


def test_admin_creates_resource(client, admin_headers) -> None:
    response = client.post('/resources', json=NEW_RESOURCE, headers=admin_headers)

    assert response.status_code == 201
    body = response.json()
    assert body['id'] == 3
    assert body['type'] == 'Article'
    assert body['content'] == ''


def test_create_resource_without_token_is_unauthenticated(client, sql_store) -> None:
    response = client.post('/resources', json=NEW_RESOURCE)

    assert response.status_code == 401
    assert response.json() == {'error': 'No token provided'}
    assert len(sql_store.load(RESOURCES)) == 2


def test_student_cannot_create_resource(client, sql_store, student_headers) -> None:
    before = sql_store.load(RESOURCES)

    response = client.post('/resources', json=NEW_RESOURCE, headers=student_headers)

    assert response.status_code == 403
    assert response.json() == {'error': 'Admin access required'}
    assert sql_store.load(RESOURCES) == before


def test_create_resource_with_missing_fields(client, admin_headers) -> None:
    response = client.post('/resources', json={'title': 'Only a title'}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json() == {'error': 'Please provide title, description, and category'}


def test_create_resource_with_wrong_field_type(client, admin_headers) -> None:
    response = client.post('/resources', json={**NEW_RESOURCE, 'title': ['not', 'text']}, headers=admin_headers)

    assert response.status_code == 400
    assert 'title' in response.json()['error']


def test_admin_updates_resource(client, admin_headers) -> None:
    response = client.put('/resources/1', json={'category': 'Coping'}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()['category'] == 'Coping'
    assert response.json()['title'] == 'Understanding Stress and Anxiety'


def test_update_missing_resource(client, admin_headers) -> None:
    response = client.put('/resources/42', json={'title': 'x'}, headers=admin_headers)

    assert response.status_code == 404
    assert response.json() == {'error': 'Resource not found'}


def test_update_resource_with_blank_type(client, admin_headers) -> None:
    response = client.put('/resources/1', json={'type': '   '}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json() == {'error': 'Type cannot be empty'}
    assert client.get('/resources/1').json()['type'] == 'Article'


def test_student_cannot_delete_resource(client, sql_store, student_headers) -> None:
    response = client.delete('/resources/1', headers=student_headers)

    assert response.status_code == 403
    assert len(sql_store.load(RESOURCES)) == 2


def test_admin_deletes_resource(client, admin_headers) -> None:
    response = client.delete('/resources/1', headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {'message': 'Resource deleted successfully'}
    assert client.delete('/resources/1', headers=admin_headers).status_code == 404


def test_corrupt_storage_is_an_internal_error(client, sql_store, monkeypatch) -> None:
    def _corrupt(collection):
        raise StorageCorrupt(f'{collection} is unreadable')

    monkeypatch.setattr(sql_store, 'load', _corrupt)

    response = client.get('/resources')

    assert response.status_code == 500
    assert response.json() == {'error': 'Internal server error'}


def test_health(client) -> None:
    assert client.get('/health').json() == {'status': 'OK', 'message': 'Server is running'}
