from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from tests.conftest import auth_header, get_subject, get_user, login


def test_role_protected_route_access(client: TestClient, db_session: Session) -> None:
    subject = get_subject(db_session, 'JavaScript')
    candidate = get_user(db_session, 'seed-candidate-1@example.com')
    admin_tokens = login(client, 'seed-admin@example.com')
    admin_headers = auth_header(admin_tokens['access_token'])

    forbidden = client.get('/api/v1/tests/reassignments', headers=admin_headers)
    assert forbidden.status_code == 403

    forbidden = client.patch(
        '/api/v1/tests/reassign',
        json={'user_id': str(candidate.id), 'subject_id': str(subject.id)},
        headers=admin_headers,
    )
    assert forbidden.status_code == 403

    super_tokens = login(client, 'seed-super-admin@example.com')
    allowed = client.get('/api/v1/tests/reassignments', headers=auth_header(super_tokens['access_token']))
    assert allowed.status_code == 200
    payload = allowed.json()
    assert payload['meta'] == {'page': 1, 'page_size': 10, 'total': 0}


def test_candidate_cannot_assign_tests(client: TestClient, db_session: Session) -> None:
    subject = get_subject(db_session, 'JavaScript')
    candidate = get_user(db_session, 'seed-candidate-1@example.com')
    other = get_user(db_session, 'seed-candidate-2@example.com')

    admin_tokens = login(client, 'seed-admin@example.com')
    response = client.post(
        '/api/v1/tests/assign',
        json={'user_id': str(candidate.id), 'subject_id': str(subject.id)},
        headers=auth_header(admin_tokens['access_token']),
    )
    assert response.status_code == 201

    candidate_tokens = login(client, 'seed-candidate-1@example.com')
    response = client.post(
        '/api/v1/tests/assign',
        json={'user_id': str(other.id), 'subject_id': str(subject.id)},
        headers=auth_header(candidate_tokens['access_token']),
    )
    assert response.status_code == 403


def test_requests_without_token_are_unauthorized(client: TestClient) -> None:
    assert client.get('/api/v1/tests/start').status_code == 401
    assert client.get('/api/v1/subjects').status_code == 401


def test_health_is_public(client: TestClient) -> None:
    response = client.get('/api/v1/health')
    assert response.status_code == 200
    assert response.json()['status'] == 'ok'
