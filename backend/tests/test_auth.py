from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from tests.conftest import auth_header, get_subject, get_user, login, seed_questions


def test_auth_login_and_refresh(client: TestClient) -> None:
    auth_payload = login(client, 'seed-admin@example.com')
    assert auth_payload['access_token']
    assert auth_payload['refresh_token']
    assert auth_payload['user']['email'] == 'seed-admin@example.com'
    assert auth_payload['subject_id'] is None

    refresh_response = client.post(
        '/api/v1/auth/refresh',
        json={'refresh_token': auth_payload['refresh_token']},
    )
    assert refresh_response.status_code == 200

    refreshed = refresh_response.json()
    assert refreshed['access_token']
    assert refreshed['refresh_token']
    assert refreshed['refresh_token'] != auth_payload['refresh_token']


def test_login_rejects_bad_credentials(client: TestClient) -> None:
    response = client.post(
        '/api/v1/auth/login',
        json={'email': 'seed-admin@example.com', 'password': 'WrongPass123!'},
    )
    assert response.status_code == 401


def test_refresh_rejects_garbage_token(client: TestClient) -> None:
    response = client.post('/api/v1/auth/refresh', json={'refresh_token': 'not-a-token'})
    assert response.status_code == 401


def test_candidate_without_assignment_cannot_log_in(client: TestClient) -> None:
    response = client.post(
        '/api/v1/auth/login',
        json={'email': 'seed-candidate-1@example.com', 'password': 'SeedPass123!'},
    )
    assert response.status_code == 404
    assert response.json() == {
        'detail': 'Test has not been assigned to the user. Cannot proceed.',
        'error': 'not_found',
    }


def test_submit_logs_the_candidate_out_everywhere(client: TestClient, db_session: Session) -> None:
    subject = get_subject(db_session, 'JavaScript')
    questions = seed_questions(db_session, subject)
    candidate = get_user(db_session, 'seed-candidate-1@example.com')

    admin_tokens = login(client, 'seed-admin@example.com')
    assigned = client.post(
        '/api/v1/tests/assign',
        json={'user_id': str(candidate.id), 'subject_id': str(subject.id)},
        headers=auth_header(admin_tokens['access_token']),
    )
    assert assigned.status_code == 201, assigned.text

    candidate_tokens = login(client, 'seed-candidate-1@example.com')
    assert candidate_tokens['subject_id'] == str(subject.id)
    assert candidate_tokens['question_count'] == len(questions)
    headers = auth_header(candidate_tokens['access_token'])

    assert client.get('/api/v1/auth/me', headers=headers).status_code == 200

    submitted = client.post(
        '/api/v1/tests/submit',
        json={
            'subject_id': str(subject.id),
            'answers': [{'question_id': str(q.id), 'option_id': str(q.correct_option_id)} for q in questions],
        },
        headers=headers,
    )
    assert submitted.status_code == 200, submitted.text

    assert client.get('/api/v1/auth/me', headers=headers).status_code == 401
    refreshed = client.post('/api/v1/auth/refresh', json={'refresh_token': candidate_tokens['refresh_token']})
    assert refreshed.status_code == 401

    # The admin's own session is untouched.
    assert client.get('/api/v1/auth/me', headers=auth_header(admin_tokens['access_token'])).status_code == 200
