import os
import tempfile
from collections.abc import Generator
from dataclasses import dataclass
from uuid import UUID

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session, sessionmaker

TEST_DATABASE_URL = os.environ.setdefault(
    'TEST_DATABASE_URL',
    'sqlite:///' + os.path.join(tempfile.gettempdir(), 'testdesk-tests.db'),
)

os.environ.setdefault('DATABASE_URL', TEST_DATABASE_URL)
os.environ.setdefault('JWT_SECRET_KEY', 'test-access-secret-32-chars-min-0001')
os.environ.setdefault('JWT_REFRESH_SECRET_KEY', 'test-refresh-secret-32-chars-min-0002')
os.environ.setdefault('APP_ENV', 'test')
os.environ.setdefault('LOG_LEVEL', 'WARNING')
os.environ.setdefault('CORS_ORIGINS', 'http://localhost:3001')
os.environ.setdefault('FIRST_ADMIN_EMAIL', 'seed-super-admin@example.com')
os.environ.setdefault('FIRST_ADMIN_PASSWORD', 'SeedPass123!')

from testdesk.api.v1.endpoints.auth import login_rate_limiter
from testdesk.core.security import hash_password
from testdesk.db.base import Base
from testdesk.db.session import get_db
from testdesk.main import app
from testdesk.models.position import Position
from testdesk.models.question_bank import Question, QuestionOption, Subject
from testdesk.models.rbac import Role, User, UserRole
from testdesk.services.bootstrap_service import ensure_reference_data


SEED_PASSWORD = 'SeedPass123!'
SEED_PASSWORD_HASH = hash_password(SEED_PASSWORD)

_connect_args = {'check_same_thread': False} if TEST_DATABASE_URL.startswith('sqlite') else {}
engine = create_engine(TEST_DATABASE_URL, pool_pre_ping=True, connect_args=_connect_args)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@dataclass
class SeededQuestion:
    id: UUID
    correct_option_id: UUID
    wrong_option_id: UUID


@pytest.fixture(autouse=True)
def setup_database() -> Generator[None, None, None]:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        ensure_reference_data(db)
        _seed_users(db)
        db.commit()
    finally:
        db.close()

    login_rate_limiter.reset('testclient')

    yield

    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    def _override_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_db

    with TestClient(app) as api_client:
        yield api_client

    app.dependency_overrides.clear()


def _seed_users(db: Session) -> None:
    positions = {position.name: position for position in db.scalars(select(Position)).all()}
    users = [
        ('seed-admin@example.com', 'Admin User', None, ['admin'], None),
        ('seed-candidate-1@example.com', 'Candidate One', '9000000001', ['candidate'], 'JavaScript Developer'),
        ('seed-candidate-2@example.com', 'Candidate Two', '9000000002', ['candidate'], 'Embedded Developer'),
        ('seed-candidate-3@example.com', 'Candidate Three', '9000000003', ['candidate'], 'JavaScript Developer'),
    ]

    role_map = {role.name: role for role in db.scalars(select(Role)).all()}

    for email, full_name, mobile, role_names, position_name in users:
        user = User(
            email=email,
            full_name=full_name,
            mobile=mobile,
            hashed_password=SEED_PASSWORD_HASH,
            is_active=True,
            position_id=positions[position_name].id if position_name else None,
        )
        db.add(user)
        db.flush()

        for role_name in role_names:
            db.add(UserRole(user_id=user.id, role_id=role_map[role_name].id))

    db.flush()


def get_user(db: Session, email: str) -> User:
    return db.scalar(select(User).where(User.email == email))


def get_subject(db: Session, name: str) -> Subject:
    return db.scalar(select(Subject).where(Subject.name == name))


def seed_questions(db: Session, subject: Subject, count: int = 4) -> list[SeededQuestion]:
    """Add ``count`` questions with four options each; the second option is the correct one."""
    seeded = []
    for number in range(1, count + 1):
        question = Question(subject_id=subject.id, text=f'{subject.name} question {number}', is_active=True)
        db.add(question)
        db.flush()

        options = [
            QuestionOption(
                question_id=question.id,
                text=f'Option {label}',
                is_correct=index == 1,
                is_active=True,
                order_index=index,
            )
            for index, label in enumerate('ABCD')
        ]
        db.add_all(options)
        db.flush()
        seeded.append(
            SeededQuestion(id=question.id, correct_option_id=options[1].id, wrong_option_id=options[0].id)
        )
    db.commit()
    return seeded


def login(client: TestClient, email: str, password: str = SEED_PASSWORD) -> dict:
    response = client.post(
        '/api/v1/auth/login',
        json={
            'email': email,
            'password': password,
        },
    )
    assert response.status_code == 200, response.text
    return response.json()


def auth_header(access_token: str) -> dict[str, str]:
    return {'Authorization': f'Bearer {access_token}'}
