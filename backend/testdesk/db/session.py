from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from testdesk.core.config import settings


def _connect_args(database_url: str) -> dict:
    # Request handlers run in a threadpool; SQLite connections must be shareable.
    if database_url.startswith('sqlite'):
        return {'check_same_thread': False}
    return {}


engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=_connect_args(settings.DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
