import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from testdesk.core.config import settings
from testdesk.db.session import get_db


router = APIRouter(tags=['health'])
logger = logging.getLogger(__name__)


@router.get('/health')
def health(db: Session = Depends(get_db)) -> dict[str, str]:
    try:
        db.execute(text('select 1'))
        database = 'ok'
    except SQLAlchemyError as exc:
        logger.error('Health check could not reach the database: %s', exc)
        database = 'unavailable'
    return {'status': 'ok', 'database': database, 'environment': settings.APP_ENV}
