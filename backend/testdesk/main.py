from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from testdesk.api.v1.router import api_router
from testdesk.core.config import settings
from testdesk.core.errors import LifecycleError
from testdesk.core.logging import configure_logging
from testdesk.db.session import SessionLocal
from testdesk.services.bootstrap_service import ensure_reference_data


configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    db = SessionLocal()
    try:
        ensure_reference_data(db)
        db.commit()
    except Exception as exc:  # noqa: BLE001
        db.rollback()
        logger.warning('Bootstrap seed skipped: %s', exc)
    finally:
        db.close()

    yield


app = FastAPI(
    title='Candidate Test Desk API',
    version='0.1.0',
    openapi_url='/api/v1/openapi.json',
    docs_url='/api/v1/docs',
    redoc_url='/api/v1/redoc',
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)


@app.exception_handler(LifecycleError)
async def lifecycle_error_handler(_: Request, exc: LifecycleError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={'detail': exc.message, 'error': exc.kind})


app.include_router(api_router, prefix='/api/v1')


@app.get('/')
def root() -> dict[str, str]:
    return {'service': 'testdesk-api', 'status': 'running'}
