from fastapi import APIRouter

from testdesk.api.v1.endpoints import auth, health, questions, tests


api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(tests.router)
api_router.include_router(questions.router)
