import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from studymatch.api.auth import router as auth_router
from studymatch.api.health import router as health_router
from studymatch.api.matches import router as matches_router
from studymatch.api.notifications import router as notifications_router
from studymatch.api.requests import router as requests_router
from studymatch.api.users import router as users_router
from studymatch.api.ws import router as ws_router
from studymatch.config import settings
from studymatch.database import engine
from studymatch.errors import (
    StudyMatchError,
    database_exception_handler,
    request_validation_exception_handler,
    study_match_exception_handler,
)
from studymatch.logging_config import setup_logging
from studymatch.models import Base

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        if settings.RESET_DB:
            logger.warning("RESET_DB set: dropping all tables")
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield
    finally:
        await engine.dispose()


app = FastAPI(title="StudyMatch", version="0.1.0", lifespan=lifespan)
app.add_exception_handler(StudyMatchError, study_match_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_exception_handler(SQLAlchemyError, database_exception_handler)

app.include_router(health_router, prefix="/api")
app.include_router(auth_router, prefix="/api")
app.include_router(requests_router, prefix="/api")
app.include_router(matches_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(notifications_router, prefix="/api")
app.include_router(ws_router)


@app.get("/api")
def api_root():
    return {"message": "StudyMatch API"}
