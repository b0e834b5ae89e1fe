import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from analysis.analysis_client import AnalysisClient
from api import state
from api.routers import ai, ops
from smartnote_ai.errors import (
    DraftValidationError,
    InternalError,
    SmartNoteError,
    UpstreamUnavailable,
)
from storage import db
from storage.postgres_store import PostgresEntityStore

# Logging configuration
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

INIT_DB_SCHEMA = os.getenv("INIT_DB_SCHEMA", "true").lower() in {"1", "true", "yes"}

app = FastAPI(title="SmartNote AI")
app.include_router(ai.router)
app.include_router(ops.router)

ERROR_STATUS = {
    DraftValidationError: 400,
    UpstreamUnavailable: 502,
    InternalError: 500,
}


@app.exception_handler(SmartNoteError)
async def smartnote_error_handler(request: Request, exc: SmartNoteError) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={"detail": f"{location}: {message}" if location else message},
    )


@app.on_event("startup")
async def startup() -> None:
    state.analysis_client = AnalysisClient()

    try:
        await db.init_db_pool()
        if INIT_DB_SCHEMA:
            await db.init_schema()
        state.entity_store = PostgresEntityStore()
        logger.info("Entity store ready")
    except Exception:
        logger.exception("Database unavailable, storage endpoints will return 503")


@app.on_event("shutdown")
async def shutdown() -> None:
    if isinstance(state.entity_store, PostgresEntityStore):
        await db.close_db_pool()
