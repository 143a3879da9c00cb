"""FastAPI application for the local stub backend."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from featurefest.config import configure_logging, settings
from featurefest.schemas import ErrorBody
from featurefest.stub.api.boards import router as boards_router
from featurefest.stub.api.features import router as features_router
from featurefest.stub.api.postgrest import PostgrestError
from featurefest.stub.api.votes import router as votes_router
from featurefest.stub.db import engine, init_db

logger = logging.getLogger(__name__)

REST_PREFIX = "/rest/v1"


async def require_api_key(apikey: str | None = Header(default=None)) -> None:
    """Reject requests without the configured static key. No key configured means open."""
    if settings.service_key and apikey != settings.service_key:
        raise PostgrestError(
            401,
            "Invalid API key",
            hint="Double check your FEATUREFEST_SERVICE_KEY.",
        )


def _error_response(status_code: int, body: ErrorBody) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    body = ErrorBody(
        message=str(exc.detail),
        code=getattr(exc, "code", None),
        details=getattr(exc, "details", None),
        hint=getattr(exc, "hint", None),
    )
    return _error_response(exc.status_code, body)


async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in exc.errors())
    body = ErrorBody(message="Invalid request body", code="PGRST102", details=fields)
    return _error_response(400, body)


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch unhandled exceptions and return a clean JSON 500 instead of a stack trace."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _error_response(500, ErrorBody(message="Internal server error"))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging()
    await init_db()
    logger.info("Stub backend ready at %s", settings.stub_base_url)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Featurefest stub",
        description="Local stand-in for the hosted Featurefest REST API",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)

    rest_dependencies = [Depends(require_api_key)]
    app.include_router(boards_router, prefix=REST_PREFIX, dependencies=rest_dependencies)
    app.include_router(features_router, prefix=REST_PREFIX, dependencies=rest_dependencies)
    app.include_router(votes_router, prefix=REST_PREFIX, dependencies=rest_dependencies)

    return app


app = create_app()
