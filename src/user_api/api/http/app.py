"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from src.user_api import __version__
from src.user_api.api.http.app_data import ApplicationDependencies
from src.user_api.api.http.routers import health_router, users_router
from src.user_api.api.utils.app_startup import configure_logging
from src.user_api.core.models.envelope import Envelope
from src.user_api.core.services import DbSessionService
from src.user_api.runtime.context import get_config
from src.user_api.runtime.init_db import init_db

main_config = get_config()

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup(app)
    try:
        yield
    finally:
        await shutdown(app)


app = FastAPI(
    title="User Resource API",
    version=__version__,
    lifespan=lifespan,
    docs_url=None if main_config.app.environment == "production" else "/docs",
    redoc_url=None if main_config.app.environment == "production" else "/redoc",
)

__all__ = ["app", "startup", "shutdown"]

# --- CORS configuration ---
if main_config.app.environment == "production" and "*" in main_config.app.cors.origins:
    raise RuntimeError(
        "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=main_config.app.cors.origins,
    allow_credentials=main_config.app.cors.allow_credentials,
    allow_methods=main_config.app.cors.allow_methods,
    allow_headers=main_config.app.cors.allow_headers,
)


# --- Request context middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content=Envelope(success=False, message="Internal Server Error").to_body(),
                headers={"X-Request-ID": request_id},
            )

        duration_ms = (time.perf_counter() - start) * 1000
        logger.bind(
            status_code=response.status_code,
            duration_ms=round(duration_ms, 1),
        ).debug("request.end")
        response.headers.setdefault("X-Request-ID", request_id)
        return response


# --- Error envelopes for framework-raised errors ---
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "body"
        errors.setdefault(location, []).append(error.get("msg", "Invalid value"))

    logger.bind(status_code=422, error_type=type(exc).__name__).info(
        "request.validation_error"
    )
    return JSONResponse(
        status_code=422,
        content=Envelope(
            success=False, message="The given data was invalid.", errors=errors
        ).to_body(),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=Envelope(success=False, message=str(exc.detail)).to_body(),
        headers=getattr(exc, "headers", None),
    )


# --- Router registration ---
app.include_router(health_router)
app.include_router(users_router)


# --- Lifecycle hooks ---
async def startup(app: FastAPI) -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    database_service = DbSessionService(config)
    if config.database.auto_create_tables:
        init_db(database_service)

    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
    )


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        app_dependencies.database_service.dispose()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=main_config.app.host,
        port=main_config.app.port,
        access_log=False,  # request logging happens in the middleware
    )
