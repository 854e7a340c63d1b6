"""Main FastAPI application entry point.

Startup fails fast on unusable configuration: settings are validated on
import, and the lifespan builds the secret codec and the session token
service and checks the database before serving requests.

Run:
    uvicorn latchkey.main:app --reload
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from latchkey.core.config import settings
from latchkey.core.container import (
    get_database,
    get_logger,
    get_secret_codec,
    get_session_token_service,
)
from latchkey.presentation.routers.api.middleware.trace_middleware import (
    TRACE_HEADER,
    TraceMiddleware,
)
from latchkey.presentation.routers.api.v1 import v1_router
from latchkey.presentation.routers.api.v1.errors import register_exception_handlers
from latchkey.presentation.routers.system import system_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    - Startup: build crypto services, verify the database is reachable
    - Shutdown: dispose of the connection pool

    Raises:
        RuntimeError: If the database cannot be reached.
    """
    logger = get_logger()

    get_secret_codec()
    get_session_token_service()

    database = get_database()
    if not await database.check_connection():
        logger.critical("Database unreachable at startup")
        raise RuntimeError("Database unreachable")

    logger.info(
        "Application started",
        environment=settings.environment.value,
        version=settings.app_version,
    )

    yield

    await database.close()
    logger.info("Application stopped")


app = FastAPI(
    title=settings.app_name,
    description="Account authentication service: registration, cookie sessions, emailed verification links and TOTP",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Credentialed CORS so the web client can send the session cookies
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Content-Type", TRACE_HEADER],
    expose_headers=[TRACE_HEADER],
)

# Wire trace middleware (request correlation)
app.add_middleware(TraceMiddleware)

# Register global exception handlers (RFC 7807 error responses)
register_exception_handlers(app)

app.include_router(system_router)
app.include_router(v1_router)
