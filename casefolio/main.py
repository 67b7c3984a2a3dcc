"""
Casefolio FastAPI application entry point.
"""
import logging
import uuid
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from casefolio.database.engine import create_database_engine
from casefolio.database.init_db import create_tables
from casefolio.database.session import create_session_factory
from casefolio.routes.admin import router as admin_router
from casefolio.routes.auth import router as auth_router
from casefolio.routes.case_studies import router as case_studies_router
from casefolio.routes.contact import router as contact_router
from casefolio.routes.health import router as health_router
from casefolio.schemas.validation import PayloadValidationError, field_errors
from casefolio.services.config_service import AppConfig
from casefolio.services.email_service import EmailService
from casefolio.services.session_service import SessionService

LOG_FORMAT = "%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s request_id=%(request_id)s"

# Request ID context variable
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


# Custom logging filter to add request_id
class RequestIDFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("")
        return True


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)

    # Handler filters also see records propagated from child loggers
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, RequestIDFilter) for f in handler.filters):
            handler.addFilter(RequestIDFilter())


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """
    Build the application around an explicit configuration.

    Args:
        config: Settings to use, read from the environment when omitted

    Returns:
        Configured FastAPI app
    """
    configure_logging()
    config = config or AppConfig.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = create_database_engine(config)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        if config.create_tables:
            await create_tables(engine)
        try:
            yield
        finally:
            await engine.dispose()

    app = FastAPI(
        title="Casefolio",
        description="Content backend for a portfolio website",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.email_service = EmailService(config)
    app.state.session_service = SessionService(config)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request ID middleware
    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        request_id = str(uuid.uuid4())
        request_id_var.set(request_id)

        logger = logging.getLogger("casefolio.request")
        logger.info(
            f"Request started method={request.method} url={str(request.url)} client_ip={request.client.host if request.client else 'unknown'}"
        )

        response = await call_next(request)

        logger.info(f"Request completed status_code={response.status_code}")
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(PayloadValidationError)
    async def payload_validation_handler(request: Request, exc: PayloadValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = field_errors(exc.errors())
        return JSONResponse(
            status_code=400,
            content={"detail": "Invalid request", "errors": [error.model_dump() for error in errors]},
        )

    # Include routers
    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)
    app.include_router(contact_router)
    app.include_router(case_studies_router)
    app.include_router(admin_router)

    return app


app = create_app()
