import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .repositories import (
    DuplicateError,
    NotFoundError,
    Repository,
    StoreError,
    TransactionAbortedError,
    open_repository,
)
from .routers import categories as categories_router
from .routers import checklist as checklist_router
from .routers import schedules as schedules_router
from .routers import topics as topics_router
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "schedules", "description": "Weekday and weekend study schedules."},
    {"name": "categories", "description": "Topic categories; deleting one removes its topics."},
    {"name": "topics", "description": "Study topics and their status."},
    {"name": "checklist", "description": "Daily checklist with reset to defaults."},
]


def setup_logging(settings: Settings) -> None:
    """Configure root logging with a console handler."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
    logging.getLogger("pymongo").setLevel(logging.WARNING)


def _error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for request validation errors.

        Response format:
            {
                "error": "ValidationError",
                "detail": [... pydantic/fastapi error details ...],
                "message": "Request validation failed"
            }
        """
        return JSONResponse(
            status_code=422,
            content={
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return _error_response(404, "NotFound", str(exc))

    @app.exception_handler(DuplicateError)
    async def duplicate_handler(request: Request, exc: DuplicateError) -> JSONResponse:
        return _error_response(400, "Duplicate", str(exc))

    @app.exception_handler(TransactionAbortedError)
    async def aborted_handler(request: Request, exc: TransactionAbortedError) -> JSONResponse:
        logger.warning("%s %s aborted: %s", request.method, request.url.path, exc)
        return _error_response(400, "TransactionAborted", str(exc))

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.error("%s %s failed", request.method, request.url.path, exc_info=exc)
        return _error_response(500, "StoreError", str(exc))


# PUBLIC_INTERFACE
def create_app(repository: Optional[Repository] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    When `repository` is given the app uses it as-is and leaves closing it to the
    caller; otherwise a repository is opened from settings at startup and closed
    at shutdown. Startup also seeds the schedule if the store is empty.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = getattr(app.state, "repository", None) is None
        if owned:
            app.state.repository = open_repository(settings)
        logger.info("Starting Study Planner API (backend: %s)", settings.persistence_backend)
        app.state.repository.ensure_schedule_seeded()
        yield
        if owned:
            app.state.repository.close()
            app.state.repository = None
        logger.info("Study Planner API stopped")

    app = FastAPI(
        title="Study Planner Backend",
        description="Backend API for a personal study plan: schedules, topics, categories and a daily checklist.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.repository = repository

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health.
        """
        return {"message": "Healthy", "backend": settings.persistence_backend}

    app.include_router(schedules_router.router)
    app.include_router(categories_router.router)
    app.include_router(topics_router.router)
    app.include_router(checklist_router.router)
    return app


app = create_app()


# PUBLIC_INTERFACE
def run() -> None:
    """Serve the application with uvicorn on the configured port."""
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)


if __name__ == "__main__":
    run()
