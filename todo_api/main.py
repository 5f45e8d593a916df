import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import PORT
from .database import Database
from .logging_setup import setup_logging
from .routers import tasks

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request body"},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Build the API around ``database``, or the configured MySQL store."""
    app = FastAPI(
        title="Todo App API",
        description="Lists, creates and completes tasks",
        version="1.0.0",
    )
    app.state.database = database if database is not None else Database()

    # The UI may be served from another origin during development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(tasks.router, prefix="/api", tags=["tasks"])

    # Create tables on startup
    @app.on_event("startup")
    def on_startup():
        app.state.database.create_tables()

    @app.on_event("shutdown")
    def on_shutdown():
        app.state.database.dispose()

    @app.get("/")
    def read_root():
        return {"message": "Todo App Backend API is running!"}

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


app = create_app()


def run() -> None:
    """Start the API with uvicorn on the configured port."""
    setup_logging()
    uvicorn.run(app, host="0.0.0.0", port=PORT, log_config=None)


if __name__ == "__main__":
    run()
