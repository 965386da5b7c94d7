import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from pagetrail.config import LOG_LEVEL
from pagetrail.errors import PagetrailError
from pagetrail.log import configure_logging
from pagetrail.routers import auth, catalog, library

logger = logging.getLogger(__name__)


def _error(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": code, "message": message})


async def handle_pagetrail_error(request: Request, exc: PagetrailError) -> JSONResponse:
    return _error(exc.status_code, exc.code, exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted({".".join(str(p) for p in err["loc"][1:]) or str(err["loc"][0]) for err in exc.errors()})
    return _error(400, "InvalidInput", f"Invalid or missing fields: {', '.join(fields)}.")


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return _error(500, "Internal", "Internal server error.")


def create_app() -> FastAPI:
    configure_logging(LOG_LEVEL)
    app = FastAPI(title="Pagetrail", version="0.1.0")
    app.add_exception_handler(PagetrailError, handle_pagetrail_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
    app.include_router(auth.router)
    app.include_router(catalog.router)
    app.include_router(library.router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
