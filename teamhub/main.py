import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.middleware.sessions import SessionMiddleware

from teamhub import settings
from teamhub.access.permissions import PERMISSIONS
from teamhub.db import create_database
from teamhub.db.indexes import ensure_indexes
from teamhub.middleware.audit_middleware import AuditMiddleware
from teamhub.middleware.security_headers import SecurityHeadersMiddleware
from teamhub.routes import athlete, auth, organization, team, testing, trainer

logger = logging.getLogger(__name__)


def create_app(database=None, permissions=PERMISSIONS) -> FastAPI:
    """
    Build the API. `database` defaults to a Motor handle on MONGO_URI;
    tests pass an in-memory one. `permissions` replaces the role matrix.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="teamhub")
    app.state.db = database if database is not None else create_database()
    app.state.permissions = permissions

    # last added runs first: audit wraps everything
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET_KEY,
        max_age=settings.SESSION_MAX_AGE,
        https_only=settings.COOKIE_SECURE,
        same_site="strict" if settings.COOKIE_SECURE else "lax",
    )
    app.add_middleware(AuditMiddleware)

    # Routers
    app.include_router(auth.router)
    app.include_router(organization.router)
    app.include_router(team.router)
    app.include_router(trainer.router)
    app.include_router(athlete.router)
    app.include_router(testing.router)

    @app.on_event("startup")
    async def _startup():
        try:
            await ensure_indexes(app.state.db)
        except PyMongoError as e:
            logger.warning("index creation skipped: %s", e)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse({"detail": exc.detail}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(PyMongoError)
    async def database_error_handler(request: Request, exc: PyMongoError):
        logger.error("database error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse({"detail": "Database unavailable"}, status_code=503)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
