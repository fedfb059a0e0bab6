"""EcoTrack - FastAPI app entry point."""
import logging
from contextlib import asynccontextmanager
from datetime import timedelta

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ecotrack.core.config import Settings, get_settings
from ecotrack.core.errors import DuplicateUsernameError
from ecotrack.core.log_config import configure_logging
from ecotrack.core.security import configure_password_hashing
from ecotrack.core.sessions import DatabaseSessionStore, MemorySessionStore, SessionManager
from ecotrack.db.base import Base
from ecotrack.db.session import make_engine, make_session_factory
from ecotrack.routers import api, auth, web
from ecotrack.services.seeding import seed_tips

log = logging.getLogger(__name__)

# an empty string counts as a missing field
MISSING_ERROR_TYPES = {"missing", "string_too_short"}


def build_session_manager(settings: Settings, session_factory) -> SessionManager:
    if settings.session_backend == "database":
        store = DatabaseSessionStore(session_factory)
    elif settings.session_backend == "memory":
        store = MemorySessionStore()
    else:
        raise ValueError(f"unknown session backend: {settings.session_backend!r}")
    return SessionManager(
        store,
        secret_key=settings.secret_key,
        max_age=timedelta(seconds=settings.session_max_age),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # create tables, then seed the tip catalog
    Base.metadata.create_all(app.state.engine)
    with app.state.session_factory() as db:
        seed_tips(db)
    app.state.sessions.purge_expired()

    yield

    app.state.engine.dispose()


# ---------- error handlers ----------

async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = {}
    missing = False
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query")]
        name = ".".join(loc) or "body"
        fields[name] = err.get("msg", "Invalid value")
        if err.get("type") in MISSING_ERROR_TYPES:
            missing = True
    message = "Missing fields" if missing else "Invalid input"
    return JSONResponse({"error": message, "fields": fields}, status_code=400)


async def duplicate_username_handler(request: Request, exc: DuplicateUsernameError) -> JSONResponse:
    return JSONResponse({"error": "Username already exists"}, status_code=400)


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    log.exception("Store failure on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Server error"}, status_code=500)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Server error"}, status_code=500)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)
    configure_password_hashing(settings.bcrypt_rounds)

    app = FastAPI(
        title=settings.app_name,
        description="Daily eco task, streaks, tips and rewards",
        lifespan=lifespan,
    )

    engine = make_engine(settings.database_url)
    session_factory = make_session_factory(engine)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.sessions = build_session_manager(settings, session_factory)

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(DuplicateUsernameError, duplicate_username_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    app.include_router(auth.router)
    app.include_router(api.router)
    # catch-all GET; must stay last
    app.include_router(web.router)

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run("ecotrack.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
