"""Auth routes: signup, login, logout, me. Session-based auth via signed cookie."""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from ecotrack.core.config import Settings
from ecotrack.core.security import hash_password, password_too_long, verify_password
from ecotrack.core.sessions import SessionManager
from ecotrack.db.session import get_db
from ecotrack.schemas.auth import CredentialsSchema, MeOutSchema, UserOutSchema
from ecotrack.services import store

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])

INVALID_CREDENTIALS = "Invalid username or password"


# ---------- dependencies ----------

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.sessions


def get_session_token(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> str | None:
    return request.cookies.get(settings.session_cookie_name)


def get_current_user_id_optional(
    token: Annotated[str | None, Depends(get_session_token)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
) -> int | None:
    """Return the session's user id if the cookie is valid; else None."""
    if not token:
        return None
    return sessions.resolve(token)


def require_user_id(
    user_id: Annotated[int | None, Depends(get_current_user_id_optional)],
) -> int:
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not logged in")
    return user_id


def _start_session(response: Response, sessions: SessionManager, settings: Settings, user_id: int) -> None:
    token = sessions.create(user_id)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
    )


# ---------- routes ----------

@router.post("/signup")
def signup(
    body: CredentialsSchema,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Create the user and log them in."""
    if password_too_long(body.password):
        raise HTTPException(status_code=400, detail="Password must be at most 72 bytes")

    # DuplicateUsernameError is mapped to a 400 by the app's error handler
    user = store.create_user(db, body.username, hash_password(body.password))
    log.info("New user %s (id=%s)", user.username, user.id)
    _start_session(response, sessions, settings, user.id)
    return {"success": True}


@router.post("/login")
def login(
    body: CredentialsSchema,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    user = store.get_user_by_username(db, body.username)
    if not user or not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=400, detail=INVALID_CREDENTIALS)

    _start_session(response, sessions, settings, user.id)
    return {"success": True}


@router.post("/logout")
def logout(
    response: Response,
    token: Annotated[str | None, Depends(get_session_token)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Drop the server-side session and clear the cookie."""
    sessions.destroy(token)
    # path must match the one used in set_cookie()
    response.delete_cookie(settings.session_cookie_name, path="/")
    return {"success": True}


@router.get("/me", response_model=MeOutSchema, response_model_exclude_none=True)
def me(
    db: Annotated[Session, Depends(get_db)],
    user_id: Annotated[int | None, Depends(get_current_user_id_optional)],
):
    if user_id is None:
        return MeOutSchema(loggedIn=False)
    user = store.get_user(db, user_id)
    if user is None:
        return MeOutSchema(loggedIn=False)
    return MeOutSchema(loggedIn=True, user=UserOutSchema.model_validate(user))
