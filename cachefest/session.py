"""Organizer session for the admin pages.

The flag lives in Starlette's signed session cookie. It keeps casual
visitors out of the dashboard; it is not real authentication, since anyone
holding the shared password gets in.
"""

import secrets

from fastapi import HTTPException, Request, status

from . import config

SESSION_KEY = "is_admin"


class AdminSession:
    def __init__(self, request: Request) -> None:
        self._session = request.session

    @property
    def is_admin(self) -> bool:
        return bool(self._session.get(SESSION_KEY))

    def login(self, password: str) -> bool:
        ok = secrets.compare_digest(password.encode(), config.ADMIN_PASSWORD.encode())
        if ok:
            self._session[SESSION_KEY] = True
        return ok

    def logout(self) -> None:
        self._session.pop(SESSION_KEY, None)


class LoginRequired(Exception):
    """Raised by admin page dependencies; answered with a redirect to the login page."""


def get_admin_session(request: Request) -> AdminSession:
    return AdminSession(request)


def require_admin_page(request: Request) -> AdminSession:
    session = AdminSession(request)
    if not session.is_admin:
        raise LoginRequired()
    return session


def require_admin_api(request: Request) -> AdminSession:
    session = AdminSession(request)
    if not session.is_admin:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Admin login required")
    return session
