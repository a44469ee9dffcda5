"""Response helpers shared by page loaders and form actions."""

from typing import Any

from fastapi.responses import JSONResponse, RedirectResponse
from starlette.responses import Response

from notesweb.config import Config
from notesweb.session import SESSION_TOKEN_COOKIE, USER_ID_COOKIE


class Redirect(Exception):
    """Raised by loaders and dependencies to abort with a 303 redirect."""

    def __init__(self, location: str) -> None:
        super().__init__(location)
        self.location = location


def redirect(location: str) -> RedirectResponse:
    """Post-action navigation, always 303 so the browser follows with GET."""
    return RedirectResponse(location, status_code=303)


def fail(status_code: int, message: str, **extra: Any) -> JSONResponse:
    """Action failure payload re-displayed next to the submitted form."""
    content = {key: value for key, value in extra.items() if value is not None}
    content["message"] = message
    return JSONResponse(status_code=status_code, content=content)


def _set_cookie(response: Response, key: str, value: str, config: Config) -> None:
    response.set_cookie(
        key=key,
        value=value,
        path="/",
        httponly=True,
        samesite="strict",
        secure=config.secure_cookies,
    )


def set_session_cookies(response: Response, config: Config, *, user_id: str, token: str) -> None:
    _set_cookie(response, USER_ID_COOKIE, user_id, config)
    _set_cookie(response, SESSION_TOKEN_COOKIE, token, config)


def clear_session_cookies(response: Response, config: Config) -> None:
    for key in (USER_ID_COOKIE, SESSION_TOKEN_COOKIE):
        response.delete_cookie(key, path="/", httponly=True, samesite="strict", secure=config.secure_cookies)
