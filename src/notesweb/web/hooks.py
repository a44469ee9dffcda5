"""Per-request hooks run before any route handler."""

from collections.abc import Awaitable, Callable

from fastapi import Request, Response

from notesweb.session import read_session


async def session_hook(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Attach the session decoded from the session cookie to the request.

    A missing or malformed cookie leaves the request without a session.
    """
    request.state.session = read_session(request.cookies)
    return await call_next(request)
