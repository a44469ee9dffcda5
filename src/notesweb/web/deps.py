from typing import Annotated, cast

from fastapi import Depends, Request

from notesweb.api.client import ApiClient
from notesweb.app import App
from notesweb.session import Session


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_session(request: Request) -> Session | None:
    """Session populated by the session hook for this request."""
    return cast(Session | None, getattr(request.state, "session", None))


async def get_api(
    app: Annotated[App, Depends(get_app)],
    session: Annotated[Session | None, Depends(get_session)],
) -> ApiClient:
    """Notes API client forwarding the current session's token."""
    return app.api(session)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
SessionDep = Annotated[Session | None, Depends(get_session)]
ApiDep = Annotated[ApiClient, Depends(get_api)]
