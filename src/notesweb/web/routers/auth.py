from typing import Annotated
from uuid import UUID

import structlog
from fastapi import APIRouter, Cookie, Form
from pydantic import BaseModel, Field
from starlette.responses import Response

from notesweb.api.auth import PasswordCredentials, authenticate
from notesweb.api.client import Err
from notesweb.api.users import CreatePassword, CreateUser, create_user, delete_user_session, set_user_password
from notesweb.session import USER_ID_COOKIE
from notesweb.web.actions import clear_session_cookies, fail, redirect, set_session_cookies
from notesweb.web.deps import ApiDep, AppDep, SessionDep
from notesweb.web.openapi import ActionFailure

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["auth"])

MIN_USERNAME_LENGTH = 6
MIN_PASSWORD_LENGTH = 6


class AuthPage(BaseModel):
    """Page data for the sign-in and sign-up forms."""

    signed_in: bool = Field(..., description="Whether the visitor already has a session")


@router.get("/signin", summary="Sign-in page", operation_id="signinPage")
async def signin_page(session: SessionDep) -> AuthPage:
    return AuthPage(signed_in=session is not None)


@router.get("/signup", summary="Sign-up page", operation_id="signupPage")
async def signup_page(session: SessionDep) -> AuthPage:
    return AuthPage(signed_in=session is not None)


@router.get("/signup/password", summary="Set password page", operation_id="signupPasswordPage")
async def signup_password_page(session: SessionDep) -> AuthPage:
    return AuthPage(signed_in=session is not None)


@router.post(
    "/signin",
    summary="Sign in",
    description="Authenticate with username and password. Sets the session cookies and redirects to `/`.",
    operation_id="signin",
    status_code=303,
    responses={
        303: {"description": "Signed in, redirect to the notes"},
        400: {"model": ActionFailure, "description": "Missing username or password"},
        500: {"model": ActionFailure, "description": "Authentication failed"},
    },
)
async def signin(
    app: AppDep,
    api: ApiDep,
    username: Annotated[str | None, Form()] = None,
    password: Annotated[str | None, Form()] = None,
) -> Response:
    if not username:
        return fail(400, "username is required")
    if not password:
        return fail(400, "password is required")

    result = await authenticate(api, PasswordCredentials(username=username, password=password))
    if isinstance(result, Err):
        return fail(500, "authentication failed", username=username)

    logger.info("user_signed_in", user_id=str(result.data.user.id))
    response = redirect("/")
    set_session_cookies(response, app.config, user_id=str(result.data.user.id), token=result.data.session.token)
    return response


@router.post(
    "/signout",
    summary="Sign out",
    description="End the current session on the notes API and clear the session cookies.",
    operation_id="signout",
    status_code=303,
    responses={
        303: {"description": "Signed out (or no session), redirect to `/signin`"},
        500: {"model": ActionFailure, "description": "The notes API rejected the request"},
    },
)
async def signout(app: AppDep, api: ApiDep, session: SessionDep) -> Response:
    if session is None:
        return redirect("/signin")

    result = await delete_user_session(api, session.user_id, session.id)
    if isinstance(result, Err):
        return fail(500, "something went wrong")

    logger.info("user_signed_out", user_id=str(session.user_id))
    response = redirect("/signin")
    clear_session_cookies(response, app.config)
    return response


@router.post(
    "/signup",
    summary="Sign up",
    description=(
        "Create a user with the given username. The new session is stored in cookies and the browser "
        "is sent on to `/signup/password` to choose a password."
    ),
    operation_id="signup",
    status_code=303,
    responses={
        303: {"description": "User created, redirect to `/signup/password`"},
        400: {"model": ActionFailure, "description": "Username too short"},
        500: {"model": ActionFailure, "description": "The notes API rejected the request"},
    },
)
async def signup(
    app: AppDep,
    api: ApiDep,
    username: Annotated[str | None, Form()] = None,
) -> Response:
    if not username or len(username) < MIN_USERNAME_LENGTH:
        return fail(400, f"username must contain at least {MIN_USERNAME_LENGTH} characters", username=username)

    result = await create_user(api, CreateUser(username=username))
    if isinstance(result, Err):
        return fail(500, "something went wrong")

    logger.info("user_signed_up", user_id=str(result.data.user.id))
    response = redirect("/signup/password")
    set_session_cookies(response, app.config, user_id=str(result.data.user.id), token=result.data.session.token)
    return response


@router.post(
    "/signup/password",
    summary="Set password",
    description="Second sign-up step: set the password of the user created by `/signup`.",
    operation_id="signupPassword",
    status_code=303,
    responses={
        303: {"description": "Password set, redirect to `/` (or to `/signin` without a user cookie)"},
        400: {"model": ActionFailure, "description": "Password too short"},
        500: {"model": ActionFailure, "description": "The notes API rejected the request"},
    },
)
async def signup_password(
    api: ApiDep,
    user_id: Annotated[str | None, Cookie(alias=USER_ID_COOKIE)] = None,
    password: Annotated[str | None, Form()] = None,
) -> Response:
    if not user_id:
        return redirect("/signin")
    try:
        parsed_user_id = UUID(user_id)
    except ValueError:
        return redirect("/signin")

    if not password or len(password) < MIN_PASSWORD_LENGTH:
        return fail(400, f"password must contain at least {MIN_PASSWORD_LENGTH} characters")

    result = await set_user_password(api, parsed_user_id, CreatePassword(password=password))
    if isinstance(result, Err):
        return fail(500, "something went wrong")

    return redirect("/")
