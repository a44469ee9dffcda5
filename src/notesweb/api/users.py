from uuid import UUID

from pydantic import BaseModel

from notesweb.api.client import ApiClient, Result


class User(BaseModel):
    """User account, owned by the notes API."""

    id: UUID
    username: str


class UserSession(BaseModel):
    """Session credential issued by the notes API."""

    token: str


class UserWithSession(BaseModel):
    """A user together with a freshly issued session."""

    user: User
    session: UserSession


class CreateUser(BaseModel):
    username: str


class CreatePassword(BaseModel):
    password: str


async def create_user(api: ApiClient, user: CreateUser) -> Result[UserWithSession]:
    return await api.call("POST", "/users", json=user.model_dump(), response_model=UserWithSession)


async def set_user_password(api: ApiClient, user_id: UUID, password: CreatePassword) -> Result[None]:
    return await api.call("PUT", f"/users/{user_id}/password", json=password.model_dump())


async def delete_user_session(api: ApiClient, user_id: UUID, session_id: UUID) -> Result[None]:
    return await api.call("DELETE", f"/users/{user_id}/sessions/{session_id}")
