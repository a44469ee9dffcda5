from typing import Literal

from pydantic import BaseModel

from notesweb.api.client import ApiClient, Result
from notesweb.api.users import UserWithSession


class PasswordCredentials(BaseModel):
    """Username and password authentication method."""

    method: Literal["password"] = "password"
    username: str
    password: str


async def authenticate(api: ApiClient, credentials: PasswordCredentials) -> Result[UserWithSession]:
    """Exchange credentials for a user and a new session."""
    return await api.call("POST", "/auth", json=credentials.model_dump(), response_model=UserWithSession)
