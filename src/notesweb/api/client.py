"""HTTP client for the notes API.

Every call returns a `Result` instead of raising, so route handlers branch on
`result.ok` and never need to catch transport errors themselves.
"""

from dataclasses import dataclass
from functools import cache
from typing import Any, Literal

import httpx
import pydantic
import structlog
from pydantic import TypeAdapter

from notesweb.session import Session, forward_credentials

logger = structlog.get_logger(__name__)


class ApiError(Exception):
    """Raised inside the client for a non-2xx notes API response."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"api error: {status_code}")
        self.status_code = status_code


@dataclass(frozen=True)
class Ok[T]:
    """Successful call carrying the parsed response body."""

    data: T

    @property
    def ok(self) -> Literal[True]:
        return True


@dataclass(frozen=True)
class Err:
    """Failed call carrying the failure reason."""

    error: Exception

    @property
    def ok(self) -> Literal[False]:
        return False


type Result[T] = Ok[T] | Err


@cache
def _adapter[T](model: type[T]) -> TypeAdapter[T]:
    return TypeAdapter(model)


class ApiClient:
    """Notes API client bound to the session of one inbound request."""

    def __init__(self, http: httpx.AsyncClient, base_url: str, session: Session | None = None) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._backend = httpx.URL(self._base_url)
        self.session = session

    def url(self, path: str) -> httpx.URL:
        return httpx.URL(f"{self._base_url}{path}")

    async def call[T](
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        response_model: type[T] | None = None,
    ) -> Result[T]:
        """Send one request to the notes API.

        The body of a 2xx response is parsed into `response_model`. Without a
        model the body is ignored and `data` is None.
        """
        request = self._http.build_request(method, self.url(path), json=json)
        request.headers.update(forward_credentials(self.session, request.url, self._backend))

        try:
            response = await self._http.send(request)
        except httpx.HTTPError as e:
            logger.warning("Notes API request failed", method=method, path=path, error=repr(e))
            return Err(e)

        if not response.is_success:
            logger.warning("Notes API returned an error", method=method, path=path, status_code=response.status_code)
            return Err(ApiError(response.status_code))

        if response_model is None:
            return Ok(None)  # type: ignore[return-value]

        try:
            data = _adapter(response_model).validate_json(response.content)
        except pydantic.ValidationError as e:
            logger.warning("Notes API returned an unexpected body", method=method, path=path, error=str(e))
            return Err(e)

        return Ok(data)
