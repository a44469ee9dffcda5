from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
import structlog

from notesweb.api.client import ApiClient
from notesweb.config import Config
from notesweb.session import Session

logger = structlog.get_logger(__name__)


class App:
    """Facade owning the shared notes API connection pool."""

    def __init__(self, config: Config, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Open the notes API client on startup and close it on shutdown."""
        self._http = httpx.AsyncClient(timeout=self.config.backend_timeout, transport=self._transport)
        logger.debug("notes_api_client_started", base_url=self.config.api_base_url)
        try:
            yield
        finally:
            await self._http.aclose()
            self._http = None

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http is None:
            raise RuntimeError("Notes API client is not started")
        return self._http

    def api(self, session: Session | None) -> ApiClient:
        """Notes API client that forwards the given session's credentials."""
        return ApiClient(self.http, self.config.api_base_url, session)
