"""Uvicorn server runner."""

import uvicorn

from notesweb.app import App
from notesweb.config import Config
from notesweb.web.server import create_fastapi_app


def run_server(app: App, config: Config) -> None:
    """Serve the frontend on the configured host and port.

    Uvicorn's own logging config is disabled so its `uvicorn.error` and
    `uvicorn.access` records reach the root handler set up by `setup_logging`.
    """
    fastapi_app = create_fastapi_app(app, config)
    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=None,
        log_level="debug" if config.debug else "info",
    )
