"""Application entry point for the notes web frontend."""

from notesweb.app import App
from notesweb.config import Config
from notesweb.logging import setup_logging
from notesweb.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
