"""Application entry point for the record store backend server."""

from recordstore.app import App
from recordstore.config import Config
from recordstore.logging import setup_logging
from recordstore.web.runner import run_server


def main() -> None:
    config = Config()  # type: ignore[call-arg]
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
