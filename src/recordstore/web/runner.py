"""Uvicorn server runner with custom configuration."""

import copy
from typing import Any

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from recordstore.app import App
from recordstore.config import Config
from recordstore.web.server import create_fastapi_app


def build_log_config(debug: bool) -> dict[str, Any]:
    """Uvicorn logging config: timestamped formats, access lines only in debug mode.

    In production the application logs JSON through structlog, and uvicorn's
    plain-text access lines would break that stream.
    """
    log_config = copy.deepcopy(LOGGING_CONFIG)
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s - "%(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
    log_config["loggers"]["uvicorn.access"]["level"] = "INFO" if debug else "WARNING"
    return log_config


def run_server(app: App, config: Config) -> None:
    """Run the Uvicorn server on the configured host and port."""
    fastapi_app = create_fastapi_app(app, config)
    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=build_log_config(config.debug),
        access_log=config.debug,
    )
