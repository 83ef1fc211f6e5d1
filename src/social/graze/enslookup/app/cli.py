import os
from aiohttp import web
import logging
from logging.config import dictConfig
import json


def configure_logging(level: int = logging.DEBUG) -> None:
    """
    Configure logging from LOGGING_CONFIG_FILE (a JSON dictConfig) if set, else basicConfig at level.
    """
    logging_config_file = os.getenv("LOGGING_CONFIG_FILE", "")

    if len(logging_config_file) > 0:
        with open(logging_config_file) as fl:
            dictConfig(json.load(fl))
        return

    logging.basicConfig()
    logging.getLogger().setLevel(level)


def invoke():
    from social.graze.enslookup.app.config import Settings
    from social.graze.enslookup.app.server import start_web_server

    settings = Settings()  # type: ignore
    configure_logging(logging.DEBUG if settings.debug else logging.INFO)

    web.run_app(start_web_server(settings), port=settings.http_port)


if __name__ == "__main__":
    invoke()
