"""Launch the relay with uvicorn on the loopback interface."""
from __future__ import annotations
import argparse
import dataclasses
import logging

import uvicorn
from dotenv import find_dotenv, load_dotenv

from component_relay.common.config import Settings
from component_relay.common.logging_setup import setup_logging
from component_relay.serve.fastapi_app import create_app

LOGGER = logging.getLogger("component_relay.serve.server")


def build_settings(argv: list[str] | None = None) -> Settings:
    """Read settings from the environment and a .env in the working directory, then apply CLI overrides."""
    load_dotenv(find_dotenv(usecwd=True))
    settings = Settings.from_env()

    ap = argparse.ArgumentParser(description="Serve the component generation relay")
    ap.add_argument("--host", default=settings.host, help="Listen address")
    ap.add_argument("--port", type=int, default=settings.port, help="Listen port")
    ap.add_argument("--log-level", default=settings.log_level, help="Logging level")
    args = ap.parse_args(argv)

    return dataclasses.replace(
        settings, host=args.host, port=args.port, log_level=args.log_level.upper()
    )


def main(argv: list[str] | None = None) -> None:
    settings = build_settings(argv)
    setup_logging(settings.log_level)
    if not settings.gemini_api_key:
        LOGGER.warning("GEMINI_API_KEY is not set; generation requests will fail")

    app = create_app(settings)
    LOGGER.info(
        "Server is running on http://%s:%s (model=%s)",
        settings.host,
        settings.port,
        settings.gemini_model,
    )
    # uvicorn exits the process with status 1 when the port cannot be bound
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
