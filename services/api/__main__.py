"""Command-line entry point: ``python -m services.api``."""

from __future__ import annotations

import argparse
import asyncio
import os
import ssl
import sys
from pathlib import Path

import uvicorn
from loguru import logger

from core.exceptions import ConfigurationError
from core.logging_config import setup_logging
from core.settings import get_settings
from services.api.main import create_app, create_validating_app
from services.api.server import SupervisedServer, serve_until_signalled


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the XMLVault upload/read API")
    parser.add_argument(
        "--mode",
        choices=("store", "validate"),
        default="store",
        help="store: persist uploads over TLS; validate: only check XML payloads over plain HTTP",
    )
    parser.add_argument("--config", type=Path, help="YAML configuration file (default: $XMLVAULT_CONFIG or config/default.yaml)")
    parser.add_argument("--host", help="Bind address (overrides configuration)")
    parser.add_argument("--port", type=int, help="Bind port (overrides configuration)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    json_logging = os.getenv("JSON_LOGGING", "false").lower() in {"true", "1", "yes"}
    log_file = os.getenv("LOG_FILE")
    setup_logging(
        level=os.getenv("LOG_LEVEL", "INFO"),
        json_format=json_logging,
        log_file=Path(log_file) if log_file else None,
    )

    ssl_certfile: str | None = None
    ssl_keyfile: str | None = None
    try:
        settings = get_settings(str(args.config) if args.config else None)
        if args.mode == "store":
            app = create_app(settings)
            ssl_certfile = settings.server.cert_file
            ssl_keyfile = settings.server.key_file
        else:
            app = create_validating_app(settings)
    except ConfigurationError as exc:
        logger.critical("{message}", message=exc.message, details=exc.details)
        return 1

    host = args.host or settings.server.host
    port = args.port or settings.server.port
    grace_period = settings.server.graceful_shutdown_seconds
    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        ssl_certfile=ssl_certfile,
        ssl_keyfile=ssl_keyfile,
        timeout_graceful_shutdown=grace_period,
        log_config=None,
    )

    logger.info("Starting {mode} server on {host}:{port}", mode=args.mode, host=host, port=port)
    try:
        asyncio.run(serve_until_signalled(SupervisedServer(config), grace_period=grace_period))
    except ssl.SSLError as exc:
        # uvicorn builds the TLS context only once the server starts
        logger.critical("Failed to load TLS certificate or key: {error}", error=str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
