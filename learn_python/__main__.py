from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

import structlog
import uvicorn

from learn_python.config import Settings, get_settings
from learn_python.main import create_app
from learn_python.observability.logging import configure_logging

logger = structlog.get_logger("learn_python.server")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="learn-python HTTP microservice")
    parser.add_argument("--host", default=None, help="Bind host (overrides HOST)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (overrides PORT)")
    parser.add_argument("--log-level", default=None, help="Log level (overrides LOG_LEVEL)")
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace, base: Settings | None = None) -> Settings:
    settings = base or get_settings()
    overrides = {
        key: value
        for key, value in (("host", args.host), ("port", args.port), ("log_level", args.log_level))
        if value is not None
    }
    return settings.model_copy(update=overrides) if overrides else settings


def build_server(settings: Settings) -> uvicorn.Server:
    """uvicorn owns the socket; on SIGINT/SIGTERM it stops accepting and drains
    in-flight requests for at most `shutdown_grace_seconds`."""

    config = uvicorn.Config(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
        access_log=False,
        timeout_graceful_shutdown=settings.shutdown_grace_seconds,
        lifespan="on",
    )
    return uvicorn.Server(config)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = resolve_settings(args)
    configure_logging(settings.log_level)

    server = build_server(settings)
    logger.info("server_starting", address=settings.bind_address)
    try:
        server.run()
    except SystemExit as exc:
        # uvicorn exits with status 1 when the socket cannot be bound.
        code = exc.code if isinstance(exc.code, int) else 1
        if code:
            logger.error("server_start_failed", address=settings.bind_address, exit_code=code)
        return code
    except OSError as exc:
        logger.error("server_start_failed", address=settings.bind_address, error=str(exc))
        return 1

    if not server.started:
        logger.error("server_start_failed", address=settings.bind_address)
        return 1

    logger.info("server_stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
