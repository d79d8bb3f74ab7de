from __future__ import annotations

import argparse

import structlog
import uvicorn

from contactbook.config import get_settings
from contactbook.main import create_app
from contactbook.observability.logging import configure_logging


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="contactbook web server")
    parser.add_argument("--host", default=settings.host, help="Interface to bind (CONTACTBOOK_HOST)")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on (CONTACTBOOK_PORT)")
    parser.add_argument("--seed", action=argparse.BooleanOptionalAction, default=settings.seed, help="Load sample contacts")
    args = parser.parse_args()

    settings = settings.model_copy(update={"host": args.host, "port": args.port, "seed": bool(args.seed)})
    configure_logging(settings.log_level)
    app = create_app(settings=settings)

    # uvicorn stops accepting on SIGINT/SIGTERM and waits for in-flight requests
    # up to timeout_graceful_shutdown before closing the remaining connections.
    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        timeout_keep_alive=settings.keepalive_timeout,
        timeout_graceful_shutdown=settings.shutdown_timeout,
        log_config=None,
    )
    server = uvicorn.Server(config)

    log = structlog.get_logger("server")
    log.info("server_starting", addr=settings.addr)
    server.run()
    log.info("server_stopped")


if __name__ == "__main__":
    main()
