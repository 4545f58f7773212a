# src/todo_tracker/cli/main.py

"""
CLI entrypoint.

    todo-tracker serve     run the HTTP API (uvicorn)
    todo-tracker console   interactive client against TODO_API_BASE_URL
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from ..api.client import TodoClient
from ..cli.bootstrap import create_console_state, create_server_app
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    # Accepted before or after the subcommand; SUPPRESS keeps a subparser from resetting it.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--verbose", action="store_true", default=argparse.SUPPRESS, help="Debug logging on the console"
    )

    parser = argparse.ArgumentParser(
        prog="todo-tracker", description="Personal to-do tracker", parents=[common]
    )
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the HTTP API", parents=[common])
    serve.add_argument("--host", default=None, help="Bind address (default: TODO_HOST)")
    serve.add_argument("--port", type=int, default=None, help="Port (default: TODO_PORT / PORT)")

    console = sub.add_parser("console", help="Interactive client", parents=[common])
    console.add_argument("--api", default=None, help="API base URL (default: TODO_API_BASE_URL)")
    return parser


def _serve(settings, host: str | None, port: int | None) -> None:
    app = create_server_app(settings=settings)
    bind_host = host or settings.host
    bind_port = port or settings.port
    logger.info("Server running on %s:%s (db=%s)", bind_host, bind_port, settings.db_path)
    # log_config=None keeps our handlers instead of uvicorn's default dictConfig.
    uvicorn.run(app, host=bind_host, port=bind_port, log_config=None)


def _console(settings, api: str | None) -> None:
    with TodoClient(
        (api or settings.api_base_url).rstrip("/"),
        timeout_seconds=settings.http_timeout_seconds,
    ) as gateway:
        run_console_loop(create_console_state(settings=settings, gateway=gateway))


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()

    verbose = getattr(args, "verbose", False)
    level_name = "DEBUG" if verbose else str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (%s)...", settings.app_name, args.command or "console")

    if args.command == "serve":
        _serve(settings, args.host, args.port)
    else:
        _console(settings, getattr(args, "api", None))

    logger.info("Bye.")


if __name__ == "__main__":
    main()
