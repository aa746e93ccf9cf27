"""CLI entry point — ``python -m todo_service``."""

from __future__ import annotations

import argparse
import os

from dotenv import load_dotenv

load_dotenv()

from todo_service.api import create_app, list_routes
from todo_service.server import TodoServer

CONFIG_ENV_VAR = "TODO_SERVICE_CONFIG"


def _print_routes() -> None:
    """Print every HTTP route the service exposes."""
    routes = list_routes(create_app())
    print("\nROUTES")
    print("------")
    for methods, path in routes:
        print(f"  {methods:10s} {path}")
    print()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="todo-service",
        description="Run the in-memory To-Do List API.",
    )
    parser.add_argument(
        "-c", "--config",
        default=os.environ.get(CONFIG_ENV_VAR),
        help=f"Path to the service YAML config file (default: ${CONFIG_ENV_VAR}).",
    )
    parser.add_argument("--host", help="Interface to bind, overrides the config file.")
    parser.add_argument("--port", type=int, help="Port to bind, overrides the config file.")
    parser.add_argument("--log-level", help="Logging level, overrides the config file.")
    parser.add_argument(
        "-l", "--list-routes",
        action="store_true",
        default=False,
        help="List the HTTP routes, then exit without starting the server.",
    )

    args = parser.parse_args(argv)

    if args.list_routes:
        _print_routes()
        return

    server = TodoServer(
        args.config,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
    )
    server.run()


if __name__ == "__main__":
    main()
