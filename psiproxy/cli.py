"""Command line entry point that serves the proxy."""

import argparse
import os
import sys

import uvicorn

from psiproxy.config.settings import LOG_LEVELS, get_config, reset_config


def main(argv: list[str] | None = None) -> None:
    """Start the PSI proxy HTTP server."""
    try:
        config = get_config()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    parser = argparse.ArgumentParser(description="PageSpeed Insights summary proxy")
    parser.add_argument(
        "--host",
        default=config.host,
        help=f"Interface to bind (default: {config.host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=config.port,
        help=f"Port to listen on (default: {config.port})",
    )
    parser.add_argument(
        "--log-level",
        default=config.log_level.lower(),
        choices=[level.lower() for level in LOG_LEVELS],
        help="Log level for the server and the application",
    )

    args = parser.parse_args(argv)

    # The app module configures logging from the config on import, which
    # happens inside uvicorn.run below.
    os.environ["LOG_LEVEL"] = args.log_level.upper()
    reset_config()

    print(f"Server running at http://{args.host}:{args.port}/")
    uvicorn.run("psiproxy.main:app", host=args.host, port=args.port, log_level=args.log_level)


if __name__ == "__main__":
    main()
