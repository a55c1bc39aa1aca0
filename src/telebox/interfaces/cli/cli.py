"""``telebox`` command: load config, configure logging, serve the catalog API."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
import uvicorn
import yaml

from telebox.infrastructure.config import load_config
from telebox.infrastructure.logging.setup import configure_logging
from telebox.interfaces.main import build_app

log = structlog.get_logger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 7980

# argparse dest -> flat config key
_OVERRIDE_FLAGS = {
    "base_folder": "linkbox_base_folder_id",
    "log_level": "log_level",
    "log_format": "log_format",
}


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="telebox",
        description="Serve a Telebox/Linkbox account as a media catalog.",
    )

    server = parser.add_argument_group("server")
    server.add_argument("--host", help="Bind host (overrides HOST env).")
    server.add_argument("--port", type=int, help="Bind port (overrides PORT env).")

    files = parser.add_argument_group("configuration files")
    files.add_argument("--config", type=Path, help="Path to YAML config file.")
    files.add_argument("--dotenv", type=Path, help="Path to .env file.")

    overrides = parser.add_argument_group("overrides")
    overrides.add_argument("--base-folder", help="Linkbox folder id used as root.")
    overrides.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"]
    )
    overrides.add_argument("--log-format", choices=["json", "console"])

    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print the effective configuration (token masked) and exit.",
    )
    return parser.parse_args(argv)


def build_cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Translate parsed flags into flat config overrides (unset flags omitted)."""
    return {
        key: getattr(args, dest)
        for dest, key in _OVERRIDE_FLAGS.items()
        if getattr(args, dest)
    }


def start(argv: Iterable[str] | None = None) -> None:
    """Process entrypoint.

    The API token comes from YAML or ``TELEBOX_LINKBOX_API_TOKEN`` only; it
    is never accepted on the command line.
    """
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    config = load_config(
        config_path=args.config,
        dotenv_path=args.dotenv,
        cli_overrides=build_cli_overrides(args),
    )

    if args.print_config:
        yaml.safe_dump(config.to_sectioned_dict(), sys.stdout, sort_keys=False)
        return

    host = args.host or os.getenv("HOST", DEFAULT_HOST)
    port = args.port or int(os.getenv("PORT", str(DEFAULT_PORT)))

    log_config = configure_logging(config)
    log.info("server_starting", host=host, port=port, environment=config.environment)

    uvicorn.run(build_app(config), host=host, port=port, log_config=log_config)


if __name__ == "__main__":
    raise SystemExit(start())
