"""CLI entrypoint for one-off calls against the OTP service."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from otpclient.client import OtpClient
from otpclient.errors import OtpServiceError
from otpclient.settings import ClientSettings
from otpclient.utils.logging import get_logger, set_level

logger = get_logger("otpclient.cli")

_USER_COMMANDS = {
    "get": "get_user_otp",
    "create": "create_user_otp",
    "disable": "disable_user_otp",
    "delete": "delete_user_otp",
}
_TOKEN_COMMANDS = {
    "verify": "verify_otp",
    "validate": "validate_otp",
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="otp-client", description="Call the OTP provisioning service.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML settings file (defaults to OTP_SERVICE_* environment variables)",
    )
    parser.add_argument("--debug", action="store_true", help="Log every HTTP exchange")
    commands = parser.add_subparsers(dest="command", required=True)
    for name in _USER_COMMANDS:
        sub = commands.add_parser(name, help=f"{name} the OTP registration of a user")
        sub.add_argument("user_id", type=int)
    for name in _TOKEN_COMMANDS:
        sub = commands.add_parser(name, help=f"{name} a token for a user")
        sub.add_argument("user_id", type=int)
        sub.add_argument("token")
    return parser


def _load_settings(path: Optional[Path]) -> ClientSettings:
    if path is None:
        return ClientSettings.from_env()
    if not path.exists():
        raise ValueError(f"Settings file not found: {path}")
    return ClientSettings.from_file(path)


def run(args: argparse.Namespace, client: OtpClient) -> int:
    try:
        if args.command in _USER_COMMANDS:
            result = getattr(client, _USER_COMMANDS[args.command])(args.user_id)
        else:
            result = getattr(client, _TOKEN_COMMANDS[args.command])(args.user_id, args.token)
    except OtpServiceError as exc:
        logger.error("%s failed for user %s: %s", args.command, args.user_id, exc)
        return 1

    print(result.model_dump_json() if result is not None else "ok")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        settings = _load_settings(args.config)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    if args.debug or settings.debug:
        set_level(logging.DEBUG)

    with OtpClient.from_settings(settings) as client:
        return run(args, client)


if __name__ == "__main__":
    sys.exit(main())
