"""Verify that the relying party configuration is complete before starting.

Loads ``AppSettings`` from the process environment seeded with the supplied
``.env`` file and reports missing or malformed entries, so a misconfigured
client registration fails here rather than on the first login.

Example usage::

    python -m scripts.check_env --env-file /opt/relying-party/.env --show
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError
from pydantic_settings import SettingsError

from relying_party.core.config import AppSettings, _load_env_file

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_RUNTIME_ERROR = 5


def _validate_settings(env_file: Path) -> AppSettings:
    """Ensure required settings can be loaded from the supplied env file."""
    _load_env_file(str(env_file))
    return AppSettings()  # type: ignore[call-arg]


def _describe(settings: AppSettings) -> str:
    """Summarize the resolved configuration without the client secret."""
    oauth = settings.oauth
    lines = [
        f"service:                {settings.service_name} ({settings.environment})",
        f"client id:              {oauth.client_id}",
        f"authorization endpoint: {oauth.authorization_endpoint}",
        f"token endpoint:         {oauth.token_endpoint}",
        f"redirect uri:           {oauth.redirect_uri}",
        f"scopes:                 {' '.join(oauth.scopes) or '(none)'}",
        f"token timeout:          {oauth.token_exchange_timeout_seconds}s",
    ]
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the relying party settings."
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        type=Path,
        help="Path to the environment file (default: .env in the repo root).",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the resolved configuration (secrets omitted).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    env_file: Path = args.env_file
    if not env_file.exists():
        print(
            f"Environment file {env_file} does not exist. "
            "Ensure the path is correct or create it before running this tool.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    try:
        settings = _validate_settings(env_file)
    except ValidationError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:\n"
            f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR
    except SettingsError as exc:
        print(f"Settings could not be parsed: {exc}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    if args.show:
        print(_describe(settings))
    print("Configuration OK.")
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
