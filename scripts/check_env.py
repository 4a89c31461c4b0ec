"""Preflight checks for the OAuth callback listener's configuration.

Google rejects every code exchange when the client id, secret or redirect URI
differ from the registered application, and the only symptom is a stream of
``token_exchange_failed`` redirects. This tool surfaces those problems before
the listener starts.

Example usages::

    # Fail fast when required settings are missing or malformed.
    python -m scripts.check_env check --env-file /opt/staarkids/.env

    # Print the effective configuration (secret masked) for comparison with
    # the Google Cloud console.
    python -m scripts.check_env show --env-file /opt/staarkids/.env

    # Print the consent URL the listener would send browsers to.
    python -m scripts.check_env login-url --env-file /opt/staarkids/.env
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from oauth_callback.clients import GoogleOAuthClient
from oauth_callback.core.config import AppSettings, GoogleSettings, ServerSettings

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_RUNTIME_ERROR = 5


def _load_settings(env_file: Path) -> AppSettings:
    """Load settings from ``env_file`` layered under the real environment."""
    source = str(env_file)
    return AppSettings(  # type: ignore[call-arg]
        _env_file=source,
        google=GoogleSettings(_env_file=source),  # type: ignore[call-arg]
        server=ServerSettings(_env_file=source),  # type: ignore[call-arg]
    )


def _mask(secret: str) -> str:
    if len(secret) <= 4:
        return "*" * len(secret)
    return f"{'*' * (len(secret) - 4)}{secret[-4:]}"


def _show(settings: AppSettings) -> int:
    google = settings.google
    print(f"client_id:          {google.client_id}")
    print(f"client_secret:      {_mask(google.client_secret.get_secret_value())}")
    print(f"redirect_uri:       {google.redirect_uri}")
    print(f"scopes:             {' '.join(google.scopes)}")
    print(f"listener:           {settings.server.host}:{settings.server.port}")
    print(f"frontend_base_url:  {settings.frontend_base_url}")
    return EXIT_OK


def _login_url(settings: AppSettings) -> int:
    print(GoogleOAuthClient(settings.google).build_authorization_url())
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate OAuth callback settings before starting the listener."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("check", "Validate settings and exit."),
        ("show", "Validate settings and print them with the secret masked."),
        ("login-url", "Validate settings and print the Google consent URL."),
    ):
        subparser = subparsers.add_parser(name, help=help_text)
        subparser.add_argument(
            "--env-file",
            default=".env",
            type=Path,
            help="Path to the environment file (default: .env in the repo root).",
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
        settings = _load_settings(env_file)
    except ValidationError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:\n"
            f"{exc.json(indent=2, include_input=False)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR

    handlers: dict[str, Callable[[AppSettings], int]] = {
        "check": lambda _: EXIT_OK,
        "show": _show,
        "login-url": _login_url,
    }
    return handlers[args.command](settings)


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
