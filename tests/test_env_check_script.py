"""Tests for the configuration preflight script."""

from __future__ import annotations

from pathlib import Path

import pytest

from scripts import check_env

REQUIRED_ENV_KEYS = [
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "GOOGLE_REDIRECT_URI",
]


def _write_env(env_path: Path, **values: str) -> None:
    contents = "\n".join(f"{key}={value}" for key, value in values.items())
    env_path.write_text(contents + "\n", encoding="utf-8")


@pytest.fixture(autouse=True)
def _clear_required_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in REQUIRED_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("OAUTH_CALLBACK_PORT", raising=False)


@pytest.mark.parametrize("command", ["check", "show", "login-url"])
def test_main_requires_existing_env_file(tmp_path: Path, command: str) -> None:
    exit_code = check_env.main([command, "--env-file", str(tmp_path / ".missing")])

    assert exit_code == check_env.EXIT_RUNTIME_ERROR


def test_check_accepts_complete_env(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    _write_env(
        env_file,
        GOOGLE_CLIENT_ID="abc.apps.googleusercontent.com",
        GOOGLE_CLIENT_SECRET="secret",
        GOOGLE_REDIRECT_URI="https://staarkids.org:5001/oauth-callback",
    )

    assert check_env.main(["check", "--env-file", str(env_file)]) == check_env.EXIT_OK


def test_validation_failure_for_missing_secret(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    env_file = tmp_path / ".env"
    _write_env(
        env_file,
        GOOGLE_CLIENT_ID="abc.apps.googleusercontent.com",
        GOOGLE_REDIRECT_URI="https://staarkids.org:5001/oauth-callback",
    )

    exit_code = check_env.main(["check", "--env-file", str(env_file)])

    assert exit_code == check_env.EXIT_VALIDATION_ERROR
    assert "GOOGLE_CLIENT_SECRET" in capsys.readouterr().err


def test_validation_failure_for_relative_redirect(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    _write_env(
        env_file,
        GOOGLE_CLIENT_ID="abc.apps.googleusercontent.com",
        GOOGLE_CLIENT_SECRET="secret",
        GOOGLE_REDIRECT_URI="/oauth-callback",
    )

    exit_code = check_env.main(["check", "--env-file", str(env_file)])

    assert exit_code == check_env.EXIT_VALIDATION_ERROR


def test_show_masks_secret(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    env_file = tmp_path / ".env"
    _write_env(
        env_file,
        GOOGLE_CLIENT_ID="abc.apps.googleusercontent.com",
        GOOGLE_CLIENT_SECRET="super-secret-1234",
        GOOGLE_REDIRECT_URI="https://staarkids.org:5001/oauth-callback",
        OAUTH_CALLBACK_PORT="5001",
    )

    exit_code = check_env.main(["show", "--env-file", str(env_file)])

    out = capsys.readouterr().out
    assert exit_code == check_env.EXIT_OK
    assert "super-secret" not in out
    assert "*1234" in out
    assert "https://staarkids.org:5001/oauth-callback" in out
    assert "0.0.0.0:5001" in out


def test_login_url_prints_consent_url(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    env_file = tmp_path / ".env"
    _write_env(
        env_file,
        GOOGLE_CLIENT_ID="abc.apps.googleusercontent.com",
        GOOGLE_CLIENT_SECRET="secret",
        GOOGLE_REDIRECT_URI="https://staarkids.org:5001/oauth-callback",
    )

    exit_code = check_env.main(["login-url", "--env-file", str(env_file)])

    out = capsys.readouterr().out.strip()
    assert exit_code == check_env.EXIT_OK
    assert out.startswith("https://accounts.google.com/o/oauth2/v2/auth?")
    assert "client_id=abc.apps.googleusercontent.com" in out
