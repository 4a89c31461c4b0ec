"""Pytest configuration shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
except ImportError:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from urllib.parse import parse_qs

import httpx
import pytest

from oauth_callback.clients import GoogleOAuthClient
from oauth_callback.core.config import GoogleSettings

TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


class FakeGoogle:
    """In-memory stand-in for Google's token and userinfo endpoints.

    Codes in ``valid_codes`` are accepted once; any reuse is answered with
    ``invalid_grant`` like the real token endpoint.
    """

    def __init__(self) -> None:
        self.valid_codes: set[str] = {"good-code"}
        self.consumed: set[str] = set()
        self.token_status = 200
        self.token_body: dict | None = None
        self.userinfo_status = 200
        self.userinfo_body: dict = {
            "id": "1234567890",
            "email": "a@b.com",
            "verified_email": True,
            "name": "Ada Lovelace",
        }
        self.token_requests: list[dict[str, list[str]]] = []
        self.userinfo_requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url == TOKEN_URL:
            return self._token(request)
        if request.url == USERINFO_URL:
            return self._userinfo(request)
        return httpx.Response(404)

    def _token(self, request: httpx.Request) -> httpx.Response:
        form = parse_qs(request.content.decode("utf-8"))
        self.token_requests.append(form)
        if self.token_status != 200:
            return httpx.Response(self.token_status, json={"error": "invalid_request"})
        code = form.get("code", [""])[0]
        if code not in self.valid_codes or code in self.consumed:
            return httpx.Response(
                400,
                json={"error": "invalid_grant", "error_description": "Bad Request"},
            )
        self.consumed.add(code)
        body = self.token_body or {
            "access_token": f"access-{code}",
            "token_type": "Bearer",
            "expires_in": 3599,
            "scope": "openid email profile",
        }
        return httpx.Response(200, json=body)

    def _userinfo(self, request: httpx.Request) -> httpx.Response:
        self.userinfo_requests.append(request)
        if self.userinfo_status != 200:
            return httpx.Response(
                self.userinfo_status, json={"error": {"status": "UNAUTHENTICATED"}}
            )
        return httpx.Response(200, json=self.userinfo_body)


@pytest.fixture
def google_settings() -> GoogleSettings:
    return GoogleSettings(
        GOOGLE_CLIENT_ID="test-client-id",
        GOOGLE_CLIENT_SECRET="  test-client-secret\n",
        GOOGLE_REDIRECT_URI="https://staarkids.org:5001/oauth-callback",
    )


@pytest.fixture
def fake_google() -> FakeGoogle:
    return FakeGoogle()


@pytest.fixture
def oauth_client(google_settings: GoogleSettings, fake_google: FakeGoogle) -> GoogleOAuthClient:
    return GoogleOAuthClient(
        google_settings, transport=httpx.MockTransport(fake_google.handler)
    )
