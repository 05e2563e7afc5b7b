"""Shared test fixtures for curvenote.

Provides token factories, mock-transport sessions, isolated config
environments, output-state management, and a CLI runner.  These fixtures
are discovered by pytest and available to all test modules.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest
from jose import jwt

from curvenote.models import SessionOptions
from curvenote.output import OutputFormat, OutputManager, reset_output, set_output
from curvenote.session import Session

API_URL = "https://api.example.com"
SITE_URL = "https://example.com"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


def _make_token(expires_in: float = 3600, **claims: Any) -> str:
    """Mint an HS256 token whose ``exp`` lies *expires_in* seconds from now."""
    payload = {"sub": "user-1", "exp": int(time.time() + expires_in), **claims}
    return jwt.encode(payload, "test-secret", algorithm="HS256")


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Factory for tokens, see :func:`_make_token`."""
    return _make_token


@pytest.fixture
def token() -> str:
    """A token valid for one hour."""
    return _make_token()


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, colourless output manager as the global output."""
    output = OutputManager(format=OutputFormat.JSON, no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def make_session(quiet_output: OutputManager) -> Callable[..., Session]:
    """Factory for sessions against ``API_URL`` backed by an httpx.MockTransport.

    The handler records every request it sees on ``session.requests``.
    """
    sessions: list[Session] = []

    def factory(handler: Handler, token: Optional[str] = None, **kwargs: Any) -> Session:
        requests: list[httpx.Request] = []

        def recording(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        session = Session(
            token,
            SessionOptions(api_url=API_URL, site_url=SITE_URL),
            transport=httpx.MockTransport(recording),
            **kwargs,
        )
        session.requests = requests  # type: ignore[attr-defined]
        sessions.append(session)
        return session

    yield factory
    for session in sessions:
        session.close()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points the XDG directories at *tmp_path*, forces the XDG code path,
    clears all CURVENOTE_* environment variables and disables colour.
    """
    monkeypatch.setattr("curvenote.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("NO_COLOR", "1")
    for var in ["CURVENOTE_TOKEN", "CURVENOTE_API_URL", "CURVENOTE_SITE_URL"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
