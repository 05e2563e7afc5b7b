"""Tests for the ``curvenote`` CLI and its ``build`` command."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import pytest

from curvenote import __version__
from curvenote.app import app
from curvenote.commands.build import build_document
from curvenote.exit_codes import EXIT_AUTH_FAILURE, EXIT_NOT_FOUND, EXIT_SERVER_ERROR
from curvenote.models import SessionOptions
from curvenote.session import Session

PROJECT_JSON = {
    "id": "p1",
    "name": "notebook",
    "title": "A Notebook",
    "team": "lab",
    "created_by": "u1",
}
USER_JSON = {"id": "u1", "username": "ada", "display_name": "Ada"}


def _handler(request: httpx.Request) -> httpx.Response:
    routes = {
        "/projects/p1": PROJECT_JSON,
        "/projects/orphan": {**PROJECT_JSON, "id": "orphan", "created_by": None},
        "/projects/broken": {"id": "broken", "title": 5},
        "/users/u1": USER_JSON,
    }
    body = routes.get(request.url.path)
    if body is None:
        return httpx.Response(404, json={"message": "not found"})
    return httpx.Response(200, json=body)


@pytest.fixture
def seen() -> list[httpx.Request]:
    return []


@pytest.fixture
def mock_api(monkeypatch: pytest.MonkeyPatch, isolated_config: Path, seen) -> list[httpx.Request]:
    """Route every Session created by the build command through a mock transport."""

    def recording(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return _handler(request)

    def factory(token: Any = None, options: Any = None, **kwargs: Any) -> Session:
        return Session(token, options, transport=httpx.MockTransport(recording), **kwargs)

    monkeypatch.setattr("curvenote.commands.build.Session", factory)
    return seen


class TestGlobalFlags:
    @pytest.mark.parametrize("flag", ["-v", "--version"])
    def test_version(self, cli_runner, flag: str) -> None:
        result = cli_runner.invoke(app, [flag])
        assert result.exit_code == 0
        assert result.output.strip() == f"curvenote v{__version__}"

    def test_help_lists_build(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "build" in result.output
        assert "--debug" in result.output


class TestBuild:
    def test_build_to_stdout(self, cli_runner, mock_api) -> None:
        result = cli_runner.invoke(app, ["build", "p1"])
        assert result.exit_code == 0, result.output
        document = json.loads(result.stdout)
        assert document["project"]["title"] == "A Notebook"
        assert document["author"]["username"] == "ada"
        assert document["url"] == "https://curvenote.com/@lab/notebook"
        assert [r.url.path for r in mock_api] == ["/projects/p1", "/users/u1"]

    def test_build_to_file(self, cli_runner, mock_api, isolated_config: Path) -> None:
        target = isolated_config / "build.json"
        result = cli_runner.invoke(app, ["build", "p1", "-o", str(target)])
        assert result.exit_code == 0, result.output
        document = json.loads(target.read_text())
        assert document["project"]["id"] == "p1"

    def test_project_without_creator(self, cli_runner, mock_api) -> None:
        result = cli_runner.invoke(app, ["build", "orphan"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["author"] is None
        assert len(mock_api) == 1

    def test_url_flags(self, cli_runner, mock_api) -> None:
        result = cli_runner.invoke(
            app,
            ["build", "p1", "--api-url", "http://localhost:8083", "--site-url", "http://localhost:3000"],
        )
        assert result.exit_code == 0, result.output
        assert str(mock_api[0].url) == "http://localhost:8083/projects/p1"
        assert json.loads(result.stdout)["url"] == "http://localhost:3000/@lab/notebook"

    def test_token_from_env(self, cli_runner, mock_api, make_token, monkeypatch) -> None:
        token = make_token()
        monkeypatch.setenv("CURVENOTE_TOKEN", token)
        result = cli_runner.invoke(app, ["build", "p1"])
        assert result.exit_code == 0, result.output
        assert mock_api[0].headers["authorization"] == f"Bearer {token}"

    def test_anonymous_by_default(self, cli_runner, mock_api) -> None:
        result = cli_runner.invoke(app, ["build", "p1"])
        assert result.exit_code == 0, result.output
        assert "authorization" not in mock_api[0].headers

    def test_missing_project_exit_code(self, cli_runner, mock_api) -> None:
        result = cli_runner.invoke(app, ["build", "nope"])
        assert result.exit_code == EXIT_NOT_FOUND
        assert "Project: Not found" in result.output

    def test_expired_token_exit_code(self, cli_runner, mock_api, make_token) -> None:
        result = cli_runner.invoke(app, ["build", "p1", "--token", make_token(expires_in=-5)])
        assert result.exit_code == EXIT_AUTH_FAILURE
        assert "expired" in result.output
        assert mock_api == []

    def test_debug_flag_logs_fetches(self, cli_runner, mock_api) -> None:
        result = cli_runner.invoke(app, ["--debug", "build", "p1"])
        assert result.exit_code == 0, result.output
        assert 'Fetching Project: "/projects/p1"' in result.output

    def test_invalid_response_exit_code(self, cli_runner, mock_api) -> None:
        result = cli_runner.invoke(app, ["build", "broken"])
        assert result.exit_code == EXIT_SERVER_ERROR
        assert "Project: Unexpected response from /projects/broken" in result.output

    def test_quiet_hides_info(self, cli_runner, mock_api, isolated_config: Path) -> None:
        target = isolated_config / "quiet.json"
        result = cli_runner.invoke(app, ["--quiet", "build", "p1", "-o", str(target)])
        assert result.exit_code == 0, result.output
        assert "Wrote" not in result.output
        assert target.is_file()

    def test_info_shown_without_quiet(self, cli_runner, mock_api, isolated_config: Path) -> None:
        target = isolated_config / "loud.json"
        result = cli_runner.invoke(app, ["build", "p1", "-o", str(target)])
        assert result.exit_code == 0, result.output
        assert f"Wrote {target}" in result.output


class TestBuildDocument:
    def test_shared_author_is_fetched_once(self, quiet_output) -> None:
        seen: list[httpx.Request] = []

        def recording(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return _handler(request)

        with Session(
            options=SessionOptions(api_url="https://api.example.com"),
            transport=httpx.MockTransport(recording),
        ) as session:
            first = build_document(session, "p1")
            second = build_document(session, "p1")
        assert first == second
        assert [r.url.path for r in seen] == ["/projects/p1", "/users/u1"]
