"""Shared test fixtures for cocli.

Provides reusable fixtures for loading response fixtures, isolating the
configuration environment, faking the Compose API with
:class:`httpx.MockTransport`, and running CLI commands. These fixtures are
automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional, Union

import httpx
import pytest

from cocli.client import ComposeClient
from cocli.models import ClientConfig
from cocli.output import reset_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"

API_PREFIX = "/2016-07/"

Route = Union[tuple[int, Any], Callable[[httpx.Request], httpx.Response]]


def load_fixture(name: str) -> dict[str, Any]:
    """Load ``tests/fixtures/<name>.json`` as a dict."""
    with open(FIXTURES_DIR / f"{name}.json") as f:
        return json.load(f)


def fixture_text(name: str) -> str:
    """Return ``tests/fixtures/<name>.json`` exactly as stored."""
    return (FIXTURES_DIR / f"{name}.json").read_text()


class FakeComposeAPI:
    """In-memory stand-in for the Compose API.

    Routes are keyed by ``(method, path)`` where *path* is relative to the
    versioned prefix (``"accounts"``, ``"deployments/abc/recipes"``). A
    route is either a ``(status, body)`` pair -- *body* being a dict/list
    (sent as JSON) or a string (sent verbatim) -- or a handler function.
    Unknown routes answer 404. Every request is recorded in
    :attr:`requests`.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Route] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, route: Route) -> None:
        self.routes[(method.upper(), path)] = route

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]
        route = self.routes.get((request.method, path))
        if route is None:
            return httpx.Response(404, json={"error": f"no route for {request.method} {path}"})
        if callable(route):
            return route(request)
        status, body = route
        if isinstance(body, str):
            return httpx.Response(status, text=body, headers={"content-type": "application/json"})
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_json(self) -> Any:
        """Decode the body of the most recent request."""
        return json.loads(self.requests[-1].content)


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_DATA_HOME at subdirectories of
    tmp_path, forces the XDG layout, clears the token and base URL
    environment variables, and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("cocli.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["COMPOSEAPITOKEN", "COCLI_BASE_URL"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# API fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(token="test-token", base_url="https://api.example.com/2016-07/")


@pytest.fixture
def fake_api() -> FakeComposeAPI:
    """A fake API preloaded with one fixture response per resource."""
    api = FakeComposeAPI()
    api.add("GET", "accounts", (200, load_fixture("accounts")))
    api.add("GET", "deployments", (200, load_fixture("deployments")))
    api.add("GET", "deployments/575714a5c1d4e9001300000a", (200, load_fixture("deployment")))
    api.add("GET", "deployments/575714a5c1d4e9001300000a/recipes", (200, load_fixture("recipes")))
    api.add("GET", "recipes/575714a5c1d4e9001300000c", (200, load_fixture("recipe")))
    api.add("GET", "clusters", (200, load_fixture("clusters")))
    api.add("GET", "datacenters", (200, load_fixture("datacenters")))
    api.add("GET", "databases", (200, load_fixture("databases")))
    api.add("GET", "user", (200, load_fixture("user")))
    return api


@pytest.fixture
def compose(client_config: ClientConfig, fake_api: FakeComposeAPI) -> ComposeClient:
    """An open ComposeClient talking to ``fake_api``."""
    with ComposeClient(client_config, transport=fake_api.transport) as client:
        yield client


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_env(
    isolated_config: Path,
    fake_api: FakeComposeAPI,
    monkeypatch: pytest.MonkeyPatch,
) -> FakeComposeAPI:
    """Wire CLI commands to ``fake_api`` with a token set and colour disabled.

    Returns the fake API so tests can add routes and inspect requests.
    """
    monkeypatch.setenv("COMPOSEAPITOKEN", "cli-token")
    monkeypatch.setenv("NO_COLOR", "1")

    def _build(config: ClientConfig, transport: Optional[httpx.BaseTransport] = None) -> ComposeClient:
        return ComposeClient(config, transport=fake_api.transport)

    monkeypatch.setattr("cocli.commands.shared.build_client", _build)
    return fake_api
