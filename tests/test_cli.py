import pytest
from typer.testing import CliRunner

from routefetch import cli
from routefetch.cli import app
from routefetch.config.settings import ENV_API_KEY, ENV_API_VERSION, ENV_BASE_URL, ENV_TIMEOUT
from routefetch.domain.errors import NetworkError
from routefetch.domain.json_value import JSON
from routefetch.domain.result import Failure, Success

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (ENV_API_KEY, ENV_BASE_URL, ENV_API_VERSION, ENV_TIMEOUT):
        monkeypatch.delenv(name, raising=False)


def test_ping_fetches_status(monkeypatch):
    seen = []

    async def fake_fetch_json(config, route_name):
        seen.append((config.api_base, route_name))
        return Success(JSON.from_python({"status": "ok"}))

    monkeypatch.setattr(cli, "_fetch_json", fake_fetch_json)
    result = runner.invoke(app, ["ping", "--api-key", "k", "--base-url", "https://api.example.com"])

    assert result.exit_code == 0
    assert "OK" in result.output
    assert seen == [("https://api.example.com", "general.status")]


def test_ping_reports_failure(monkeypatch):
    async def fake_fetch_json(config, route_name):
        return Failure(NetworkError.server_error("Unauthorized"))

    monkeypatch.setattr(cli, "_fetch_json", fake_fetch_json)
    result = runner.invoke(app, ["ping", "--api-key", "k"])

    assert result.exit_code == 1
    assert "Unreachable" in result.output
    assert "Unauthorized" in result.output


def test_ping_needs_configuration():
    result = runner.invoke(app, ["ping"])
    assert result.exit_code == 1
    assert ENV_API_KEY in result.output


def test_routes_lists_catalog_without_api_key():
    result = runner.invoke(app, ["routes", "--base-url", "https://api.example.com"])
    assert result.exit_code == 0
    assert "general.status" in result.output
    assert "users.get_user" in result.output


def test_check_config_fails_without_key():
    result = runner.invoke(app, ["check-config"])
    assert result.exit_code == 1
    assert ENV_API_KEY in result.output


def test_check_config_with_env(monkeypatch):
    monkeypatch.setenv(ENV_API_KEY, "k")
    monkeypatch.setenv(ENV_BASE_URL, "https://api.example.com")
    result = runner.invoke(app, ["check-config", "--timeout", "5"])
    assert result.exit_code == 0
    assert "Configuration OK" in result.output
    assert "https://api.example.com" in result.output


def test_fetch_rejects_unknown_route():
    result = runner.invoke(app, ["fetch", "nope", "--api-key", "k"])
    assert result.exit_code != 0


def test_invalid_env_timeout_is_reported(monkeypatch):
    monkeypatch.setenv(ENV_TIMEOUT, "soon")
    result = runner.invoke(app, ["check-config", "--api-key", "k"])
    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_routes_reports_invalid_env(monkeypatch):
    monkeypatch.setenv(ENV_TIMEOUT, "soon")
    result = runner.invoke(app, ["routes"])
    assert result.exit_code == 1
    assert ENV_TIMEOUT in result.output
