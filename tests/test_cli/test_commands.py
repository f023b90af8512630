# tests/test_cli/test_commands.py
import asyncio
from unittest.mock import MagicMock

import httpx
import pytest
from typer.testing import CliRunner

from openrouter_flow import cli
from openrouter_flow.config import Settings
from openrouter_flow.device.host import OpenRouterDevice
from openrouter_flow.device.interfaces import CapabilityStore, DeviceSettings

runner = CliRunner()


def _openrouter(request: httpx.Request) -> httpx.Response:
    if request.url.path.endswith("/models"):
        return httpx.Response(200, json={"data": [
            {"id": "acme/foo", "name": "foo"},
            {"id": "openai/gpt-4.1", "name": "gpt-4.1"},
        ]})
    if request.url.path.endswith("/credits"):
        return httpx.Response(200, json={"data": {"total_credits": 7.5, "total_usage": 2.5}})
    if request.url.path.endswith("/chat/completions"):
        return httpx.Response(200, json={"choices": [{"message": {"content": "  Lights are on.  "}}]})
    return httpx.Response(404)


@pytest.fixture
def configured(monkeypatch, make_client, api_key):
    """Point the CLI at a mocked OpenRouter and skip file logging."""
    settings = Settings(api_key=api_key)
    client = make_client(_openrouter)
    monkeypatch.setattr(cli, "setup_logging", lambda debug: None)
    monkeypatch.setattr(cli.Settings, "from_env", classmethod(lambda cls, env_file=None: settings))
    monkeypatch.setattr(cli.Settings, "client", lambda self: client)
    return settings


def test_version():
    result = runner.invoke(cli.app, ["--version"])

    assert result.exit_code == 0
    assert "openrouter-flow v0.1.0" in result.output


def test_models_lists_featured_first(configured):
    result = runner.invoke(cli.app, ["models"])

    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert lines[0].startswith("openai/gpt-4.1")
    assert lines[1].startswith("acme/foo")


def test_models_no_match(configured):
    result = runner.invoke(cli.app, ["models", "nothing-like-this"])

    assert result.exit_code == 0
    assert "No matching models." in result.output


def test_generate(configured, sent_requests):
    result = runner.invoke(cli.app, ["generate", "Are the lights on?", "--system", "Be terse"])

    assert result.exit_code == 0
    assert result.output.strip() == "Lights are on."
    assert sent_requests[-1].url.path.endswith("/chat/completions")


def test_generate_without_key(configured):
    configured.api_key = ""

    result = runner.invoke(cli.app, ["generate", "Hi"])

    assert result.exit_code == 1
    assert "API key not configured" in result.output


def test_status(configured):
    result = runner.invoke(cli.app, ["status"])

    assert result.exit_code == 0
    assert "Online: yes" in result.output
    assert "Credits: $5.00" in result.output


def test_pair_writes_env_file(configured, monkeypatch, tmp_path, api_key):
    answers = iter([api_key, "openai/gpt-4.1"])
    prompt = MagicMock()
    prompt.return_value.ask.side_effect = lambda: next(answers)
    monkeypatch.setattr(cli.questionary, "password", prompt)
    monkeypatch.setattr(cli.questionary, "text", prompt)
    env_file = tmp_path / ".env"

    result = runner.invoke(cli.app, ["pair", "--env-file", str(env_file)])

    assert result.exit_code == 0
    assert "Paired OpenRouter" in result.output
    content = env_file.read_text()
    assert api_key in content
    assert "openai/gpt-4.1" in content


def test_pair_rejects_bad_key(configured, monkeypatch, tmp_path):
    prompt = MagicMock()
    prompt.return_value.ask.return_value = "not-a-key"
    monkeypatch.setattr(cli.questionary, "password", prompt)
    monkeypatch.setattr(cli.questionary, "text", prompt)

    result = runner.invoke(cli.app, ["pair", "--env-file", str(tmp_path / ".env")])

    assert result.exit_code == 1
    assert "should start with sk-or-" in result.output


@pytest.mark.asyncio
async def test_watch_stops_monitor_when_cancelled(make_client, api_key):
    device = OpenRouterDevice(
        make_client(_openrouter), DeviceSettings(api_key=api_key), CapabilityStore(), interval=60
    )
    lines = []

    task = asyncio.create_task(cli.watch_device(device, echo=lines.append))
    await asyncio.sleep(0.05)
    assert device.monitor.running

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert not device.monitor.running
    assert lines == ["online=True credits=5.0"]
