# tests/test_device/test_generation_service.py
import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from openrouter_flow.device.generation import GenerationService, build_messages
from openrouter_flow.device.interfaces import DeviceSettings
from openrouter_flow.llm.errors import ApiError, NoKeyConfigured, ServerError
from openrouter_flow.llm.models import ChatMessage


@pytest.fixture
def client():
    client = MagicMock()
    client.generate = AsyncMock(return_value="done")
    return client


@pytest.fixture
def settings(api_key):
    return DeviceSettings(api_key=api_key, default_model="default/model")


def test_build_messages_without_system_prompt():
    assert build_messages("Hi") == [ChatMessage(role="user", content="Hi")]
    assert build_messages("Hi", "") == [ChatMessage(role="user", content="Hi")]


def test_build_messages_with_system_prompt():
    messages = build_messages("Hi", "Be terse")

    assert [m.role for m in messages] == ["system", "user"]
    assert messages[0].content == "Be terse"
    assert messages[1].content == "Hi"


@pytest.mark.asyncio
async def test_explicit_model_is_used(client, settings, api_key):
    service = GenerationService(client, settings)

    result = await service.generate_text("Hi", "m", "Be terse")

    assert result == "done"
    client.generate.assert_awaited_once_with(
        api_key,
        "m",
        [ChatMessage(role="system", content="Be terse"), ChatMessage(role="user", content="Hi")],
    )


@pytest.mark.asyncio
async def test_default_model_when_none_given(client, settings, api_key):
    service = GenerationService(client, settings)

    await service.generate_text("Hi")

    client.generate.assert_awaited_once_with(
        api_key, "default/model", [ChatMessage(role="user", content="Hi")]
    )


@pytest.mark.asyncio
async def test_missing_key_fails_before_request(client):
    service = GenerationService(client, DeviceSettings(api_key=""))

    with pytest.raises(NoKeyConfigured):
        await service.generate_text("Hi", "m")
    client.generate.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [ApiError("insufficient_quota", 200), ServerError("API request failed: 500", 500)])
async def test_errors_propagate_unchanged(client, settings, error):
    client.generate.side_effect = error
    service = GenerationService(client, settings)

    with pytest.raises(type(error)) as exc_info:
        await service.generate_text("Hi")
    assert exc_info.value is error
    client.generate.assert_awaited_once()


@pytest.mark.asyncio
async def test_end_to_end_over_http(make_client, sent_requests, settings):
    client = make_client(
        lambda request: httpx.Response(200, json={"choices": [{"message": {"content": " Hello! "}}]})
    )
    service = GenerationService(client, settings)

    result = await service.generate_text("Hi", model="m", system_prompt="Be terse")

    assert result == "Hello!"
    body = json.loads(sent_requests[0].content)
    assert body["messages"] == [
        {"role": "system", "content": "Be terse"},
        {"role": "user", "content": "Hi"},
    ]
    assert body["model"] == "m"


@pytest.mark.asyncio
async def test_failure_is_logged_with_traceback(client, settings, caplog):
    client.generate.side_effect = ServerError("API request failed: 503", 503)
    service = GenerationService(client, settings)

    with caplog.at_level("ERROR", logger="openrouter_flow.device.generation"):
        with pytest.raises(ServerError):
            await service.generate_text("Hi")

    records = [r for r in caplog.records if r.name == "openrouter_flow.device.generation"]
    assert records[-1].getMessage() == "Text generation failed: API request failed: 503"
    assert records[-1].exc_info is not None
    assert records[-1].exc_info[0] is ServerError
