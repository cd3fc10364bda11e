"""Tests for the OpenRouter completion client."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai
import pytest

from nihonto.transcription.completion import OPENROUTER_ENDPOINT, CompletionClient, user_message
from nihonto.transcription.errors import CompletionError


def reply(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def api():
    return MagicMock()


def test_complete_returns_first_choice(api):
    api.chat.completions.create.return_value = reply("corrected text")

    text = CompletionClient("key", client=api).complete(
        model="anthropic/claude-3.5-sonnet",
        messages=[user_message("hello")],
        max_tokens=4000,
        temperature=0.1,
    )

    assert text == "corrected text"
    api.chat.completions.create.assert_called_once_with(
        model="anthropic/claude-3.5-sonnet",
        messages=[{"role": "user", "content": "hello"}],
        max_tokens=4000,
        temperature=0.1,
    )


def test_empty_reply(api):
    api.chat.completions.create.return_value = reply("  ")

    with pytest.raises(CompletionError, match="empty"):
        CompletionClient("key", client=api).complete("m", [user_message("x")], 10, 0.3)


def test_no_choices(api):
    api.chat.completions.create.return_value = SimpleNamespace(choices=[])

    with pytest.raises(CompletionError):
        CompletionClient("key", client=api).complete("m", [user_message("x")], 10, 0.3)


def test_status_error(api):
    request = httpx.Request("POST", f"{OPENROUTER_ENDPOINT}/chat/completions")
    response = httpx.Response(402, request=request)
    api.chat.completions.create.side_effect = openai.APIStatusError(
        "Insufficient credits", response=response, body=None
    )

    with pytest.raises(CompletionError, match="402"):
        CompletionClient("key", client=api).complete("m", [user_message("x")], 10, 0.3)


def test_connection_error(api):
    request = httpx.Request("POST", f"{OPENROUTER_ENDPOINT}/chat/completions")
    api.chat.completions.create.side_effect = openai.APIConnectionError(request=request)

    with pytest.raises(CompletionError):
        CompletionClient("key", client=api).complete("m", [user_message("x")], 10, 0.3)


def test_user_message_with_image():
    """Image part comes before the text part."""
    message = user_message("fix this", image_url="https://cdn.test/a.jpg")

    assert message["role"] == "user"
    assert message["content"][0] == {"type": "image_url", "image_url": {"url": "https://cdn.test/a.jpg"}}
    assert message["content"][1] == {"type": "text", "text": "fix this"}


def test_default_client_points_at_openrouter():
    client = CompletionClient("sk-or-test")

    assert str(client.client.base_url).rstrip("/") == OPENROUTER_ENDPOINT
    assert client.client.max_retries == 0
