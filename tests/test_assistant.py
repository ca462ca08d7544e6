"""Tests for the privacy assistant client."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from privacyguard.assistant.client import (
    ERROR_MESSAGE,
    SYSTEM_INSTRUCTION,
    UNAVAILABLE_MESSAGE,
    AssistantClient,
)
from privacyguard.assistant.models import ChatHistory, ChatMessage, ChatRole

REPLY = {
    "candidates": [
        {"content": {"role": "model", "parts": [{"text": "Change your password "}, {"text": "and enable 2FA."}]}}
    ]
}


def mock_session(status: int = 200, payload=None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload)
    response.text = AsyncMock(return_value=text)

    request_cm = MagicMock()
    request_cm.__aenter__.return_value = response
    request_cm.__aexit__.return_value = None

    session = MagicMock()
    session.closed = False
    session.post = MagicMock(return_value=request_cm)
    session.close = AsyncMock()
    return session


class TestChatHistory:
    """Test suite for ChatHistory."""

    def test_with_message_returns_new_history(self):
        empty = ChatHistory()
        history = empty.with_message(ChatRole.USER, "hi")
        assert len(empty) == 0
        assert list(history) == [ChatMessage(ChatRole.USER, "hi")]

    def test_with_exchange(self):
        history = ChatHistory().with_exchange("question", "answer")
        assert [m.role for m in history] == [ChatRole.USER, ChatRole.ASSISTANT]

    def test_truncated_keeps_latest(self):
        history = ChatHistory()
        for i in range(5):
            history = history.with_message(ChatRole.USER, str(i))
        assert [m.text for m in history.truncated(2)] == ["3", "4"]
        assert len(history.truncated(0)) == 0
        assert len(history) == 5


class TestAssistantClient:
    """Test suite for AssistantClient."""

    @pytest.mark.asyncio
    async def test_unconfigured_returns_unavailable(self):
        client = AssistantClient(api_key=None)
        with patch.object(client, "_ensure_session", new=AsyncMock()) as mock_ensure:
            reply = await client.reply(ChatHistory(), "Hello")

        assert reply == UNAVAILABLE_MESSAGE
        mock_ensure.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        assert AssistantClient().is_configured

    @pytest.mark.asyncio
    async def test_blank_message_rejected(self):
        client = AssistantClient(api_key="key")
        with pytest.raises(ValueError):
            await client.reply(ChatHistory(), "  ")

    @pytest.mark.asyncio
    async def test_successful_reply(self):
        client = AssistantClient(api_key="key", model="gemini-test")
        session = mock_session(200, payload=REPLY)
        history = ChatHistory().with_exchange("Was I breached?", "You appear in 2 breaches.")

        with patch.object(client, "_ensure_session", new=AsyncMock(return_value=session)):
            reply = await client.reply(history, "What now?")

        assert reply == "Change your password and enable 2FA."

        args, kwargs = session.post.call_args
        assert args[0].endswith("/models/gemini-test:generateContent")
        assert kwargs["headers"]["x-goog-api-key"] == "key"
        contents = kwargs["json"]["contents"]
        assert [c["role"] for c in contents] == ["user", "model", "user"]
        assert contents[-1]["parts"][0]["text"] == "What now?"
        assert kwargs["json"]["systemInstruction"]["parts"][0]["text"] == SYSTEM_INSTRUCTION

    @pytest.mark.asyncio
    async def test_http_error_returns_error_message(self):
        client = AssistantClient(api_key="key")
        session = mock_session(500, text="internal")
        with patch.object(client, "_ensure_session", new=AsyncMock(return_value=session)):
            assert await client.reply(ChatHistory(), "Hello") == ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_transport_error_returns_error_message(self):
        client = AssistantClient(api_key="key")
        session = mock_session()
        session.post.side_effect = aiohttp.ClientConnectionError("refused")
        with patch.object(client, "_ensure_session", new=AsyncMock(return_value=session)):
            assert await client.reply(ChatHistory(), "Hello") == ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_timeout_returns_error_message(self):
        client = AssistantClient(api_key="key")
        session = mock_session()
        session.post.side_effect = asyncio.TimeoutError()
        with patch.object(client, "_ensure_session", new=AsyncMock(return_value=session)):
            assert await client.reply(ChatHistory(), "Hello") == ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_empty_candidates_returns_error_message(self):
        client = AssistantClient(api_key="key")
        session = mock_session(200, payload={"candidates": []})
        with patch.object(client, "_ensure_session", new=AsyncMock(return_value=session)):
            assert await client.reply(ChatHistory(), "Hello") == ERROR_MESSAGE

    def test_extract_text_handles_junk(self):
        assert AssistantClient.extract_text(None) is None
        assert AssistantClient.extract_text({"candidates": [{}]}) is None
