"""
Privacy assistant backed by the Gemini text-completion API.

The assistant is an external collaborator: when it is not configured or a
request fails, callers get a fixed fallback message instead of an exception.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import logging
import os
from typing import Any

import aiohttp

from privacyguard.assistant.models import ChatHistory, ChatRole

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = (
    "The AI assistant is currently unavailable. Please ensure the API key is configured."
)
ERROR_MESSAGE = "Sorry, I encountered an error. Please try again later."

SYSTEM_INSTRUCTION = (
    "You are PrivacyGuard AI, a friendly and expert cybersecurity assistant. "
    "Your goal is to help users understand data breaches and improve their "
    "online privacy. Explain complex topics simply. Be encouraging and provide "
    "actionable advice. Do not mention that you are a language model. Keep "
    "responses concise and helpful."
)

# Gemini calls the assistant side of a conversation "model"
_ROLE_NAMES = {
    ChatRole.USER: "user",
    ChatRole.ASSISTANT: "model",
}


class AssistantClient:
    """Client for the breach-aware chat assistant."""

    GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
    DEFAULT_MODEL = "gemini-2.5-flash"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float = 30.0,
        user_agent: str = "PrivacyGuard/0.1",
    ):
        """Initialize assistant client.

        Args:
            api_key: Gemini API key; without one every reply is the
                unavailable message
            model: Gemini model name
            timeout: Total request timeout in seconds
            user_agent: User-Agent header for requests
        """
        self.api_key = api_key or os.environ.get("PRIVACYGUARD_AI_API_KEY") or os.environ.get("GEMINI_API_KEY")
        self.model = model or self.DEFAULT_MODEL
        self.timeout = timeout
        self.user_agent = user_agent
        self._session: aiohttp.ClientSession | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure HTTP session exists."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "AssistantClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def build_payload(self, history: ChatHistory, message: str) -> dict[str, Any]:
        """Build a generateContent request body."""
        contents = [
            {"role": _ROLE_NAMES[m.role], "parts": [{"text": m.text}]}
            for m in history
        ]
        contents.append({"role": "user", "parts": [{"text": message}]})
        return {
            "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
            "contents": contents,
        }

    @staticmethod
    def extract_text(data: Any) -> str | None:
        """Pull the reply text out of a generateContent response."""
        if not isinstance(data, dict):
            return None
        for candidate in data.get("candidates") or []:
            parts = (candidate.get("content") or {}).get("parts") or []
            text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
            if text:
                return text
        return None

    async def reply(self, history: ChatHistory, message: str) -> str:
        """Get the assistant's reply to a new user message.

        Args:
            history: Conversation so far, oldest first
            message: New user message

        Returns:
            Reply text, or a fixed fallback message if the assistant is
            unconfigured or the request fails
        """
        if not message or not message.strip():
            raise ValueError("Message must not be empty")

        if not self.is_configured:
            return UNAVAILABLE_MESSAGE

        url = f"{self.GEMINI_API_BASE}/models/{self.model}:generateContent"
        headers = {
            "User-Agent": self.user_agent,
            "x-goog-api-key": self.api_key,
        }

        session = await self._ensure_session()
        try:
            async with session.post(
                url,
                json=self.build_payload(history, message),
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if response.status != 200:
                    text = await response.text()
                    logger.error(f"Assistant API error: HTTP {response.status}: {text[:200]}")
                    return ERROR_MESSAGE
                data = await response.json(content_type=None)

        except asyncio.TimeoutError:
            logger.error("Assistant API error: request timeout")
            return ERROR_MESSAGE
        except (aiohttp.ClientError, ValueError) as e:
            logger.error(f"Assistant API error: {e}")
            return ERROR_MESSAGE

        text = self.extract_text(data)
        if text is None:
            logger.error("Assistant API error: response contained no text")
            return ERROR_MESSAGE
        return text
