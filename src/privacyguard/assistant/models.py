"""
Conversation models for the privacy assistant.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator


class ChatRole(str, Enum):
    """Who spoke a message."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    """A single message in a conversation."""

    role: ChatRole
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role.value, "text": self.text}


@dataclass(frozen=True)
class ChatHistory:
    """Ordered, immutable conversation history.

    The caller owns retention: each turn produces a new history and the
    caller decides when to truncate it.
    """

    messages: tuple[ChatMessage, ...] = ()

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(self.messages)

    def with_message(self, role: ChatRole, text: str) -> "ChatHistory":
        """Return a new history with one message appended."""
        return ChatHistory(self.messages + (ChatMessage(role=role, text=text),))

    def with_exchange(self, user_text: str, assistant_text: str) -> "ChatHistory":
        """Return a new history with a user message and its reply appended."""
        return (
            self.with_message(ChatRole.USER, user_text)
            .with_message(ChatRole.ASSISTANT, assistant_text)
        )

    def truncated(self, max_messages: int) -> "ChatHistory":
        """Keep only the most recent ``max_messages`` messages."""
        if max_messages <= 0:
            return ChatHistory()
        return ChatHistory(self.messages[-max_messages:])
