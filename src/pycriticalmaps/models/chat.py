"""Chat message models."""

from __future__ import annotations

import secrets
import time

from pydantic import Field

from pycriticalmaps.models._base import CriticalMapsModel


class SendChatMessage(CriticalMapsModel):
    """An outgoing chat message.

    ``identifier`` is chosen by the client; the server echoes accepted
    messages back keyed by it.
    """

    text: str = ""
    timestamp: float = Field(default_factory=time.time)
    identifier: str = Field(default_factory=lambda: secrets.token_hex(16).upper())

    @classmethod
    def create(cls, text: str) -> SendChatMessage:
        """Build a message stamped with the current time and a fresh identifier."""
        return cls(text=text)


class ChatMessage(CriticalMapsModel):
    """A chat message as stored by the server."""

    message: str = ""
    timestamp: float = 0.0
