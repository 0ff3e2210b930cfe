"""Request bodies and the decoded API response."""

from __future__ import annotations

from pydantic import Field

from pycriticalmaps.exceptions import EncodingError
from pycriticalmaps.models._base import CriticalMapsModel
from pycriticalmaps.models.chat import ChatMessage, SendChatMessage
from pycriticalmaps.models.location import Location


class PositionReport(CriticalMapsModel):
    """POST body broadcasting the device position."""

    device: str
    location: Location


class MessageBatch(CriticalMapsModel):
    """POST body submitting chat messages, in order."""

    device: str
    messages: list[SendChatMessage] = Field(default_factory=list)


class ApiResponse(CriticalMapsModel):
    """Decoded server payload.

    Parameters
    ----------
    locations : dict
        Current world state, keyed by device identifier.
    chat_messages : dict
        Chat messages keyed by message identifier. After a message
        submission this carries the messages the server accepted.
    """

    locations: dict[str, Location] = Field(default_factory=dict)
    chat_messages: dict[str, ChatMessage] = Field(default_factory=dict)


def encode_body(body: CriticalMapsModel) -> bytes:
    """Serialize a request body to UTF-8 JSON using wire (camelCase) keys.

    Unset optional fields are omitted rather than sent as ``null``.
    """
    try:
        return body.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
    except (ValueError, TypeError) as exc:
        raise EncodingError(f"Cannot encode {type(body).__name__}: {exc}") from exc
