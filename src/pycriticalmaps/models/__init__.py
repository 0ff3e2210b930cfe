"""Data models for Critical Maps API payloads."""

from pycriticalmaps.models._base import CriticalMapsModel
from pycriticalmaps.models.api import ApiResponse, MessageBatch, PositionReport, encode_body
from pycriticalmaps.models.chat import ChatMessage, SendChatMessage
from pycriticalmaps.models.location import MICRODEGREES, Location

__all__ = [
    "ApiResponse",
    "ChatMessage",
    "CriticalMapsModel",
    "Location",
    "MICRODEGREES",
    "MessageBatch",
    "PositionReport",
    "SendChatMessage",
    "encode_body",
]
