"""pycriticalmaps - Async sync controller for the Critical Maps location-sharing API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pycriticalmaps")
except PackageNotFoundError:
    __version__ = "0+local"
from pycriticalmaps._transport import HttpTransport
from pycriticalmaps.config import SyncConfig
from pycriticalmaps.controller import SyncController
from pycriticalmaps.exceptions import (
    ConfigError,
    CriticalMapsError,
    DecodeError,
    EncodingError,
    TransportError,
)
from pycriticalmaps.execution import GraceTimerHost, NullExecutionHost
from pycriticalmaps.identity import DailyRotatingIDProvider, StaticIDProvider
from pycriticalmaps.location_source import StaticLocationProvider
from pycriticalmaps.models import (
    ApiResponse,
    ChatMessage,
    Location,
    MessageBatch,
    PositionReport,
    SendChatMessage,
)
from pycriticalmaps.state import DataStore

__all__ = [
    "__version__",
    "ApiResponse",
    "ChatMessage",
    "ConfigError",
    "CriticalMapsError",
    "DailyRotatingIDProvider",
    "DataStore",
    "DecodeError",
    "EncodingError",
    "GraceTimerHost",
    "HttpTransport",
    "Location",
    "MessageBatch",
    "NullExecutionHost",
    "PositionReport",
    "SendChatMessage",
    "StaticIDProvider",
    "StaticLocationProvider",
    "SyncConfig",
    "SyncController",
    "TransportError",
]
