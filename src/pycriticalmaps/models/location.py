"""Location model."""

from __future__ import annotations

import time

from pydantic import Field, field_validator

from pycriticalmaps.models._base import CriticalMapsModel

#: The API transmits coordinates as integer microdegrees.
MICRODEGREES = 1_000_000


class Location(CriticalMapsModel):
    """A device position at a point in time.

    Parameters
    ----------
    longitude : int
        Longitude in microdegrees (degrees * 1e6).
    latitude : int
        Latitude in microdegrees (degrees * 1e6).
    timestamp : float
        Epoch seconds when the position was observed.
    name : str or None
        Optional display name attached by the server.
    color : str or None
        Optional display color attached by the server.
    """

    longitude: int
    latitude: int
    timestamp: float = Field(default_factory=time.time)
    name: str | None = None
    color: str | None = None

    @field_validator("longitude", "latitude", mode="before")
    @classmethod
    def _coerce_int(cls, value: object) -> object:
        # Some server builds send "13405000" or 13405000.0
        if isinstance(value, str):
            return int(float(value))
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value

    @field_validator("latitude")
    @classmethod
    def _check_latitude(cls, value: int) -> int:
        if abs(value) > 90 * MICRODEGREES:
            raise ValueError(f"latitude out of range: {value}")
        return value

    @field_validator("longitude")
    @classmethod
    def _check_longitude(cls, value: int) -> int:
        if abs(value) > 180 * MICRODEGREES:
            raise ValueError(f"longitude out of range: {value}")
        return value

    @classmethod
    def from_degrees(
        cls,
        latitude: float,
        longitude: float,
        *,
        timestamp: float | None = None,
    ) -> Location:
        """Build a location from decimal degrees."""
        return cls(
            latitude=round(latitude * MICRODEGREES),
            longitude=round(longitude * MICRODEGREES),
            timestamp=time.time() if timestamp is None else timestamp,
        )

    @property
    def latitude_degrees(self) -> float:
        return self.latitude / MICRODEGREES

    @property
    def longitude_degrees(self) -> float:
        return self.longitude / MICRODEGREES
