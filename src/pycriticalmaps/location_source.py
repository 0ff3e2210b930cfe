"""Location source implementations."""

from __future__ import annotations

from pycriticalmaps.models.location import Location


class StaticLocationProvider:
    """Holds the last position pushed by the platform location service.

    ``current_location`` is ``None`` until the first fix arrives and
    after :meth:`clear` (e.g. when the user stops sharing).
    """

    def __init__(self, location: Location | None = None) -> None:
        self._location = location

    @property
    def current_location(self) -> Location | None:
        return self._location

    def update(self, location: Location) -> None:
        self._location = location

    def clear(self) -> None:
        self._location = None
