"""State/store layer.

The store is the single place where decoded API responses are merged
into the shared application state.
"""

from pycriticalmaps.state.store import DataStore

__all__ = ["DataStore"]
