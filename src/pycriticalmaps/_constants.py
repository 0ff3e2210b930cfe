"""Internal constants shared across the library."""

DEFAULT_ENDPOINT = "https://api.criticalmaps.net/"
USER_AGENT = "pycriticalmaps"

#: Seconds between two poll cycles.
DEFAULT_POLL_INTERVAL: float = 12.0
DEFAULT_REQUEST_TIMEOUT: float = 30.0
#: Seconds a message submission may keep running after it was started.
DEFAULT_GRACE_PERIOD: float = 30.0
