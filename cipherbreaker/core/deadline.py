import time


class Deadline:
    """
    Wall-clock budget shared by every breaker of one request.

    Long enumerations poll `expired()` so a caller can bound worst-case
    latency. A deadline built with `seconds=None` never expires.
    """

    def __init__(self, seconds: float | None = None):
        self.seconds = seconds
        self._expires_at = None if seconds is None else time.monotonic() + seconds

    def expired(self) -> bool:
        return self._expires_at is not None and time.monotonic() >= self._expires_at

