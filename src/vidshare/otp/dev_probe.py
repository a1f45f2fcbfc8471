"""Development-only probe that remembers the most recently issued code.

The probe is process-wide, not per destination, and lets a local front
end auto-fill the code without a working SMS channel.  Only wire it in
when ``settings.development_mode`` is on.
"""

from __future__ import annotations


class DevelopmentCodeProbe:
    """Holds the last code issued to any destination."""

    def __init__(self) -> None:
        self._last_code: str | None = None
        self._last_destination: str | None = None

    def record(self, destination: str, code: str) -> None:
        self._last_code = code
        self._last_destination = destination

    def peek(self) -> str | None:
        """Return the last issued code, or ``None`` if none was issued yet."""
        return self._last_code

    @property
    def last_destination(self) -> str | None:
        return self._last_destination
