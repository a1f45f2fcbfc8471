"""Numeric one-time code generator."""

from __future__ import annotations

import secrets

DEFAULT_CODE_LENGTH = 6


class NumericCodeGenerator:
    """Produces fixed-length numeric codes from the ``secrets`` CSPRNG.

    Codes are uniform over the whole range, leading zeros included
    (``000000`` through ``999999`` for the default length).
    """

    def __init__(self, length: int = DEFAULT_CODE_LENGTH) -> None:
        if length < 1:
            raise ValueError("Code length must be at least 1")
        self._length = length

    def generate(self) -> str:
        """Return a fresh code of exactly ``length`` ASCII digits."""
        return f"{secrets.randbelow(10**self._length):0{self._length}d}"
