"""Exception types raised by the checking harness."""

from __future__ import annotations


class QuickDiffError(Exception):
    pass


class ConfigurationError(QuickDiffError, ValueError):
    """Invalid check selection or run parameters, detected before any trial."""


class SlotAlreadySettledError(QuickDiffError):
    """A write-once result slot received a second value."""

    def __init__(self, index: int) -> None:
        super().__init__(f"Slot {index} was already settled")
        self.index = index


class DotParseError(QuickDiffError, ValueError):
    pass


__all__ = [
    "ConfigurationError",
    "DotParseError",
    "QuickDiffError",
    "SlotAlreadySettledError",
]
