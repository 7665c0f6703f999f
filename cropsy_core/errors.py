"""Error types raised by the layout and panner computations."""

from __future__ import annotations


class InvalidDimensionError(ValueError):
    """Frame size, box count, aspect ratio or spacing outside the valid range."""


class DegenerateLayoutError(ValueError):
    """Layout computed for a frame too small to hold a non-empty box."""

    def __init__(self, count: int, message: str | None = None):
        self.count = count
        super().__init__(message or f"Layout for {count} box(es) has zero-size boxes")


class ZeroTravelRangeError(ZeroDivisionError):
    """Box fills the whole screen on one axis, leaving no range to pan across."""
