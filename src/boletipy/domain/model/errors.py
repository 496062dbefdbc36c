"""Domain error types."""

from __future__ import annotations


class StructuralError(ValueError):
    """Raised when a ticket, result or prize entry has an invalid shape."""
