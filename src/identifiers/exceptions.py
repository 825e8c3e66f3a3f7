"""Exceptions raised by the identifier codec."""

from typing import Optional


class InvalidIdentifier(ValueError):
    """A package URL, or one of its parts, violates the purl grammar.

    Always a caller-input problem; retrying the same value will fail again.
    """

    def __init__(self, message: str, value: Optional[str] = None):
        super().__init__(message)
        self.value = value
