"""Custom exceptions for savegame decoding."""
from __future__ import annotations


class DecodeError(Exception):
    """Base exception for the decoding layer.

    ``path`` names the field being read when decoding stopped, for example
    ``party_records[42].party.stacks[3].num_troops``; ``offset`` is the byte
    position where that field started.
    """

    def __init__(self, message: str, *, path: str = "", offset: int | None = None) -> None:
        self.message = message
        self.path = path
        self.offset = offset
        super().__init__(self._format())

    def _format(self) -> str:
        location = []
        if self.path:
            location.append(f"at {self.path}")
        if self.offset is not None:
            location.append(f"offset {self.offset}")
        if not location:
            return self.message
        return f"{self.message} ({', '.join(location)})"


class InvalidFormatError(DecodeError):
    """Raised when the header magic number does not match."""


class TruncatedInputError(DecodeError):
    """Raised when fewer bytes remain than a field requires."""


class MalformedLengthError(DecodeError):
    """Raised when a count field is negative or implausibly large."""


class UnsupportedVersionWarning(UserWarning):
    """Emitted when the format version lies outside the verified range."""


class SaveLoadError(Exception):
    """Raised when a savegame file cannot be opened or read."""
