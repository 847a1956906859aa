"""Low-level little-endian reader with a moving cursor and a field path."""
from __future__ import annotations

import struct
from contextlib import contextmanager
from typing import Iterator, List, Tuple

from .errors import MalformedLengthError, TruncatedInputError

_INT32 = struct.Struct("<i")
_INT64 = struct.Struct("<q")
_UINT32 = struct.Struct("<I")
_UINT64 = struct.Struct("<Q")
_FLOAT32 = struct.Struct("<f")


class ByteCursor:
    """Wraps a bytes buffer with typed reads, a position and a symbolic path.

    Every read consumes exactly the bytes of its type, in file order, with no
    alignment. Failures carry the dotted path of the field being read so a
    desynchronised decode can be traced back to the record it started in.
    """

    __slots__ = ("_data", "_pos", "_path")

    def __init__(self, data: bytes, offset: int = 0) -> None:
        self._data = bytes(data)
        if not 0 <= offset <= len(self._data):
            raise ValueError(f"offset {offset} outside buffer of {len(self._data)} bytes")
        self._pos = offset
        self._path: List[str] = []

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    @property
    def path(self) -> str:
        return ".".join(self._path)

    @contextmanager
    def scope(self, segment: str) -> Iterator[None]:
        """Push ``segment`` onto the path for the duration of the block."""
        self._path.append(segment)
        try:
            yield
        finally:
            self._path.pop()

    def field_path(self, name: str | None) -> str:
        if not name:
            return self.path
        return ".".join([*self._path, name])

    def _take(self, size: int, name: str | None) -> bytes:
        if size > self.remaining:
            raise TruncatedInputError(
                f"Expected {size} bytes but only {self.remaining} remain",
                path=self.field_path(name),
                offset=self._pos,
            )
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def _unpack(self, fmt: struct.Struct, name: str | None):
        return fmt.unpack(self._take(fmt.size, name))[0]

    def int32(self, name: str | None = None) -> int:
        return self._unpack(_INT32, name)

    def int64(self, name: str | None = None) -> int:
        return self._unpack(_INT64, name)

    def uint32(self, name: str | None = None) -> int:
        return self._unpack(_UINT32, name)

    def uint64(self, name: str | None = None) -> int:
        return self._unpack(_UINT64, name)

    def float32(self, name: str | None = None) -> float:
        return self._unpack(_FLOAT32, name)

    def boolean(self, name: str | None = None) -> bool:
        return self._take(1, name)[0] != 0

    def raw(self, size: int, name: str | None = None) -> bytes:
        return self._take(size, name)

    def length_prefixed(self, name: str | None = None) -> bytes:
        """Read an int32 byte count followed by exactly that many bytes."""
        start = self._pos
        count = self.int32(name)
        if count < 0:
            raise MalformedLengthError(
                f"Negative length {count}", path=self.field_path(name), offset=start
            )
        return self._take(count, name)

    def count(self, name: str, element_size: int) -> int:
        """Read a repetition count and check it fits in the remaining input.

        ``element_size`` is the smallest number of bytes a single element can
        occupy; a count whose minimum footprint exceeds what is left cannot be
        valid.
        """
        start = self._pos
        value = self.int32(name)
        if value < 0:
            raise MalformedLengthError(
                f"Negative count {value}", path=self.field_path(name), offset=start
            )
        if value * element_size > self.remaining:
            raise MalformedLengthError(
                f"Count {value} needs at least {value * element_size} bytes "
                f"but only {self.remaining} remain",
                path=self.field_path(name),
                offset=start,
            )
        return value

    def int32_array(self, length: int, name: str | None = None) -> Tuple[int, ...]:
        return self._array("i", 4, length, name)

    def int64_array(self, length: int, name: str | None = None) -> Tuple[int, ...]:
        return self._array("q", 8, length, name)

    def float32_array(self, length: int, name: str | None = None) -> Tuple[float, ...]:
        return self._array("f", 4, length, name)

    def _array(self, code: str, size: int, length: int, name: str | None) -> tuple:
        if length < 0:
            raise MalformedLengthError(
                f"Negative array length {length}", path=self.field_path(name), offset=self._pos
            )
        if length == 0:
            return ()
        return struct.unpack(f"<{length}{code}", self._take(size * length, name))
