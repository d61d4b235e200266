"""Bounds-checked big-endian reader over an in-memory IFO image."""

from __future__ import annotations

import struct
from pathlib import Path
from typing import Union

from dvdti.ifo.errors import TruncatedDataError

DVD_BLOCK_LEN = 2048

_U8 = struct.Struct(">B")
_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")
_U64 = struct.Struct(">Q")


def bcd(value: int) -> int:
    """Decode one packed BCD byte (``0x12`` -> 12)."""
    return (value >> 4) * 10 + (value & 0x0F)


def trim_field(text: str) -> str:
    """Strip the trailing spaces and NUL padding of a fixed-length field."""
    return text.rstrip(" \x00")


class BinaryReader:
    """Cursor and absolute-offset reads over an immutable byte range.

    Offsets are relative to the start of the range, so a reader returned by
    :meth:`slice` addresses its own sub-table from zero.  Every read past the
    end of the range raises :class:`TruncatedDataError`.
    """

    __slots__ = ("_buf", "_base", "_limit", "_cursor", "_source")

    def __init__(self, source: Union[bytes, bytearray, memoryview, str, Path]) -> None:
        if isinstance(source, (str, Path)):
            self._source: str | None = str(source)
            self._buf = memoryview(Path(source).read_bytes())
        else:
            self._source = None
            self._buf = source if isinstance(source, memoryview) else memoryview(bytes(source))
        self._base = 0
        self._limit = len(self._buf)
        self._cursor = 0

    def __enter__(self) -> BinaryReader:
        return self

    def __exit__(self, *_: object) -> None:
        self._buf.release()

    # -- position --

    @property
    def size(self) -> int:
        """Length of the readable range."""
        return self._limit - self._base

    @property
    def remaining(self) -> int:
        """Bytes left between the cursor and the end of the range."""
        return self._limit - self._cursor

    @property
    def path(self) -> str | None:
        return self._source

    def tell(self) -> int:
        return self._cursor - self._base

    def seek(self, offset: int) -> None:
        """Move the cursor; the end of the range itself is a valid position."""
        if not 0 <= offset <= self.size:
            raise TruncatedDataError(f"seek to {offset:#x} outside range of {self.size:#x} bytes")
        self._cursor = self._base + offset

    def skip(self, n: int) -> None:
        self.require(n)
        self._cursor += n

    # -- bounds --

    def require(self, n: int) -> None:
        """Raise unless *n* bytes are readable at the cursor."""
        if n > self.remaining:
            raise TruncatedDataError(
                f"need {n} bytes at offset {self.tell():#x}, only {self.remaining} left"
            )

    def require_at(self, offset: int, n: int) -> None:
        """Raise unless ``[offset, offset + n)`` lies inside the range."""
        if offset < 0 or n < 0 or offset + n > self.size:
            raise TruncatedDataError(
                f"need {n} bytes at offset {offset:#x}, range is {self.size:#x} bytes"
            )

    def slice(self, offset: int, length: int) -> BinaryReader:
        """Zero-copy sub-reader over ``[offset, offset + length)``."""
        self.require_at(offset, length)
        child = object.__new__(BinaryReader)
        child._buf = self._buf
        child._source = self._source
        child._base = self._base + offset
        child._limit = child._base + length
        child._cursor = child._base
        return child

    def slice_from(self, offset: int) -> BinaryReader:
        """Sub-reader from *offset* to the end of this range."""
        return self.slice(offset, self.size - offset)

    # -- cursor reads --

    def _take(self, codec: struct.Struct) -> int:
        self.require(codec.size)
        (value,) = codec.unpack_from(self._buf, self._cursor)
        self._cursor += codec.size
        return value

    def u8(self) -> int:
        return self._take(_U8)

    def u16(self) -> int:
        return self._take(_U16)

    def u32(self) -> int:
        return self._take(_U32)

    def u64(self) -> int:
        return self._take(_U64)

    def bcd(self) -> int:
        """Read one byte and decode it as packed BCD."""
        return bcd(self._take(_U8))

    def read_bytes(self, n: int) -> bytes:
        self.require(n)
        start = self._cursor
        self._cursor += n
        return bytes(self._buf[start : self._cursor])

    def read_string(self, n: int) -> str:
        """Read *n* bytes as Latin-1 text, padding included."""
        return self.read_bytes(n).decode("latin-1")

    # -- absolute reads (cursor untouched) --

    def _peek(self, codec: struct.Struct, offset: int) -> int:
        self.require_at(offset, codec.size)
        (value,) = codec.unpack_from(self._buf, self._base + offset)
        return value

    def u8_at(self, offset: int) -> int:
        return self._peek(_U8, offset)

    def u16_at(self, offset: int) -> int:
        return self._peek(_U16, offset)

    def u32_at(self, offset: int) -> int:
        return self._peek(_U32, offset)

    def u64_at(self, offset: int) -> int:
        return self._peek(_U64, offset)

    def bytes_at(self, offset: int, n: int) -> bytes:
        self.require_at(offset, n)
        start = self._base + offset
        return bytes(self._buf[start : start + n])

    def string_at(self, offset: int, n: int) -> str:
        """Latin-1 text of *n* bytes at *offset*, padding included."""
        return self.bytes_at(offset, n).decode("latin-1")

    def __repr__(self) -> str:
        return (
            f"BinaryReader({self._source or 'bytes'}, "
            f"offset={self.tell():#x}, size={self.size:#x})"
        )
