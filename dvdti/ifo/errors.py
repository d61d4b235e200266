"""Errors raised while decoding DVD-Video IFO structures."""

from __future__ import annotations


class IfoError(ValueError):
    """Base class for every IFO decode failure."""


class FormatError(IfoError):
    """The 12-byte identifier at the start of an IFO file is wrong."""


class TruncatedDataError(IfoError):
    """A read ran past the end of the buffer."""


class UnsupportedStructureError(IfoError):
    """A table references something outside its documented range."""
