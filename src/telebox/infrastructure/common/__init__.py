"""Common infrastructure utilities."""

from __future__ import annotations

from .converters import format_size, to_int, to_size_bytes

__all__ = [
    "format_size",
    "to_int",
    "to_size_bytes",
]
