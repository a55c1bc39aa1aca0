"""Type conversion utilities."""

from __future__ import annotations

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def to_int(raw: object) -> int | None:
    """Convert a loosely-typed JSON/HTML value to int, ``None`` if invalid.

    Handles:
        - None → None
        - bool → None (JSON ``true`` is not a number)
        - int → int (passthrough)
        - 12.0 → 12
        - "123" → 123
        - "1,234" → 1234
        - "" / "abc" / "²" → None
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, int):
        return raw

    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None

    if isinstance(raw, str):
        txt = raw.strip().replace(",", "").replace(" ", "")
        if not (txt.isascii() and txt.isdigit()):
            return None
        try:
            return int(txt)
        except ValueError:
            return None

    return None


def to_size_bytes(raw: object) -> int | None:
    """Like :func:`to_int` but rejects negative sizes."""
    value = to_int(raw)
    if value is None or value < 0:
        return None
    return value


def format_size(size_bytes: int | None) -> str:
    """Render a byte count as a human-readable caption.

    Examples:
        - None → ""
        - 512 → "512 B"
        - 1536 → "1.5 KB"
        - 4_831_838_208 → "4.5 GB"
    """
    if size_bytes is None or size_bytes < 0:
        return ""

    value = float(size_bytes)
    for unit in _SIZE_UNITS:
        if value < 1024 or unit == _SIZE_UNITS[-1]:
            if unit == "B":
                return f"{int(value)} B"
            return f"{value:.1f} {unit}"
        value /= 1024
    return ""
