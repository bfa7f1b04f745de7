from __future__ import annotations

import re

from ..config import ParserSettings
from ..models.classinfo import ClassInfo

SIMPLE_CODE = re.compile(r"[A-Z][0-9]+")

DEFAULT_SETTINGS = ParserSettings()


def _to_int32(n: int) -> int:
    n &= 0xFFFFFFFF
    return n - 0x100000000 if n & 0x80000000 else n


def _utf16_units(text: str):
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def string_hash(text: str) -> int:
    """Rolling hash ``h = c + ((h << 5) - h)`` with JavaScript number rules.

    The shift wraps to int32 but the subtraction does not, so the result can
    leave the int32 range; ``_to_int32`` of it equals the usual 31-multiplier
    string hash.
    """
    h = 0
    for unit in _utf16_units(text):
        h = unit + (_to_int32(_to_int32(h) << 5) - h)
    return h


def hue_for(text: str) -> int:
    h = string_hash(text)
    # truncated remainder: keeps the sign of the hash
    r = abs(h) % 360
    return -r if h < 0 else r


def is_complex_cell(cell: str) -> bool:
    return "-" in cell and len(cell) > 5


def highlight_color(cell: str, settings: ParserSettings = DEFAULT_SETTINGS) -> str:
    return f"hsl({hue_for(cell)}, {settings.saturation}%, {settings.lightness}%)"


def parse_cell(cell: str, settings: ParserSettings = DEFAULT_SETTINGS) -> ClassInfo | None:
    """Turn one raw grid cell into a ClassInfo, or None for an empty slot.

    "L1"                        -> ClassInfo("L1")
    "A1-BCSE305L-TH-SJT704-ALL" -> code A1, room TH, instructor SJT704, colored
    "Lunch", "-", ""            -> None
    Anything else is kept whole as an opaque code.
    """
    cell = cell.strip()
    if not cell or cell in settings.empty_tokens:
        return None

    if SIMPLE_CODE.fullmatch(cell):
        return ClassInfo(code=cell)

    parts = cell.split("-")
    if len(parts) >= 2 and parts[0]:
        return ClassInfo(
            code=parts[0],
            room=parts[2] if len(parts) > 2 else None,
            instructor=parts[3] if len(parts) > 3 else None,
            color=highlight_color(cell, settings) if is_complex_cell(cell) else None,
        )

    return ClassInfo(code=cell)
