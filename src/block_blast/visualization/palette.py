from __future__ import annotations

from typing import Tuple

from block_blast.game import PieceColor


EMPTY_CELL = (40, 40, 48)


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    value = value.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"expected #RRGGBB, got {value!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def rgb_for_value(v: int) -> Tuple[int, int, int]:
    """RGB color for a board cell value (0 is empty)."""
    if v == 0:
        return EMPTY_CELL
    return hex_to_rgb(PieceColor(v).hex)
