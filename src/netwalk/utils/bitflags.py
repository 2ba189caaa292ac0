"""Helpers for the 4-bit connection masks carried by tiles."""
from __future__ import annotations

from typing import Iterator

# Flags in direction-table order: UP, RIGHT, DOWN, LEFT.
ALL_FLAGS = (1, 2, 4, 8)


def count_bits(mask: int) -> int:
    return mask.bit_count()


def has_flag(mask: int, flag: int) -> bool:
    return (mask & flag) != 0


def iter_flags(mask: int) -> Iterator[int]:
    """Yield each direction flag set in ``mask``, in direction-table order."""
    for flag in ALL_FLAGS:
        if mask & flag:
            yield flag
