"""Direction table shared by adjacency, opposite matching and rotation.

Every direction carries its own bit, the bit facing back at it, the bits it
turns into after a clockwise or counter-clockwise quarter turn and its unit
grid offset. Nothing else in the package hard-codes direction arithmetic.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Dict, Tuple

from netwalk.utils.geometry import Position


class DirectionFlag(IntFlag):
    UP = 1
    RIGHT = 2
    DOWN = 4
    LEFT = 8


# Plain ints so masks built from the table stay ints.
UP, RIGHT, DOWN, LEFT = (flag.value for flag in DirectionFlag)


class RotationDirection(Enum):
    RIGHT = "right"  # clockwise
    LEFT = "left"    # counter-clockwise

    @classmethod
    def parse(cls, value: "str | RotationDirection") -> "RotationDirection":
        """Accept an enum member or the client spelling (``"Right"``/``"Left"``)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ValueError(f"Unknown rotation direction: {value!r}")


@dataclass(frozen=True, slots=True)
class Direction:
    flag: int
    opposite: int
    right: int
    left: int
    offset: Position

    def turned(self, rotation: RotationDirection) -> int:
        return self.right if rotation is RotationDirection.RIGHT else self.left


DIRECTIONS: Tuple[Direction, ...] = (
    Direction(UP, opposite=DOWN, right=RIGHT, left=LEFT, offset=Position(0, -1)),
    Direction(RIGHT, opposite=LEFT, right=DOWN, left=UP, offset=Position(1, 0)),
    Direction(DOWN, opposite=UP, right=LEFT, left=RIGHT, offset=Position(0, 1)),
    Direction(LEFT, opposite=RIGHT, right=UP, left=DOWN, offset=Position(-1, 0)),
)

_BY_FLAG: Dict[int, Direction] = {direction.flag: direction for direction in DIRECTIONS}


def direction_for_flag(flag: int) -> Direction:
    try:
        return _BY_FLAG[flag]
    except KeyError:
        raise ValueError(f"Not a single direction flag: {flag!r}") from None
