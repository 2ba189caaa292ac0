from dataclasses import dataclass
from enum import IntEnum

from netwalk.components.direction import DIRECTIONS, RotationDirection
from netwalk.utils.bitflags import count_bits


class TileKind(IntEnum):
    UNDEFINED = 0
    SERVER = 1
    TERMINAL = 2
    CONNECTOR = 3


@dataclass(slots=True)
class Tile:
    """Per-cell pipe state.

    ``directions`` is the open-connection mask the player rotates.
    ``neighbours`` is the generation frontier: directions that still lead to an
    unvisited in-bounds cell. ``kind`` is assigned once after generation and is
    never recomputed. ``powered`` is rewritten by every solvability check.
    """
    kind: TileKind = TileKind.UNDEFINED
    directions: int = 0
    neighbours: int = 0
    powered: bool = False

    def rotate(self, rotation: RotationDirection, n: int = 1) -> None:
        for _ in range(n):
            turned = 0
            for direction in DIRECTIONS:
                if self.directions & direction.flag:
                    turned |= direction.turned(rotation)
            self.directions = turned

    def connections(self) -> int:
        return count_bits(self.directions)

    def free_directions(self) -> int:
        return count_bits(self.neighbours)
