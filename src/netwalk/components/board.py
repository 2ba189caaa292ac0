from dataclasses import dataclass, field
from typing import List

from netwalk.components.tile import Tile
from netwalk.utils.geometry import Position, Size


@dataclass(slots=True)
class Board:
    """Singleton component owning the tile grid.

    Tiles are stored row-major; ``x + y * width`` is the only addressing scheme.
    ``to_visit`` is the generation worklist and is empty once a board is built.
    """
    width: int
    height: int
    root: Position = Position(0, 0)
    tiles: List[Tile] = field(default_factory=list)
    to_visit: List[Position] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.tiles:
            self.tiles = [Tile() for _ in range(self.width * self.height)]

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def index_of(self, pos: Position) -> int:
        if not self.in_bounds(pos):
            raise IndexError(f"Position {pos} outside {self.width}x{self.height} board")
        return pos.x + pos.y * self.width

    def tile(self, pos: Position) -> Tile:
        return self.tiles[self.index_of(pos)]

    def position_of(self, index: int) -> Position:
        y, x = divmod(index, self.width)
        return Position(x, y)
