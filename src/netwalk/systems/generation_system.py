"""Procedural board construction: randomized spanning tree, tile kinds, scramble."""
from __future__ import annotations

import logging
from typing import List, Optional

from esper import World

from netwalk.components.board import Board
from netwalk.components.direction import Direction, RotationDirection, direction_for_flag
from netwalk.components.tile import Tile, TileKind
from netwalk.constants import SCRAMBLE_TURN_CHOICES
from netwalk.events.bus import EventBus, EVENT_BOARD_GENERATED, EVENT_BOARD_SCRAMBLED
from netwalk.systems.board_ops import count_edges, get_board, iter_neighbours
from netwalk.utils.bitflags import iter_flags
from netwalk.utils.geometry import Position
from netwalk.utils.seed import GameRng

logger = logging.getLogger(__name__)


class BoardGenerationSystem:
    """Fills the world's board with a random spanning tree of pipes.

    Every draw comes from the ``rng`` handed in, so the same seed always grows
    the same tree. Growth picks a random cell from the whole worklist rather
    than the newest one, which keeps the tree bushy instead of snake-like.
    """

    def __init__(self, world: World, event_bus: EventBus, *, rng: GameRng) -> None:
        self.world = world
        self.event_bus = event_bus
        self._rng = rng

    @property
    def board(self) -> Board:
        return get_board(self.world)

    def generate(self) -> Board:
        board = self.board
        board.root = Position(self._rng.randrange(board.width), self._rng.randrange(board.height))
        self._init_tiles(board)
        self._generate_tree(board)
        self._assign_kinds(board)
        edges = count_edges(board)
        logger.debug(
            "Generated %dx%d board rooted at (%d, %d) with %d edges",
            board.width, board.height, board.root.x, board.root.y, edges,
        )
        self.event_bus.emit(EVENT_BOARD_GENERATED, size=board.size, root=board.root, edges=edges)
        return board

    def scramble(self) -> List[int]:
        """Rotate each tile clockwise by 0, 1 or 2 quarter turns, row-major."""
        board = self.board
        turns: List[int] = []
        for tile in board.tiles:
            n = self._rng.randrange(SCRAMBLE_TURN_CHOICES)
            tile.rotate(RotationDirection.RIGHT, n)
            turns.append(n)
        self.event_bus.emit(EVENT_BOARD_SCRAMBLED, turns=turns)
        return turns

    def _init_tiles(self, board: Board) -> None:
        board.tiles = []
        board.to_visit = []
        for y in range(board.height):
            for x in range(board.width):
                tile = Tile()
                for direction, _ in iter_neighbours(board, Position(x, y)):
                    tile.neighbours |= direction.flag
                board.tiles.append(tile)

    def _visit(self, board: Board, pos: Position, flag: int) -> None:
        tile = board.tile(pos)
        # The root keeps an empty mask until its first edge, so it is queued only once.
        if tile.directions == 0 and (pos != board.root or flag == 0):
            board.to_visit.append(pos)
        tile.directions |= flag
        # Nobody may offer an edge into this cell any more.
        for direction, neighbour in iter_neighbours(board, pos):
            board.tile(neighbour).neighbours &= ~direction.opposite

    def _random_direction(self, tile: Tile) -> Optional[Direction]:
        candidates = [direction_for_flag(flag) for flag in iter_flags(tile.neighbours)]
        if not candidates:
            return None
        return candidates[self._rng.randrange(len(candidates))]

    def _generate_tree(self, board: Board) -> None:
        self._visit(board, board.root, 0)
        while board.to_visit:
            n = self._rng.randrange(len(board.to_visit))
            pos = board.to_visit[n]
            tile = board.tile(pos)
            direction = self._random_direction(tile)
            if direction is not None:
                self._visit(board, pos, direction.flag)
                self._visit(board, pos + direction.offset, direction.opposite)
            # A cell leaves the worklist only once no unvisited neighbour remains.
            if tile.neighbours == 0:
                board.to_visit.pop(n)

    def _assign_kinds(self, board: Board) -> None:
        for tile in board.tiles:
            tile.kind = TileKind.TERMINAL if tile.connections() == 1 else TileKind.CONNECTOR
        board.tile(board.root).kind = TileKind.SERVER
