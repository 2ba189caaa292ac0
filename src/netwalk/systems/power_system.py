from __future__ import annotations

import logging
from typing import List

from esper import World

from netwalk.components.board import Board
from netwalk.components.direction import DIRECTIONS
from netwalk.components.tile import TileKind
from netwalk.events.bus import EventBus, EVENT_POWER_UPDATED, EVENT_PUZZLE_SOLVED
from netwalk.systems.board_ops import get_board, get_clock, get_puzzle_state
from netwalk.utils.bitflags import has_flag
from netwalk.utils.geometry import Position

logger = logging.getLogger(__name__)


class PowerSystem:
    """Propagates power from the server and decides whether the puzzle is solved.

    Power crosses between two adjacent tiles only when both have a pipe stub
    facing the other; a stub pointing at a tile that does not point back
    conducts nothing.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus

    def propagate(self) -> int:
        """Recompute every tile's ``powered`` flag and return how many are powered."""
        board = get_board(self.world)
        for tile in board.tiles:
            tile.powered = False
        root_tile = board.tile(board.root)
        root_tile.powered = True
        powered = 1
        stack: List[Position] = [board.root]
        while stack:
            pos = stack.pop()
            mask = board.tile(pos).directions
            for direction in DIRECTIONS:
                if not has_flag(mask, direction.flag):
                    continue
                neighbour_pos = pos + direction.offset
                if not board.in_bounds(neighbour_pos):
                    continue
                neighbour = board.tile(neighbour_pos)
                if has_flag(neighbour.directions, direction.opposite) and not neighbour.powered:
                    neighbour.powered = True
                    powered += 1
                    stack.append(neighbour_pos)
        return powered

    def is_solved(self) -> bool:
        powered = self.propagate()
        board = get_board(self.world)
        solved = all(tile.powered for tile in board.tiles if tile.kind == TileKind.TERMINAL)
        state = get_puzzle_state(self.world)
        was_solved = state.solved
        state.solved = solved
        self.event_bus.emit(EVENT_POWER_UPDATED, powered=powered, solved=solved)
        if solved and not was_solved:
            elapsed_ms = get_clock(self.world).elapsed_ms()
            logger.info("Puzzle solved in %d moves after %d ms", state.moves, elapsed_ms)
            self.event_bus.emit(EVENT_PUZZLE_SOLVED, moves=state.moves, elapsed_ms=elapsed_ms)
        return solved

    def powered_positions(self) -> List[Position]:
        board: Board = get_board(self.world)
        return [board.position_of(index) for index, tile in enumerate(board.tiles) if tile.powered]
