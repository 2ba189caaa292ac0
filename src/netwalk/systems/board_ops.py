from __future__ import annotations

from typing import Iterator, List, Tuple

from esper import World

from netwalk.components.board import Board
from netwalk.components.direction import DIRECTIONS, Direction
from netwalk.components.game_clock import GameClock
from netwalk.components.puzzle_state import PuzzleState
from netwalk.components.tile import Tile, TileKind
from netwalk.utils.geometry import Position


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board component not found")


def get_clock(world: World) -> GameClock:
    for _, clock in world.get_component(GameClock):
        return clock
    raise RuntimeError("GameClock component not found")


def get_puzzle_state(world: World) -> PuzzleState:
    for _, state in world.get_component(PuzzleState):
        return state
    raise RuntimeError("PuzzleState component not found")


def tile_at(world: World, pos: Position) -> Tile:
    """Direct lookup; out-of-range positions raise ``IndexError``."""
    return get_board(world).tile(pos)


def iter_neighbours(board: Board, pos: Position) -> Iterator[Tuple[Direction, Position]]:
    """Yield ``(direction, neighbour)`` for every in-bounds neighbour of ``pos``."""
    for direction in DIRECTIONS:
        neighbour = pos + direction.offset
        if board.in_bounds(neighbour):
            yield direction, neighbour


def count_edges(board: Board) -> int:
    """Count undirected edges whose two ends both face each other."""
    edges = 0
    for index, tile in enumerate(board.tiles):
        pos = board.position_of(index)
        for direction, neighbour in iter_neighbours(board, pos):
            # Only RIGHT and DOWN so each edge is counted once.
            if direction.offset.x < 0 or direction.offset.y < 0:
                continue
            if tile.directions & direction.flag and board.tile(neighbour).directions & direction.opposite:
                edges += 1
    return edges


def positions_of_kind(board: Board, kind: TileKind) -> List[Position]:
    return [board.position_of(index) for index, tile in enumerate(board.tiles) if tile.kind == kind]
