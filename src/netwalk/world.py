from __future__ import annotations

from typing import Callable

from esper import World

from netwalk.components.board import Board
from netwalk.components.game_clock import GameClock
from netwalk.components.puzzle_state import PuzzleState
from netwalk.constants import DEFAULT_HEIGHT, DEFAULT_WIDTH, MAX_BOARD_SIZE, MIN_BOARD_SIZE


def validate_size(width: int, height: int) -> None:
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Board {name} must be an integer, got {value!r}")
        if not MIN_BOARD_SIZE <= value <= MAX_BOARD_SIZE:
            raise ValueError(
                f"Board {name} must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}, got {value}"
            )


def create_world(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    *,
    seed_hex: str = "",
    clock: Callable[[], float] | None = None,
) -> World:
    """Build a world holding one empty board plus the clock and puzzle state.

    The board's tiles are blank until a generation system fills them in.
    """
    validate_size(width, height)
    world = World()
    world.create_entity(
        Board(width=width, height=height),
        GameClock(clock=clock),
        PuzzleState(seed_hex=seed_hex),
    )
    return world
