"""One playthrough of the puzzle and the surface a hosting layer talks to.

A :class:`Game` owns its world, event bus, board and the random stream that
built the board. Games may share an event bus, in which case rotate requests
name the world they target and a finished game should be closed. Callers that
serve several games at once are expected to serialize access to each one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Dict, List, Optional

from esper import World

from netwalk.components.board import Board
from netwalk.components.direction import RotationDirection
from netwalk.events.bus import EventBus, EVENT_TILE_ROTATE_REQUEST, EVENT_TIMER_STARTED
from netwalk.systems.board_ops import get_board, get_clock, get_puzzle_state
from netwalk.systems.generation_system import BoardGenerationSystem
from netwalk.systems.power_system import PowerSystem
from netwalk.systems.rotation_system import NO_CHANGE, RotationSystem
from netwalk.utils.geometry import Position, Size
from netwalk.utils.seed import GameRng, GameSeed
from netwalk.world import create_world

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class NewGameResult:
    """What a client needs to draw a freshly created game."""
    root: Position
    seed: str
    tiles: List[int]
    size: Size

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root.to_dict(),
            "seed": self.seed,
            "tiles": list(self.tiles),
            "size": self.size.to_dict(),
        }


@dataclass(slots=True)
class UpdateGameState:
    """Reply to an accepted rotation; ``time`` is whole milliseconds since the timer started."""
    pos: Position
    flag: int
    is_solved: bool
    time: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pos": self.pos.to_dict(),
            "flag": self.flag,
            "is_solved": self.is_solved,
            "time": self.time,
        }


def new_board(width: int, height: int, seed: GameSeed, *, event_bus: EventBus | None = None) -> Board:
    """Generate an unscrambled board for ``(width, height, seed)``.

    The board is a solved spanning tree; the same arguments always give the
    same root and direction masks.
    """
    bus = event_bus or EventBus()
    world = create_world(width, height, seed_hex=seed.hex())
    return BoardGenerationSystem(world, bus, rng=GameRng(seed)).generate()


class Game:
    def __init__(
        self,
        width: int,
        height: int,
        seed: GameSeed | None = None,
        *,
        scramble: bool = True,
        clock: Callable[[], float] | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.rng = GameRng(seed)
        self.event_bus = event_bus or EventBus()
        self.world: World = create_world(
            width, height, seed_hex=self.rng.game_seed.hex(), clock=clock
        )
        self.generation_system = BoardGenerationSystem(self.world, self.event_bus, rng=self.rng)
        self.rotation_system = RotationSystem(self.world, self.event_bus)
        self.power_system = PowerSystem(self.world, self.event_bus)
        self.generation_system.generate()
        if scramble:
            self.generation_system.scramble()
        logger.info("New %dx%d game with seed %s", width, height, self.seed)

    @classmethod
    def from_hex(cls, width: int, height: int, seed_hex: str | None = None, **kwargs) -> "Game":
        """Create a game from optional seed text; bad text raises ``InvalidSeedError``."""
        seed = GameSeed.from_hex(seed_hex) if seed_hex is not None else None
        return cls(width, height, seed, **kwargs)

    @property
    def seed(self) -> GameSeed:
        return self.rng.game_seed

    @property
    def board(self) -> Board:
        return get_board(self.world)

    @property
    def moves(self) -> int:
        return get_puzzle_state(self.world).moves

    def get_root(self) -> Position:
        return self.board.root

    def get_size(self) -> Size:
        return self.board.size

    def get_directions(self) -> List[int]:
        return [tile.directions for tile in self.board.tiles]

    def get_neighbours(self) -> List[int]:
        return [tile.neighbours for tile in self.board.tiles]

    def rotate_tile(self, pos: Position, direction: RotationDirection | str) -> int:
        return self.rotation_system.rotate_tile(pos, RotationDirection.parse(direction))

    def request_rotation(self, pos: Position, direction: RotationDirection | str) -> None:
        """Post a rotate request for this game on its event bus."""
        self.event_bus.emit(EVENT_TILE_ROTATE_REQUEST, world=self.world, pos=pos, direction=direction)

    def is_solved(self) -> bool:
        return self.power_system.is_solved()

    def powered_positions(self) -> List[Position]:
        return self.power_system.powered_positions()

    def start_timer(self) -> None:
        get_clock(self.world).start()
        self.event_bus.emit(EVENT_TIMER_STARTED)

    def elapsed_since_start(self) -> timedelta:
        return get_clock(self.world).elapsed()

    def elapsed_ms(self) -> int:
        return get_clock(self.world).elapsed_ms()

    def new_game_result(self) -> NewGameResult:
        return NewGameResult(
            root=self.get_root(),
            seed=self.seed.hex(),
            tiles=self.get_directions(),
            size=self.get_size(),
        )

    def update_for_rotation(
        self, pos: Position, direction: RotationDirection | str
    ) -> Optional[UpdateGameState]:
        """Rotate a tile and build the client update, or ``None`` when nothing changed."""
        flag = self.rotate_tile(pos, direction)
        solved = self.is_solved()
        if flag == NO_CHANGE:
            return None
        return UpdateGameState(pos=pos, flag=flag, is_solved=solved, time=self.elapsed_ms())

    def close(self) -> None:
        """Detach this game from its event bus; later rotate requests are not handled."""
        self.rotation_system.close()

    def __repr__(self) -> str:
        board = self.board
        return f"Game(size={board.width}x{board.height}, root={board.root}, seed={self.seed.hex()!r})"
