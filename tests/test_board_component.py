import pytest

from netwalk.components.board import Board
from netwalk.components.game_clock import GameClock
from netwalk.components.puzzle_state import PuzzleState
from netwalk.systems.board_ops import get_board, get_clock, get_puzzle_state, tile_at
from netwalk.utils.geometry import Position, Size
from netwalk.world import create_world
from esper import World
from tests.helpers import FakeClock


def test_board_component_exists():
    world = create_world(6, 7, seed_hex="ab" * 32)
    boards = list(world.get_component(Board))
    assert boards, 'Board component missing'
    ent, comp = boards[0]
    assert comp.width == 6 and comp.height == 7
    assert comp.size == Size(6, 7)
    assert len(comp.tiles) == 42
    assert get_puzzle_state(world).seed_hex == "ab" * 32
    assert isinstance(get_clock(world), GameClock)


def test_row_major_addressing():
    board = Board(width=4, height=3)
    assert board.index_of(Position(0, 0)) == 0
    assert board.index_of(Position(3, 0)) == 3
    assert board.index_of(Position(1, 2)) == 9
    for index in range(12):
        assert board.index_of(board.position_of(index)) == index


def test_direct_lookup_out_of_range_raises():
    world = create_world(2, 2)
    with pytest.raises(IndexError):
        tile_at(world, Position(2, 0))
    with pytest.raises(IndexError):
        get_board(world).tile(Position(0, -1))


def test_missing_singletons_raise():
    world = World()
    with pytest.raises(RuntimeError):
        get_board(world)
    with pytest.raises(RuntimeError):
        get_clock(world)
    with pytest.raises(RuntimeError):
        get_puzzle_state(world)


def test_game_clock_uses_injected_clock():
    clock = FakeClock()
    game_clock = GameClock(clock=clock)
    clock.advance(2.5)
    assert game_clock.elapsed_ms() == 2500
    game_clock.start()
    assert game_clock.elapsed_ms() == 0


def test_puzzle_state_defaults():
    state = PuzzleState()
    assert state.moves == 0 and not state.solved and state.seed_hex == ""


def test_position_addition():
    assert Position(2, 3) + Position(-1, 1) == Position(1, 4)
    assert Position.from_dict({"x": 1, "y": 2}) == Position(1, 2)
