import pytest

from netwalk.components.tile import TileKind
from netwalk.events.bus import EventBus, EVENT_BOARD_GENERATED, EVENT_BOARD_SCRAMBLED
from netwalk.game import new_board
from netwalk.systems.board_ops import count_edges, get_board, positions_of_kind
from netwalk.systems.generation_system import BoardGenerationSystem
from netwalk.systems.power_system import PowerSystem
from netwalk.utils.bitflags import count_bits
from netwalk.utils.geometry import Position
from netwalk.utils.seed import GameRng, GameSeed
from netwalk.world import create_world
from tests.helpers import record

SIZES = [(1, 1), (1, 5), (5, 1), (2, 2), (3, 3), (4, 7), (9, 6), (16, 16)]
SEEDS = [
    GameSeed.zero(),
    GameSeed.from_hex("00112233445566778899aabbccddeeff" * 2),
    GameSeed.from_hex("ff" * 32),
]


def _generated_world(width, height, seed, bus=None):
    bus = bus or EventBus()
    world = create_world(width, height)
    system = BoardGenerationSystem(world, bus, rng=GameRng(seed))
    system.generate()
    return world, bus, system


@pytest.mark.parametrize("width, height", SIZES)
@pytest.mark.parametrize("seed", SEEDS)
def test_generated_board_is_spanning_tree(width, height, seed):
    world, bus, _ = _generated_world(width, height, seed)
    board = get_board(world)
    assert count_edges(board) == width * height - 1
    # Every stub is matched on the other side, so half the stub count is the edge count.
    assert sum(count_bits(tile.directions) for tile in board.tiles) == 2 * (width * height - 1)
    assert not board.to_visit
    power = PowerSystem(world, bus)
    assert power.propagate() == width * height
    assert power.is_solved()


@pytest.mark.parametrize("width, height", SIZES)
def test_kind_assignment(width, height):
    world, _, _ = _generated_world(width, height, SEEDS[1])
    board = get_board(world)
    assert positions_of_kind(board, TileKind.SERVER) == [board.root]
    for index, tile in enumerate(board.tiles):
        if board.position_of(index) == board.root:
            continue
        expected = TileKind.TERMINAL if tile.connections() == 1 else TileKind.CONNECTOR
        assert tile.kind is expected
    assert positions_of_kind(board, TileKind.UNDEFINED) == []


def test_root_is_in_bounds_and_frontier_is_exhausted():
    world, _, _ = _generated_world(6, 4, SEEDS[2])
    board = get_board(world)
    assert board.in_bounds(board.root)
    assert all(tile.neighbours == 0 for tile in board.tiles)


def test_same_seed_same_board():
    first = new_board(7, 5, SEEDS[1])
    second = new_board(7, 5, SEEDS[1])
    assert first.root == second.root
    assert [t.directions for t in first.tiles] == [t.directions for t in second.tiles]
    assert [t.kind for t in first.tiles] == [t.kind for t in second.tiles]


def test_different_seeds_give_different_boards():
    boards = [new_board(8, 8, seed) for seed in SEEDS]
    layouts = {tuple(t.directions for t in board.tiles) for board in boards}
    assert len(layouts) == len(SEEDS)


def test_zero_seed_three_by_three_scenario():
    # Pinned layout; seed strings handed to clients must keep replaying this board.
    board = new_board(3, 3, GameSeed.zero())
    assert board.root == Position(1, 1)
    assert [t.directions for t in board.tiles] == [4, 6, 8, 5, 5, 4, 3, 11, 9]
    assert count_edges(board) == 8
    assert all(0 < t.directions <= 0b1111 for t in board.tiles)


def test_single_cell_board_has_no_terminals_and_is_solved():
    world, bus, _ = _generated_world(1, 1, SEEDS[0])
    board = get_board(world)
    assert board.root == Position(0, 0)
    (tile,) = board.tiles
    assert tile.directions == 0
    assert tile.kind is TileKind.SERVER
    assert positions_of_kind(board, TileKind.TERMINAL) == []
    assert PowerSystem(world, bus).is_solved()


def test_generation_emits_event():
    bus = EventBus()
    events = record(bus, EVENT_BOARD_GENERATED)
    world, _, _ = _generated_world(4, 3, SEEDS[0], bus)
    board = get_board(world)
    assert events == [{"size": board.size, "root": board.root, "edges": 11}]


def test_scramble_keeps_stub_counts_and_uses_short_turns():
    bus = EventBus()
    scrambles = record(bus, EVENT_BOARD_SCRAMBLED)
    world, _, system = _generated_world(6, 6, SEEDS[1], bus)
    before = [tile.connections() for tile in get_board(world).tiles]
    turns = system.scramble()
    after = [tile.connections() for tile in get_board(world).tiles]
    assert before == after
    assert len(turns) == 36
    assert set(turns) <= {0, 1, 2}
    assert scrambles == [{"turns": turns}]
