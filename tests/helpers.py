from __future__ import annotations

from typing import Iterable, List, Tuple

from esper import World

from netwalk.components.tile import TileKind
from netwalk.events.bus import EventBus
from netwalk.systems.board_ops import get_board
from netwalk.utils.geometry import Position
from netwalk.world import create_world


class FakeClock:
    def __init__(self) -> None:
        self.value = 0.0

    def advance(self, amount: float) -> None:
        self.value += amount

    def __call__(self) -> float:
        return self.value


def build_world(
    width: int,
    height: int,
    masks: Iterable[int],
    *,
    root: Tuple[int, int] = (0, 0),
    kinds: Iterable[TileKind] | None = None,
) -> World:
    """Create a world whose board tiles carry the given masks (row-major)."""
    world = create_world(width, height)
    board = get_board(world)
    board.root = Position(*root)
    masks = list(masks)
    assert len(masks) == width * height
    kinds = list(kinds) if kinds is not None else [TileKind.CONNECTOR] * len(masks)
    for tile, mask, kind in zip(board.tiles, masks, kinds):
        tile.directions = mask
        tile.kind = kind
    return world


def record(bus: EventBus, name: str) -> List[dict]:
    received: List[dict] = []
    bus.subscribe(name, lambda sender, **payload: received.append(payload))
    return received
