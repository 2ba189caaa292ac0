from __future__ import annotations

import logging

from esper import World

from netwalk.components.direction import RotationDirection
from netwalk.events.bus import (
    EventBus,
    EVENT_TILE_ROTATE_IGNORED,
    EVENT_TILE_ROTATE_REQUEST,
    EVENT_TILE_ROTATED,
)
from netwalk.systems.board_ops import get_board, get_puzzle_state
from netwalk.utils.geometry import Position

logger = logging.getLogger(__name__)

# Returned when a rotation changed nothing a client could observe.
NO_CHANGE = 0


class RotationSystem:
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILE_ROTATE_REQUEST, self.on_rotate_request)

    def close(self) -> None:
        self.event_bus.unsubscribe(EVENT_TILE_ROTATE_REQUEST, self.on_rotate_request)

    def on_rotate_request(self, sender, **kwargs):
        # Requests name the world they target; a bus may be shared between games.
        if kwargs.get('world') is not self.world:
            return
        pos = kwargs.get('pos')
        direction = kwargs.get('direction')
        try:
            rotation = RotationDirection.parse(direction)
        except ValueError:
            rotation = None
        if pos is None or rotation is None:
            logger.debug("Dropping rotate request pos=%r direction=%r", pos, direction)
            self.event_bus.emit(EVENT_TILE_ROTATE_IGNORED, pos=pos, reason='bad_request')
            return
        self.rotate_tile(pos, rotation)

    def rotate_tile(self, pos: Position, direction: RotationDirection) -> int:
        """Turn one tile a quarter turn and return its new mask.

        Returns ``NO_CHANGE`` without touching state for out-of-bounds positions,
        and also when the turned mask equals the old one (empty, full or
        straight-through masks), since there is nothing to broadcast.
        """
        board = get_board(self.world)
        if not board.in_bounds(pos):
            logger.debug("Ignoring rotation outside the board at %s", pos)
            self.event_bus.emit(EVENT_TILE_ROTATE_IGNORED, pos=pos, reason='out_of_bounds')
            return NO_CHANGE
        tile = board.tile(pos)
        previous = tile.directions
        tile.rotate(direction, 1)
        if tile.directions == previous:
            self.event_bus.emit(EVENT_TILE_ROTATE_IGNORED, pos=pos, reason='symmetric')
            return NO_CHANGE
        state = get_puzzle_state(self.world)
        state.moves += 1
        self.event_bus.emit(
            EVENT_TILE_ROTATED, pos=pos, flag=tile.directions, previous=previous, moves=state.moves
        )
        return tile.directions
