from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so handlers that are bound methods of unreferenced systems stay connected.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# BOARD LIFECYCLE
# ============================================================================
EVENT_BOARD_GENERATED = "board_generated"      # payload: size=Size, root=Position, edges=int
EVENT_BOARD_SCRAMBLED = "board_scrambled"      # payload: turns=list[int]


# ============================================================================
# PLAYER ACTIONS
# ============================================================================
EVENT_TILE_ROTATE_REQUEST = "tile_rotate_request"  # payload: world=World, pos=Position, direction=RotationDirection|str
EVENT_TILE_ROTATED = "tile_rotated"                # payload: pos=Position, flag=int, previous=int, moves=int
EVENT_TILE_ROTATE_IGNORED = "tile_rotate_ignored"  # payload: pos=Position, reason=str


# ============================================================================
# POWER & COMPLETION
# ============================================================================
EVENT_POWER_UPDATED = "power_updated"      # payload: powered=int, solved=bool
EVENT_PUZZLE_SOLVED = "puzzle_solved"      # payload: moves=int, elapsed_ms=int
EVENT_TIMER_STARTED = "timer_started"      # payload: None
