"""Game seeds and the deterministic random stream derived from them.

A seed is exactly 32 bytes. Its text form is 64 lowercase hex characters, which
is what clients echo back to replay a board.
"""
from __future__ import annotations

import random
import secrets
import string

from netwalk.constants import SEED_BYTES, SEED_HEX_LENGTH

_HEX_DIGITS = frozenset(string.hexdigits)


class InvalidSeedError(ValueError):
    """Raised when seed text or bytes do not describe a 32-byte seed."""


class GameSeed:
    __slots__ = ("_data",)

    def __init__(self, data: bytes) -> None:
        if not isinstance(data, (bytes, bytearray)):
            raise InvalidSeedError(f"Seed must be bytes, got {type(data).__name__}")
        data = bytes(data)
        if len(data) != SEED_BYTES:
            raise InvalidSeedError(f"Seed must be {SEED_BYTES} bytes, got {len(data)}")
        self._data = data

    @classmethod
    def new(cls) -> "GameSeed":
        return cls(secrets.token_bytes(SEED_BYTES))

    @classmethod
    def zero(cls) -> "GameSeed":
        return cls(bytes(SEED_BYTES))

    @classmethod
    def from_bytes(cls, data: bytes) -> "GameSeed":
        return cls(data)

    @classmethod
    def from_hex(cls, text: str) -> "GameSeed":
        # bytes.fromhex tolerates whitespace, so the digits are checked up front.
        if not isinstance(text, str):
            raise InvalidSeedError(f"Seed must be a hex string, got {type(text).__name__}")
        if len(text) != SEED_HEX_LENGTH or not _HEX_DIGITS.issuperset(text):
            raise InvalidSeedError(f"Seed must be {SEED_HEX_LENGTH} hex characters: {text!r}")
        return cls(bytes.fromhex(text))

    @property
    def data(self) -> bytes:
        return self._data

    def hex(self) -> str:
        return self._data.hex()

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"GameSeed({self.hex()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameSeed):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)


class GameRng(random.Random):
    """``random.Random`` seeded from a :class:`GameSeed`.

    The 32 seed bytes are fed to the Mersenne Twister as one big-endian
    integer, so a given seed yields the same draws in every process.
    """

    def __init__(self, game_seed: GameSeed | None = None) -> None:
        self.game_seed = game_seed if game_seed is not None else GameSeed.new()
        super().__init__(int.from_bytes(self.game_seed.data, "big"))

    def __repr__(self) -> str:
        return f"GameRng(seed={self.game_seed.hex()!r})"
