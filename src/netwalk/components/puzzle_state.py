from dataclasses import dataclass


@dataclass(slots=True)
class PuzzleState:
    """Singleton component with the outcome of the latest solvability check."""
    seed_hex: str = ""
    solved: bool = False
    moves: int = 0
