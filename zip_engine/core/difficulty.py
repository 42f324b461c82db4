from enum import Enum


class Difficulty(Enum):
    # code, grid size, checkpoint count, wall ratio
    EASY   = (0, 6, 7, 0.3)
    MEDIUM = (1, 7, 8, 0.4)
    HARD   = (2, 8, 9, 0.5)

    def __init__(self, code: int, grid_size: int, checkpoint_count: int, wall_ratio: float):
        self.code = code
        self.grid_size = grid_size
        self.checkpoint_count = checkpoint_count
        self.wall_ratio = wall_ratio

    @property
    def display_name(self) -> str:
        return f"{self.name.capitalize()} ({self.grid_size}×{self.grid_size})"

    @classmethod
    def from_code(cls, code: int) -> "Difficulty":
        for difficulty in cls:
            if difficulty.code == code:
                return difficulty
        raise ValueError(f"Unknown difficulty code: {code}")

    @classmethod
    def from_name(cls, name: str) -> "Difficulty":
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown difficulty: {name}") from None


class GameMode(Enum):
    DAILY = 0
    UNLIMITED = 1

    @property
    def description(self) -> str:
        if self is GameMode.DAILY:
            return "One new puzzle every day"
        return "Practice with unlimited puzzles"

    @property
    def is_daily(self) -> bool:
        return self is GameMode.DAILY
