from abc import ABC, abstractmethod
from typing import List, Optional

from zip_engine.core.grid import Position
from zip_engine.core.rng import XorShiftRandom


class PathBuilder(ABC):
    def __init__(self, size: int, rng: Optional[XorShiftRandom] = None):
        if size < 1:
            raise ValueError(f"Path size must be positive, got {size}")
        self.size = size
        self.rng = rng if rng is not None else XorShiftRandom()
        self.step_count = 0

    @abstractmethod
    def build(self) -> List[Position]:
        """
        Returns every position of the size x size grid exactly once,
        each consecutive pair adjacent.
        """
        pass
