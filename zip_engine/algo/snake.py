from typing import List

from zip_engine.core.grid import Position
from zip_engine.algo.base import PathBuilder


class SnakePath(PathBuilder):
    """Boustrophedon sweep. Always a valid Hamiltonian path."""

    def build(self) -> List[Position]:
        top_down = self.rng.randbool()
        left_to_right = self.rng.randbool()

        rows = range(self.size) if top_down else range(self.size - 1, -1, -1)
        path: List[Position] = []
        for row in rows:
            cols = range(self.size) if left_to_right else range(self.size - 1, -1, -1)
            for col in cols:
                path.append(Position(row, col))
                self.step_count += 1
            # Turn around for the next row
            left_to_right = not left_to_right
        return path
