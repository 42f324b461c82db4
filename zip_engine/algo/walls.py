import math
from typing import List, Sequence, Set, Tuple

from zip_engine.core.grid import Grid, Position
from zip_engine.core.rng import XorShiftRandom

Edge = Tuple[Position, Position]


def normalize_edge(a: Position, b: Position) -> Edge:
    return (a, b) if a <= b else (b, a)


def solution_edges(solution: Sequence[Position]) -> Set[Edge]:
    return {normalize_edge(a, b) for a, b in zip(solution, solution[1:])}


class WallPlacer:
    @staticmethod
    def place(grid: Grid, solution: Sequence[Position], ratio: float, rng: XorShiftRandom) -> int:
        """
        Blocks a share of the grid edges the solution does not use.
        ratio: 0.0 = no walls
               1.0 = every non-solution edge walled
        Returns the number of walls placed.
        """
        if not 0.0 <= ratio <= 1.0:
            raise ValueError(f"Wall ratio must be within [0, 1], got {ratio}")

        used = solution_edges(solution)
        candidates: List[Edge] = [edge for edge in grid.edges() if normalize_edge(*edge) not in used]
        rng.shuffle(candidates)

        # Half rounds up
        target = int(math.floor(ratio * len(candidates) + 0.5))
        for a, b in candidates[:target]:
            grid.add_wall(a, a.direction_to(b))
        return target

    @staticmethod
    def calculate_stats(grid):
        """Wall counts for a Grid or a finished Puzzle."""
        dead_ends = 0 # 3 walls
        corridors = 0 # 2 walls
        open_cells = 0 # 0, 1 walls
        walls = 0

        for pos in grid.positions():
            count = grid.walls_at(pos).count()
            walls += count
            if count == 3: dead_ends += 1
            elif count == 2: corridors += 1
            elif count <= 1: open_cells += 1

        return {
            # Each internal wall is recorded on both of its cells
            "walls": walls // 2,
            "dead_ends": dead_ends,
            "corridors": corridors,
            "open_cells": open_cells,
        }
