import logging
from typing import Optional

from zip_engine.core.difficulty import Difficulty
from zip_engine.core.grid import Grid
from zip_engine.core.puzzle import Puzzle
from zip_engine.core.rng import XorShiftRandom
from zip_engine.algo.checkpoints import CheckpointPlacer
from zip_engine.algo.walls import WallPlacer
from zip_engine.algo.warnsdorff import WarnsdorffPath

logger = logging.getLogger(__name__)


class PuzzleGenerator:
    """
    Difficulty + seed -> Puzzle.
    Draw order from the random source is fixed: path, then walls.
    Checkpoint placement draws nothing.
    """

    def __init__(self, difficulty: Difficulty, seed: Optional[int] = None):
        self.difficulty = difficulty
        self.rng = XorShiftRandom(seed)
        self.used_fallback = False

    @property
    def seed(self) -> int:
        return self.rng.seed

    def generate(self) -> Puzzle:
        size = self.difficulty.grid_size

        builder = WarnsdorffPath(size, self.rng)
        solution = builder.build()
        self.used_fallback = builder.used_fallback

        grid = Grid(size)
        placed = WallPlacer.place(grid, solution, self.difficulty.wall_ratio, self.rng)
        checkpoints = CheckpointPlacer(solution, self.difficulty.checkpoint_count).place()

        logger.debug("Generated %s puzzle (seed=%d, walls=%d, attempts=%d, fallback=%s)",
                     self.difficulty.name, self.seed, placed, builder.attempts, builder.used_fallback)

        return Puzzle.build(grid, solution, checkpoints, seed=self.seed, difficulty=self.difficulty)


def generate(difficulty: Difficulty, seed: Optional[int] = None) -> Puzzle:
    return PuzzleGenerator(difficulty, seed).generate()
