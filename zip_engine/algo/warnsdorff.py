import logging
from typing import List, Optional

from zip_engine.core.grid import Grid, Position
from zip_engine.algo.base import PathBuilder
from zip_engine.algo.snake import SnakePath

logger = logging.getLogger(__name__)


class WarnsdorffPath(PathBuilder):
    """
    Greedy Hamiltonian path: always step to the unvisited neighbor with the
    fewest unvisited neighbors of its own. No backtracking; a dead end abandons
    the start and the next candidate start is tried. If every start fails the
    snake sweep is used, so build() never fails.
    """
    RANDOM_STARTS = 4

    def __init__(self, size: int, rng=None):
        super().__init__(size, rng)
        self.grid = Grid(size)
        self.attempts = 0
        self.used_fallback = False

    def candidate_starts(self) -> List[Position]:
        last = self.size - 1
        starts = [
            Position(0, 0),
            Position(0, last),
            Position(last, 0),
            Position(last, last),
        ]
        for _ in range(self.RANDOM_STARTS):
            starts.append(Position(self.rng.randrange(self.size), self.rng.randrange(self.size)))
        self.rng.shuffle(starts)
        return starts

    def build(self) -> List[Position]:
        if self.size == 1:
            return [Position(0, 0)]

        for start in self.candidate_starts():
            self.attempts += 1
            path = self.walk(start)
            if path is not None:
                logger.debug("Hamiltonian walk from %s succeeded on attempt %d", start, self.attempts)
                return path
            logger.debug("Hamiltonian walk from %s hit a dead end", start)

        logger.debug("All %d starts failed on %dx%d, using snake fallback",
                     self.attempts, self.size, self.size)
        self.used_fallback = True
        return SnakePath(self.size, self.rng).build()

    def walk(self, start: Position) -> Optional[List[Position]]:
        total = self.size * self.size
        visited = bytearray(total)
        visited[self.grid.get_index(start)] = 1
        path = [start]

        while len(path) < total:
            current = path[-1]
            neighbors = [n for n, _ in self.grid.get_neighbors(current)
                         if not visited[self.grid.get_index(n)]]
            if not neighbors:
                return None

            # Minimum remaining degree, ties broken at random
            degrees = [self._unvisited_degree(n, visited) for n in neighbors]
            best = min(degrees)
            tied = [n for n, d in zip(neighbors, degrees) if d == best]
            nxt = tied[0] if len(tied) == 1 else self.rng.choice(tied)

            visited[self.grid.get_index(nxt)] = 1
            path.append(nxt)
            self.step_count += 1

        return path

    def _unvisited_degree(self, pos: Position, visited: bytearray) -> int:
        count = 0
        for neighbor, _ in self.grid.get_neighbors(pos):
            if not visited[self.grid.get_index(neighbor)]:
                count += 1
        return count
