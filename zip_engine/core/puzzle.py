from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Sequence, Tuple

from zip_engine.core.difficulty import Difficulty
from zip_engine.core.grid import Grid, Position, Walls


@dataclass(frozen=True)
class Cell:
    position: Position
    checkpoint_number: Optional[int] = None
    walls: Walls = field(default_factory=Walls)

    @property
    def is_checkpoint(self) -> bool:
        return self.checkpoint_number is not None


@dataclass(frozen=True)
class Puzzle:
    size: int
    cells: Tuple[Tuple[Cell, ...], ...]
    solution: Tuple[Position, ...]
    # (number, position) pairs in number order; read through .checkpoints
    checkpoint_pairs: Tuple[Tuple[int, Position], ...]
    seed: Optional[int] = None
    difficulty: Optional[Difficulty] = None

    @classmethod
    def build(cls, grid: Grid, solution: Sequence[Position],
              checkpoint_positions: Mapping[Position, int],
              seed: Optional[int] = None, difficulty: Optional[Difficulty] = None) -> "Puzzle":
        """
        Freezes a populated wall arena plus the checkpoint assignment into a Puzzle.
        The grid is read once here and never touched again.
        """
        rows = []
        checkpoints: Dict[int, Position] = {}
        for row in range(grid.size):
            row_cells = []
            for col in range(grid.size):
                pos = Position(row, col)
                number = checkpoint_positions.get(pos)
                row_cells.append(Cell(pos, number, grid.walls_at(pos)))
                if number is not None:
                    checkpoints[number] = pos
            rows.append(tuple(row_cells))

        return cls(
            size=grid.size,
            cells=tuple(rows),
            solution=tuple(solution),
            checkpoint_pairs=tuple(sorted(checkpoints.items())),
            seed=seed,
            difficulty=difficulty,
        )

    @classmethod
    def custom(cls, size: int, solution: Sequence[Position],
               checkpoints: Mapping[Position, int],
               walls: Sequence[Tuple[Position, Position]] = ()) -> "Puzzle":
        """Hand-made puzzle, walls given as pairs of adjacent positions."""
        grid = Grid(size)
        for a, b in walls:
            direction = a.direction_to(b)
            if direction is None:
                raise ValueError(f"Wall needs adjacent positions, got {a} and {b}")
            grid.add_wall(a, direction)
        return cls.build(grid, solution, checkpoints)

    @property
    def checkpoints(self) -> Mapping[int, Position]:
        """Read-only number -> position view."""
        return MappingProxyType(dict(self.checkpoint_pairs))

    @property
    def total_cells(self) -> int:
        return self.size * self.size

    @property
    def max_checkpoint(self) -> int:
        return self.checkpoint_pairs[-1][0] if self.checkpoint_pairs else 0

    @property
    def start_position(self) -> Optional[Position]:
        return self.checkpoints.get(1)

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.row < self.size and 0 <= pos.col < self.size

    def positions(self) -> Iterator[Position]:
        for row in self.cells:
            for cell in row:
                yield cell.position

    def walls_at(self, pos: Position) -> Walls:
        return self.cells[pos.row][pos.col].walls

    def cell(self, pos: Position) -> Optional[Cell]:
        if not self.in_bounds(pos):
            return None
        return self.cells[pos.row][pos.col]

    def checkpoint_number(self, pos: Position) -> Optional[int]:
        cell = self.cell(pos)
        return cell.checkpoint_number if cell else None

    def position_for_checkpoint(self, number: int) -> Optional[Position]:
        return self.checkpoints.get(number)

    def has_wall(self, src: Position, dst: Position) -> bool:
        """Wall between two adjacent positions. Invalid pairs count as blocked."""
        direction = src.direction_to(dst)
        cell = self.cell(src)
        if direction is None or cell is None:
            return True
        return cell.walls.has_wall(direction)

    def can_move(self, src: Position, dst: Position) -> bool:
        if not src.is_adjacent(dst):
            return False
        if not self.in_bounds(dst):
            return False
        return not self.has_wall(src, dst)
