from array import array
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, NamedTuple, Optional, Tuple


class Direction(IntEnum):
    # Values double as wall bits in Grid.cells
    TOP    = 0b0001
    RIGHT  = 0b0010
    BOTTOM = 0b0100
    LEFT   = 0b1000

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITE[self]

    @property
    def delta(self) -> Tuple[int, int]:
        """(drow, dcol) step for this direction."""
        return _DELTA[self]


_OPPOSITE = {
    Direction.TOP: Direction.BOTTOM,
    Direction.BOTTOM: Direction.TOP,
    Direction.RIGHT: Direction.LEFT,
    Direction.LEFT: Direction.RIGHT,
}

_DELTA = {
    Direction.TOP: (-1, 0),
    Direction.RIGHT: (0, 1),
    Direction.BOTTOM: (1, 0),
    Direction.LEFT: (0, -1),
}


class Position(NamedTuple):
    row: int
    col: int

    def is_adjacent(self, other: "Position") -> bool:
        return abs(self.row - other.row) + abs(self.col - other.col) == 1

    def direction_to(self, other: "Position") -> Optional[Direction]:
        """Direction of an adjacent position, None if not adjacent."""
        step = (other.row - self.row, other.col - self.col)
        for direction, delta in _DELTA.items():
            if delta == step:
                return direction
        return None

    def step(self, direction: Direction) -> "Position":
        dr, dc = direction.delta
        return Position(self.row + dr, self.col + dc)


@dataclass(frozen=True)
class Walls:
    top: bool = False
    right: bool = False
    bottom: bool = False
    left: bool = False

    @classmethod
    def from_mask(cls, mask: int) -> "Walls":
        return cls(
            top=bool(mask & Direction.TOP),
            right=bool(mask & Direction.RIGHT),
            bottom=bool(mask & Direction.BOTTOM),
            left=bool(mask & Direction.LEFT),
        )

    @property
    def mask(self) -> int:
        value = 0
        for direction in Direction:
            if self.has_wall(direction):
                value |= direction
        return value

    def has_wall(self, direction: Direction) -> bool:
        return getattr(self, direction.name.lower())

    def count(self) -> int:
        return self.top + self.right + self.bottom + self.left


class Grid:
    """
    N x N arena of wall bits, one byte per cell.
    Used while a puzzle is being built; Puzzle freezes it into Cell values.
    """
    __slots__ = ('size', 'cells')

    def __init__(self, size: int):
        if size < 1:
            raise ValueError(f"Grid size must be positive, got {size}")
        self.size = size
        # Every side open by default
        self.cells = array('B', [0] * (size * size))

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.row < self.size and 0 <= pos.col < self.size

    def get_index(self, pos: Position) -> int:
        if self.in_bounds(pos):
            return pos.row * self.size + pos.col
        raise IndexError(f"Position ({pos.row}, {pos.col}) out of bounds")

    def positions(self) -> Iterator[Position]:
        for row in range(self.size):
            for col in range(self.size):
                yield Position(row, col)

    def add_wall(self, pos: Position, direction: Direction):
        """
        Blocks the edge on 'direction' side of pos.
        Also sets the OPPOSITE wall on the neighbor so walls stay edge-symmetric.
        """
        self.cells[self.get_index(pos)] |= direction

        neighbor = pos.step(direction)
        if self.in_bounds(neighbor):
            self.cells[self.get_index(neighbor)] |= direction.opposite

    def has_wall(self, pos: Position, direction: Direction) -> bool:
        return (self.cells[self.get_index(pos)] & direction) != 0

    def walls_at(self, pos: Position) -> Walls:
        return Walls.from_mask(self.cells[self.get_index(pos)])

    def get_neighbors(self, pos: Position) -> Iterator[Tuple[Position, Direction]]:
        """
        Yields (neighbor, direction_to_neighbor) for all in-bounds neighbors,
        in TOP, RIGHT, BOTTOM, LEFT order.
        Does NOT check walls.
        """
        for direction in Direction:
            neighbor = pos.step(direction)
            if self.in_bounds(neighbor):
                yield neighbor, direction

    def edges(self) -> Iterator[Tuple[Position, Position]]:
        """Every internal adjacency once, row-major: right edge then bottom edge."""
        for pos in self.positions():
            if pos.col + 1 < self.size:
                yield pos, Position(pos.row, pos.col + 1)
            if pos.row + 1 < self.size:
                yield pos, Position(pos.row + 1, pos.col)
