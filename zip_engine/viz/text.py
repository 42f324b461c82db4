from typing import Dict

from zip_engine.core.grid import Direction, Position
from zip_engine.core.puzzle import Puzzle


def render_ascii(puzzle: Puzzle, show_solution: bool = False) -> str:
    """
    Plain-text board. Checkpoints print their number, other cells a dot.
    With show_solution every cell prints its 1-based step along the solution.
    """
    order: Dict[Position, int] = {}
    if show_solution:
        order = {pos: i + 1 for i, pos in enumerate(puzzle.solution)}

    def label(pos: Position) -> str:
        if show_solution:
            return f"{order[pos]:^3}"
        number = puzzle.checkpoint_number(pos)
        return f"{number:^3}" if number is not None else " . "

    border = "+" + "---+" * puzzle.size
    lines = [border]
    for row in range(puzzle.size):
        cells_line = "|"
        floor_line = "+"
        for col in range(puzzle.size):
            pos = Position(row, col)
            walls = puzzle.cell(pos).walls
            last_col = col == puzzle.size - 1
            last_row = row == puzzle.size - 1

            cells_line += label(pos)
            cells_line += "|" if last_col or walls.has_wall(Direction.RIGHT) else " "
            floor_line += "---" if last_row or walls.has_wall(Direction.BOTTOM) else "   "
            floor_line += "+"
        lines.append(cells_line)
        lines.append(floor_line)
    return "\n".join(lines)
