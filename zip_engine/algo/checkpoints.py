from typing import Dict, List, Optional, Sequence

from zip_engine.core.grid import Position


def turn_indices(path: Sequence[Position]) -> List[int]:
    """Interior indices where the incoming step direction differs from the outgoing one."""
    turns = []
    for i in range(1, len(path) - 1):
        incoming = path[i - 1].direction_to(path[i])
        outgoing = path[i].direction_to(path[i + 1])
        if incoming != outgoing:
            turns.append(i)
    return turns


class CheckpointPlacer:
    """
    Numbers K cells along a solution path: 1 on the first cell, K on the
    last, and the rest spread out, preferring cells where the path turns.
    """
    # Fraction of the ideal spacing a turn may sit away from its target
    TURN_WINDOW = 0.6

    def __init__(self, path: Sequence[Position], count: int):
        if count < 2:
            raise ValueError(f"Need at least 2 checkpoints, got {count}")
        if not path:
            raise ValueError("Cannot place checkpoints on an empty path")
        self.path = path
        # A path shorter than K cannot hold K distinct checkpoints
        self.count = min(count, len(path))

    def place(self) -> Dict[Position, int]:
        by_index = self.place_indices()
        return {self.path[index]: number for index, number in by_index.items()}

    def place_indices(self) -> Dict[int, int]:
        n = len(self.path)
        k = self.count
        assigned: Dict[int, int] = {0: 1}
        if k == 1:
            return assigned
        assigned[n - 1] = k

        turns = turn_indices(self.path)
        spacing = n / k
        window = self.TURN_WINDOW * spacing
        prev = 0

        for slot in range(1, k - 1):
            target = int(slot * spacing)
            # Stay after the previous checkpoint and leave one index per remaining slot
            lo = prev + 1
            hi = n - 2 - (k - 2 - slot)

            index = self._closest_turn(turns, target, window, lo, hi, assigned)
            if index is None:
                index = self._free_at_or_after(target, lo, hi, assigned)
            if index is None:
                index = self._free_at_or_before(target, lo, hi, assigned)

            assigned[index] = slot + 1
            prev = index

        return assigned

    @staticmethod
    def _closest_turn(turns, target, window, lo, hi, taken) -> Optional[int]:
        best = None
        for t in turns:
            if t < lo or t > hi or t in taken:
                continue
            if abs(t - target) > window:
                continue
            if best is None or abs(t - target) < abs(best - target):
                best = t
        return best

    @staticmethod
    def _free_at_or_after(target, lo, hi, taken) -> Optional[int]:
        for i in range(max(target, lo), hi + 1):
            if i not in taken:
                return i
        return None

    @staticmethod
    def _free_at_or_before(target, lo, hi, taken) -> Optional[int]:
        for i in range(min(target, hi), lo - 1, -1):
            if i not in taken:
                return i
        return None
