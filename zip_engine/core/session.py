import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Set, Tuple

from zip_engine.algo.generator import PuzzleGenerator
from zip_engine.core.difficulty import Difficulty, GameMode
from zip_engine.core.grid import Position
from zip_engine.core.puzzle import Puzzle

logger = logging.getLogger(__name__)


class Phase(Enum):
    READY = "ready"
    PLAYING = "playing"
    COMPLETED = "completed"


@dataclass(frozen=True)
class GameState:
    phase: Phase
    elapsed: Optional[float] = None

    @classmethod
    def completed(cls, elapsed: float) -> "GameState":
        return cls(Phase.COMPLETED, elapsed)

    @property
    def is_playing(self) -> bool:
        return self.phase is Phase.PLAYING

    @property
    def is_completed(self) -> bool:
        return self.phase is Phase.COMPLETED


GameState.READY = GameState(Phase.READY)
GameState.PLAYING = GameState(Phase.PLAYING)


@dataclass(frozen=True)
class CompletionEvent:
    difficulty: Optional[Difficulty]
    elapsed: float
    is_daily: bool
    seed: Optional[int] = None


class Feedback:
    """Haptic/audio cues. The base class is silent; front-ends override what they support."""

    def on_step(self):
        pass

    def on_backtrack(self):
        pass

    def on_complete(self):
        pass


def format_time(seconds: float) -> str:
    """m:ss.t"""
    tenths_total = int(seconds * 10)
    minutes, tenths_left = divmod(tenths_total, 600)
    secs, tenths = divmod(tenths_left, 10)
    return f"{minutes}:{secs:02d}.{tenths}"


class GameSession:
    """
    One attempt at a puzzle: the live path, checkpoint order and the clock.

    Touches may come from anywhere (a drag can leave the grid), so illegal
    touches are simply ignored; no operation here raises on player input.
    """

    def __init__(self, puzzle: Puzzle, difficulty: Optional[Difficulty] = None,
                 mode: GameMode = GameMode.UNLIMITED,
                 clock: Callable[[], float] = time.monotonic,
                 feedback: Optional[Feedback] = None,
                 event_writer=None):
        self.puzzle = puzzle
        self.difficulty = difficulty if difficulty is not None else puzzle.difficulty
        self.mode = mode
        self.clock = clock
        self.feedback = feedback if feedback is not None else Feedback()
        self.event_writer = event_writer
        self.listeners: List[Callable[[CompletionEvent], None]] = []

        self.state = GameState.READY
        self._path: List[Position] = []
        self._path_set: Set[Position] = set()
        self.next_required_checkpoint = 1
        self._start_time: Optional[float] = None

        if self.event_writer:
            if self.difficulty is None or puzzle.seed is None:
                raise ValueError("Event logging needs a puzzle with a difficulty and a seed")
            self.event_writer.write_header()
            self._log_puzzle()

    # Observables

    @property
    def path(self) -> Tuple[Position, ...]:
        return tuple(self._path)

    @property
    def elapsed_time(self) -> float:
        if self.state.is_completed:
            return self.state.elapsed
        if self._start_time is None:
            return 0.0
        return self.clock() - self._start_time

    @property
    def formatted_time(self) -> str:
        return format_time(self.elapsed_time)

    def contains(self, pos: Position) -> bool:
        return pos in self._path_set

    def path_index(self, pos: Position) -> Optional[int]:
        if pos not in self._path_set:
            return None
        return self._path.index(pos)

    def add_completion_listener(self, callback: Callable[[CompletionEvent], None]):
        self.listeners.append(callback)

    # Input

    def handle_touch(self, pos: Position) -> bool:
        """
        Applies one touch. Returns True if the live path changed.
        A first touch anywhere but checkpoint 1 is ignored and does not start the clock.
        """
        if self.state.is_completed:
            return False

        if not self._path:
            # Only checkpoint 1 can start a path; the clock starts with it
            if self.puzzle.checkpoint_number(pos) != 1:
                return False
            if self.state.phase is Phase.READY:
                self._start()
            self._append(pos)
            self.next_required_checkpoint = 2
            self._check_win()
            return True

        last = self._path[-1]

        if len(self._path) >= 2 and pos == self._path[-2]:
            self._backtrack()
            return True

        if pos == last:
            return False

        if not self.puzzle.can_move(last, pos) or pos in self._path_set:
            return False

        checkpoint = self.puzzle.checkpoint_number(pos)
        if checkpoint is not None:
            # Out-of-order checkpoints are refused, never backtracked to
            if checkpoint != self.next_required_checkpoint:
                return False
            self._append(pos)
            self.next_required_checkpoint += 1
        else:
            self._append(pos)

        self._check_win()
        return True

    def reset(self):
        self._path = []
        self._path_set = set()
        self.next_required_checkpoint = 1
        self.state = GameState.READY
        self._start_time = None
        if self.event_writer:
            self.event_writer.log_reset()

    def new_puzzle(self) -> bool:
        """Practice mode only: swap in a fresh unseeded puzzle and reset."""
        if self.mode.is_daily:
            logger.warning("new_puzzle() ignored in daily mode")
            return False
        if self.difficulty is None:
            logger.warning("new_puzzle() needs a difficulty")
            return False

        self.puzzle = PuzzleGenerator(self.difficulty).generate()
        self.reset()
        if self.event_writer:
            self._log_puzzle()
        return True

    # Internals

    def _start(self):
        self.state = GameState.PLAYING
        self._start_time = self.clock()

    def _append(self, pos: Position):
        self._path.append(pos)
        self._path_set.add(pos)
        self.feedback.on_step()
        if self.event_writer:
            self.event_writer.log_path_add(pos.row, pos.col)

    def _backtrack(self):
        removed = self._path.pop()
        self._path_set.discard(removed)

        checkpoint = self.puzzle.checkpoint_number(removed)
        if checkpoint is not None:
            self.next_required_checkpoint = checkpoint

        self.feedback.on_backtrack()
        if self.event_writer:
            self.event_writer.log_path_rem(removed.row, removed.col)

    def _check_win(self):
        all_cells = len(self._path) == self.puzzle.total_cells
        all_checkpoints = self.next_required_checkpoint > self.puzzle.max_checkpoint
        if all_cells and all_checkpoints:
            self._complete()

    def _complete(self):
        elapsed = self.clock() - self._start_time
        self.state = GameState.completed(elapsed)
        self._start_time = None
        self.feedback.on_complete()
        if self.event_writer:
            self.event_writer.log_complete(elapsed)

        logger.info("Puzzle completed in %s (%s, %s)", format_time(elapsed),
                    self.difficulty.name if self.difficulty else "custom", self.mode.name)

        event = CompletionEvent(
            difficulty=self.difficulty,
            elapsed=elapsed,
            is_daily=self.mode.is_daily,
            seed=self.puzzle.seed,
        )
        for listener in self.listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Completion listener %r failed", listener)

    def _log_puzzle(self):
        self.event_writer.log_puzzle(self.difficulty.code, self.mode.value, self.puzzle.seed)
