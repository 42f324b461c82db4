import logging
from typing import Iterator, Optional

from zip_engine.algo.generator import generate
from zip_engine.core.difficulty import Difficulty, GameMode
from zip_engine.core.events import (
    EventReader, EVT_PATH_ADD, EVT_PATH_REM, EVT_RESET, EVT_COMPLETE, EVT_PUZZLE,
)
from zip_engine.core.grid import Position
from zip_engine.core.session import GameSession

logger = logging.getLogger(__name__)


class SessionReplay:
    """
    Re-drives a fresh GameSession from a session log.
    Puzzles are regenerated from the logged seeds, then every logged path
    change is fed back in as a touch. Works headless or stepped by the Renderer.
    """

    def __init__(self, reader: EventReader):
        self.reader = reader
        self.reader.read_header()
        self.events = self.reader.stream_events()

        # The first record must say which puzzle was played
        type_code, data = next(self.events, (None, None))
        if type_code != EVT_PUZZLE:
            raise ValueError("Session log does not start with a puzzle record")
        difficulty_code, mode_code, seed = data
        self.session = GameSession(
            self._regenerate(difficulty_code, seed),
            mode=GameMode(mode_code),
        )
        self.event_count = 0
        self.recorded_elapsed: Optional[float] = None

    @staticmethod
    def _regenerate(difficulty_code: int, seed: int):
        return generate(Difficulty.from_code(difficulty_code), seed)

    def run(self) -> Iterator[str]:
        for type_code, data in self.events:
            self.event_count += 1

            if type_code == EVT_PATH_ADD:
                pos = Position(*data)
                if not self.session.handle_touch(pos):
                    raise ValueError(f"Logged move to {pos} is not legal on the regenerated puzzle")

            elif type_code == EVT_PATH_REM:
                path = self.session.path
                if len(path) < 2 or path[-1] != Position(*data):
                    raise ValueError(f"Logged backtrack from {Position(*data)} does not match the path")
                self.session.handle_touch(path[-2])

            elif type_code == EVT_RESET:
                self.session.reset()

            elif type_code == EVT_COMPLETE:
                self.recorded_elapsed = data[0]
                if not self.session.state.is_completed:
                    raise ValueError("Log records a completion the replay did not reach")

            elif type_code == EVT_PUZZLE:
                difficulty_code, mode_code, seed = data
                self.session.difficulty = Difficulty.from_code(difficulty_code)
                self.session.puzzle = self._regenerate(difficulty_code, seed)
                self.session.reset()

            yield "Replay"

        yield "Done"

    def run_all(self) -> GameSession:
        for _ in self.run():
            pass
        logger.debug("Replayed %d events", self.event_count)
        return self.session
