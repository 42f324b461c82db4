import unittest
import sys
import os
import shutil

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from zip_engine.core.difficulty import Difficulty, GameMode
from zip_engine.core.events import (
    EventReader, EventWriter, EVT_COMPLETE, EVT_PATH_ADD, EVT_PATH_REM, EVT_PUZZLE, EVT_RESET,
)
from zip_engine.core.grid import Position
from zip_engine.core.puzzle import Puzzle
from zip_engine.core.session import GameSession
from zip_engine.algo.generator import generate
from zip_engine.viz.replay import SessionReplay

class TestSessionLog(unittest.TestCase):
    def setUp(self):
        os.makedirs("test_out", exist_ok=True)

    def tearDown(self):
        shutil.rmtree("test_out", ignore_errors=True)

    def read_all(self, path):
        reader = EventReader(path)
        reader.read_header()
        events = list(reader.stream_events())
        reader.close()
        return events

    def play_logged(self, path, puzzle, mode=GameMode.DAILY, moves=None):
        writer = EventWriter(path)
        session = GameSession(puzzle, mode=mode, event_writer=writer)
        for pos in (moves if moves is not None else puzzle.solution):
            session.handle_touch(pos)
        writer.close()
        return session

    def test_records_session(self):
        puzzle = generate(Difficulty.EASY, 42)
        path = "test_out/session.log"
        first, second, third = puzzle.solution[:3]
        # Start, step forward twice, then back once
        self.play_logged(path, puzzle, moves=[first, second, third, second])

        writer_events = self.read_all(path)
        self.assertEqual(writer_events[0], (EVT_PUZZLE, (Difficulty.EASY.code, GameMode.DAILY.value, 42)))
        self.assertEqual(writer_events[1:], [
            (EVT_PATH_ADD, tuple(first)),
            (EVT_PATH_ADD, tuple(second)),
            (EVT_PATH_ADD, tuple(third)),
            (EVT_PATH_REM, tuple(third)),
        ])

    def test_reset_and_complete_records(self):
        puzzle = generate(Difficulty.MEDIUM, 8)
        path = "test_out/complete.log"
        writer = EventWriter(path)
        session = GameSession(puzzle, event_writer=writer)
        session.handle_touch(puzzle.solution[0])
        session.reset()
        for pos in puzzle.solution:
            session.handle_touch(pos)
        writer.close()

        events = self.read_all(path)
        codes = [code for code, _ in events]
        self.assertEqual(codes[:3], [EVT_PUZZLE, EVT_PATH_ADD, EVT_RESET])
        self.assertEqual(codes[-1], EVT_COMPLETE)
        self.assertEqual(events[-1][1][0], session.state.elapsed)

    def test_replay_reaches_completion(self):
        puzzle = generate(Difficulty.HARD, 2024)
        path = "test_out/replay.log"
        moves = list(puzzle.solution[:5]) + [puzzle.solution[3]] + list(puzzle.solution[4:])
        original = self.play_logged(path, puzzle, moves=moves)
        self.assertTrue(original.state.is_completed)

        reader = EventReader(path)
        replay = SessionReplay(reader)
        session = replay.run_all()
        reader.close()

        self.assertEqual(session.puzzle, puzzle)
        self.assertEqual(session.mode, GameMode.DAILY)
        self.assertTrue(session.state.is_completed)
        self.assertEqual(session.path, puzzle.solution)
        self.assertEqual(replay.recorded_elapsed, original.state.elapsed)

    def test_replay_follows_new_puzzle(self):
        path = "test_out/practice.log"
        writer = EventWriter(path)
        session = GameSession(generate(Difficulty.EASY, 1), mode=GameMode.UNLIMITED, event_writer=writer)
        session.new_puzzle()
        for pos in session.puzzle.solution[:4]:
            session.handle_touch(pos)
        writer.close()

        reader = EventReader(path)
        replayed = SessionReplay(reader).run_all()
        reader.close()
        self.assertEqual(replayed.puzzle, session.puzzle)
        self.assertEqual(replayed.path, session.path)

    def test_replay_rejects_diverging_log(self):
        path = "test_out/bad.log"
        writer = EventWriter(path)
        writer.write_header()
        writer.log_puzzle(Difficulty.EASY.code, GameMode.UNLIMITED.value, 42)
        # The mirror image of the start cell is never checkpoint 1
        start = generate(Difficulty.EASY, 42).solution[0]
        far = Position(5 - start.row, 5 - start.col)
        writer.log_path_add(far.row, far.col)
        writer.close()

        reader = EventReader(path)
        with self.assertRaises(ValueError):
            SessionReplay(reader).run_all()
        reader.close()

    def test_invalid_magic(self):
        path = "test_out/garbage.log"
        with open(path, "wb") as f:
            f.write(b"NOTALOG")
        reader = EventReader(path)
        with self.assertRaises(ValueError):
            reader.read_header()
        reader.close()

    def test_truncated_record(self):
        path = "test_out/truncated.log"
        writer = EventWriter(path)
        writer.write_header()
        writer.file.write(bytes([EVT_PATH_ADD, 1]))
        writer.close()

        reader = EventReader(path)
        reader.read_header()
        with self.assertRaises(ValueError):
            list(reader.stream_events())
        reader.close()

    def test_logging_needs_seeded_puzzle(self):
        puzzle = Puzzle.custom(1, [Position(0, 0)], {Position(0, 0): 1})
        writer = EventWriter("test_out/unused.log")
        with self.assertRaises(ValueError):
            GameSession(puzzle, event_writer=writer)
        writer.close()

if __name__ == '__main__':
    unittest.main()
