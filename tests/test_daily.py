import unittest
import sys
import os
from datetime import date, datetime

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from zip_engine.core.daily import DailyPuzzle
from zip_engine.core.difficulty import Difficulty

class TestDailyPuzzle(unittest.TestCase):
    def test_seed_is_days_since_base(self):
        self.assertEqual(DailyPuzzle.seed_for(date(2024, 1, 1)), 0)
        self.assertEqual(DailyPuzzle.seed_for(date(2024, 1, 2)), 1)
        self.assertEqual(DailyPuzzle.seed_for(date(2025, 1, 1)), 366) # 2024 is a leap year
        self.assertEqual(DailyPuzzle.seed_for(datetime(2024, 1, 2, 23, 59)), 1)

    def test_puzzle_number(self):
        self.assertEqual(DailyPuzzle.puzzle_number(date(2024, 1, 1)), 1)
        self.assertEqual(DailyPuzzle.puzzle_number(date(2024, 2, 1)), 32)

    def test_difficulty_by_weekday(self):
        # 2024-01-01 was a Monday
        expected = [Difficulty.EASY, Difficulty.EASY,
                    Difficulty.MEDIUM, Difficulty.MEDIUM, Difficulty.MEDIUM,
                    Difficulty.HARD, Difficulty.HARD]
        for offset, difficulty in enumerate(expected):
            day = date(2024, 1, 1 + offset)
            self.assertEqual(DailyPuzzle.difficulty_for(day), difficulty, str(day))

    def test_same_day_same_puzzle(self):
        day = date(2024, 6, 15)
        puzzle = DailyPuzzle.puzzle_for(day)
        self.assertEqual(puzzle, DailyPuzzle.puzzle_for(day))
        self.assertEqual(puzzle.difficulty, Difficulty.HARD) # Saturday
        self.assertEqual(puzzle.seed, DailyPuzzle.seed_for(day))

    def test_days_before_base_share_first_puzzle(self):
        day = date(2023, 12, 25) # a Monday, like BASE_DATE
        self.assertEqual(DailyPuzzle.seed_for(day), 0)
        self.assertEqual(DailyPuzzle.puzzle_number(day), 1)
        puzzle = DailyPuzzle.puzzle_for(day)
        self.assertEqual(puzzle, DailyPuzzle.puzzle_for(DailyPuzzle.BASE_DATE))
        self.assertEqual(puzzle.seed, DailyPuzzle.puzzle_for(DailyPuzzle.BASE_DATE).seed)

    def test_difficulty_override(self):
        puzzle = DailyPuzzle.puzzle_for(date(2024, 6, 15), Difficulty.EASY)
        self.assertEqual(puzzle.size, 6)

    def test_time_until_next(self):
        self.assertEqual(DailyPuzzle.time_until_next(datetime(2024, 1, 1, 23, 0, 0)), "01:00:00")
        self.assertEqual(DailyPuzzle.time_until_next(datetime(2024, 1, 1, 0, 0, 0)), "24:00:00")
        self.assertEqual(DailyPuzzle.time_until_next(datetime(2024, 1, 1, 12, 34, 56)), "11:25:04")

if __name__ == '__main__':
    unittest.main()
