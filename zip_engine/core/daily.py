from datetime import date, datetime, timedelta
from typing import Optional

from zip_engine.algo.generator import generate
from zip_engine.core.difficulty import Difficulty
from zip_engine.core.puzzle import Puzzle


class DailyPuzzle:
    """Maps a calendar day to its seed, number and difficulty."""
    BASE_DATE = date(2024, 1, 1)

    @classmethod
    def days_since_base(cls, day: date) -> int:
        """Whole days since BASE_DATE; days before it count as day 0."""
        if isinstance(day, datetime):
            day = day.date()
        return max(0, (day - cls.BASE_DATE).days)

    @classmethod
    def seed_for(cls, day: date) -> int:
        return cls.days_since_base(day)

    @classmethod
    def puzzle_number(cls, day: date) -> int:
        return cls.days_since_base(day) + 1

    @staticmethod
    def difficulty_for(day: date) -> Difficulty:
        # Mon-Tue easy, Wed-Fri medium, weekend hard
        weekday = day.weekday()
        if weekday <= 1:
            return Difficulty.EASY
        if weekday <= 4:
            return Difficulty.MEDIUM
        return Difficulty.HARD

    @classmethod
    def puzzle_for(cls, day: date, difficulty: Optional[Difficulty] = None) -> Puzzle:
        if difficulty is None:
            difficulty = cls.difficulty_for(day)
        return generate(difficulty, cls.seed_for(day))

    @staticmethod
    def time_until_next(now: datetime) -> str:
        midnight = datetime.combine(now.date() + timedelta(days=1), datetime.min.time(), tzinfo=now.tzinfo)
        remaining = int((midnight - now).total_seconds())
        hours, rest = divmod(remaining, 3600)
        minutes, seconds = divmod(rest, 60)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
