"""Pytest configuration and shared fixtures."""

from datetime import datetime

import pytest
import pytest_asyncio

from db.database import Database
from models import Game, GameResult
from tracker.catalog import WORDLE


@pytest_asyncio.fixture
async def db():
    """Create an in-memory database for testing."""
    database = Database(":memory:")
    await database.connect()
    yield database
    await database.close()


@pytest.fixture
def make_result():
    """Build a GameResult with sensible defaults for streak and achievement tests."""

    def _make(
        when: datetime,
        game: Game = WORDLE,
        score: int | None = 3,
        completed: bool = True,
        max_attempts: int | None = None,
        puzzle_number: str | None = None,
        parsed_data: dict[str, str] | None = None,
    ) -> GameResult:
        data = dict(parsed_data or {})
        if puzzle_number is not None:
            data["puzzleNumber"] = puzzle_number
        return GameResult(
            game_id=game.id,
            game_name=game.name,
            date=when,
            score=score if completed else None,
            max_attempts=max_attempts if max_attempts is not None else (game.max_attempts or 6),
            completed=completed,
            shared_text=f"{game.display_name} test share",
            parsed_data=data,
        )

    return _make
