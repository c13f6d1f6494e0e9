"""Ingestion service: the single writer for results, streaks and achievements."""

import asyncio
import logging
from datetime import datetime
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from db.database import Database
from models import AchievementUnlock, Game, GameResult, GameStreak, TieredAchievement
from tracker import catalog
from tracker.parsers.errors import MalformedGameData, ParsingError
from tracker.parsers.result_parser import parse, parse_shared_text
from tracker.services.achievement_definitions import create_default_achievements
from tracker.services.achievement_service import check_all_achievements, recompute_achievements
from tracker.services.duplicates import is_duplicate
from tracker.services.streak_service import rebuild_all_streaks, rebuild_streak
from utils.formatting import format_parse_failure, format_result_line

logger = logging.getLogger(__name__)


class IngestOutcome(BaseModel):
    """What happened to one submitted result."""

    added: bool
    message: str
    result: Optional[GameResult] = None
    error_code: Optional[str] = None
    shared_text: Optional[str] = None
    unlocks: list[AchievementUnlock] = Field(default_factory=list)


class TrackerState(BaseModel):
    results: list[GameResult]
    streaks: list[GameStreak]
    achievements: list[TieredAchievement]


class IngestionService:
    """Service for recording results and keeping derived state in step.

    All read-modify-write cycles on the stored history run under one lock,
    so concurrent submissions can't lose each other's updates.
    """

    def __init__(self, db: Database, games: Optional[Iterable[Game]] = None):
        self.db = db
        self.games = list(games) if games is not None else catalog.all_games()
        self._games_by_id = {game.id: game for game in self.games}
        self._lock = asyncio.Lock()

    async def ingest_text(
        self, text: str, game: Optional[Game] = None, now: Optional[datetime] = None
    ) -> IngestOutcome:
        """Parse shared text and record it. Detects the game when none is given."""
        if game is not None:
            parsed = parse(text, game, now)
        else:
            parsed = parse_shared_text(text, self.games, now)

        if isinstance(parsed, ParsingError):
            logger.info(f"Could not parse shared text ({parsed.error_code}): {parsed.failure_reason}")
            return IngestOutcome(
                added=False,
                message=format_parse_failure(parsed),
                error_code=parsed.error_code,
                shared_text=text,
            )

        return await self.ingest_result(parsed, now)

    async def ingest_result(self, result: GameResult, now: Optional[datetime] = None) -> IngestOutcome:
        """Record a result, then update its streak and every achievement."""
        if not result.is_valid:
            error = MalformedGameData(result.game_name, f"Score {result.score} is not valid", result.shared_text)
            return IngestOutcome(
                added=False,
                message=format_parse_failure(error),
                result=result,
                error_code=error.error_code,
                shared_text=result.shared_text,
            )

        async with self._lock:
            existing = await self.db.get_results()
            if is_duplicate(result, existing):
                logger.info(f"Skipping duplicate {result.game_name} result #{result.puzzle_number}")
                return IngestOutcome(
                    added=False,
                    message=f"Already recorded: {format_result_line(result)}",
                    result=result,
                )

            if not await self.db.add_result(result):
                return IngestOutcome(added=False, message="Failed to save result. Please try again.", result=result)

            all_results = [*existing, result]
            streaks = await self._current_streaks()
            game = self._games_by_id.get(result.game_id)
            if game is None:
                logger.debug(f"Result {result.id} is for a game outside the catalog; streaks unchanged")
            else:
                updated = rebuild_streak(game, all_results)
                streaks = [updated if s.game_id == game.id else s for s in streaks]

            achievements, unlocks = check_all_achievements(
                result, all_results, streaks, self.games, await self._load_achievements(), now
            )
            await self.db.save_streaks(streaks)
            await self.db.save_achievements(achievements)

        logger.info(f"Recorded {result.game_name} result #{result.puzzle_number}")
        return IngestOutcome(
            added=True,
            message=f"Recorded {format_result_line(result)}",
            result=result,
            unlocks=unlocks,
        )

    async def ingest_many(self, results: Iterable[GameResult], now: Optional[datetime] = None) -> int:
        """Record several results. Returns how many were actually added."""
        added = 0
        for result in results:
            outcome = await self.ingest_result(result, now)
            if outcome.added:
                added += 1
        return added

    async def recompute_all(
        self, now: Optional[datetime] = None
    ) -> tuple[list[GameStreak], list[AchievementUnlock]]:
        """Rebuild every streak and achievement from the stored history."""
        async with self._lock:
            results = await self.db.get_results()
            streaks = rebuild_all_streaks(self.games, results)
            achievements, unlocks = recompute_achievements(
                results, streaks, self.games, await self._load_achievements(), now
            )
            await self.db.save_streaks(streaks)
            await self.db.save_achievements(achievements)
        return streaks, unlocks

    async def reparse_results(self, game_name: Optional[str] = None, now: Optional[datetime] = None) -> int:
        """Re-run the current grammars over stored share text.

        A result is replaced only when its score or completion changes; the
        original id and date are kept. Results that no longer parse are left
        alone. Returns the number of results fixed.
        """
        async with self._lock:
            results = await self.db.get_results()
            fixed = 0
            updated_results = []

            for result in results:
                game = self._games_by_id.get(result.game_id)
                if game is None or (game_name is not None and game.name != game_name.lower()):
                    updated_results.append(result)
                    continue

                reparsed = parse(result.shared_text, game, now=result.date)
                if isinstance(reparsed, ParsingError):
                    logger.warning(f"Could not reparse {game.name} result {result.id}: {reparsed.failure_reason}")
                    updated_results.append(result)
                    continue

                if reparsed.completed != result.completed or reparsed.score != result.score:
                    fixed += 1
                    updated_results.append(reparsed.model_copy(update={"id": result.id, "date": result.date}))
                else:
                    updated_results.append(result)

            if fixed:
                await self.db.replace_results(updated_results)
                streaks = rebuild_all_streaks(self.games, updated_results)
                achievements, _ = recompute_achievements(
                    updated_results, streaks, self.games, await self._load_achievements(), now
                )
                await self.db.save_streaks(streaks)
                await self.db.save_achievements(achievements)

        logger.info(f"Reparse fixed {fixed} results")
        return fixed

    async def load_state(self) -> TrackerState:
        """Get results, a streak for every game, and every achievement."""
        async with self._lock:
            return TrackerState(
                results=await self.db.get_results(),
                streaks=await self._current_streaks(),
                achievements=await self._load_achievements(),
            )

    async def _current_streaks(self) -> list[GameStreak]:
        stored = {streak.game_id: streak for streak in await self.db.get_streaks()}
        return [stored.get(game.id) or GameStreak.empty(game) for game in self.games]

    async def _load_achievements(self) -> list[TieredAchievement]:
        stored = await self.db.get_achievement_progress()
        achievements = []
        for achievement in create_default_achievements(self.games):
            if achievement.category in stored:
                achievement_id, progress = stored[achievement.category]
                achievement = achievement.model_copy(update={"id": achievement_id, "progress": progress})
            achievements.append(achievement)
        return achievements
