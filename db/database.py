import aiosqlite
import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Any, Iterable
from uuid import UUID
import logging

from models import (
    AchievementCategory,
    AchievementProgress,
    AchievementTier,
    GameResult,
    GameStreak,
    TieredAchievement,
)

logger = logging.getLogger(__name__)

RESULT_COLUMNS = (
    "id, game_id, game_name, played_at, score, max_attempts, completed, shared_text, parsed_data"
)


def _to_text(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _from_text(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _result_params(result: GameResult) -> tuple:
    return (
        str(result.id),
        str(result.game_id),
        result.game_name,
        result.date.isoformat(),
        result.score,
        result.max_attempts,
        result.completed,
        result.shared_text,
        json.dumps(result.parsed_data),
    )


def _row_to_result(row: aiosqlite.Row) -> GameResult:
    return GameResult(
        id=UUID(row["id"]),
        game_id=UUID(row["game_id"]),
        game_name=row["game_name"],
        date=datetime.fromisoformat(row["played_at"]),
        score=row["score"],
        max_attempts=row["max_attempts"],
        completed=bool(row["completed"]),
        shared_text=row["shared_text"],
        parsed_data=json.loads(row["parsed_data"]),
    )


def _row_to_streak(row: aiosqlite.Row) -> GameStreak:
    return GameStreak(
        id=UUID(row["id"]),
        game_id=UUID(row["game_id"]),
        game_name=row["game_name"],
        current_streak=row["current_streak"],
        max_streak=row["max_streak"],
        total_games_played=row["total_games_played"],
        total_games_completed=row["total_games_completed"],
        last_played_date=_from_text(row["last_played_date"]),
        streak_start_date=_from_text(row["streak_start_date"]),
    )


class Database:
    """Async SQLite database wrapper."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._connection: Optional[aiosqlite.Connection] = None

    async def connect(self) -> None:
        """Connect to the database and run migrations."""
        self._connection = await aiosqlite.connect(self.db_path)
        self._connection.row_factory = aiosqlite.Row
        await self._run_migrations()

    async def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def _run_migrations(self) -> None:
        """Run all SQL migration files."""
        # Create migrations tracking table
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS _migrations (
                name TEXT PRIMARY KEY,
                applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        await self._connection.commit()

        migrations_dir = Path(__file__).parent / "migrations"

        for migration_file in sorted(migrations_dir.glob("*.sql")):
            # Check if migration already applied
            cursor = await self._connection.execute(
                "SELECT 1 FROM _migrations WHERE name = ?",
                (migration_file.name,)
            )
            if await cursor.fetchone():
                logger.debug(f"Skipping already applied migration: {migration_file.name}")
                continue

            logger.info(f"Running migration: {migration_file.name}")
            sql = migration_file.read_text()
            await self._connection.executescript(sql)
            await self._connection.execute(
                "INSERT INTO _migrations (name) VALUES (?)",
                (migration_file.name,)
            )
            await self._connection.commit()

    async def execute(
        self, query: str, params: tuple = ()
    ) -> aiosqlite.Cursor:
        """Execute a query and return the cursor."""
        cursor = await self._connection.execute(query, params)
        await self._connection.commit()
        return cursor

    async def fetch_one(
        self, query: str, params: tuple = ()
    ) -> Optional[aiosqlite.Row]:
        """Fetch a single row."""
        cursor = await self._connection.execute(query, params)
        return await cursor.fetchone()

    async def fetch_all(
        self, query: str, params: tuple = ()
    ) -> list[aiosqlite.Row]:
        """Fetch all rows."""
        cursor = await self._connection.execute(query, params)
        return await cursor.fetchall()

    async def fetch_value(
        self, query: str, params: tuple = ()
    ) -> Optional[Any]:
        """Fetch a single value from the first column of the first row."""
        row = await self.fetch_one(query, params)
        return row[0] if row else None

    # Game result methods

    async def add_result(self, result: GameResult) -> bool:
        """Store a parsed result. Returns True if successful."""
        try:
            await self.execute(
                f"INSERT INTO game_results ({RESULT_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                _result_params(result),
            )
            return True
        except Exception as e:
            logger.error(f"Failed to add result: {e}")
            return False

    async def get_results(self) -> list[GameResult]:
        """Get every stored result, oldest first."""
        rows = await self.fetch_all(
            f"SELECT {RESULT_COLUMNS} FROM game_results ORDER BY played_at, created_at"
        )
        return [_row_to_result(row) for row in rows]

    async def get_results_for_game(self, game_id: UUID) -> list[GameResult]:
        """Get all results for one game, oldest first."""
        rows = await self.fetch_all(
            f"""
            SELECT {RESULT_COLUMNS} FROM game_results
            WHERE game_id = ?
            ORDER BY played_at, created_at
            """,
            (str(game_id),),
        )
        return [_row_to_result(row) for row in rows]

    async def result_exists(self, result_id: UUID) -> bool:
        """Check if a result with this id is stored."""
        row = await self.fetch_one(
            "SELECT 1 FROM game_results WHERE id = ?",
            (str(result_id),),
        )
        return row is not None

    async def count_results(self) -> int:
        return await self.fetch_value("SELECT COUNT(*) FROM game_results") or 0

    async def replace_results(self, results: Iterable[GameResult]) -> None:
        """Swap the whole result history for `results` in one transaction."""
        params = [_result_params(result) for result in results]
        await self._connection.execute("DELETE FROM game_results")
        await self._connection.executemany(
            f"INSERT INTO game_results ({RESULT_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            params,
        )
        await self._connection.commit()
        logger.info(f"Replaced result history with {len(params)} results")

    # Streak methods

    async def save_streaks(self, streaks: Iterable[GameStreak]) -> None:
        """Insert or update the streak row for each game."""
        await self._connection.executemany(
            """
            INSERT INTO game_streaks
            (game_id, id, game_name, current_streak, max_streak, total_games_played,
             total_games_completed, last_played_date, streak_start_date)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(game_id) DO UPDATE SET
                game_name = excluded.game_name,
                current_streak = excluded.current_streak,
                max_streak = excluded.max_streak,
                total_games_played = excluded.total_games_played,
                total_games_completed = excluded.total_games_completed,
                last_played_date = excluded.last_played_date,
                streak_start_date = excluded.streak_start_date,
                updated_at = CURRENT_TIMESTAMP
            """,
            [
                (
                    str(streak.game_id),
                    str(streak.id),
                    streak.game_name,
                    streak.current_streak,
                    streak.max_streak,
                    streak.total_games_played,
                    streak.total_games_completed,
                    _to_text(streak.last_played_date),
                    _to_text(streak.streak_start_date),
                )
                for streak in streaks
            ],
        )
        await self._connection.commit()

    async def get_streaks(self) -> list[GameStreak]:
        """Get all stored streaks."""
        rows = await self.fetch_all("SELECT * FROM game_streaks ORDER BY game_name")
        return [_row_to_streak(row) for row in rows]

    # Achievement methods

    async def save_achievements(self, achievements: Iterable[TieredAchievement]) -> None:
        """Store progress for each achievement. Tier unlock dates are never overwritten."""
        for achievement in achievements:
            progress = achievement.progress
            await self._connection.execute(
                """
                INSERT INTO achievements (category, id, current_value, current_tier, last_updated)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(category) DO UPDATE SET
                    current_value = excluded.current_value,
                    current_tier = excluded.current_tier,
                    last_updated = excluded.last_updated
                """,
                (
                    achievement.category.value,
                    str(achievement.id),
                    progress.current_value,
                    int(progress.current_tier) if progress.current_tier is not None else None,
                    progress.last_updated.isoformat(),
                ),
            )
            await self._connection.executemany(
                """
                INSERT OR IGNORE INTO achievement_tier_unlocks (category, tier, unlocked_at)
                VALUES (?, ?, ?)
                """,
                [
                    (achievement.category.value, int(tier), unlocked_at.isoformat())
                    for tier, unlocked_at in progress.tier_unlock_dates.items()
                ],
            )
        await self._connection.commit()

    async def get_achievement_progress(self) -> dict[AchievementCategory, tuple[UUID, AchievementProgress]]:
        """Get stored progress keyed by category, along with each achievement's id."""
        unlock_rows = await self.fetch_all(
            "SELECT category, tier, unlocked_at FROM achievement_tier_unlocks"
        )
        unlock_dates: dict[str, dict[AchievementTier, datetime]] = {}
        for row in unlock_rows:
            unlock_dates.setdefault(row["category"], {})[AchievementTier(row["tier"])] = datetime.fromisoformat(
                row["unlocked_at"]
            )

        progress = {}
        for row in await self.fetch_all("SELECT * FROM achievements"):
            try:
                category = AchievementCategory(row["category"])
            except ValueError:
                logger.warning(f"Ignoring progress for unknown achievement category {row['category']}")
                continue
            progress[category] = (
                UUID(row["id"]),
                AchievementProgress(
                    current_value=row["current_value"],
                    current_tier=AchievementTier(row["current_tier"]) if row["current_tier"] is not None else None,
                    tier_unlock_dates=unlock_dates.get(row["category"], {}),
                    last_updated=datetime.fromisoformat(row["last_updated"]),
                ),
            )
        return progress

    async def delete_all_data(self) -> None:
        """Delete all results and everything derived from them."""
        for table in ["game_results", "game_streaks", "achievements", "achievement_tier_unlocks"]:
            await self.execute(f"DELETE FROM {table}")
        logger.info("Deleted all tracking data")
