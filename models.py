"""Pydantic models for games, results, streaks and achievements."""

from datetime import date, datetime
from enum import Enum, IntEnum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from utils.dates import is_today_or_yesterday, local_day, now, to_local


class RecordModel(BaseModel):
    """Base for persisted records: camelCase JSON, snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# Games


class ScoringModel(str, Enum):
    LOWER_ATTEMPTS = "lowerAttempts"
    LOWER_TIME_SECONDS = "lowerTimeSeconds"
    LOWER_GUESSES = "lowerGuesses"
    LOWER_HINTS = "lowerHints"
    HIGHER_IS_BETTER = "higherIsBetter"

    @property
    def is_lower_better(self) -> bool:
        return self is not ScoringModel.HIGHER_IS_BETTER


class GameCategory(str, Enum):
    WORD = "word"
    MATH = "math"
    MUSIC = "music"
    GEOGRAPHY = "geography"
    TRIVIA = "trivia"
    PUZZLE = "puzzle"
    NYT_GAMES = "nyt_games"
    LINKEDIN_GAMES = "linkedin_games"
    CUSTOM = "custom"


class Game(RecordModel):
    """A static catalog entry."""

    id: UUID
    name: str
    display_name: str
    url: str
    category: GameCategory
    scoring_model: ScoringModel
    max_attempts: Optional[int] = None
    share_marker: Optional[str] = None
    parsed_data_keys: tuple[str, ...] = ()
    is_popular: bool = False
    is_custom: bool = False


# Results

# Scores are seconds for these games, so there is no upper bound
TIME_SCORED_GAMES = frozenset(
    {"linkedinzip", "linkedintango", "linkedinqueens", "linkedincrossclimb", "minicrossword"}
)
# Scores may legitimately be zero (no hints used, no categories solved)
ZERO_BASED_GAMES = frozenset({"strands", "connections"})


class GameResult(RecordModel):
    """One parsed play event."""

    id: UUID = Field(default_factory=uuid4)
    game_id: UUID
    game_name: str
    date: datetime
    score: Optional[int] = None
    max_attempts: int
    completed: bool
    shared_text: str
    parsed_data: dict[str, str] = Field(default_factory=dict)

    @field_validator("date")
    @classmethod
    def _local_date(cls, value: datetime) -> datetime:
        return to_local(value)

    @property
    def is_success(self) -> bool:
        return self.completed and self.score is not None

    @property
    def puzzle_number(self) -> Optional[str]:
        return self.parsed_data.get("puzzleNumber")

    @property
    def day(self) -> date:
        return local_day(self.date)

    @property
    def is_valid(self) -> bool:
        return (
            bool(self.game_name)
            and self.max_attempts >= 0
            and bool(self.shared_text)
            and self.has_valid_score
        )

    @property
    def has_valid_score(self) -> bool:
        """Check the score against the range that makes sense for the game."""
        if self.score is None:
            return True

        name = self.game_name.lower()
        if name in TIME_SCORED_GAMES:
            return self.score >= 0
        if name in ZERO_BASED_GAMES:
            return 0 <= self.score <= self.max_attempts
        if name == "octordle":
            # maxAttempts mirrors the total score for Octordle
            return self.score >= 0 and self.score == self.max_attempts
        return 1 <= self.score <= self.max_attempts


# Streaks


class StreakStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    BROKEN = "broken"


class GameStreak(RecordModel):
    """Streak and play totals for one game, derived from its result history."""

    id: UUID = Field(default_factory=uuid4)
    game_id: UUID
    game_name: str
    current_streak: int = 0
    max_streak: int = 0
    total_games_played: int = 0
    total_games_completed: int = 0
    last_played_date: Optional[datetime] = None
    streak_start_date: Optional[datetime] = None

    @classmethod
    def empty(cls, game: Game) -> "GameStreak":
        return cls(game_id=game.id, game_name=game.display_name)

    @property
    def completion_rate(self) -> float:
        if self.total_games_played == 0:
            return 0.0
        return self.total_games_completed / self.total_games_played

    def status(self, today: Optional[date] = None) -> StreakStatus:
        """Display status relative to `today`.

        This is only for presentation; the streak counts themselves never decay.
        """
        if self.current_streak == 0 or self.last_played_date is None:
            return StreakStatus.BROKEN
        today = today or now().date()
        if is_today_or_yesterday(local_day(self.last_played_date), today):
            return StreakStatus.ACTIVE
        return StreakStatus.INACTIVE


# Achievements


class AchievementTier(IntEnum):
    BRONZE = 1
    SILVER = 2
    GOLD = 3
    DIAMOND = 4
    MASTER = 5
    LEGENDARY = 6

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


class AchievementCategory(str, Enum):
    STREAK_MASTER = "streak_master"
    GAME_COLLECTOR = "game_collector"
    PERFECTIONIST = "perfectionist"
    DAILY_DEVOTEE = "daily_devotee"
    VARIETY_PLAYER = "variety_player"
    SPEED_DEMON = "speed_demon"
    EARLY_BIRD = "early_bird"
    NIGHT_OWL = "night_owl"
    COMEBACK_CHAMPION = "comeback_champion"
    MARATHON_RUNNER = "marathon_runner"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()

    @property
    def description(self) -> str:
        return CATEGORY_DESCRIPTIONS[self]

    @property
    def icon_name(self) -> str:
        return CATEGORY_ICONS[self]


CATEGORY_DESCRIPTIONS = {
    AchievementCategory.STREAK_MASTER: "Maintain consecutive day streaks for individual games",
    AchievementCategory.GAME_COLLECTOR: "Play games across all categories",
    AchievementCategory.PERFECTIONIST: "Complete games successfully without failing",
    AchievementCategory.DAILY_DEVOTEE: "Play at least one game every day",
    AchievementCategory.VARIETY_PLAYER: "Play many different games over time",
    AchievementCategory.SPEED_DEMON: "Win games with minimal attempts",
    AchievementCategory.EARLY_BIRD: "Play games in the early morning",
    AchievementCategory.NIGHT_OWL: "Play games late at night",
    AchievementCategory.COMEBACK_CHAMPION: "Rebuild streaks after they break",
    AchievementCategory.MARATHON_RUNNER: "Stay active for extended periods",
}

CATEGORY_ICONS = {
    AchievementCategory.STREAK_MASTER: "🔥",
    AchievementCategory.GAME_COLLECTOR: "🎮",
    AchievementCategory.PERFECTIONIST: "✅",
    AchievementCategory.DAILY_DEVOTEE: "📅",
    AchievementCategory.VARIETY_PLAYER: "🧩",
    AchievementCategory.SPEED_DEMON: "⚡",
    AchievementCategory.EARLY_BIRD: "🌅",
    AchievementCategory.NIGHT_OWL: "🦉",
    AchievementCategory.COMEBACK_CHAMPION: "🔁",
    AchievementCategory.MARATHON_RUNNER: "🏃",
}


class TierRequirement(RecordModel):
    tier: AchievementTier
    threshold: int
    specific_game_id: Optional[UUID] = None


class AchievementProgress(RecordModel):
    current_value: int = 0
    current_tier: Optional[AchievementTier] = None
    tier_unlock_dates: dict[AchievementTier, datetime] = Field(default_factory=dict)
    last_updated: datetime = Field(default_factory=now)

    @property
    def next_tier(self) -> Optional[AchievementTier]:
        if self.current_tier is None:
            return AchievementTier.BRONZE
        if self.current_tier is AchievementTier.LEGENDARY:
            return None
        return AchievementTier(self.current_tier + 1)

    def percentage_to_next_tier(self, requirements: list[TierRequirement]) -> float:
        """Fraction of the way from the current tier's threshold to the next one."""
        next_tier = self.next_tier
        if next_tier is None:
            return 1.0
        next_requirement = next((r for r in requirements if r.tier == next_tier), None)
        if next_requirement is None:
            return 0.0

        previous_threshold = 0
        if self.current_tier is not None:
            current = next((r for r in requirements if r.tier == self.current_tier), None)
            if current is not None:
                previous_threshold = current.threshold

        span = next_requirement.threshold - previous_threshold
        if span <= 0:
            return 0.0
        return min(1.0, max(0.0, (self.current_value - previous_threshold) / span))


class TieredAchievement(RecordModel):
    id: UUID = Field(default_factory=uuid4)
    category: AchievementCategory
    requirements: list[TierRequirement]
    progress: AchievementProgress = Field(default_factory=AchievementProgress)

    @field_validator("requirements")
    @classmethod
    def _sort_requirements(cls, value: list[TierRequirement]) -> list[TierRequirement]:
        return sorted(value, key=lambda r: r.tier)

    @property
    def display_name(self) -> str:
        return self.category.display_name

    @property
    def is_unlocked(self) -> bool:
        return self.progress.current_tier is not None

    @property
    def is_global(self) -> bool:
        return not self.requirements or self.requirements[0].specific_game_id is None

    @property
    def next_tier_requirement(self) -> Optional[TierRequirement]:
        next_tier = self.progress.next_tier
        if next_tier is None:
            return None
        return next((r for r in self.requirements if r.tier == next_tier), None)

    @property
    def progress_description(self) -> str:
        next_requirement = self.next_tier_requirement
        if next_requirement is not None:
            return f"{self.progress.current_value}/{next_requirement.threshold}"
        if self.is_unlocked:
            return f"{self.progress.current_value} (Max)"
        return "Not started"

    def highest_tier_for(self, value: int) -> Optional[AchievementTier]:
        """Highest tier whose threshold `value` reaches, if any."""
        reached = [r.tier for r in self.requirements if value >= r.threshold]
        return max(reached) if reached else None

    def with_progress(self, value: int, updated_at: Optional[datetime] = None) -> "TieredAchievement":
        """Return a copy with `value` recorded and the tier raised if earned.

        Tiers only move up. The unlock date of a tier is written the first
        time it is reached and never overwritten.
        """
        updated_at = updated_at or now()
        current_tier = self.progress.current_tier
        unlock_dates = dict(self.progress.tier_unlock_dates)

        reached = self.highest_tier_for(value)
        if reached is not None and (current_tier is None or reached > current_tier):
            current_tier = reached
            unlock_dates.setdefault(reached, updated_at)

        progress = AchievementProgress(
            current_value=value,
            current_tier=current_tier,
            tier_unlock_dates=unlock_dates,
            last_updated=updated_at,
        )
        return self.model_copy(update={"progress": progress})


class AchievementUnlock(RecordModel):
    """Emitted when an achievement reaches a new tier."""

    id: UUID = Field(default_factory=uuid4)
    achievement: TieredAchievement
    tier: AchievementTier
    timestamp: datetime
