"""Tests for model validation, derived values and serialisation."""

from datetime import date, datetime, timedelta, timezone

from models import (
    AchievementCategory,
    AchievementProgress,
    AchievementTier,
    GameResult,
    GameStreak,
    StreakStatus,
    TieredAchievement,
    TierRequirement,
)
from tracker.catalog import CONNECTIONS, LINKEDIN_ZIP, OCTORDLE, WORDLE
from tracker.services.achievement_definitions import requirements_for


def result_for(game, score, max_attempts, completed=True):
    return GameResult(
        game_id=game.id,
        game_name=game.name,
        date=datetime(2024, 6, 1, 12, 0),
        score=score,
        max_attempts=max_attempts,
        completed=completed,
        shared_text="shared",
    )


class TestGameResultValidity:
    def test_attempt_games(self):
        assert result_for(WORDLE, 3, 6).is_valid
        assert not result_for(WORDLE, 0, 6).is_valid
        assert not result_for(WORDLE, 7, 6).is_valid

    def test_missing_score_is_valid(self):
        assert result_for(WORDLE, None, 6, completed=False).is_valid

    def test_time_games_have_no_upper_bound(self):
        assert result_for(LINKEDIN_ZIP, 3600, 0).is_valid
        assert not result_for(LINKEDIN_ZIP, -1, 0).is_valid

    def test_zero_based_games(self):
        assert result_for(CONNECTIONS, 0, 4, completed=False).is_valid
        assert not result_for(CONNECTIONS, 5, 4).is_valid

    def test_octordle_score_matches_max(self):
        assert result_for(OCTORDLE, 62, 62).is_valid
        assert not result_for(OCTORDLE, 62, 70).is_valid

    def test_empty_shared_text(self):
        result = result_for(WORDLE, 3, 6).model_copy(update={"shared_text": ""})
        assert not result.is_valid

    def test_is_success(self):
        assert result_for(WORDLE, 3, 6).is_success
        assert not result_for(WORDLE, None, 6, completed=False).is_success


class TestGameResultSerialisation:
    def test_camel_case_aliases(self):
        result = result_for(WORDLE, 3, 6)
        data = result.model_dump(mode="json", by_alias=True)
        assert data["gameId"] == str(WORDLE.id)
        assert data["maxAttempts"] == 6
        assert data["sharedText"] == "shared"
        assert data["date"] == "2024-06-01T12:00:00"

    def test_round_trip_json(self):
        result = result_for(WORDLE, 3, 6)
        restored = GameResult.model_validate_json(result.model_dump_json(by_alias=True))
        assert restored == result

    def test_aware_dates_become_naive(self):
        aware = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
        result = GameResult(
            game_id=WORDLE.id,
            game_name="wordle",
            date=aware,
            score=3,
            max_attempts=6,
            completed=True,
            shared_text="shared",
        )
        assert result.date.tzinfo is None


class TestGameStreak:
    def test_empty(self):
        streak = GameStreak.empty(WORDLE)
        assert streak.game_name == "Wordle"
        assert streak.current_streak == 0
        assert streak.max_streak == 0
        assert streak.last_played_date is None
        assert streak.streak_start_date is None
        assert streak.completion_rate == 0.0

    def test_status(self):
        today = date(2024, 6, 10)
        streak = GameStreak(
            game_id=WORDLE.id,
            game_name="Wordle",
            current_streak=3,
            max_streak=3,
            total_games_played=4,
            total_games_completed=3,
            last_played_date=datetime(2024, 6, 9, 20, 0),
        )
        assert streak.status(today) is StreakStatus.ACTIVE
        assert streak.status(today + timedelta(days=2)) is StreakStatus.INACTIVE
        assert streak.model_copy(update={"current_streak": 0}).status(today) is StreakStatus.BROKEN
        assert streak.completion_rate == 0.75


class TestAchievementModels:
    def make(self, thresholds=(3, 7, 14)):
        return TieredAchievement(
            category=AchievementCategory.STREAK_MASTER,
            requirements=requirements_for(thresholds),
        )

    def test_requirements_sorted(self):
        achievement = TieredAchievement(
            category=AchievementCategory.NIGHT_OWL,
            requirements=[
                TierRequirement(tier=AchievementTier.GOLD, threshold=10),
                TierRequirement(tier=AchievementTier.BRONZE, threshold=1),
            ],
        )
        assert [r.tier for r in achievement.requirements] == [AchievementTier.BRONZE, AchievementTier.GOLD]

    def test_category_display(self):
        assert AchievementCategory.STREAK_MASTER.display_name == "Streak Master"
        assert AchievementCategory.NIGHT_OWL.icon_name == "🦉"
        assert AchievementTier.LEGENDARY.display_name == "Legendary"

    def test_with_progress_unlocks_highest_met_tier(self):
        now = datetime(2024, 6, 1, 9, 0)
        achievement = self.make().with_progress(8, now)
        assert achievement.progress.current_tier is AchievementTier.SILVER
        assert achievement.progress.tier_unlock_dates == {AchievementTier.SILVER: now}
        assert achievement.progress_description == "8/14"

    def test_tier_never_regresses(self):
        achievement = self.make().with_progress(8, datetime(2024, 6, 1))
        lowered = achievement.with_progress(1, datetime(2024, 6, 2))
        assert lowered.progress.current_tier is AchievementTier.SILVER
        assert lowered.progress.current_value == 1

    def test_unlock_date_not_overwritten(self):
        first = datetime(2024, 6, 1)
        achievement = self.make().with_progress(3, first)
        again = achievement.with_progress(4, datetime(2024, 6, 5))
        assert again.progress.tier_unlock_dates[AchievementTier.BRONZE] == first

    def test_with_progress_is_pure(self):
        achievement = self.make()
        achievement.with_progress(20)
        assert achievement.progress.current_value == 0
        assert achievement.progress.current_tier is None

    def test_progress_descriptions(self):
        achievement = self.make()
        assert achievement.progress_description == "0/3"
        assert achievement.with_progress(20).progress_description == "20 (Max)"

    def test_next_tier(self):
        assert AchievementProgress().next_tier is AchievementTier.BRONZE
        assert AchievementProgress(current_tier=AchievementTier.LEGENDARY).next_tier is None

    def test_percentage_to_next_tier(self):
        requirements = requirements_for((10, 20))
        progress = AchievementProgress(current_value=15, current_tier=AchievementTier.BRONZE)
        assert progress.percentage_to_next_tier(requirements) == 0.5
        assert AchievementProgress(current_value=50).percentage_to_next_tier(requirements) == 1.0
