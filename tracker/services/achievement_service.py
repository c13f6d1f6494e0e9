"""Achievement progress and unlock detection.

Every metric is recomputed from the full result history, so running a check
twice with the same inputs changes nothing and emits no unlocks. Variety
Player and Comeback Champion keep their previous value when the history
would now give a lower one.
"""

import logging
from datetime import date, datetime
from typing import Callable, Iterable, Optional
from uuid import UUID

from models import (
    AchievementCategory,
    AchievementUnlock,
    Game,
    GameResult,
    GameStreak,
    TieredAchievement,
)
from utils.dates import local_day
from utils.dates import now as local_now

logger = logging.getLogger(__name__)

# Fewest attempts a win can take, for games where that is a meaningful target
SPEED_DEMON_MINIMUM = {
    "wordle": 1,
    "nerdle": 1,
    "framed": 1,
    "xordle": 1,
    "kilordle": 1,
    "primel": 1,
    "rankdle": 1,
    "quordle": 1,
}

EARLY_BIRD_HOURS = range(5, 9)
NIGHT_OWL_HOURS = range(0, 5)


def daily_devotee_days(results: list[GameResult], today: date) -> int:
    """Length of the latest run of consecutive days with any play.

    The run only counts while it is still alive, i.e. the last play was
    today or yesterday.
    """
    if not results:
        return 0

    days = sorted(local_day(r.date) for r in results)
    run = 1
    for previous, day in zip(days, days[1:]):
        gap = (day - previous).days
        if gap == 1:
            run += 1
        elif gap > 1:
            run = 1

    if (today - days[-1]).days > 1:
        return 0
    return run


def speed_demon_wins(results: list[GameResult], games: list[Game]) -> int:
    names = {game.id: game.name for game in games}
    wins = 0
    for result in results:
        if not result.is_success:
            continue
        name = names.get(result.game_id)
        if name is None:
            continue
        minimum = SPEED_DEMON_MINIMUM.get(name)
        if minimum is None:
            if result.max_attempts <= 1:
                continue
            minimum = 1
        if result.score == minimum:
            wins += 1
    return wins


def comeback_runs(results: list[GameResult]) -> int:
    """Number of times any game's streak was restarted after a missed day."""
    days_by_game: dict[UUID, set[date]] = {}
    for result in results:
        days_by_game.setdefault(result.game_id, set()).add(local_day(result.date))

    comebacks = 0
    for days in days_by_game.values():
        ordered = sorted(days)
        comebacks += sum(1 for previous, day in zip(ordered, ordered[1:]) if (day - previous).days > 1)
    return comebacks


def played_in_hours(results: list[GameResult], hours: range) -> int:
    return sum(1 for r in results if r.date.hour in hours)


def _metrics(
    results: list[GameResult],
    games: list[Game],
    streak_value: Optional[int],
    today: date,
) -> dict[AchievementCategory, Callable[[TieredAchievement], Optional[int]]]:
    """Per-category value functions. Returning None leaves the achievement as it was."""

    def streak_master(achievement: TieredAchievement) -> Optional[int]:
        if streak_value is None or not achievement.is_global:
            return None
        return streak_value

    return {
        AchievementCategory.STREAK_MASTER: streak_master,
        AchievementCategory.GAME_COLLECTOR: lambda a: len(results),
        AchievementCategory.PERFECTIONIST: lambda a: sum(1 for r in results if r.is_success),
        AchievementCategory.DAILY_DEVOTEE: lambda a: daily_devotee_days(results, today),
        AchievementCategory.VARIETY_PLAYER: lambda a: max(
            a.progress.current_value, len({r.game_id for r in results})
        ),
        AchievementCategory.SPEED_DEMON: lambda a: speed_demon_wins(results, games),
        AchievementCategory.EARLY_BIRD: lambda a: played_in_hours(results, EARLY_BIRD_HOURS),
        AchievementCategory.NIGHT_OWL: lambda a: played_in_hours(results, NIGHT_OWL_HOURS),
        AchievementCategory.COMEBACK_CHAMPION: lambda a: max(a.progress.current_value, comeback_runs(results)),
        AchievementCategory.MARATHON_RUNNER: lambda a: len({local_day(r.date) for r in results}),
    }


def _apply_metrics(
    achievements: Iterable[TieredAchievement],
    results: list[GameResult],
    games: list[Game],
    streak_value: Optional[int],
    now: datetime,
) -> tuple[list[TieredAchievement], list[AchievementUnlock]]:
    metrics = _metrics(results, games, streak_value, now.date())
    updated: list[TieredAchievement] = []
    unlocks: list[AchievementUnlock] = []

    for achievement in achievements:
        metric = metrics.get(achievement.category)
        value = metric(achievement) if metric else None
        if value is None:
            updated.append(achievement)
            continue

        new_achievement = achievement.with_progress(value, now)
        new_tier = new_achievement.progress.current_tier
        if new_tier is not None and new_tier != achievement.progress.current_tier:
            logger.info(f"Achievement unlocked: {new_achievement.display_name} {new_tier.display_name} ({value})")
            unlocks.append(AchievementUnlock(achievement=new_achievement, tier=new_tier, timestamp=now))
        updated.append(new_achievement)

    return updated, unlocks


def check_all_achievements(
    new_result: GameResult,
    all_results: Iterable[GameResult],
    streaks: Iterable[GameStreak],
    games: Iterable[Game],
    achievements: Iterable[TieredAchievement],
    now: Optional[datetime] = None,
) -> tuple[list[TieredAchievement], list[AchievementUnlock]]:
    """Update every achievement after `new_result` was recorded.

    `all_results` must already include `new_result`. Streak Master follows
    the streak of the game that was just played.
    """
    streak = next((s for s in streaks if s.game_id == new_result.game_id), None)
    return _apply_metrics(
        achievements,
        list(all_results),
        list(games),
        streak.current_streak if streak else None,
        now or local_now(),
    )


def recompute_achievements(
    all_results: Iterable[GameResult],
    streaks: Iterable[GameStreak],
    games: Iterable[Game],
    achievements: Iterable[TieredAchievement],
    now: Optional[datetime] = None,
) -> tuple[list[TieredAchievement], list[AchievementUnlock]]:
    """Update every achievement from history alone, e.g. after an import.

    With no single triggering result, Streak Master uses the best current
    streak across all games.
    """
    streaks = list(streaks)
    best_streak = max((s.current_streak for s in streaks), default=None)
    updated, unlocks = _apply_metrics(achievements, list(all_results), list(games), best_streak, now or local_now())
    logger.info(f"Recomputed achievements: {len(unlocks)} new unlocks")
    return updated, unlocks
