"""Default tier thresholds for each achievement category."""

from typing import Iterable

from models import AchievementCategory, AchievementTier, Game, TieredAchievement, TierRequirement

TIER_THRESHOLDS: dict[AchievementCategory, tuple[int, ...]] = {
    AchievementCategory.STREAK_MASTER: (3, 7, 14, 30, 60, 100),
    AchievementCategory.GAME_COLLECTOR: (10, 50, 100, 250, 500, 1000),
    AchievementCategory.PERFECTIONIST: (5, 25, 50, 100, 250, 500),
    AchievementCategory.DAILY_DEVOTEE: (3, 7, 14, 30, 60),
    AchievementCategory.SPEED_DEMON: (1, 5, 10, 20, 50, 100),
    AchievementCategory.EARLY_BIRD: (1, 5, 10, 20),
    AchievementCategory.NIGHT_OWL: (1, 5, 10, 20),
    AchievementCategory.COMEBACK_CHAMPION: (1, 7, 14, 30),
    AchievementCategory.MARATHON_RUNNER: (10, 30, 60, 100, 365),
}

VARIETY_STEPS = (3, 5, 8, 12, 15)


def variety_thresholds(game_count: int) -> tuple[int, ...]:
    """Thresholds for Variety Player, capped at the number of games on offer.

    Values stay strictly increasing and stop once every game is required.
    """
    total = max(1, game_count)
    thresholds: list[int] = []
    for step in (*VARIETY_STEPS, total):
        value = min(step, total)
        if thresholds and value <= thresholds[-1]:
            continue
        thresholds.append(value)
        if value == total:
            break
    return tuple(thresholds)


def requirements_for(thresholds: Iterable[int]) -> list[TierRequirement]:
    return [
        TierRequirement(tier=tier, threshold=threshold)
        for tier, threshold in zip(AchievementTier, thresholds)
    ]


def create_default_achievements(games: Iterable[Game]) -> list[TieredAchievement]:
    """One fresh achievement per category, in category order."""
    game_count = len(list(games))
    achievements = []
    for category in AchievementCategory:
        if category is AchievementCategory.VARIETY_PLAYER:
            thresholds = variety_thresholds(game_count)
        else:
            thresholds = TIER_THRESHOLDS[category]
        achievements.append(TieredAchievement(category=category, requirements=requirements_for(thresholds)))
    return achievements
