"""Streak calculation from result history."""

import logging
from typing import Iterable
from uuid import UUID

from models import Game, GameResult, GameStreak
from utils.dates import day_gap

logger = logging.getLogger(__name__)


def rebuild_streak(game: Game, results: Iterable[GameResult]) -> GameStreak:
    """Recompute a game's streak from scratch.

    Results for other games are ignored. A streak counts calendar days with
    a completed result; several plays on one day count once, a failure ends
    the streak, and a gap of more than a day starts a new one. Streaks never
    decay just because time has passed since the last play.
    """
    history = sorted((r for r in results if r.game_id == game.id), key=lambda r: r.date)
    if not history:
        return GameStreak.empty(game)

    current = 0
    best = 0
    start = None
    last_played = None
    last_completed = None

    for result in history:
        if result.completed:
            if current == 0:
                current = 1
                start = result.date
            else:
                gap = day_gap(last_completed.date, result.date)
                if gap == 1:
                    current += 1
                elif gap > 1:
                    best = max(best, current)
                    current = 1
                    start = result.date
            last_completed = result
        else:
            best = max(best, current)
            current = 0
            start = None
        last_played = result.date

    best = max(best, current)

    return GameStreak(
        game_id=game.id,
        game_name=game.display_name,
        current_streak=current,
        max_streak=best,
        total_games_played=len(history),
        total_games_completed=sum(1 for r in history if r.completed),
        last_played_date=last_played,
        streak_start_date=start,
    )


def rebuild_all_streaks(games: Iterable[Game], results: Iterable[GameResult]) -> list[GameStreak]:
    """One streak per game, in catalog order."""
    games = list(games)
    by_game: dict[UUID, list[GameResult]] = {game.id: [] for game in games}
    for result in results:
        if result.game_id not in by_game:
            logger.debug(f"Skipping result {result.id} for unknown game {result.game_name}")
            continue
        by_game[result.game_id].append(result)

    streaks = [rebuild_streak(game, by_game[game.id]) for game in games]
    logger.info(f"Rebuilt streaks for {len(streaks)} games")
    return streaks


def apply_result(streak: GameStreak, result: GameResult) -> GameStreak:
    """Fold one new result into an existing streak.

    This assumes `result` is newer than everything already counted.
    """
    current = streak.current_streak
    best = streak.max_streak
    start = streak.streak_start_date

    if result.completed:
        if streak.last_played_date is None or current == 0:
            current = 1
            start = result.date
        else:
            gap = day_gap(streak.last_played_date, result.date)
            if gap == 1:
                current += 1
            elif gap > 1:
                current = 1
                start = result.date
        best = max(best, current)
    else:
        current = 0
        start = None

    return streak.model_copy(
        update={
            "current_streak": current,
            "max_streak": best,
            "total_games_played": streak.total_games_played + 1,
            "total_games_completed": streak.total_games_completed + (1 if result.completed else 0),
            "last_played_date": result.date,
            "streak_start_date": start,
        }
    )
