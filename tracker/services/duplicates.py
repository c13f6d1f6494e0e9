"""Duplicate result detection."""

from typing import Iterable, Optional

from config import Config
from models import GameResult


def clean_puzzle_number(puzzle_number: Optional[str]) -> str:
    if not puzzle_number:
        return ""
    return puzzle_number.replace(",", "").replace(" ", "")


def duplicate_key(result: GameResult) -> Optional[str]:
    """Key that identifies the same puzzle being shared twice, if the result has one.

    Pips puzzles come in three difficulties, so those are keyed separately.
    """
    puzzle = clean_puzzle_number(result.puzzle_number)
    if not puzzle or puzzle.lower() == "unknown":
        return None
    if result.game_name.lower() == "pips":
        difficulty = result.parsed_data.get("difficulty", "")
        return f"{result.game_id}:{puzzle}-{difficulty}"
    return f"{result.game_id}:{puzzle}"


def is_duplicate(
    result: GameResult,
    existing: Iterable[GameResult],
    dedupe_same_day: Optional[bool] = None,
) -> bool:
    """Check whether `result` is already represented in `existing`.

    Results without a puzzle number are only matched by id, unless
    `dedupe_same_day` (default from config) is set, in which case another
    result for the same game on the same day counts as a duplicate.
    """
    if dedupe_same_day is None:
        dedupe_same_day = Config.DEDUPE_SAME_DAY_WITHOUT_PUZZLE

    key = duplicate_key(result)
    for other in existing:
        if other.id == result.id:
            return True
        if other.game_id != result.game_id:
            continue
        if key is not None:
            if duplicate_key(other) == key:
                return True
        elif dedupe_same_day and other.day == result.day:
            return True
    return False
