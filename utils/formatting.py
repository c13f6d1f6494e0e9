"""Message formatting utilities for results, streaks and achievements."""

from datetime import date
from typing import TYPE_CHECKING, Iterable

from models import AchievementUnlock, GameResult, GameStreak, StreakStatus
from tracker import catalog
from tracker.parsers.errors import ParsingError
from utils.dates import seconds_to_clock

if TYPE_CHECKING:
    from tracker.services.ingestion_service import IngestOutcome

LINKEDIN_TIME_GAMES = frozenset({"linkedinzip", "linkedintango", "linkedinqueens", "linkedincrossclimb"})

PIPS_DIFFICULTY_EMOJI = {"easy": "🟢", "medium": "🟡", "hard": "🟠"}

# Indexed by number of boards/categories solved
QUORDLE_EMOJI = ["❌", "🥇", "🥈", "🥉", "🏆"]
CONNECTIONS_EMOJI = ["❌", "🥉", "🥈", "🥇", "🏆"]

MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}

STREAK_STATUS_EMOJI = {
    StreakStatus.ACTIVE: "🔥",
    StreakStatus.INACTIVE: "💤",
    StreakStatus.BROKEN: "💔",
}


def game_display_name(result: GameResult) -> str:
    game = catalog.get_game(result.game_id)
    return game.display_name if game else result.game_name


def _int_or_zero(value: str | None) -> int:
    try:
        return int(value) if value else 0
    except ValueError:
        return 0


def display_score(result: GameResult) -> str:
    """Short score text in the way each game presents its own results."""
    name = result.game_name.lower()
    data = result.parsed_data

    if name == "quordle" and "score1" in data:
        scores = [data.get(f"score{i}", "failed") for i in range(1, 5)]
        return "-".join("X" if s == "failed" else s for s in scores)

    if name == "pips":
        difficulty = data.get("difficulty", "")
        time = data.get("time", "")
        return f"{difficulty} - {time}" if time else difficulty

    if name == "connections":
        solved = data.get("solvedCategories") or str(result.score or 0)
        return f"{solved}/4"

    if name in LINKEDIN_TIME_GAMES:
        if data.get("time"):
            return data["time"]
        if result.score:
            return seconds_to_clock(result.score)
        return "Completed"

    if name == "linkedinpinpoint":
        guesses = _int_or_zero(data.get("guessCount")) or (result.score or 0)
        return f"{guesses} guesses" if guesses > 0 else "Completed"

    if name == "strands":
        hints = _int_or_zero(data.get("hintCount")) if "hintCount" in data else (result.score or 0)
        return "Perfect" if hints == 0 else f"{hints} hints"

    if name == "octordle":
        return str(result.score) if result.score is not None else "Failed"

    if result.score is None:
        return f"X/{result.max_attempts}"
    return f"{result.score}/{result.max_attempts}"


def score_emoji(result: GameResult) -> str:
    name = result.game_name.lower()
    data = result.parsed_data

    if name == "quordle":
        solved = min(4, _int_or_zero(data.get("completedPuzzles")))
        return QUORDLE_EMOJI[solved]

    if name == "connections":
        solved = min(4, result.score or 0)
        return CONNECTIONS_EMOJI[solved]

    if name == "pips":
        return PIPS_DIFFICULTY_EMOJI.get(data.get("difficulty", "").lower(), "✅")

    if name == "linkedinpinpoint" and not result.completed:
        return "❌"

    if result.score is None:
        return "❌"
    return MEDALS.get(result.score, "✅")


def format_result_line(result: GameResult) -> str:
    """One-line summary, e.g. "🥉 **Wordle** #942 3/6"."""
    puzzle = f" #{result.puzzle_number}" if result.puzzle_number else ""
    return f"{score_emoji(result)} **{game_display_name(result)}**{puzzle} {display_score(result)}"


def format_streak_summary(streaks: Iterable[GameStreak], today: date | None = None) -> str:
    """Format the streak overview, best current streak first."""
    lines = [
        "# 🔥 Streaks",
        "",
    ]

    played = [s for s in streaks if s.total_games_played > 0]
    if not played:
        lines.append("*No results yet! Share a game result to get started*")
        return "\n".join(lines)

    for streak in sorted(played, key=lambda s: (s.current_streak, s.max_streak), reverse=True):
        status = STREAK_STATUS_EMOJI[streak.status(today)]
        days = "day" if streak.current_streak == 1 else "days"
        lines.append(
            f"{status} **{streak.game_name}** - {streak.current_streak} {days} "
            f"(best {streak.max_streak}, {streak.total_games_completed}/{streak.total_games_played} completed, "
            f"{streak.completion_rate:.0%})"
        )

    return "\n".join(lines)


def format_unlock_message(unlock: AchievementUnlock) -> str:
    achievement = unlock.achievement
    return (
        f"{achievement.category.icon_name} **{achievement.display_name}** "
        f"{unlock.tier.display_name} unlocked! ({achievement.progress_description})"
    )


def format_parse_failure(error: ParsingError) -> str:
    """Explain a parse failure and what the user can do about it."""
    return f"❌ {error.description}: {error.failure_reason}\n💡 {error.recovery_suggestion}"


def format_ingest_outcome(outcome: "IngestOutcome") -> str:
    lines = [outcome.message]
    for unlock in outcome.unlocks:
        lines.append(format_unlock_message(unlock))
    return "\n".join(lines)
