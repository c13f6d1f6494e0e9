"""Grammars for the LinkedIn daily games."""

from typing import Optional

from tracker.parsers.grammar import KEYCAP, GameGrammar, ScoreMatch, compile_pattern, first_group
from utils.dates import clock_to_seconds

CLOCK_PATTERN = r"(\d{1,2}:\d{2})"
COMPLETION_PATTERN = compile_pattern(r"✅|🏁|👑|🌗|🌙|🪜|completed|solved")


def _timed_match(
    puzzle: str, clock: Optional[str], game_type: str, **extra: str
) -> ScoreMatch:
    return ScoreMatch(
        score=clock_to_seconds(clock) if clock else 0,
        max_attempts=int(extra.get("backtrackCount", "0")),
        completed=True,
        parsed_data={
            "puzzleNumber": puzzle,
            "time": clock or "",
            "gameType": game_type,
            "displayScore": clock or "Completed",
            **extra,
        },
    )


def timed_grammar(name: str, game_type: str) -> GameGrammar:
    """Grammar for games that share "<Name> #N" and a solve time.

    A share without a time is still accepted when it shows the puzzle was
    finished; it gets a score of 0 and "Completed" as its display score.
    """
    with_time = compile_pattern(rf"{name}\s+#(\d+)[\s\S]*?{CLOCK_PATTERN}")
    header = compile_pattern(rf"{name}\s+#(\d+)")

    def with_solve_time(text: str) -> Optional[ScoreMatch]:
        found = with_time.search(text)
        return _timed_match(found.group(1), found.group(2), game_type) if found else None

    def completed_without_time(text: str) -> Optional[ScoreMatch]:
        puzzle = first_group(header, text)
        if puzzle is None or not COMPLETION_PATTERN.search(text):
            return None
        return _timed_match(puzzle, None, game_type)

    with_solve_time.__name__ = f"{name.lower()}_with_solve_time"
    completed_without_time.__name__ = f"{name.lower()}_completed_without_time"
    return GameGrammar(name, [with_solve_time, completed_without_time], puzzle_pattern=rf"{name}\s+#\d")


# Zip

ZIP_WITH_TIME = compile_pattern(rf"Zip\s+#(\d+)[\s\S]*?{CLOCK_PATTERN}")
ZIP_HEADER = compile_pattern(r"Zip\s+#(\d+)")
BACKTRACK_PATTERNS = (
    compile_pattern(r"With\s+(\d+)\s+backtrack"),
    compile_pattern(r"(\d+)\s+backtracks?"),
)


def count_backtracks(text: str) -> str:
    for pattern in BACKTRACK_PATTERNS:
        count = first_group(pattern, text)
        if count is not None:
            return count
    return "0"


def zip_with_solve_time(text: str) -> Optional[ScoreMatch]:
    found = ZIP_WITH_TIME.search(text)
    if found is None:
        return None
    return _timed_match(
        found.group(1), found.group(2), "connectivity_puzzle", backtrackCount=count_backtracks(text)
    )


def zip_completed_without_time(text: str) -> Optional[ScoreMatch]:
    puzzle = first_group(ZIP_HEADER, text)
    if puzzle is None or not COMPLETION_PATTERN.search(text):
        return None
    return _timed_match(puzzle, None, "connectivity_puzzle", backtrackCount=count_backtracks(text))


# Pinpoint

PINPOINT_EMOJI_PATTERN = compile_pattern(r"Pinpoint\s+#(\d+)[\s\S]*?\((\d+)/(\d+)\)")
PINPOINT_HEADER = compile_pattern(r"Pinpoint\s+#(\d+)")
PINPOINT_GUESS_PATTERNS = (
    compile_pattern(r"\|\s*(\d+)\s+guesses?"),
    compile_pattern(r"(\d+)\s+guesses?"),
)
PINPOINT_KEYCAP = compile_pattern(rf"\d+{KEYCAP}")
PIN = "📌"


def _pinpoint_match(puzzle: str, guesses: int, max_attempts: int, completed: bool, share_format: str) -> ScoreMatch:
    return ScoreMatch(
        score=guesses if guesses > 0 else 1,
        max_attempts=max_attempts,
        completed=completed,
        parsed_data={
            "puzzleNumber": puzzle,
            "guessCount": str(guesses),
            "gameType": "word_association",
            "displayScore": f"{guesses} guesses" if guesses > 0 else "Completed",
            "shareFormat": share_format,
        },
    )


def pinpoint_emoji_grid(text: str) -> Optional[ScoreMatch]:
    """Newer shares: "🤔 📌 ⬜ ⬜ ⬜ (2/5)"."""
    found = PINPOINT_EMOJI_PATTERN.search(text)
    if found is None:
        return None
    return _pinpoint_match(
        found.group(1), int(found.group(2)), int(found.group(3)), PIN in text, "emoji_based"
    )


def pinpoint_guess_lines(text: str) -> Optional[ScoreMatch]:
    """Older shares with "| N guesses" or one keycap line per guess."""
    puzzle = first_group(PINPOINT_HEADER, text)
    if puzzle is None:
        return None

    count = None
    for pattern in PINPOINT_GUESS_PATTERNS:
        count = first_group(pattern, text)
        if count is not None:
            break
    guesses = int(count) if count is not None else len(PINPOINT_KEYCAP.findall(text))

    completed = "100% match" in text.lower() or PIN in text
    return _pinpoint_match(puzzle, guesses, 5, completed, "original")


# Mini Sudoku

MINI_SUDOKU_PATTERN = compile_pattern(r"Mini Sudoku\s+#(\d+)")
MINI_SUDOKU_LEGACY_PATTERN = compile_pattern(r"Mini Sudoku.*?puzzle(?:.*?#(\d+))?")
MINI_SUDOKU_CLOCK = compile_pattern(CLOCK_PATTERN)


def _mini_sudoku_match(puzzle: str, text: str) -> ScoreMatch:
    parsed_data = {"puzzleNumber": puzzle, "gameType": "sudoku"}
    clock = first_group(MINI_SUDOKU_CLOCK, text)
    if clock:
        parsed_data["time"] = clock
    return ScoreMatch(score=1, max_attempts=1, completed=True, parsed_data=parsed_data)


def mini_sudoku_numbered(text: str) -> Optional[ScoreMatch]:
    puzzle = first_group(MINI_SUDOKU_PATTERN, text)
    return _mini_sudoku_match(puzzle, text) if puzzle else None


def mini_sudoku_legacy(text: str) -> Optional[ScoreMatch]:
    found = MINI_SUDOKU_LEGACY_PATTERN.search(text)
    if found is None:
        return None
    return _mini_sudoku_match(found.group(1) or "1", text)


GRAMMARS = {
    "linkedinqueens": timed_grammar("Queens", "logic_puzzle"),
    "linkedintango": timed_grammar("Tango", "logic_puzzle"),
    "linkedincrossclimb": timed_grammar("Crossclimb", "word_association"),
    "linkedinzip": GameGrammar("Zip", [zip_with_solve_time, zip_completed_without_time], puzzle_pattern=r"Zip\s+#\d"),
    "linkedinpinpoint": GameGrammar(
        "Pinpoint",
        [pinpoint_emoji_grid, pinpoint_guess_lines],
        puzzle_pattern=r"Pinpoint\s+#\d",
    ),
    "linkedinminisudoku": GameGrammar("Mini Sudoku", [mini_sudoku_numbered, mini_sudoku_legacy]),
}
