"""Grammars for the multi-board word games, Nerdle, and anything without its own grammar."""

from typing import Optional

from tracker.parsers.grammar import KEYCAP, GameGrammar, ScoreMatch, compile_pattern, first_group
from tracker.parsers.nyt import attempts_match

FAILED_BOARD = "🟥"

# Quordle

QUORDLE_PATTERN = compile_pattern(r"Daily Quordle\s+(\d+)")
QUORDLE_HASH_PATTERN = compile_pattern(r"Daily Quordle\s+#(\d+)")
QUORDLE_BOARD = compile_pattern(rf"([0-9]){KEYCAP}|{FAILED_BOARD}")


def quordle_scores(text: str) -> list[int]:
    """Guesses per board in share order, with -1 for a board that was failed."""
    return [int(found.group(1)) if found.group(1) else -1 for found in QUORDLE_BOARD.finditer(text)]


def _quordle_match(puzzle: str, text: str) -> ScoreMatch:
    scores = quordle_scores(text)
    failed = scores.count(-1)
    solved = [s for s in scores if s > 0]

    score = None
    if failed == 0 and solved:
        score = sum(solved) // len(solved)

    parsed_data = {"puzzleNumber": puzzle}
    if len(scores) >= 4:
        for i, value in enumerate(scores[:4], start=1):
            parsed_data[f"score{i}"] = "failed" if value == -1 else str(value)
        parsed_data["completedPuzzles"] = str(len(solved))
        parsed_data["failedPuzzles"] = str(failed)

    return ScoreMatch(
        score=score,
        max_attempts=9,
        completed=failed == 0 and len(solved) == 4,
        parsed_data=parsed_data,
    )


def quordle_plain_number(text: str) -> Optional[ScoreMatch]:
    puzzle = first_group(QUORDLE_PATTERN, text)
    return _quordle_match(puzzle, text) if puzzle else None


def quordle_hash_number(text: str) -> Optional[ScoreMatch]:
    puzzle = first_group(QUORDLE_HASH_PATTERN, text)
    return _quordle_match(puzzle, text) if puzzle else None


# Octordle

OCTORDLE_PATTERN = compile_pattern(r"Daily Octordle #(\d+)")
OCTORDLE_PLAIN_PATTERN = compile_pattern(r"Daily Octordle\s+(\d+)")
OCTORDLE_SCORE = compile_pattern(r"Score:\s*(\d+)")
OCTORDLE_WORD = compile_pattern(rf"([1-9]){KEYCAP}|🔟|🕚|🕛|{FAILED_BOARD}")
OCTORDLE_EMOJI_VALUES = {"🔟": 10, "🕚": 11, "🕛": 12, FAILED_BOARD: 13}


def octordle_words(text: str) -> list[int]:
    """Guess count per word from the grid lines. A failed word counts 13."""
    values = []
    for line in text.splitlines():
        if "daily octordle" in line.lower() or "score:" in line.lower():
            continue
        for found in OCTORDLE_WORD.finditer(line):
            if found.group(1):
                values.append(int(found.group(1)))
            else:
                values.append(OCTORDLE_EMOJI_VALUES[found.group(0)])
    return values


def _octordle_match(puzzle: str, text: str) -> ScoreMatch:
    words = octordle_words(text)
    failed = text.count(FAILED_BOARD)
    completed_words = len(words) - words.count(OCTORDLE_EMOJI_VALUES[FAILED_BOARD])

    stated = first_group(OCTORDLE_SCORE, text)
    score = int(stated) if stated is not None else sum(words)

    return ScoreMatch(
        score=score,
        max_attempts=score,
        completed=failed == 0,
        parsed_data={
            "puzzleNumber": puzzle,
            "totalScore": str(score),
            "completedWords": str(completed_words),
            "failedWords": str(failed),
            "completionRate": f"{completed_words}/8",
            "hasFailedWords": "true" if failed else "false",
            "gameType": "word_variant",
        },
    )


def octordle_hash_number(text: str) -> Optional[ScoreMatch]:
    puzzle = first_group(OCTORDLE_PATTERN, text)
    return _octordle_match(puzzle, text) if puzzle else None


def octordle_plain_number(text: str) -> Optional[ScoreMatch]:
    puzzle = first_group(OCTORDLE_PLAIN_PATTERN, text)
    return _octordle_match(puzzle, text) if puzzle else None


# Nerdle

NERDLE_PATTERN = compile_pattern(r"nerdlegame\s+(\d+)\s+([X1-6])/6")
NERDLE_SHORT_PATTERN = compile_pattern(r"nerdle\s+#?(\d+)\s+([X1-6])/6")


def nerdle_game(text: str) -> Optional[ScoreMatch]:
    found = NERDLE_PATTERN.search(text)
    return attempts_match(found.group(1), found.group(2)) if found else None


def nerdle_short(text: str) -> Optional[ScoreMatch]:
    found = NERDLE_SHORT_PATTERN.search(text)
    return attempts_match(found.group(1), found.group(2)) if found else None


# Everything else

GENERIC_FRACTION = compile_pattern(r"([X\d])/(\d+)")
GENERIC_COUNT = compile_pattern(r"in (\d+) (?:guesses|attempts|tries)")


def generic_fraction(text: str) -> Optional[ScoreMatch]:
    found = GENERIC_FRACTION.search(text)
    if found is None:
        return None
    failed = found.group(1).upper() == "X"
    return ScoreMatch(
        score=None if failed else int(found.group(1)),
        max_attempts=int(found.group(2)) or 6,
        completed=not failed,
        parsed_data={"source": "manual"},
    )


def generic_count(text: str) -> Optional[ScoreMatch]:
    count = first_group(GENERIC_COUNT, text)
    if count is None:
        return None
    return ScoreMatch(score=int(count), max_attempts=6, completed=True, parsed_data={"source": "manual"})


def generic_grammar(display_name: str) -> GameGrammar:
    return GameGrammar(display_name, [generic_fraction, generic_count])


GRAMMARS = {
    "quordle": GameGrammar(
        "Quordle",
        [quordle_plain_number, quordle_hash_number],
        puzzle_pattern=r"Daily Quordle\s+#?\d",
    ),
    "octordle": GameGrammar(
        "Octordle",
        [octordle_hash_number, octordle_plain_number],
        puzzle_pattern=r"Daily Octordle\s+#?\d",
    ),
    "nerdle": GameGrammar(
        "nerdle",
        [nerdle_game, nerdle_short],
        puzzle_pattern=r"nerdle(?:game)?\s+#?\d",
    ),
}
