"""Grammars for the New York Times games and Pips."""

from typing import Optional

from tracker.parsers.grammar import GameGrammar, ScoreMatch, compile_pattern, first_group
from utils.dates import clock_to_seconds

# Wordle

WORDLE_PATTERN = compile_pattern(r"Wordle\s+(\d+(?:,\d+)*)\s+([X1-6])/6")
WORDLE_HASH_PATTERN = compile_pattern(r"Wordle\s+#(\d+(?:,\d+)*)\s+([X1-6])/6")


def attempts_match(puzzle: str, attempts: str, max_attempts: int = 6) -> ScoreMatch:
    """Shared shape for "N/6" games, where X means the puzzle was failed."""
    failed = attempts.upper() == "X"
    return ScoreMatch(
        score=None if failed else int(attempts),
        max_attempts=max_attempts,
        completed=not failed,
        parsed_data={"puzzleNumber": puzzle.replace(",", "")},
    )


def wordle_standard(text: str) -> Optional[ScoreMatch]:
    found = WORDLE_PATTERN.search(text)
    return attempts_match(found.group(1), found.group(2)) if found else None


def wordle_hash_number(text: str) -> Optional[ScoreMatch]:
    found = WORDLE_HASH_PATTERN.search(text)
    return attempts_match(found.group(1), found.group(2)) if found else None


# Connections

CONNECTIONS_PUZZLE_PATTERN = compile_pattern(r"Puzzle #(\d+)")
CONNECTIONS_HASH_PATTERN = compile_pattern(r"Connections\s+#(\d+)")
CONNECTIONS_SQUARES = frozenset("🟩🟨🟦🟪")


def connections_rows(text: str) -> list[str]:
    """Lines of exactly four coloured squares, one per guess."""
    rows = []
    for line in text.splitlines():
        line = line.strip()
        if len(line) == 4 and all(char in CONNECTIONS_SQUARES for char in line):
            rows.append(line)
    return rows


def _connections_match(puzzle: str, text: str) -> ScoreMatch:
    rows = connections_rows(text)
    # A guess is a solved category only when all four squares share a colour
    solved = sum(1 for row in rows if len(set(row)) == 1)
    strikes = len(rows) - solved
    return ScoreMatch(
        score=solved,
        max_attempts=4,
        completed=solved == 4,
        parsed_data={
            "puzzleNumber": puzzle,
            "totalGuesses": str(len(rows)),
            "solvedCategories": str(solved),
            "strikes": str(strikes),
            "emojiGrid": " ".join(rows),
        },
    )


def connections_puzzle_header(text: str) -> Optional[ScoreMatch]:
    if "connections" not in text.lower():
        return None
    puzzle = first_group(CONNECTIONS_PUZZLE_PATTERN, text)
    return _connections_match(puzzle, text) if puzzle else None


def connections_hash_header(text: str) -> Optional[ScoreMatch]:
    puzzle = first_group(CONNECTIONS_HASH_PATTERN, text)
    return _connections_match(puzzle, text) if puzzle else None


# Spelling Bee

SPELLING_BEE_PATTERN = compile_pattern(
    r"Spelling Bee[\s\S]*?Score:\s*(\d+)[\s\S]*?Words:\s*(\d+)[\s\S]*?Rank:\s*([A-Za-z\s]+)"
)
SPELLING_BEE_SCORE = compile_pattern(r"Score:\s*(\d+)")
SPELLING_BEE_WORDS = compile_pattern(r"Words:\s*(\d+)")
SPELLING_BEE_RANK = compile_pattern(r"Rank:\s*([A-Za-z ]+)")
TOP_RANKS = ("genius", "queen bee", "amazing")


def _spelling_bee_match(score: str, words: str, rank: str) -> ScoreMatch:
    # The rank pattern can run on into the next line
    rank = rank.strip().splitlines()[0].strip() if rank.strip() else ""
    return ScoreMatch(
        score=int(score),
        max_attempts=1000,
        completed=any(top in rank.lower() for top in TOP_RANKS),
        parsed_data={"score": score, "wordsFound": words, "rank": rank},
    )


def spelling_bee_ordered(text: str) -> Optional[ScoreMatch]:
    found = SPELLING_BEE_PATTERN.search(text)
    return _spelling_bee_match(*found.groups()) if found else None


def spelling_bee_any_order(text: str) -> Optional[ScoreMatch]:
    if "spelling bee" not in text.lower():
        return None
    score = first_group(SPELLING_BEE_SCORE, text)
    words = first_group(SPELLING_BEE_WORDS, text)
    rank = first_group(SPELLING_BEE_RANK, text)
    if score is None or words is None or rank is None:
        return None
    return _spelling_bee_match(score, words, rank)


# Mini Crossword

MINI_CROSSWORD_PATTERN = compile_pattern(r"Mini Crossword[\s\S]*?Completed in (\d+:\d+)")
MINI_CROSSWORD_SOLVED_PATTERN = compile_pattern(r"Mini Crossword in (\d+:\d+)")


def _mini_crossword_match(clock: str) -> ScoreMatch:
    seconds = clock_to_seconds(clock)
    return ScoreMatch(
        score=seconds,
        max_attempts=600,
        completed=True,
        parsed_data={"completionTime": clock, "totalSeconds": str(seconds)},
    )


def mini_crossword_completed(text: str) -> Optional[ScoreMatch]:
    clock = first_group(MINI_CROSSWORD_PATTERN, text)
    return _mini_crossword_match(clock) if clock else None


def mini_crossword_solved_in(text: str) -> Optional[ScoreMatch]:
    clock = first_group(MINI_CROSSWORD_SOLVED_PATTERN, text)
    return _mini_crossword_match(clock) if clock else None


# Strands

STRANDS_PATTERN = compile_pattern(r"Strands\s+#(\d+)")
STRANDS_PLAIN_PATTERN = compile_pattern(r"Strands\s+(\d+(?:,\d+)*)")
STRANDS_THEME_PATTERN = compile_pattern(r"[\"“”](.+?)[\"“”]")
HINT = "💡"


def _strands_match(puzzle: str, text: str) -> ScoreMatch:
    hints = text.count(HINT)
    theme = first_group(STRANDS_THEME_PATTERN, text) or ""
    return ScoreMatch(
        score=hints,
        max_attempts=10,
        completed=True,
        parsed_data={
            "puzzleNumber": puzzle.replace(",", ""),
            "hintCount": str(hints),
            "theme": theme.strip(),
            "gameType": "word_puzzle",
            "displayScore": "Perfect" if hints == 0 else f"{hints} hints",
        },
    )


def strands_hash_number(text: str) -> Optional[ScoreMatch]:
    puzzle = first_group(STRANDS_PATTERN, text)
    return _strands_match(puzzle, text) if puzzle else None


def strands_plain_number(text: str) -> Optional[ScoreMatch]:
    puzzle = first_group(STRANDS_PLAIN_PATTERN, text)
    return _strands_match(puzzle, text) if puzzle else None


# Pips

PIPS_PATTERN = compile_pattern(
    r"Pips #(\d+) (Easy|Medium|Hard)(?:\s*[🟢🟡🟠🟤⚫⚪])?[\s\S]*?(\d{1,2}:\d{2})"
)
PIPS_LOOSE_PATTERN = compile_pattern(r"Pips\s*#\s*(\d+)\s+(Easy|Medium|Hard)\b[\s\S]*?(\d{1,2}:\d{2})")
PIPS_DIFFICULTY = {"easy": 1, "medium": 2, "hard": 3}


def _pips_match(puzzle: str, difficulty: str, clock: str) -> ScoreMatch:
    return ScoreMatch(
        score=PIPS_DIFFICULTY[difficulty.lower()],
        max_attempts=3,
        completed=True,
        parsed_data={
            "puzzleNumber": puzzle,
            "difficulty": difficulty.capitalize(),
            "time": clock,
            "totalSeconds": str(clock_to_seconds(clock)),
        },
    )


def pips_single_line(text: str) -> Optional[ScoreMatch]:
    found = PIPS_PATTERN.search(text)
    return _pips_match(*found.groups()) if found else None


def pips_multi_line(text: str) -> Optional[ScoreMatch]:
    found = PIPS_LOOSE_PATTERN.search(text)
    return _pips_match(*found.groups()) if found else None


GRAMMARS = {
    "wordle": GameGrammar(
        "Wordle",
        [wordle_standard, wordle_hash_number],
        puzzle_pattern=r"Wordle\s+#?\d",
    ),
    "connections": GameGrammar(
        "Connections",
        [connections_puzzle_header, connections_hash_header],
        puzzle_pattern=r"(?:Puzzle|Connections)\s+#\d",
    ),
    "spellingbee": GameGrammar("Spelling Bee", [spelling_bee_ordered, spelling_bee_any_order]),
    "minicrossword": GameGrammar("Mini Crossword", [mini_crossword_completed, mini_crossword_solved_in]),
    "strands": GameGrammar(
        "Strands",
        [strands_hash_number, strands_plain_number],
        puzzle_pattern=r"Strands\s+#?\d",
    ),
    "pips": GameGrammar(
        "Pips",
        [pips_single_line, pips_multi_line],
        puzzle_pattern=r"Pips\s*#\s*\d",
    ),
}
