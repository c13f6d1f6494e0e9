"""Static catalog of supported games and share-text game detection."""

import re
from typing import Optional
from uuid import UUID

from models import Game, GameCategory, ScoringModel


def _game_id(suffix: str) -> UUID:
    return UUID(f"550e8400-e29b-41d4-a716-446655440{suffix}")


WORDLE = Game(
    id=_game_id("000"),
    name="wordle",
    display_name="Wordle",
    url="https://www.nytimes.com/games/wordle",
    category=GameCategory.NYT_GAMES,
    scoring_model=ScoringModel.LOWER_ATTEMPTS,
    max_attempts=6,
    share_marker="Wordle",
    parsed_data_keys=("puzzleNumber",),
    is_popular=True,
)

QUORDLE = Game(
    id=_game_id("001"),
    name="quordle",
    display_name="Quordle",
    url="https://www.quordle.com",
    category=GameCategory.WORD,
    scoring_model=ScoringModel.LOWER_ATTEMPTS,
    max_attempts=9,
    share_marker="Daily Quordle",
    parsed_data_keys=(
        "puzzleNumber",
        "score1",
        "score2",
        "score3",
        "score4",
        "completedPuzzles",
        "failedPuzzles",
    ),
    is_popular=True,
)

NERDLE = Game(
    id=_game_id("002"),
    name="nerdle",
    display_name="Nerdle",
    url="https://nerdlegame.com",
    category=GameCategory.MATH,
    scoring_model=ScoringModel.LOWER_ATTEMPTS,
    max_attempts=6,
    share_marker="nerdlegame",
    parsed_data_keys=("puzzleNumber",),
    is_popular=True,
)

CONNECTIONS = Game(
    id=_game_id("003"),
    name="connections",
    display_name="Connections",
    url="https://www.nytimes.com/games/connections",
    category=GameCategory.NYT_GAMES,
    scoring_model=ScoringModel.HIGHER_IS_BETTER,
    max_attempts=4,
    share_marker="Connections",
    parsed_data_keys=("puzzleNumber", "totalGuesses", "solvedCategories", "strikes", "emojiGrid"),
    is_popular=True,
)

SPELLING_BEE = Game(
    id=_game_id("004"),
    name="spellingbee",
    display_name="Spelling Bee",
    url="https://www.nytimes.com/puzzles/spelling-bee",
    category=GameCategory.NYT_GAMES,
    scoring_model=ScoringModel.HIGHER_IS_BETTER,
    share_marker="Spelling Bee",
    parsed_data_keys=("score", "wordsFound", "rank"),
    is_popular=True,
)

MINI_CROSSWORD = Game(
    id=_game_id("005"),
    name="minicrossword",
    display_name="Mini Crossword",
    url="https://www.nytimes.com/crosswords/game/mini",
    category=GameCategory.NYT_GAMES,
    scoring_model=ScoringModel.LOWER_TIME_SECONDS,
    share_marker="Mini Crossword",
    parsed_data_keys=("completionTime", "totalSeconds"),
    is_popular=True,
)

PIPS = Game(
    id=_game_id("006"),
    name="pips",
    display_name="Pips",
    url="https://www.nytimes.com/games/pips",
    category=GameCategory.PUZZLE,
    scoring_model=ScoringModel.LOWER_TIME_SECONDS,
    max_attempts=3,
    share_marker="Pips #",
    parsed_data_keys=("puzzleNumber", "difficulty", "time", "totalSeconds"),
    is_popular=True,
)

STRANDS = Game(
    id=_game_id("007"),
    name="strands",
    display_name="Strands",
    url="https://www.nytimes.com/games/strands",
    category=GameCategory.NYT_GAMES,
    scoring_model=ScoringModel.LOWER_HINTS,
    max_attempts=10,
    share_marker="Strands #",
    parsed_data_keys=("puzzleNumber", "hintCount", "theme", "gameType", "displayScore"),
    is_popular=True,
)

LINKEDIN_QUEENS = Game(
    id=_game_id("100"),
    name="linkedinqueens",
    display_name="Queens",
    url="https://www.linkedin.com/games/queens",
    category=GameCategory.LINKEDIN_GAMES,
    scoring_model=ScoringModel.LOWER_TIME_SECONDS,
    share_marker="Queens #",
    parsed_data_keys=("puzzleNumber", "time", "gameType", "displayScore"),
)

LINKEDIN_TANGO = Game(
    id=_game_id("101"),
    name="linkedintango",
    display_name="Tango",
    url="https://www.linkedin.com/games/tango",
    category=GameCategory.LINKEDIN_GAMES,
    scoring_model=ScoringModel.LOWER_TIME_SECONDS,
    share_marker="Tango #",
    parsed_data_keys=("puzzleNumber", "time", "gameType", "displayScore"),
)

LINKEDIN_CROSSCLIMB = Game(
    id=_game_id("102"),
    name="linkedincrossclimb",
    display_name="Crossclimb",
    url="https://www.linkedin.com/games/crossclimb",
    category=GameCategory.LINKEDIN_GAMES,
    scoring_model=ScoringModel.LOWER_TIME_SECONDS,
    share_marker="Crossclimb #",
    parsed_data_keys=("puzzleNumber", "time", "gameType", "displayScore"),
)

LINKEDIN_PINPOINT = Game(
    id=_game_id("103"),
    name="linkedinpinpoint",
    display_name="Pinpoint",
    url="https://www.linkedin.com/games/pinpoint",
    category=GameCategory.LINKEDIN_GAMES,
    scoring_model=ScoringModel.LOWER_GUESSES,
    max_attempts=5,
    share_marker="Pinpoint #",
    parsed_data_keys=("puzzleNumber", "guessCount", "gameType", "displayScore", "shareFormat"),
)

LINKEDIN_ZIP = Game(
    id=_game_id("104"),
    name="linkedinzip",
    display_name="Zip",
    url="https://www.linkedin.com/games/zip",
    category=GameCategory.LINKEDIN_GAMES,
    scoring_model=ScoringModel.LOWER_TIME_SECONDS,
    share_marker="Zip #",
    parsed_data_keys=("puzzleNumber", "time", "backtrackCount", "gameType", "displayScore"),
)

LINKEDIN_MINI_SUDOKU = Game(
    id=_game_id("105"),
    name="linkedinminisudoku",
    display_name="Mini Sudoku",
    url="https://www.linkedin.com/games/mini-sudoku",
    category=GameCategory.LINKEDIN_GAMES,
    scoring_model=ScoringModel.LOWER_TIME_SECONDS,
    max_attempts=1,
    share_marker="Mini Sudoku",
    parsed_data_keys=("puzzleNumber", "gameType", "time"),
)

OCTORDLE = Game(
    id=_game_id("200"),
    name="octordle",
    display_name="Octordle",
    url="https://octordle.com",
    category=GameCategory.WORD,
    scoring_model=ScoringModel.LOWER_ATTEMPTS,
    share_marker="Daily Octordle",
    parsed_data_keys=(
        "puzzleNumber",
        "totalScore",
        "completedWords",
        "failedWords",
        "completionRate",
        "hasFailedWords",
        "gameType",
    ),
    is_popular=True,
)

ALL_GAMES: tuple[Game, ...] = (
    WORDLE,
    QUORDLE,
    NERDLE,
    PIPS,
    CONNECTIONS,
    SPELLING_BEE,
    MINI_CROSSWORD,
    STRANDS,
    LINKEDIN_QUEENS,
    LINKEDIN_TANGO,
    LINKEDIN_CROSSCLIMB,
    LINKEDIN_PINPOINT,
    LINKEDIN_ZIP,
    LINKEDIN_MINI_SUDOKU,
    OCTORDLE,
)

# First match wins. Connections needs two markers and is checked before these.
DETECTION_RULES: tuple[tuple[str, Game], ...] = (
    ("Pips #", PIPS),
    ("Daily Quordle", QUORDLE),
    ("Daily Octordle", OCTORDLE),
    ("Wordle", WORDLE),
    ("nerdlegame", NERDLE),
    ("Strands #", STRANDS),
    ("Mini Sudoku", LINKEDIN_MINI_SUDOKU),
    ("Queens #", LINKEDIN_QUEENS),
    ("Tango #", LINKEDIN_TANGO),
    ("Crossclimb #", LINKEDIN_CROSSCLIMB),
    ("Pinpoint #", LINKEDIN_PINPOINT),
    ("Zip #", LINKEDIN_ZIP),
    ("Spelling Bee", SPELLING_BEE),
    ("Mini Crossword", MINI_CROSSWORD),
)

# Games that show up in shared text but have no parser
UNSUPPORTED_GAME_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Letter Boxed", re.compile(r"Letter Boxed.*?in \d+ words", re.IGNORECASE)),
    ("Waffle", re.compile(r"#waffle\d+ \d+/5", re.IGNORECASE)),
    ("Mathle", re.compile(r"Mathle \d+ [1-6X]/6", re.IGNORECASE)),
    ("Numberle", re.compile(r"Numberle \d+ [1-6X]/6", re.IGNORECASE)),
    ("Worldle", re.compile(r"#Worldle #\d+ [1-6X]/6", re.IGNORECASE)),
    ("Globle", re.compile(r"Globle.*?in \d+ guesses", re.IGNORECASE)),
    ("Contexto", re.compile(r"Contexto \d+.*?in \d+ guesses", re.IGNORECASE)),
    ("Framed", re.compile(r"Framed #\d+", re.IGNORECASE)),
    ("Crosswordle", re.compile(r"Crosswordle \d+.*?in \d+", re.IGNORECASE)),
    ("Lyricle", re.compile(r"Lyricle \d+ [1-6X]/6", re.IGNORECASE)),
    ("Absurdle", re.compile(r"Absurdle.*?in \d+ guesses", re.IGNORECASE)),
    ("Semantle", re.compile(r"Semantle #\d+.*?in \d+ guesses", re.IGNORECASE)),
    ("Dordle", re.compile(r"Daily Dordle #\d+", re.IGNORECASE)),
    ("Sedecordle", re.compile(r"Daily Sedecordle #\d+", re.IGNORECASE)),
    ("Kilordle", re.compile(r"Kilordle.*?in \d+ guesses", re.IGNORECASE)),
    ("Antiwordle", re.compile(r"Antiwordle.*?in \d+ attempts", re.IGNORECASE)),
)


def all_games() -> list[Game]:
    """All supported games, in catalog order."""
    return list(ALL_GAMES)


def get_game(game_id: UUID) -> Optional[Game]:
    return next((g for g in ALL_GAMES if g.id == game_id), None)


def get_game_by_name(name: str) -> Optional[Game]:
    key = name.lower()
    return next((g for g in ALL_GAMES if g.name == key), None)


def games_by_category() -> dict[GameCategory, list[Game]]:
    grouped: dict[GameCategory, list[Game]] = {}
    for game in ALL_GAMES:
        grouped.setdefault(game.category, []).append(game)
    return grouped


def popular_games() -> list[Game]:
    return [g for g in ALL_GAMES if g.is_popular]


def detect_game(text: str) -> Optional[Game]:
    """Work out which supported game a piece of shared text came from.

    Matching is on literal marker text, in `DETECTION_RULES` order.
    Returns None when no supported game is recognised.
    """
    if "Connections" in text and "Puzzle #" in text:
        return CONNECTIONS

    for marker, game in DETECTION_RULES:
        if marker in text:
            return game

    return None


def detect_unsupported_game(text: str) -> Optional[str]:
    """Return the display name of a known-but-unsupported game found in `text`."""
    for name, pattern in UNSUPPORTED_GAME_PATTERNS:
        if pattern.search(text):
            return name
    return None
