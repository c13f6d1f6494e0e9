"""Ordered matcher lists that describe how one game shares its results."""

import logging
import re
from typing import Callable, Optional

from pydantic import BaseModel, Field

from tracker.parsers.errors import (
    InvalidScoreFormat,
    MissingPuzzleNumber,
    ParsingError,
    UnknownGameFormat,
)

logger = logging.getLogger(__name__)

KEYCAP = "\ufe0f?\u20e3"


class ScoreMatch(BaseModel):
    """What a single matcher pulled out of the text."""

    score: Optional[int] = None
    max_attempts: int
    completed: bool
    parsed_data: dict[str, str] = Field(default_factory=dict)


Matcher = Callable[[str], Optional[ScoreMatch]]


def compile_pattern(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


class GameGrammar:
    """A game's matchers, tried in order, plus what to report when none fit.

    `token` is the text that identifies the game at all. `puzzle_pattern`,
    when set, is what a share must contain for its puzzle number to be read.
    """

    def __init__(
        self,
        token: str,
        matchers: list[Matcher],
        puzzle_pattern: Optional[str] = None,
    ):
        self.token = compile_pattern(re.escape(token))
        self.matchers = matchers
        self.puzzle_pattern = compile_pattern(puzzle_pattern) if puzzle_pattern else None

    def match(self, text: str) -> Optional[ScoreMatch]:
        """Run each matcher in turn and return the first hit."""
        for matcher in self.matchers:
            found = matcher(text)
            if found is not None:
                logger.debug(f"Matched with {matcher.__name__}")
                return found
        return None

    def diagnose(self, text: str, game_name: str) -> ParsingError:
        """Pick the failure that best explains why nothing matched."""
        token = self.token.search(text)
        if token is None:
            return UnknownGameFormat(text, game_name=game_name)
        if self.puzzle_pattern is not None and not self.puzzle_pattern.search(text):
            return MissingPuzzleNumber(game_name, text)
        return InvalidScoreFormat(game_name, _score_fragment(text, token.end()), text)


PUZZLE_TOKEN = re.compile(r"^#\d+(?:,\d+)*")


def _score_fragment(text: str, start: int) -> str:
    """The rest of the line after the game token, which is usually where the score sits.

    A "#N" puzzle number straight after the token is skipped.
    """
    rest = text[start:].strip()
    line = rest.splitlines()[0].strip() if rest else ""
    return PUZZLE_TOKEN.sub("", line).strip()


def first_group(pattern: re.Pattern[str], text: str) -> Optional[str]:
    found = pattern.search(text)
    return found.group(1) if found else None
