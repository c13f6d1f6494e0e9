"""Turn shared result text into a GameResult."""

import logging
from datetime import datetime
from typing import Iterable, Optional

from models import Game, GameResult
from tracker import catalog
from tracker.parsers import linkedin, nyt, word_variants
from tracker.parsers.errors import (
    MalformedGameData,
    ParsingError,
    UnknownGameFormat,
    UnsupportedGame,
)
from tracker.parsers.grammar import GameGrammar
from utils.dates import now as local_now

logger = logging.getLogger(__name__)

GRAMMARS: dict[str, GameGrammar] = {
    **nyt.GRAMMARS,
    **linkedin.GRAMMARS,
    **word_variants.GRAMMARS,
}


def grammar_for(game: Game) -> GameGrammar:
    """Look up a game's grammar, falling back to the generic "N/M" one."""
    return GRAMMARS.get(game.name.lower()) or word_variants.generic_grammar(game.display_name)


def parse(text: str, game: Game, now: Optional[datetime] = None) -> GameResult | ParsingError:
    """Parse `text` as a result for `game`.

    Failures are returned rather than raised. The result is dated `now`
    (local time when not given); dates are never read from the text.
    """
    text = text.strip()
    name = game.name.lower()
    grammar = grammar_for(game)

    found = grammar.match(text)
    if found is None:
        error = grammar.diagnose(text, name)
        logger.debug(f"No {name} pattern matched: {error.code}")
        return error

    result = GameResult(
        game_id=game.id,
        game_name=name,
        date=now or local_now(),
        score=found.score,
        max_attempts=found.max_attempts,
        completed=found.completed,
        shared_text=text,
        parsed_data=found.parsed_data,
    )
    if not result.is_valid:
        logger.debug(f"Parsed {name} result failed validation: score={result.score}")
        return MalformedGameData(name, f"Score {result.score} is out of range for {game.display_name}", text)

    logger.debug(f"Parsed {name} #{result.puzzle_number}: score={result.score}, completed={result.completed}")
    return result


def parse_or_raise(text: str, game: Game, now: Optional[datetime] = None) -> GameResult:
    """Like `parse`, but raises the ParsingError instead of returning it."""
    outcome = parse(text, game, now)
    if isinstance(outcome, ParsingError):
        raise outcome
    return outcome


def detect_game_or_error(text: str, games: Optional[Iterable[Game]] = None) -> Game | ParsingError:
    """Find the game a share came from, or explain why none was found."""
    text = text.strip()
    game = catalog.detect_game(text)
    if game is not None and games is not None:
        allowed = {g.id for g in games}
        if game.id not in allowed:
            game = None
    if game is not None:
        return game

    unsupported = catalog.detect_unsupported_game(text)
    if unsupported is not None:
        return UnsupportedGame(unsupported, text)
    return UnknownGameFormat(text)


def parse_shared_text(
    text: str, games: Optional[Iterable[Game]] = None, now: Optional[datetime] = None
) -> GameResult | ParsingError:
    """Detect which game `text` is from, then parse it."""
    game = detect_game_or_error(text, games)
    if isinstance(game, ParsingError):
        logger.debug(f"Could not detect game: {game.code}")
        return game
    return parse(text, game, now)
