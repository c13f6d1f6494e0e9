"""Typed failures produced when shared text can't be turned into a result."""

from config import Config


class ParsingError(Exception):
    """Base class for every parse failure.

    The original text is always kept on the error so callers can offer
    manual entry or a retry without asking the user to paste it again.
    """

    code = "parsing_error"
    error_code = "PA000"
    description = "Could not read game result"
    recovery_suggestion = "Try sharing the result again"

    def __init__(self, game_name: str, text: str, failure_reason: str):
        super().__init__(failure_reason)
        self.game_name = game_name
        self.text = text
        self.failure_reason = failure_reason

    def __repr__(self) -> str:
        return f"{type(self).__name__}(game_name={self.game_name!r}, reason={self.failure_reason!r})"


def _preview(text: str) -> str:
    return text[: Config.ERROR_PREVIEW_LENGTH]


class UnknownGameFormat(ParsingError):
    code = "unknown_format"
    error_code = "PA200"
    description = "Unknown game format"
    recovery_suggestion = "Make sure to share the complete game result"

    def __init__(self, text: str, game_name: str = ""):
        super().__init__(game_name, text, f"Could not identify game in: {_preview(text)}...")


class InvalidScoreFormat(ParsingError):
    code = "invalid_score"
    error_code = "PA201"
    description = "Invalid score format"
    recovery_suggestion = "Use Manual Entry to add this result"

    def __init__(self, game_name: str, score: str, text: str = ""):
        super().__init__(game_name, text, f"Score '{score}' is not valid")
        self.score = score


class MissingPuzzleNumber(ParsingError):
    code = "missing_puzzle"
    error_code = "PA202"
    description = "Missing puzzle number"
    recovery_suggestion = "Include the puzzle number when sharing"

    def __init__(self, game_name: str, text: str = ""):
        super().__init__(game_name, text, "Puzzle number is required for tracking")


class MalformedGameData(ParsingError):
    code = "malformed_data"
    error_code = "PA203"
    description = "Malformed game data"
    recovery_suggestion = "Try copying and sharing the result again"

    def __init__(self, game_name: str, reason: str, text: str = ""):
        super().__init__(game_name, text, reason)


class UnsupportedGame(ParsingError):
    code = "unsupported_game"
    error_code = "PA204"
    description = "Unsupported game"
    recovery_suggestion = "Use Manual Entry or wait for an app update"

    def __init__(self, game_name: str, text: str = ""):
        super().__init__(game_name, text, "This game hasn't been added to StreakSync yet")


class DateParsingFailed(ParsingError):
    """Reserved; results are always dated at ingestion time."""

    code = "date_parsing_failed"
    error_code = "PA205"
    description = "Date parsing failed"
    recovery_suggestion = "Add the result manually with today's date"

    def __init__(self, game_name: str, text: str = ""):
        super().__init__(game_name, text, "Game date could not be extracted from results")
