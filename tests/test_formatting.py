"""Tests for message formatting utilities."""

from datetime import date, datetime

from models import AchievementCategory, AchievementTier, AchievementUnlock, GameStreak
from tracker.catalog import (
    CONNECTIONS,
    LINKEDIN_PINPOINT,
    LINKEDIN_QUEENS,
    OCTORDLE,
    PIPS,
    QUORDLE,
    STRANDS,
    WORDLE,
    all_games,
)
from tracker.parsers.errors import UnknownGameFormat
from tracker.services.achievement_definitions import create_default_achievements
from tracker.services.ingestion_service import IngestOutcome
from utils.formatting import (
    display_score,
    format_ingest_outcome,
    format_parse_failure,
    format_result_line,
    format_streak_summary,
    format_unlock_message,
    score_emoji,
)

NOW = datetime(2024, 6, 1, 8, 30)


class TestDisplayScore:
    def test_default(self, make_result):
        assert display_score(make_result(NOW, score=3)) == "3/6"
        assert display_score(make_result(NOW, completed=False)) == "X/6"

    def test_quordle(self, make_result):
        result = make_result(
            NOW,
            game=QUORDLE,
            score=None,
            parsed_data={"score1": "6", "score2": "5", "score3": "failed", "score4": "4"},
        )
        assert display_score(result) == "6-5-X-4"

    def test_pips(self, make_result):
        result = make_result(NOW, game=PIPS, score=1, parsed_data={"difficulty": "Easy", "time": "1:03"})
        assert display_score(result) == "Easy - 1:03"

    def test_connections(self, make_result):
        assert display_score(make_result(NOW, game=CONNECTIONS, score=3)) == "3/4"

    def test_linkedin_time(self, make_result):
        with_time = make_result(NOW, game=LINKEDIN_QUEENS, score=71, max_attempts=0, parsed_data={"time": "1:11"})
        from_score = make_result(NOW, game=LINKEDIN_QUEENS, score=71, max_attempts=0)
        no_time = make_result(NOW, game=LINKEDIN_QUEENS, score=0, max_attempts=0)
        assert display_score(with_time) == "1:11"
        assert display_score(from_score) == "1:11"
        assert display_score(no_time) == "Completed"

    def test_pinpoint(self, make_result):
        result = make_result(NOW, game=LINKEDIN_PINPOINT, score=2, parsed_data={"guessCount": "2"})
        assert display_score(result) == "2 guesses"

    def test_strands(self, make_result):
        assert display_score(make_result(NOW, game=STRANDS, score=0, parsed_data={"hintCount": "0"})) == "Perfect"
        assert display_score(make_result(NOW, game=STRANDS, score=2, parsed_data={"hintCount": "2"})) == "2 hints"

    def test_octordle(self, make_result):
        assert display_score(make_result(NOW, game=OCTORDLE, score=62, max_attempts=62)) == "62"


class TestScoreEmoji:
    def test_medals(self, make_result):
        assert score_emoji(make_result(NOW, score=1)) == "🥇"
        assert score_emoji(make_result(NOW, score=3)) == "🥉"
        assert score_emoji(make_result(NOW, score=5)) == "✅"
        assert score_emoji(make_result(NOW, completed=False)) == "❌"

    def test_quordle_by_boards_solved(self, make_result):
        result = make_result(NOW, game=QUORDLE, score=5, parsed_data={"completedPuzzles": "4"})
        assert score_emoji(result) == "🏆"

    def test_connections_by_categories(self, make_result):
        assert score_emoji(make_result(NOW, game=CONNECTIONS, score=4)) == "🏆"
        assert score_emoji(make_result(NOW, game=CONNECTIONS, score=3)) == "🥇"

    def test_pips_difficulty(self, make_result):
        result = make_result(NOW, game=PIPS, score=3, parsed_data={"difficulty": "Hard"})
        assert score_emoji(result) == "🟠"

    def test_pinpoint_not_completed(self, make_result):
        result = make_result(NOW, game=LINKEDIN_PINPOINT, score=5).model_copy(update={"completed": False})
        assert score_emoji(result) == "❌"


class TestMessages:
    def test_result_line(self, make_result):
        line = format_result_line(make_result(NOW, score=3, puzzle_number="942"))
        assert line == "🥉 **Wordle** #942 3/6"

    def test_streak_summary(self):
        streaks = [
            GameStreak.empty(CONNECTIONS),
            GameStreak(
                game_id=WORDLE.id,
                game_name="Wordle",
                current_streak=3,
                max_streak=5,
                total_games_played=4,
                total_games_completed=3,
                last_played_date=datetime(2024, 6, 1, 8),
            ),
        ]
        summary = format_streak_summary(streaks, today=date(2024, 6, 1))
        assert "🔥 **Wordle** - 3 days" in summary
        assert "Connections" not in summary

    def test_streak_summary_empty(self):
        assert "No results yet" in format_streak_summary([GameStreak.empty(WORDLE)])

    def test_parse_failure(self):
        message = format_parse_failure(UnknownGameFormat("hello"))
        assert "Could not identify game in: hello" in message
        assert "Make sure to share the complete game result" in message

    def test_unlock_and_outcome(self, make_result):
        achievement = create_default_achievements(all_games())[0].with_progress(3, NOW)
        unlock = AchievementUnlock(achievement=achievement, tier=AchievementTier.BRONZE, timestamp=NOW)
        assert achievement.category is AchievementCategory.STREAK_MASTER
        assert format_unlock_message(unlock) == "🔥 **Streak Master** Bronze unlocked! (3/7)"

        outcome = IngestOutcome(added=True, message="Recorded", result=make_result(NOW), unlocks=[unlock])
        assert format_ingest_outcome(outcome).splitlines() == ["Recorded", format_unlock_message(unlock)]
