"""Tests for the ingestion service."""

import asyncio
from datetime import datetime, timedelta

import pytest

from models import AchievementCategory, AchievementTier
from tracker.catalog import CONNECTIONS, WORDLE
from tracker.services.ingestion_service import IngestionService

NOW = datetime(2024, 6, 10, 12, 0)

PERFECT_CONNECTIONS = "Connections\nPuzzle #603\n🟩🟩🟩🟩\n🟨🟨🟨🟨\n🟪🟪🟪🟪\n🟦🟦🟦🟦"


def wordle_share(puzzle: int, score: int = 3) -> str:
    return f"Wordle {puzzle} {score}/6\n\n⬛🟨⬛⬛⬛\n🟩🟩🟩🟩🟩"


class TestIngestText:
    @pytest.mark.asyncio
    async def test_records_result(self, db):
        service = IngestionService(db)
        outcome = await service.ingest_text(wordle_share(942), now=NOW)

        assert outcome.added
        assert outcome.result.score == 3
        assert outcome.error_code is None
        assert "Wordle" in outcome.message
        assert await db.count_results() == 1

    @pytest.mark.asyncio
    async def test_parse_failure(self, db):
        service = IngestionService(db)
        outcome = await service.ingest_text("Had a lovely walk today", now=NOW)

        assert not outcome.added
        assert outcome.error_code == "PA200"
        assert "Make sure to share the complete game result" in outcome.message
        assert await db.count_results() == 0

    @pytest.mark.asyncio
    async def test_failed_parse_keeps_text(self, db):
        service = IngestionService(db)
        text = "Tango #362\nno time here, just sharing"
        outcome = await service.ingest_text(text, now=NOW)

        assert not outcome.added
        assert outcome.error_code == "PA201"
        assert outcome.shared_text == text

    @pytest.mark.asyncio
    async def test_unsupported_game(self, db):
        service = IngestionService(db)
        outcome = await service.ingest_text("#Worldle #807 3/6 (100%)", now=NOW)
        assert outcome.error_code == "PA204"

    @pytest.mark.asyncio
    async def test_explicit_game(self, db):
        service = IngestionService(db)
        outcome = await service.ingest_text(PERFECT_CONNECTIONS, game=CONNECTIONS, now=NOW)
        assert outcome.added
        assert outcome.result.game_id == CONNECTIONS.id

    @pytest.mark.asyncio
    async def test_duplicate_puzzle_rejected(self, db):
        service = IngestionService(db)
        await service.ingest_text(wordle_share(942), now=NOW)
        outcome = await service.ingest_text(wordle_share(942, score=4), now=NOW + timedelta(hours=1))

        assert not outcome.added
        assert outcome.message.startswith("Already recorded")
        assert await db.count_results() == 1


class TestDerivedState:
    @pytest.mark.asyncio
    async def test_streak_and_achievements_updated(self, db):
        service = IngestionService(db)
        unlocks = []
        for n in range(3):
            outcome = await service.ingest_text(wordle_share(940 + n), now=NOW + timedelta(days=n))
            unlocks.extend(outcome.unlocks)

        state = await service.load_state()
        wordle = next(s for s in state.streaks if s.game_id == WORDLE.id)
        assert wordle.current_streak == 3
        assert len(state.streaks) == 15

        streak_master = next(a for a in state.achievements if a.category is AchievementCategory.STREAK_MASTER)
        assert streak_master.progress.current_tier is AchievementTier.BRONZE
        # Exactly one Streak Master unlock across the three submissions
        assert len([u for u in unlocks if u.achievement.category is AchievementCategory.STREAK_MASTER]) == 1

    @pytest.mark.asyncio
    async def test_load_state_when_empty(self, db):
        state = await IngestionService(db).load_state()
        assert state.results == []
        assert all(s.current_streak == 0 for s in state.streaks)
        assert len(state.achievements) == 10

    @pytest.mark.asyncio
    async def test_concurrent_submissions_all_recorded(self, db):
        service = IngestionService(db)
        outcomes = await asyncio.gather(
            *(service.ingest_text(wordle_share(900 + n), now=NOW + timedelta(days=n)) for n in range(5))
        )
        assert all(o.added for o in outcomes)
        assert await db.count_results() == 5

        state = await service.load_state()
        collector = next(a for a in state.achievements if a.category is AchievementCategory.GAME_COLLECTOR)
        assert collector.progress.current_value == 5


class TestIngestMany:
    @pytest.mark.asyncio
    async def test_counts_only_added(self, db, make_result):
        service = IngestionService(db)
        first = make_result(NOW, puzzle_number="942")
        results = [first, make_result(NOW + timedelta(days=1), puzzle_number="943"), first]
        assert await service.ingest_many(results, now=NOW) == 2

    @pytest.mark.asyncio
    async def test_invalid_result_rejected(self, db, make_result):
        service = IngestionService(db)
        outcome = await service.ingest_result(make_result(NOW, score=9))
        assert not outcome.added
        assert outcome.error_code == "PA203"


class TestRecomputeAll:
    @pytest.mark.asyncio
    async def test_rebuilds_from_history(self, db, make_result):
        for n in range(4):
            await db.add_result(make_result(NOW - timedelta(days=n), puzzle_number=str(900 + n)))

        service = IngestionService(db)
        streaks, unlocks = await service.recompute_all(now=NOW)

        wordle = next(s for s in streaks if s.game_id == WORDLE.id)
        assert wordle.current_streak == 4
        assert any(u.achievement.category is AchievementCategory.STREAK_MASTER for u in unlocks)

        # Nothing new the second time round
        _, again = await service.recompute_all(now=NOW)
        assert again == []


class TestReparseResults:
    @pytest.mark.asyncio
    async def test_fixes_changed_results(self, db, make_result):
        stale = make_result(NOW, game=CONNECTIONS, score=1, completed=False).model_copy(
            update={"shared_text": PERFECT_CONNECTIONS}
        )
        await db.add_result(stale)

        service = IngestionService(db)
        assert await service.reparse_results("connections") == 1

        fixed = (await db.get_results())[0]
        assert fixed.id == stale.id
        assert fixed.date == stale.date
        assert fixed.score == 4
        assert fixed.completed

        state = await service.load_state()
        connections = next(s for s in state.streaks if s.game_id == CONNECTIONS.id)
        assert connections.current_streak == 1

    @pytest.mark.asyncio
    async def test_achievements_recomputed(self, db, make_result):
        stale = make_result(NOW, game=CONNECTIONS, score=1, completed=False).model_copy(
            update={"shared_text": PERFECT_CONNECTIONS}
        )
        await db.add_result(stale)

        service = IngestionService(db)
        await service.recompute_all(now=NOW)
        assert await service.reparse_results("connections", now=NOW) == 1

        _, perfectionist = (await db.get_achievement_progress())[AchievementCategory.PERFECTIONIST]
        assert perfectionist.current_value == 1

    @pytest.mark.asyncio
    async def test_unparseable_result_kept(self, db, make_result):
        original = make_result(NOW)
        await db.add_result(original)

        service = IngestionService(db)
        assert await service.reparse_results() == 0
        assert await db.get_results() == [original]

    @pytest.mark.asyncio
    async def test_other_games_untouched(self, db, make_result):
        stale = make_result(NOW, game=CONNECTIONS, score=1, completed=False).model_copy(
            update={"shared_text": PERFECT_CONNECTIONS}
        )
        await db.add_result(stale)
        assert await IngestionService(db).reparse_results("wordle") == 0
