"""Tests for the command-line entry point."""

import pytest

from config import Config
from tracker.main import main, read_share_texts


class TestReadShareTexts:
    def test_one_text_per_file(self, tmp_path):
        first = tmp_path / "first.txt"
        second = tmp_path / "second.txt"
        first.write_text("Wordle 942 3/6", encoding="utf-8")
        second.write_text("Tango #362 1:10", encoding="utf-8")
        assert read_share_texts([str(first), str(second)]) == ["Wordle 942 3/6", "Tango #362 1:10"]


class TestMain:
    @pytest.mark.asyncio
    async def test_all_parsed(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(Config, "DATABASE_PATH", str(tmp_path / "streaks.db"))
        share = tmp_path / "wordle.txt"
        share.write_text("Wordle 942 3/6", encoding="utf-8")

        assert await main([str(share)]) == 0
        output = capsys.readouterr().out
        assert "Recorded 🥉 **Wordle** #942 3/6" in output
        assert "**Wordle** - 1 day" in output

    @pytest.mark.asyncio
    async def test_parse_failure_exit_code(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(Config, "DATABASE_PATH", str(tmp_path / "streaks.db"))
        share = tmp_path / "note.txt"
        share.write_text("Had a lovely walk today", encoding="utf-8")

        assert await main([str(share)]) == 1
        assert "Could not identify game" in capsys.readouterr().out
