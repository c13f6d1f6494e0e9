"""Main entry point for StreakSync: ingest shared results from files or stdin.

Usage: python -m tracker.main [FILE ...]
"""

import asyncio
import logging
import sys
from pathlib import Path

from config import Config
from db.database import Database
from tracker.services.ingestion_service import IngestionService
from utils.formatting import format_ingest_outcome, format_streak_summary

# Configure logging
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def read_share_texts(paths: list[str]) -> list[str]:
    """One share text per file, or the whole of stdin when no files are given."""
    if not paths:
        return [sys.stdin.read()]
    return [Path(path).read_text(encoding="utf-8") for path in paths]


async def main(paths: list[str]) -> int:
    """Ingest each share text and print what happened. Returns the exit code."""
    db = Database(Config.DATABASE_PATH)
    await db.connect()
    logger.info(f"Connected to database: {Config.DATABASE_PATH}")

    failed = 0
    try:
        service = IngestionService(db)
        for text in read_share_texts(paths):
            if not text.strip():
                continue
            outcome = await service.ingest_text(text)
            if outcome.error_code is not None:
                failed += 1
            print(format_ingest_outcome(outcome))

        state = await service.load_state()
        print()
        print(format_streak_summary(state.streaks))
    finally:
        await db.close()

    if failed:
        logger.warning(f"{failed} share text(s) could not be parsed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))
