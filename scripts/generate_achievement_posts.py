"""Backfill achievement posts for every round of a tournament.

    python3 scripts/generate_achievement_posts.py E7XT2E
    python3 scripts/generate_achievement_posts.py E7XT2E --dsn postgresql://localhost/golf
"""

import argparse
import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import configure_logging, load_settings
from config.context import create_context


async def generate(code: str, dsn: str = None) -> int:
    settings = load_settings()
    if dsn:
        settings = settings.model_copy(update={"database_url": dsn})
    configure_logging(settings.log_level)

    context = await create_context(settings)
    try:
        tournament = await context.db.tournaments.get_tournament_by_code(code)
        if not tournament:
            print(f"Tournament not found: {code}")
            return 1
        print(f"Found tournament: {tournament.name}")

        report = await context.achievements.generate_for_tournament(tournament.id)
        print(
            f"Scanned {report.rounds_scanned} rounds ({report.holes_scanned} holes): "
            f"{report.detected} achievements, {report.posted} posted, "
            f"{report.skipped} already posted, {report.failed} failed"
        )
        return 0 if report.failed == 0 else 2
    finally:
        await context.close()


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("code", help="tournament access code")
    parser.add_argument("--dsn", default=None, help="overrides DATABASE_URL")
    args = parser.parse_args()
    return asyncio.run(generate(args.code, args.dsn))


if __name__ == "__main__":
    sys.exit(main())
