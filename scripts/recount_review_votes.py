#!/usr/bin/env python3
"""
Rebuild review vote counters from the votes table.

Every vote goes through the vote engine, which updates the counter in the
same transaction as the vote row, so counters should never drift. Run this
after manual edits to the votes table or a restore from a partial backup.

Usage:
    # Report drifted counters without changing anything
    python scripts/recount_review_votes.py --dry-run

    # Fix drifted counters
    python scripts/recount_review_votes.py
"""

import argparse
import asyncio

from sqlalchemy import func, select

from app.core.database import create_engine_from_settings, create_session_factory
from app.core.logging import bind_context, configure_logging, get_logger
from app.models import Reviews
from app.services.votes import recount_all_review_votes

logger = get_logger(__name__)


async def recount(dry_run: bool) -> int:
    """Recount every review's votes. Returns the number of drifted counters."""
    engine = create_engine_from_settings()
    session_factory = create_session_factory(engine)

    try:
        async with session_factory() as db:
            total = (await db.execute(select(func.count(Reviews.review_id)))).scalar_one()  # type: ignore[arg-type]
            print(f"Checking vote counters on {total} reviews...")

            corrected = await recount_all_review_votes(db)

            if dry_run:
                await db.rollback()
                print(f"Dry run: {corrected} counters would be corrected")
            else:
                await db.commit()
                print(f"Corrected {corrected} counters")
            return corrected
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Rebuild review vote counters")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report drifted counters without writing",
    )
    args = parser.parse_args()

    configure_logging()
    bind_context(task="recount_review_votes")
    corrected = asyncio.run(recount(args.dry_run))
    logger.info("recount_finished", corrected=corrected, dry_run=args.dry_run)


if __name__ == "__main__":
    main()
