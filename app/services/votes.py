"""
Review vote engine.

Each (review, voter) pair is in one of three states: no vote, up (+1) or
down (-1). Casting a value moves the pair through this table and shifts the
review's ``vote_count`` by the delta:

    NONE --(+1)--> UP      +1
    NONE --(-1)--> DOWN    -1
    UP   --(+1)--> NONE    -1   (toggle off)
    UP   --(-1)--> DOWN    -2   (switch)
    DOWN --(-1)--> NONE    +1   (toggle off)
    DOWN --(+1)--> UP      +2   (switch)

The review row is locked for the whole operation and the vote row change and
counter increment commit together, so the counter always equals the sum of
the review's vote rows.
"""

from dataclasses import dataclass

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import VoteValue
from app.core.exceptions import Forbidden, InternalError, InvalidInput, NotFound
from app.core.logging import get_logger
from app.models import Reviews, Votes
from app.models.base import utcnow

logger = get_logger(__name__)


@dataclass(frozen=True)
class VoteTransition:
    """Result of applying a cast value to the current state."""

    new_value: int | None
    delta: int


@dataclass(frozen=True)
class CastVoteResult:
    review_id: int
    counter: int
    vote: int | None
    delta: int


def resolve_transition(current: int | None, value: int) -> VoteTransition:
    """
    Compute the next state and counter delta for a cast.

    Args:
        current: The voter's existing value, or None if they have not voted
        value: The value being cast (+1 or -1)
    """
    if current is None:
        return VoteTransition(new_value=value, delta=value)
    if current == value:
        return VoteTransition(new_value=None, delta=-value)
    return VoteTransition(new_value=value, delta=2 * value)


def _validate_value(value: object) -> int:
    # bool is an int subclass; True must not count as an upvote
    if isinstance(value, bool) or not isinstance(value, int) or value not in VoteValue.ALL:
        raise InvalidInput("value must be 1 (upvote) or -1 (downvote)")
    return value


class VoteEngine:
    """Records votes and keeps review counters in step with them."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_vote(self, review_id: int, voter_id: int) -> int | None:
        """
        Return the voter's current value for a review, or None.

        Raises:
            InternalError: the store failed
        """
        try:
            result = await self.db.execute(
                select(Votes.value).where(
                    Votes.review_id == review_id,  # type: ignore[arg-type]
                    Votes.user_id == voter_id,  # type: ignore[arg-type]
                )
            )
        except SQLAlchemyError as e:
            logger.error(
                "vote_read_failed",
                review_id=review_id,
                voter_id=voter_id,
                error=str(e),
                exc_info=True,
            )
            raise InternalError("Could not read vote") from e
        return result.scalar_one_or_none()

    async def cast_vote(self, review_id: int, voter_id: int, value: int) -> CastVoteResult:
        """
        Cast, switch or withdraw a vote.

        Raises:
            InvalidInput: value is not +1 or -1
            NotFound: the review does not exist
            Forbidden: the voter wrote the review
            InternalError: the store failed; nothing was persisted
        """
        value = _validate_value(value)

        try:
            review = await self._lock_review(review_id)
            if review is None:
                raise NotFound("Review not found")
            if review.user_id == voter_id:
                raise Forbidden("You cannot vote on your own review")

            existing = await self._find_vote(review_id, voter_id)
            transition = resolve_transition(
                existing.value if existing is not None else None, value
            )

            await self._write_vote(review_id, voter_id, existing, transition)
            await self._apply_delta(review_id, transition.delta)
            # Still under the row lock, so this is the value this cast produced
            counter = await self._read_counter(review_id)
            await self.db.commit()
        except (NotFound, Forbidden):
            await self.db.rollback()
            raise
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                "vote_cast_failed",
                review_id=review_id,
                voter_id=voter_id,
                error=str(e),
                exc_info=True,
            )
            raise InternalError("Could not record vote") from e

        logger.info(
            "vote_cast",
            review_id=review_id,
            voter_id=voter_id,
            value=value,
            vote=transition.new_value,
            delta=transition.delta,
            counter=counter,
        )
        return CastVoteResult(
            review_id=review_id,
            counter=counter,
            vote=transition.new_value,
            delta=transition.delta,
        )

    async def _lock_review(self, review_id: int) -> Reviews | None:
        # FOR UPDATE serializes concurrent casts on the same review
        result = await self.db.execute(
            select(Reviews)
            .where(Reviews.review_id == review_id)  # type: ignore[arg-type]
            .with_for_update()
        )
        return result.scalar_one_or_none()

    async def _find_vote(self, review_id: int, voter_id: int) -> Votes | None:
        result = await self.db.execute(
            select(Votes).where(
                Votes.review_id == review_id,  # type: ignore[arg-type]
                Votes.user_id == voter_id,  # type: ignore[arg-type]
            )
        )
        return result.scalar_one_or_none()

    async def _write_vote(
        self,
        review_id: int,
        voter_id: int,
        existing: Votes | None,
        transition: VoteTransition,
    ) -> None:
        if existing is None:
            self.db.add(Votes(review_id=review_id, user_id=voter_id, value=transition.new_value))
        elif transition.new_value is None:
            await self.db.delete(existing)
        else:
            existing.value = transition.new_value
            existing.updated_at = utcnow()
        await self.db.flush()

    async def _apply_delta(self, review_id: int, delta: int) -> None:
        # Increment in SQL rather than writing back a value read earlier
        await self.db.execute(
            update(Reviews)
            .where(Reviews.review_id == review_id)  # type: ignore[arg-type]
            .values(vote_count=Reviews.vote_count + delta)
            .execution_options(synchronize_session=False)
        )

    async def _read_counter(self, review_id: int) -> int:
        result = await self.db.execute(
            select(Reviews.vote_count).where(Reviews.review_id == review_id)  # type: ignore[arg-type]
        )
        return int(result.scalar_one())


async def sum_review_votes(db: AsyncSession, review_id: int) -> int:
    """Sum of all vote values for a review (0 when it has none)."""
    result = await db.execute(
        select(func.coalesce(func.sum(Votes.value), 0)).where(
            Votes.review_id == review_id  # type: ignore[arg-type]
        )
    )
    return int(result.scalar_one())


async def recount_review_votes(db: AsyncSession, review_id: int) -> int:
    """
    Rebuild a review's counter from its vote rows.

    Caller must commit.

    Returns:
        The recomputed counter
    """
    total = await sum_review_votes(db, review_id)
    await db.execute(
        update(Reviews)
        .where(Reviews.review_id == review_id)  # type: ignore[arg-type]
        .values(vote_count=total)
        .execution_options(synchronize_session=False)
    )
    return total


async def recount_all_review_votes(db: AsyncSession) -> int:
    """
    Rebuild every review's counter whose stored value has drifted.

    Caller must commit.

    Returns:
        Number of reviews that were corrected
    """
    totals = (
        select(Votes.review_id, func.sum(Votes.value).label("total"))
        .group_by(Votes.review_id)  # type: ignore[arg-type]
        .subquery()
    )
    result = await db.execute(
        select(Reviews.review_id, Reviews.vote_count, func.coalesce(totals.c.total, 0))
        .outerjoin(totals, totals.c.review_id == Reviews.review_id)
    )
    corrected = 0
    for review_id, stored, actual in result.all():
        if stored != actual:
            logger.warning(
                "review_counter_drift",
                review_id=review_id,
                stored=stored,
                actual=int(actual),
            )
            await db.execute(
                update(Reviews)
                .where(Reviews.review_id == review_id)  # type: ignore[arg-type]
                .values(vote_count=int(actual))
                .execution_options(synchronize_session=False)
            )
            corrected += 1
    return corrected
