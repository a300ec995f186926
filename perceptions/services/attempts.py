"""Append-only attempt log: insert one attempt, read back per-learner counts."""
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from perceptions.models.attempt import Attempt


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AttemptStats:
    attempt_count: int
    correct_count: int

    @property
    def has_been_correct(self) -> bool:
        return self.correct_count > 0


async def record_attempt(
    db: AsyncSession,
    *,
    user_id: int,
    scenario_id: int,
    selected_answer: str,
    is_correct: bool,
    attempted_at: datetime | None = None,
) -> Attempt:
    """Insert and commit one attempt; rolls back and re-raises on failure."""
    attempt = Attempt(
        user_id=user_id,
        scenario_id=scenario_id,
        selected_answer=selected_answer,
        is_correct=is_correct,
        attempted_at=attempted_at or utc_now(),
    )
    try:
        db.add(attempt)
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    await db.refresh(attempt)
    return attempt


async def get_attempt_stats(db: AsyncSession, user_id: int, scenario_id: int) -> AttemptStats:
    result = await db.execute(
        select(
            func.count(Attempt.id),
            func.coalesce(func.sum(case((Attempt.is_correct == True, 1), else_=0)), 0),  # noqa: E712
        ).where(
            Attempt.user_id == user_id,
            Attempt.scenario_id == scenario_id,
        )
    )
    attempt_count, correct_count = result.one()
    return AttemptStats(attempt_count=int(attempt_count), correct_count=int(correct_count))
