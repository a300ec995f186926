"""Learning analytics: how long learners take to go from a wrong answer to a right one."""
import logging
import math

from sqlalchemy import case, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from perceptions.core.exceptions import StoreUnavailableError
from perceptions.models.attempt import Attempt
from perceptions.schemas.analytics import AnalyticsReportSchema, LearningJourneySchema

logger = logging.getLogger(__name__)

# Engagement band for the mean wrong -> right time, in seconds (inclusive)
ENGAGED_MIN_SECONDS = 45
ENGAGED_MAX_SECONDS = 120

INTERPRETATION_TOO_QUICK = "Users may be clicking through too quickly"
INTERPRETATION_ENGAGED = "Users are reading feedback (45-120 second range indicates engagement)"
INTERPRETATION_SIGNIFICANT = "Users are spending significant time on feedback"


def interpret_learning_time(average_seconds: float) -> str:
    if ENGAGED_MIN_SECONDS <= average_seconds <= ENGAGED_MAX_SECONDS:
        return INTERPRETATION_ENGAGED
    if average_seconds < ENGAGED_MIN_SECONDS:
        return INTERPRETATION_TOO_QUICK
    return INTERPRETATION_SIGNIFICANT


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _learning_journeys_query(scenario_id: int):
    first_wrong = func.min(case((Attempt.is_correct == False, Attempt.attempted_at)))  # noqa: E712
    first_correct = func.min(case((Attempt.is_correct == True, Attempt.attempted_at)))  # noqa: E712
    return (
        select(
            Attempt.user_id,
            func.count(Attempt.id).label("total_attempts"),
            first_wrong.label("first_wrong"),
            first_correct.label("first_correct"),
        )
        .where(Attempt.scenario_id == scenario_id)
        .group_by(Attempt.user_id)
        .having(
            first_wrong.is_not(None),
            first_correct.is_not(None),
            first_wrong < first_correct,
        )
        .order_by(Attempt.user_id)
    )


async def analyze_scenario(db: AsyncSession, scenario_id: int) -> AnalyticsReportSchema:
    """Aggregate wrong -> right transitions for one scenario.

    A learner counts only if their earliest incorrect attempt is strictly
    before their earliest correct one. A scenario with no attempts yields
    an empty report.
    """
    try:
        rows = (await db.execute(_learning_journeys_query(scenario_id))).all()
    except SQLAlchemyError as exc:
        logger.exception("Attempt store error: analytics for scenario=%s", scenario_id)
        raise StoreUnavailableError("analyze_scenario") from exc

    journeys = [
        LearningJourneySchema(
            user_id=row.user_id,
            total_attempts=row.total_attempts,
            first_wrong=row.first_wrong,
            first_correct=row.first_correct,
            # whole seconds, fraction truncated
            time_to_learn_seconds=int((row.first_correct - row.first_wrong).total_seconds()),
        )
        for row in rows
    ]

    average = (
        sum(j.time_to_learn_seconds for j in journeys) / len(journeys) if journeys else 0
    )
    return AnalyticsReportSchema(
        scenario_id=scenario_id,
        users_who_learned=len(journeys),
        average_learning_time_seconds=round_half_up(average),
        individual_learning_journeys=journeys,
        interpretation=interpret_learning_time(average),
    )
