"""Answer evaluation: correctness, per-choice feedback, attempt recording and history."""
import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from perceptions.core.exceptions import (
    FeedbackMissingError,
    ScenarioNotFoundError,
    StoreUnavailableError,
)
from perceptions.models.scenario import Scenario
from perceptions.schemas.scenario import (
    GUEST_USER_ID,
    AttemptInfoSchema,
    FeedbackOutSchema,
    SubmissionResultSchema,
)
from perceptions.services.attempts import get_attempt_stats, record_attempt, utc_now
from perceptions.services.catalog import get_feedback, get_scenario

logger = logging.getLogger(__name__)


def is_answer_correct(scenario: Scenario, selected_answer: str) -> bool:
    """Exact match against the scenario's answer key (no case folding or trimming)."""
    return selected_answer == scenario.correct_answer


async def submit_answer(
    db: AsyncSession,
    scenario_id: int,
    selected_answer: str,
    user_id: int = GUEST_USER_ID,
    *,
    clock: Callable[[], datetime] = utc_now,
) -> SubmissionResultSchema:
    """Grade one answer, store the attempt and return feedback plus attempt history.

    The attempt is committed before the history is read, so attempt_number
    counts the attempt just made. Nothing is written when the scenario or
    its feedback row is missing.
    """
    try:
        scenario = await get_scenario(db, scenario_id)
        if scenario is None:
            raise ScenarioNotFoundError(scenario_id)

        is_correct = is_answer_correct(scenario, selected_answer)

        feedback = await get_feedback(db, scenario_id, selected_answer)
        if feedback is None:
            logger.error(
                "Catalog integrity fault: no feedback row for scenario=%s answer_choice=%r",
                scenario_id,
                selected_answer,
            )
            raise FeedbackMissingError(scenario_id, selected_answer)

        feedback_out = FeedbackOutSchema(
            text=feedback.feedback_text,
            misconception=feedback.misconception,
            correct_reasoning=feedback.correct_reasoning,
        )

        attempt = await record_attempt(
            db,
            user_id=user_id,
            scenario_id=scenario_id,
            selected_answer=selected_answer,
            is_correct=is_correct,
            attempted_at=clock(),
        )
        stats = await get_attempt_stats(db, user_id, scenario_id)
    except SQLAlchemyError as exc:
        logger.exception("Attempt store error: scenario=%s user=%s", scenario_id, user_id)
        raise StoreUnavailableError("submit_answer") from exc

    logger.info(
        "Submission scenario=%s user=%s answer=%r correct=%s attempt_number=%s",
        scenario_id,
        user_id,
        selected_answer,
        is_correct,
        stats.attempt_count,
    )
    return SubmissionResultSchema(
        attempt_id=attempt.id,
        is_correct=is_correct,
        feedback=feedback_out,
        attempt_info=AttemptInfoSchema(
            attempt_number=stats.attempt_count,
            has_been_correct_before=stats.has_been_correct,
        ),
        timestamp=utc_now(),
    )
