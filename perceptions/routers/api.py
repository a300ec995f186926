"""API routes: JSON for scenarios, answer submission and learning analytics."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from perceptions.core.config import get_settings
from perceptions.core.exceptions import (
    ScenarioMismatchError,
    ScenarioNotFoundError,
    StoreUnavailableError,
)
from perceptions.db.session import get_db
from perceptions.schemas.analytics import AnalyticsReportSchema
from perceptions.schemas.scenario import (
    ScenarioOutSchema,
    SubmissionResultSchema,
    SubmitAnswerSchema,
)
from perceptions.services.analytics import analyze_scenario
from perceptions.services.catalog import get_scenario as find_scenario
from perceptions.services.catalog import scenario_to_schema
from perceptions.services.evaluator import submit_answer as evaluate_submission

router = APIRouter(prefix="/api", tags=["api"])
settings = get_settings()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health():
    return {"status": "ok", "service": settings.service_name}


@router.get("/scenarios/{scenario_id}", response_model=ScenarioOutSchema)
async def get_scenario(
    scenario_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get one scenario by ID (the answer key is not included)."""
    try:
        scenario = await find_scenario(db, scenario_id)
    except SQLAlchemyError as exc:
        logger.exception("Catalog read error: scenario=%s", scenario_id)
        raise StoreUnavailableError("get_scenario") from exc

    if not scenario:
        raise ScenarioNotFoundError(scenario_id)
    return scenario_to_schema(scenario)


@router.post("/scenarios/{scenario_id}/submit", response_model=SubmissionResultSchema)
async def submit_answer(
    scenario_id: int,
    body: SubmitAnswerSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Submit an answer; return correctness, choice-specific feedback and attempt history."""
    if body.scenario_id is not None and body.scenario_id != scenario_id:
        raise ScenarioMismatchError(scenario_id, body.scenario_id)

    return await evaluate_submission(
        db,
        scenario_id=scenario_id,
        selected_answer=body.selected_answer,
        user_id=body.user_id,
    )


@router.get("/scenarios/{scenario_id}/analytics", response_model=AnalyticsReportSchema)
async def get_analytics(
    scenario_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Wrong -> right learning times for one scenario."""
    return await analyze_scenario(db, scenario_id)
