"""Read-only scenario/feedback catalog lookups and the completeness audit."""
import json
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from perceptions.models.feedback import Feedback
from perceptions.models.scenario import Scenario
from perceptions.schemas.scenario import ChoiceSchema, ScenarioOutSchema


async def get_scenario(db: AsyncSession, scenario_id: int) -> Scenario | None:
    result = await db.execute(select(Scenario).where(Scenario.id == scenario_id))
    return result.scalar_one_or_none()


async def get_feedback(db: AsyncSession, scenario_id: int, answer_choice: str) -> Feedback | None:
    """Exact lookup on (scenario_id, answer_choice); no normalization of the choice."""
    result = await db.execute(
        select(Feedback).where(
            Feedback.scenario_id == scenario_id,
            Feedback.answer_choice == answer_choice,
        )
    )
    return result.scalar_one_or_none()


def choice_keys(scenario: Scenario) -> list[str]:
    return [c["key"] for c in json.loads(scenario.choices_json)]


def scenario_to_schema(scenario: Scenario) -> ScenarioOutSchema:
    choices = [ChoiceSchema(**c) for c in json.loads(scenario.choices_json)]
    return ScenarioOutSchema(
        id=scenario.id,
        title=scenario.title,
        situation_text=scenario.situation_text,
        choices=choices,
    )


@dataclass(frozen=True)
class CatalogGap:
    scenario_id: int
    answer_choice: str
    problem: str  # "missing" | "flag_mismatch"


async def find_catalog_gaps(db: AsyncSession) -> list[CatalogGap]:
    """Check every reachable answer choice has exactly one consistent feedback row.

    Reachable choices are the scenario's listed choice keys plus its
    correct_answer. A row whose is_correct flag disagrees with
    correct_answer is reported as "flag_mismatch"; the flag is never used
    for grading, but a mismatch usually means the content was authored
    against a different answer key.
    """
    scenarios = (await db.execute(select(Scenario).order_by(Scenario.id))).scalars().all()
    rows = (await db.execute(select(Feedback))).scalars().all()
    by_key = {(f.scenario_id, f.answer_choice): f for f in rows}

    gaps = []
    for scenario in scenarios:
        reachable = choice_keys(scenario)
        if scenario.correct_answer not in reachable:
            reachable.append(scenario.correct_answer)
        for key in reachable:
            entry = by_key.get((scenario.id, key))
            if entry is None:
                gaps.append(CatalogGap(scenario.id, key, "missing"))
            elif bool(entry.is_correct) != (key == scenario.correct_answer):
                gaps.append(CatalogGap(scenario.id, key, "flag_mismatch"))
    return gaps
