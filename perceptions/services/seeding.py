"""Load the bundled scenario catalog into an empty database."""
import json
import logging
from pathlib import Path

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from perceptions.core.config import BASE_DIR
from perceptions.models.feedback import Feedback
from perceptions.models.scenario import Scenario

logger = logging.getLogger(__name__)

SEED_FILE = BASE_DIR / "data" / "scenarios.json"


def load_seed_file(path: Path = SEED_FILE) -> list[dict]:
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


async def seed_scenarios(db: AsyncSession, path: Path = SEED_FILE) -> int:
    """Insert scenarios and their feedback rows if the catalog is empty.

    Returns the number of scenarios inserted (0 when already seeded).
    """
    existing = (await db.execute(select(func.count(Scenario.id)))).scalar_one()
    if existing:
        logger.info("Catalog already holds %s scenarios; skipping seed", existing)
        return 0

    items = load_seed_file(path)
    for item in items:
        scenario = Scenario(
            id=item.get("id"),
            title=item["title"],
            situation_text=item["situation_text"],
            choices_json=json.dumps(item["choices"], ensure_ascii=False),
            correct_answer=item["correct_answer"],
        )
        db.add(scenario)
        await db.flush()
        for fb in item["feedback"]:
            db.add(
                Feedback(
                    scenario_id=scenario.id,
                    answer_choice=fb["answer_choice"],
                    is_correct=fb["answer_choice"] == item["correct_answer"],
                    misconception=fb.get("misconception"),
                    feedback_text=fb["feedback_text"],
                    correct_reasoning=fb["correct_reasoning"],
                )
            )
    await db.commit()
    logger.info("Seeded %s scenarios from %s", len(items), path.name)
    return len(items)
