import asyncio
import json
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from perceptions.db.base import Base
from perceptions.db.session import get_db
from perceptions.main import app
from perceptions.models import Feedback, Scenario

T0 = datetime(2026, 1, 5, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine(tmp_path):
    # NullPool: every connection is opened in whichever event loop asks for it
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)

    async def _create():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_create())
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
def run_db(session_factory):
    """Run ``fn(db, *args, **kwargs)`` in a fresh session and return its result."""

    def _run(fn, *args, **kwargs):
        async def _inner():
            async with session_factory() as db:
                return await fn(db, *args, **kwargs)

        return asyncio.run(_inner())

    return _run


async def add_scenario(
    db,
    scenario_id=7,
    correct_answer="B",
    keys=("A", "B", "C"),
    feedback_keys=None,
):
    """Insert a scenario plus one feedback row per key in feedback_keys (default: all keys)."""
    db.add(
        Scenario(
            id=scenario_id,
            title=f"Scenario {scenario_id}",
            situation_text="A cyclist ahead glances over their shoulder.",
            choices_json=json.dumps([{"key": k, "text": f"Option {k}"} for k in keys]),
            correct_answer=correct_answer,
        )
    )
    for key in keys if feedback_keys is None else feedback_keys:
        db.add(
            Feedback(
                scenario_id=scenario_id,
                answer_choice=key,
                is_correct=key == correct_answer,
                misconception=None if key == correct_answer else f"misconception {scenario_id}/{key}",
                feedback_text=f"feedback {scenario_id}/{key}",
                correct_reasoning=f"reasoning {scenario_id}",
            )
        )
    await db.commit()


@pytest.fixture
def scenario_seven(run_db):
    """Scenario 7, correct answer "B", feedback rows for A, B and C."""
    run_db(add_scenario)
    return 7


@pytest.fixture
def client(session_factory):
    async def _override_get_db():
        async with session_factory() as db:
            yield db

    app.dependency_overrides[get_db] = _override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
