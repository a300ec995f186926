import logging
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from conftest import T0, add_scenario
from perceptions import main
from perceptions.models import Attempt
from perceptions.services.attempts import record_attempt


async def _count_attempts(db):
    return (await db.execute(select(func.count(Attempt.id)))).scalar_one()


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "service": "perceptions-cruising-api"}


def test_get_scenario(client, scenario_seven):
    resp = client.get("/api/scenarios/7")
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == 7
    assert [c["key"] for c in data["choices"]] == ["A", "B", "C"]
    assert "correct_answer" not in data


def test_get_missing_scenario(client):
    resp = client.get("/api/scenarios/123")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Scenario not found", "error_code": "SCENARIO_NOT_FOUND"}


def test_submit_wrong_then_right(client, scenario_seven):
    resp = client.post("/api/scenarios/7/submit", json={"selected_answer": "A", "user_id": 1})
    assert resp.status_code == 200
    data = resp.json()
    assert data["is_correct"] is False
    assert data["feedback"] == {
        "text": "feedback 7/A",
        "misconception": "misconception 7/A",
        "correct_reasoning": "reasoning 7",
    }
    assert data["attempt_info"] == {"attempt_number": 1, "has_been_correct_before": False}
    assert data["timestamp"]

    resp = client.post("/api/scenarios/7/submit", json={"selected_answer": "B", "user_id": 1})
    data = resp.json()
    assert data["is_correct"] is True
    assert data["attempt_info"] == {"attempt_number": 2, "has_been_correct_before": True}


def test_submit_without_user_uses_guest(client, scenario_seven):
    client.post("/api/scenarios/7/submit", json={"selected_answer": "A"})
    resp = client.post("/api/scenarios/7/submit", json={"selected_answer": "A", "user_id": 1})
    assert resp.json()["attempt_info"]["attempt_number"] == 2


def test_submit_body_scenario_must_match_path(client, scenario_seven):
    resp = client.post("/api/scenarios/7/submit", json={"selected_answer": "A", "scenario_id": 8})
    assert resp.status_code == 400
    assert resp.json()["error_code"] == "SCENARIO_MISMATCH"

    resp = client.post("/api/scenarios/7/submit", json={"selected_answer": "A", "scenario_id": 7})
    assert resp.status_code == 200


def test_submit_to_missing_scenario(client):
    resp = client.post("/api/scenarios/55/submit", json={"selected_answer": "A"})
    assert resp.status_code == 404
    assert resp.json()["error_code"] == "SCENARIO_NOT_FOUND"


def test_submit_choice_without_feedback(client, run_db):
    run_db(add_scenario, scenario_id=7, feedback_keys=("A", "B"))
    resp = client.post("/api/scenarios/7/submit", json={"selected_answer": "C"})
    assert resp.status_code == 500
    assert resp.json() == {
        "detail": "No feedback available for this answer choice",
        "error_code": "FEEDBACK_MISSING",
    }


@pytest.mark.parametrize("answer", ["", "b", "NOT-A-CHOICE"])
def test_submit_unknown_answer_is_missing_feedback(client, run_db, scenario_seven, answer):
    resp = client.post("/api/scenarios/7/submit", json={"selected_answer": answer})
    assert resp.status_code == 500
    assert resp.json()["error_code"] == "FEEDBACK_MISSING"
    assert run_db(_count_attempts) == 0


@pytest.mark.parametrize("user_id", [None, 0])
def test_submit_null_user_is_guest(client, run_db, scenario_seven, user_id):
    resp = client.post("/api/scenarios/7/submit", json={"selected_answer": "A", "user_id": user_id})
    assert resp.status_code == 200

    async def _users(db):
        return (await db.execute(select(Attempt.user_id))).scalars().all()

    assert run_db(_users) == [1]


def test_error_details_are_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger="perceptions.main"):
        client.get("/api/scenarios/321")
    assert "SCENARIO_NOT_FOUND" in caplog.text
    assert "'scenario_id': 321" in caplog.text


def test_analytics(client, run_db, scenario_seven):
    for user_id, correct, seconds in [(1, False, 0), (1, True, 60), (2, True, 0)]:
        run_db(
            record_attempt,
            user_id=user_id,
            scenario_id=7,
            selected_answer="B" if correct else "A",
            is_correct=correct,
            attempted_at=T0 + timedelta(seconds=seconds),
        )

    resp = client.get("/api/scenarios/7/analytics")
    assert resp.status_code == 200
    data = resp.json()
    assert data["scenario_id"] == 7
    assert data["users_who_learned"] == 1
    assert data["average_learning_time_seconds"] == 60
    assert data["interpretation"] == "Users are reading feedback (45-120 second range indicates engagement)"
    [journey] = data["individual_learning_journeys"]
    assert journey["user_id"] == 1
    assert journey["time_to_learn_seconds"] == 60


def test_analytics_for_unattempted_scenario(client):
    resp = client.get("/api/scenarios/99/analytics")
    assert resp.status_code == 200
    assert resp.json()["users_who_learned"] == 0
    assert resp.json()["individual_learning_journeys"] == []


def test_startup_seeds_catalog(engine, session_factory, client, monkeypatch):
    monkeypatch.setattr(main, "engine", engine)
    monkeypatch.setattr(main, "AsyncSessionLocal", session_factory)

    with TestClient(main.app) as started:
        resp = started.get("/api/scenarios/1")
        assert resp.status_code == 200
        assert resp.json()["title"] == "Ball rolls into the road"

        resp = started.post("/api/scenarios/1/submit", json={"selected_answer": "A"})
        assert resp.json()["is_correct"] is False
        assert "child" in resp.json()["feedback"]["correct_reasoning"]
