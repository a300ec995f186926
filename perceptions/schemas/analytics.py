"""Pydantic schemas for per-scenario learning analytics."""
from datetime import datetime

from pydantic import BaseModel


class LearningJourneySchema(BaseModel):
    user_id: int
    total_attempts: int
    first_wrong: datetime
    first_correct: datetime
    time_to_learn_seconds: int


class AnalyticsReportSchema(BaseModel):
    scenario_id: int
    users_who_learned: int
    average_learning_time_seconds: int
    individual_learning_journeys: list[LearningJourneySchema]
    interpretation: str
