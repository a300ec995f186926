"""Pydantic schemas for scenarios and answer submissions."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class ChoiceSchema(BaseModel):
    key: str  # answer-choice identifier, e.g. "A"
    text: str


class ScenarioOutSchema(BaseModel):
    id: int
    title: str
    situation_text: str
    choices: list[ChoiceSchema]

    class Config:
        from_attributes = True


# Fixed identifier used when a submission names no learner
GUEST_USER_ID = 1


class SubmitAnswerSchema(BaseModel):
    # unbounded: unknown choices are rejected by the feedback lookup
    selected_answer: str
    user_id: Optional[int] = GUEST_USER_ID
    # optional echo of the path id; must match when given
    scenario_id: Optional[int] = None

    @field_validator("user_id")
    @classmethod
    def default_to_guest(cls, v: Optional[int]) -> int:
        # null and 0 both mean "no learner given"
        return v or GUEST_USER_ID


class FeedbackOutSchema(BaseModel):
    text: str
    misconception: Optional[str] = None
    correct_reasoning: str


class AttemptInfoSchema(BaseModel):
    attempt_number: int
    has_been_correct_before: bool


class SubmissionResultSchema(BaseModel):
    attempt_id: int
    is_correct: bool
    feedback: FeedbackOutSchema
    attempt_info: AttemptInfoSchema
    timestamp: datetime
