from perceptions.schemas.scenario import (
    GUEST_USER_ID,
    AttemptInfoSchema,
    ChoiceSchema,
    FeedbackOutSchema,
    ScenarioOutSchema,
    SubmissionResultSchema,
    SubmitAnswerSchema,
)
from perceptions.schemas.analytics import AnalyticsReportSchema, LearningJourneySchema

__all__ = [
    "GUEST_USER_ID",
    "AttemptInfoSchema",
    "ChoiceSchema",
    "FeedbackOutSchema",
    "ScenarioOutSchema",
    "SubmissionResultSchema",
    "SubmitAnswerSchema",
    "AnalyticsReportSchema",
    "LearningJourneySchema",
]
