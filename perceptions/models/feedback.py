"""Feedback model: misconception and remediation text for one answer choice."""
from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from perceptions.db.session import Base


class Feedback(Base):
    __tablename__ = "feedback"
    __table_args__ = (
        UniqueConstraint("scenario_id", "answer_choice", name="uq_feedback_scenario_choice"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    scenario_id = Column(Integer, ForeignKey("scenarios.id"), nullable=False, index=True)
    answer_choice = Column(String(8), nullable=False)
    # informational only; correctness comes from Scenario.correct_answer
    is_correct = Column(Boolean, nullable=False, default=False)
    misconception = Column(Text, nullable=True)
    feedback_text = Column(Text, nullable=False)
    correct_reasoning = Column(Text, nullable=False)

    scenario = relationship("Scenario", back_populates="feedback")
