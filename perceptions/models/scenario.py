"""Scenario model: one diagnostic question with its designated correct choice."""
from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from perceptions.db.session import Base

# SQLite doesn't have native JSON; we use Text and store JSON string


class Scenario(Base):
    __tablename__ = "scenarios"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    situation_text = Column(Text, nullable=False)
    # choices: JSON array of {key, text}; keys are the answer-choice identifiers ("A", "B", ...)
    choices_json = Column(Text, nullable=False)
    correct_answer = Column(String(8), nullable=False)

    feedback = relationship("Feedback", back_populates="scenario", order_by="Feedback.answer_choice")
    attempts = relationship("Attempt", back_populates="scenario")
