"""SQLAlchemy declarative base and model imports for Alembic."""
from perceptions.db.session import Base

# Import all models so Alembic can see them
from perceptions.models.attempt import Attempt  # noqa: F401
from perceptions.models.feedback import Feedback  # noqa: F401
from perceptions.models.scenario import Scenario  # noqa: F401

__all__ = ["Base", "Scenario", "Feedback", "Attempt"]
