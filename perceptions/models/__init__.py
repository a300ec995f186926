from perceptions.models.scenario import Scenario
from perceptions.models.feedback import Feedback
from perceptions.models.attempt import Attempt

__all__ = ["Scenario", "Feedback", "Attempt"]
