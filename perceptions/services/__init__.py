from perceptions.services.analytics import analyze_scenario, interpret_learning_time
from perceptions.services.catalog import find_catalog_gaps, get_feedback, get_scenario
from perceptions.services.evaluator import submit_answer
from perceptions.services.seeding import seed_scenarios

__all__ = [
    "analyze_scenario",
    "interpret_learning_time",
    "find_catalog_gaps",
    "get_feedback",
    "get_scenario",
    "submit_answer",
    "seed_scenarios",
]
