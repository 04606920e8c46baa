"""
Workout-type specific calculation strategies.

Each strategy implements the three-level statistics calculation
for a family of workout types.
"""
from fittracker.services.analytics.strategies.base import SessionStrategy
from fittracker.services.analytics.strategies.cardio import CardioStrategy
from fittracker.services.analytics.strategies.strength import StrengthStrategy

__all__ = [
    "SessionStrategy",
    "CardioStrategy",
    "StrengthStrategy",
]
