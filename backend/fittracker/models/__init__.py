from fittracker.models.metric import BodyMetricRecord
from fittracker.models.preference import UserPreference
from fittracker.models.session import WorkoutSessionRecord

__all__ = [
    "BodyMetricRecord",
    "UserPreference",
    "WorkoutSessionRecord",
]
