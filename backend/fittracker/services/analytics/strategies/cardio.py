"""
Cardio Strategy - Statistics for runs, walks, rides and swims.
"""
from typing import Any, Dict

from fittracker.services.analytics.domain import WorkoutSession, WorkoutType
from fittracker.services.analytics.strategies.base import SessionStrategy
from fittracker.services.analytics.trends import METRES_TO_MILES


class CardioStrategy(SessionStrategy):
    """
    Strategy for distance-based workouts.

    Distance, duration and pace are primary metrics.
    """

    workout_types = (WorkoutType.RUN, WorkoutType.WALK, WorkoutType.CYCLE, WorkoutType.SWIM)

    # Pace (min/mi) is the familiar unit on foot; speed suits the rest
    PACED_TYPES = (WorkoutType.RUN, WorkoutType.WALK)

    def compute_level1(self, session: WorkoutSession) -> Dict[str, Any]:
        """
        Compute Level 1 cardio statistics.

        Includes:
        - distance_mi, distance_km
        - duration_min
        - pace_min_per_mi (runs and walks) or speed_mph (others)
        - avg_hr, calories when available
        """
        stats: Dict[str, Any] = {}

        distance_m = session.distance or 0.0
        miles = distance_m * METRES_TO_MILES
        stats["distance_mi"] = round(miles, 2)
        stats["distance_km"] = round(distance_m / 1000, 2)

        duration_min = self._duration_minutes(session)
        if duration_min is not None:
            stats["duration_min"] = duration_min
            if miles > 0:
                if session.type in self.PACED_TYPES:
                    stats["pace_min_per_mi"] = round((session.duration / 60) / miles, 2)
                else:
                    stats["speed_mph"] = round(miles / (session.duration / 3600), 1)

        self._add_vitals(stats, session)
        return stats
