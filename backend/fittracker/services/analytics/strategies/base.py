"""
Base Strategy - Abstract interface for workout-type specific summaries.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from fittracker.services.analytics.domain import WorkoutSession


class SessionStrategy(ABC):
    """
    Abstract base class for per-session statistics.

    Subclasses implement the specific algorithms for:
    - Level 1: Basic summary statistics
    - Level 2: Per-exercise / segment breakdown
    - Level 3: Event detection
    """

    workout_types: tuple = ()

    @abstractmethod
    def compute_level1(self, session: WorkoutSession) -> Dict[str, Any]:
        """
        Compute Level 1 (basic summary) statistics.

        Args:
            session: Workout session snapshot

        Returns:
            Dict with basic statistics
        """
        pass

    def compute_level2(self, session: WorkoutSession) -> Dict[str, Any]:
        """Compute Level 2 (breakdown) statistics. Empty unless overridden."""
        return {}

    def compute_level3(self, session: WorkoutSession) -> Dict[str, Any]:
        """Compute Level 3 (event) statistics. Empty unless overridden."""
        return {"events": []}

    def compute_all(self, session: WorkoutSession) -> Dict[str, Dict[str, Any]]:
        """
        Compute all three levels of statistics.

        Returns:
            Dict with level1, level2, level3 keys
        """
        return {
            "level1": self.compute_level1(session),
            "level2": self.compute_level2(session),
            "level3": self.compute_level3(session),
        }

    # ========================================
    # Shared Helper Methods
    # ========================================

    def _duration_minutes(self, session: WorkoutSession) -> Optional[float]:
        if not session.duration or session.duration <= 0:
            return None
        return round(session.duration / 60, 1)

    def _estimate_load_from_rpe(
        self,
        duration_minutes: float,
        rpe: float,
        multiplier: float = 10.0,
    ) -> float:
        """
        Estimate a training-stress style load from RPE.

        Uses simplified formula: load = duration * (RPE/10)^2 * multiplier

        Args:
            duration_minutes: Duration in minutes
            rpe: RPE value (1-10)
            multiplier: Scale for the workout type

        Returns:
            Estimated load value
        """
        if not rpe or duration_minutes <= 0:
            return 0.0

        rpe = max(1, min(10, rpe))
        intensity = rpe / 10

        return round(duration_minutes * (intensity ** 2) * multiplier, 1)

    def _add_vitals(self, stats: Dict[str, Any], session: WorkoutSession) -> None:
        """Copy heart rate and calories when the session carries them."""
        if session.average_heart_rate is not None:
            stats["avg_hr"] = round(session.average_heart_rate)
        if session.calories is not None:
            stats["calories"] = round(session.calories)
