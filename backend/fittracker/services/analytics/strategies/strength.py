"""
Strength Strategy - Statistics calculation for lifting sessions.

Strength-specific metrics:
- Set tracking and volume load (weight x reps)
- Best estimated 1RM per exercise
- RPE-based intensity
"""
from typing import Any, Dict, List

from fittracker.services.analytics.domain import WorkoutSession, WorkoutType
from fittracker.services.analytics.formulas import estimate_one_rep_max, session_density
from fittracker.services.analytics.strategies.base import SessionStrategy


class StrengthStrategy(SessionStrategy):
    """
    Strategy for strength training statistics.

    Volume and RPE are primary metrics for strength analysis.
    """

    workout_types = (WorkoutType.STRENGTH,)

    def compute_level1(self, session: WorkoutSession) -> Dict[str, Any]:
        """
        Compute Level 1 strength statistics.

        Includes:
        - total_volume, total_sets, exercise_count
        - avg_rpe (over sets with a reported RPE)
        - duration_min, density_lbs_per_min and training_load when timed
        - avg_hr, calories when available
        """
        stats: Dict[str, Any] = {
            "total_volume": round(session.total_volume, 1),
            "total_sets": session.total_sets,
            "exercise_count": len(session.exercises),
        }

        rpes = [s.rpe for e in session.exercises for s in e.sets if s.rpe]
        if rpes:
            stats["avg_rpe"] = round(sum(rpes) / len(rpes), 1)

        duration_min = self._duration_minutes(session)
        if duration_min is not None:
            stats["duration_min"] = duration_min
            stats["density_lbs_per_min"] = round(session_density(session), 1)
            # Strength training has lower load per minute due to rest periods
            stats["training_load"] = self._estimate_load_from_rpe(
                duration_min,
                stats.get("avg_rpe", 6),
                multiplier=6.0,
            )

        self._add_vitals(stats, session)
        return stats

    def compute_level2(self, session: WorkoutSession) -> Dict[str, Any]:
        """
        Compute Level 2 strength statistics (per-exercise breakdown).
        """
        exercises = []
        for exercise in session.exercises:
            entry: Dict[str, Any] = {
                "name": exercise.name,
                "muscle_group": exercise.muscle_group.value,
                "sets": len(exercise.sets),
                "volume": round(exercise.volume, 1),
            }
            best = exercise.best_set()
            if best is not None:
                entry["best_e1rm"] = round(estimate_one_rep_max(best.weight, best.reps), 1)
            exercises.append(entry)

        return {"exercises": exercises}

    def compute_level3(self, session: WorkoutSession) -> Dict[str, Any]:
        """
        Compute Level 3 strength statistics (event detection).

        Detects:
        - rpe_spike: Sudden RPE increase between consecutive sets of an exercise
        """
        events: List[Dict[str, Any]] = []
        for exercise in session.exercises:
            events.extend(self._detect_rpe_spikes(exercise.name, [s.rpe for s in exercise.sets]))
        return {"events": events}

    def _detect_rpe_spikes(
        self,
        exercise_name: str,
        rpes: List[int],
        threshold: int = 2,
    ) -> List[Dict[str, Any]]:
        """
        Detect sudden RPE increases.

        Args:
            exercise_name: Exercise the sets belong to
            rpes: RPE per set in logging order (0 = not reported)
            threshold: RPE increase threshold to count as spike

        Returns:
            List of RPE spike events
        """
        events = []
        reported = [(index, rpe) for index, rpe in enumerate(rpes) if rpe]

        for (_, prev_rpe), (index, rpe) in zip(reported, reported[1:]):
            if rpe - prev_rpe >= threshold:
                events.append({
                    "event": "rpe_spike",
                    "exercise": exercise_name,
                    "set_index": index,
                    "rpe_before": prev_rpe,
                    "rpe_after": rpe,
                })

        return events
