"""
Coaching signals derived from a snapshot of logged sessions.

Every function here is pure: the caller passes the sessions, the focus and
the current time, and gets back a display string (or a small value object).
Nothing is cached and nothing is read from the environment, so the caller
simply recomputes after each change to the history.
"""
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from fittracker.services.analytics.domain import (
    MuscleGroup,
    OverloadThresholds,
    RecompFocus,
    VolumeStatus,
    VolumeTier,
    WorkoutSession,
    WorkoutSet,
)
from fittracker.services.analytics.formulas import (
    completed_within,
    estimate_one_rep_max,
    linear_regression,
    session_density,
    sets_per_muscle,
)

MUSCLE_BUCKETS = len(MuscleGroup)
MIN_REGRESSION_SESSIONS = 3
DENSITY_SAMPLE_SIZE = 5
DEFAULT_RPE = 8
SYMMETRY_MIN_LOWER_RATIO = 0.25

INSUFFICIENT_DENSITY_DATA = "Insufficient data. Log a timed workout to measure training density."
NO_RECENT_DATA = "No recent data."


def weekly_set_target(focus: RecompFocus) -> int:
    """Hard sets per muscle group per week for the focus."""
    return focus.weekly_set_target


def step_target(focus: RecompFocus) -> int:
    """Daily step goal for the focus."""
    return focus.step_target


# ========================================
# Weekly volume & balance
# ========================================

def analyze_volume_status(
    sessions: Sequence[WorkoutSession],
    focus: RecompFocus,
    now: datetime,
) -> VolumeStatus:
    """
    Classify last week's average hard sets per muscle group against the target.

    The average is the total set count over the six muscle buckets,
    truncated to a whole number.
    """
    recent = completed_within(sessions, now)
    total_sets = sum(s.total_sets for s in recent)
    avg_sets = total_sets // MUSCLE_BUCKETS
    target = weekly_set_target(focus)

    if avg_sets >= target:
        return VolumeStatus(f"Optimal Volume ({avg_sets}/{target} sets/wk)", VolumeTier.OPTIMAL)
    if avg_sets >= target - 5:
        return VolumeStatus(f"Building Momentum ({avg_sets}/{target} sets/wk)", VolumeTier.BUILDING)
    return VolumeStatus(f"Behind Target ({avg_sets}/{target} sets/wk)", VolumeTier.BEHIND)


def find_lagging_muscle(
    sessions: Sequence[WorkoutSession],
    focus: RecompFocus,
    now: datetime,
) -> str:
    """Name the least-trained muscle group of the last week, if any lags."""
    counts = sets_per_muscle(completed_within(sessions, now))

    # min() keeps the first of equal counts, i.e. canonical order
    weakest = min(counts, key=counts.__getitem__)
    count = counts[weakest]

    if count == 0:
        return f"Neglected: {weakest.value}. 0 sets this week."
    if count < weekly_set_target(focus) // 2:
        return f"Lagging: {weakest.value}, only {count} sets/week."
    return "Balanced, no weak links detected."


def analyze_symmetry(sessions: Sequence[WorkoutSession], now: datetime) -> str:
    """Compare lower-body (legs) sets against everything else over the last week."""
    counts = sets_per_muscle(completed_within(sessions, now))
    lower_sets = counts[MuscleGroup.LEGS]
    upper_sets = sum(counts.values()) - lower_sets

    total = upper_sets + lower_sets
    if total == 0:
        return NO_RECENT_DATA

    lower_ratio = lower_sets / total
    if lower_ratio < SYMMETRY_MIN_LOWER_RATIO:
        return f"Symmetry Alert: only {int(lower_ratio * 100)}% lower body."
    return "Symmetry Good: balanced upper/lower split."


# ========================================
# Progressive overload
# ========================================

def _strength_history(
    exercise_name: str,
    sessions: Sequence[WorkoutSession],
    now: datetime,
) -> List[Tuple[WorkoutSession, WorkoutSet]]:
    """(session, best set) pairs for the exercise, oldest first."""
    history = []
    ordered = sorted(
        (s for s in sessions if s.is_completed and s.date <= now),
        key=lambda s: s.date,
    )
    for session in ordered:
        exercise = session.find_exercise(exercise_name)
        if exercise is None:
            continue
        best = exercise.best_set()
        if best is not None:
            history.append((session, best))
    return history


def suggest_progressive_overload(
    exercise_name: str,
    sessions: Sequence[WorkoutSession],
    now: datetime,
    thresholds: Optional[OverloadThresholds] = None,
) -> str:
    """
    Recommend the next load for an exercise.

    With three or more logged sessions the advice follows the slope of
    a least-squares line through the per-session e1RM values (x is the
    session's position in the exercise history). With fewer, it reads the
    RPE of the latest best set.
    """
    thresholds = thresholds or OverloadThresholds()
    history = _strength_history(exercise_name, sessions, now)

    if not history:
        return f"New exercise, start light. Log a few sets of {exercise_name} to build a baseline."

    last_session, last_best = history[-1]
    last_e1rm = estimate_one_rep_max(last_best.weight, last_best.reps)

    if len(history) < MIN_REGRESSION_SESSIONS:
        return _suggest_from_rpe(last_best, last_e1rm)

    points = [
        (float(index), estimate_one_rep_max(best.weight, best.reps))
        for index, (_, best) in enumerate(history)
    ]
    slope, _ = linear_regression(points)

    days_since_last = (now - last_session.date).total_seconds() / 86400
    if days_since_last > thresholds.detraining_days:
        trend = "positive" if slope > 0 else "flat"
        return (
            f"Detraining Risk. Your trend was {trend}, but it's been "
            f"{int(days_since_last)} days. Deload 10%."
        )

    if slope > thresholds.high_velocity_slope:
        projected = int(last_e1rm + slope)
        return f"High Velocity! You're gaining strength fast. Attempt {projected} lbs next."
    if slope > thresholds.steady_slope:
        return f"Steady Climb. Trend is positive (+{slope:.1f} lbs/session). Add 2.5-5 lbs."
    if slope > thresholds.plateau_slope:
        return "Plateau Detected. Strength is stagnant. Change rep range or increase rest times."
    return "Fatigue Detected. Your strength is trending down. Take a deload week."


def _suggest_from_rpe(best: WorkoutSet, e1rm: float) -> str:
    rpe = best.rpe or DEFAULT_RPE
    estimate = f"Est. 1RM: {int(e1rm)} lbs."

    if rpe <= 6:
        return f"Too easy (RPE {rpe}). Make a big jump: +10 lbs. {estimate}"
    if rpe >= 9:
        return f"Near max effort (RPE {rpe}). Hold the weight and own the reps. {estimate}"
    return f"Solid effort (RPE {rpe}). Add 5 lbs next time. {estimate}"


# ========================================
# Training density
# ========================================

def analyze_training_density(sessions: Sequence[WorkoutSession], now: datetime) -> str:
    """Compare the latest session's lbs/min against the recent average."""
    timed = [
        s for s in sessions
        if s.is_completed and s.date <= now and (s.duration or 0) > 0
    ]
    recent = sorted(timed, key=lambda s: s.date, reverse=True)[:DENSITY_SAMPLE_SIZE]

    if not recent:
        return INSUFFICIENT_DENSITY_DATA

    densities = [session_density(s) for s in recent]
    avg_density = sum(densities) / len(densities)
    last_density = densities[0]
    shown = round(last_density)

    if last_density > avg_density * 1.1:
        return f"High Intensity. You moved {shown} lbs/min (10% above average)."
    if last_density < avg_density * 0.9:
        return f"Low Intensity. Rest times may be too long ({shown} lbs/min)."
    return f"Consistent Pace. ({shown} lbs/min)."


# ========================================
# Daily recovery
# ========================================

def flexible_target(recovery_score: int, focus: RecompFocus) -> str:
    """Scale today's workload to a 1-10 recovery check-in."""
    target = weekly_set_target(focus)

    if recovery_score < 4:
        return (
            f"Low Recovery ({recovery_score}/10). Active recovery, stretching, "
            "or a complete rest day."
        )
    if recovery_score < 7:
        daily_goal = max(3, target // 4)
        return f"Feeling okay. Aim for a standard session: ~{daily_goal} hard sets per muscle group."
    daily_goal = max(4, target // 3)
    return f"You are Fresh! Push for hypertrophy: ~{daily_goal} hard sets per muscle group today."
