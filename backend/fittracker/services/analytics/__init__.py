"""
Analytics module - Workout history processing and coaching signals.

This module provides:
- Immutable domain snapshots of sessions, exercises and sets
- Pure coaching functions (volume, balance, overload, density)
- Per-session calculation strategies
- Data adapters and database stores
"""
from fittracker.services.analytics.adapter import (
    HealthImportAdapter,
    ManualAdapter,
    RawDataAdapter,
    get_adapter,
)
from fittracker.services.analytics.calculator import InsightsCalculator, TodayBriefing
from fittracker.services.analytics.store import MetricStore, PreferenceStore, SessionStore

__all__ = [
    # Adapters
    "RawDataAdapter",
    "ManualAdapter",
    "HealthImportAdapter",
    "get_adapter",
    # Calculator
    "InsightsCalculator",
    "TodayBriefing",
    # Stores
    "SessionStore",
    "MetricStore",
    "PreferenceStore",
]
