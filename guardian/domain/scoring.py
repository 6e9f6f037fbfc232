"""
Theft confidence scoring.

The score is a plain sum of fixed per-signal weights, so it does not depend on
the order signals arrive in. The state is derived from the score alone.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Any, Iterable

from guardian.domain.signals import SignalType

SUSPICIOUS_THRESHOLD = 40
THEFT_MODE_THRESHOLD = 70

FACE_LOCK_FIRST_ATTEMPT_WEIGHT = 20
FACE_LOCK_REPEATED_ATTEMPT_WEIGHT = 40

SIGNAL_WEIGHTS = {
    SignalType.WRONG_PIN: 15,
    SignalType.SUDDEN_JERK: 25,
    SignalType.SCREEN_ON_OFF_QUICK: 20,
    SignalType.LOCATION_JUMP: 30,
    SignalType.SIM_CHANGE: 50,
    SignalType.POWER_OFF_ATTEMPT: 50,
}


class AgentState(IntEnum):
    """Severity buckets, ordered from least to most severe."""

    NORMAL = 0
    SUSPICIOUS = 1
    THEFT_MODE = 2


def _attempt_count(signal: Any) -> int:
    metadata = getattr(signal, "metadata", None)
    count = getattr(metadata, "attempt_count", None) if metadata is not None else None
    return 1 if count is None else count


def signal_weight(signal: Any) -> int:
    """Weight of a single signal; types this version does not know score 0."""
    try:
        kind = SignalType(getattr(signal, "type", None))
    except ValueError:
        return 0
    if kind is SignalType.FACE_LOCK_FAIL:
        if _attempt_count(signal) >= 2:
            return FACE_LOCK_REPEATED_ATTEMPT_WEIGHT
        return FACE_LOCK_FIRST_ATTEMPT_WEIGHT
    return SIGNAL_WEIGHTS[kind]


def calculate_confidence_score(signals: Iterable[Any]) -> int:
    return sum(signal_weight(signal) for signal in signals)


def determine_agent_state(score: int) -> AgentState:
    if score >= THEFT_MODE_THRESHOLD:
        return AgentState.THEFT_MODE
    if score >= SUSPICIOUS_THRESHOLD:
        return AgentState.SUSPICIOUS
    return AgentState.NORMAL
