"""
Task prompt rendering for the automation agent.

The downstream agent acts on these phrases, so the directive lines are kept as
constants and only the interpolated values change between requests.
"""
from __future__ import annotations

from typing import Any, Sequence

from guardian.domain.scoring import AgentState
from guardian.domain.signals import AgentContext, SignalType

UNKNOWN_LOCATION = "Unknown"

HEADER_LINE = "Current State: {state}. Confidence Score: {score}.\n"
SIGNALS_LINE = "Signals: {signals}.\n"

NORMAL_DIRECTIVE = "Status Normal. Log events and continue monitoring.\n"

SUSPICIOUS_HEADLINE = "WARNING: Suspicious activity detected.\n"
SUSPICIOUS_PREPARE_SMS = "- Prepare SMS text to {contact} but do not send yet.\n"

THEFT_HEADLINE = "CRITICAL: THEFT DETECTED. ACT IMMEDIATELY.\n"
THEFT_SEND_SMS = "- Send SMS to {contact} with Location: {location}, Battery: {battery}%.\n"
THEFT_CALL = "- Initiate call to {contact}.\n"
THEFT_LOCK = "- Lock device screen.\n"
THEFT_CONTEXT = "Context: Owner {owner}, Battery {battery}%.\n"

EMERGENCY_CLAUSE = "\nEMERGENCY: POWER OFF ATTEMPT DETECTED! EXECUTE EMERGENCY PACKET NOW.\n"


def _signal_name(signal: Any) -> str:
    kind = getattr(signal, "type", "")
    return kind.value if isinstance(kind, SignalType) else str(kind)


def _battery(level: float) -> str:
    return f"{level:g}"


def has_power_off_attempt(signals: Sequence[Any]) -> bool:
    return any(_signal_name(signal) == SignalType.POWER_OFF_ATTEMPT.value for signal in signals)


def build_task_prompt(
    state: AgentState,
    score: int,
    signals: Sequence[Any],
    context: AgentContext,
    *,
    emergency_contact: str,
) -> str:
    parts = [
        HEADER_LINE.format(state=state.name, score=score),
        SIGNALS_LINE.format(signals=", ".join(_signal_name(s) for s in signals)),
    ]
    battery = _battery(context.battery_level)
    if state is AgentState.THEFT_MODE:
        parts.append(THEFT_HEADLINE)
        parts.append(
            THEFT_SEND_SMS.format(
                contact=emergency_contact,
                location=context.last_known_location or UNKNOWN_LOCATION,
                battery=battery,
            )
        )
        parts.append(THEFT_CALL.format(contact=emergency_contact))
        parts.append(THEFT_LOCK)
        parts.append(THEFT_CONTEXT.format(owner=context.owner_name, battery=battery))
    elif state is AgentState.SUSPICIOUS:
        parts.append(SUSPICIOUS_HEADLINE)
        parts.append(SUSPICIOUS_PREPARE_SMS.format(contact=emergency_contact))
    else:
        parts.append(NORMAL_DIRECTIVE)

    # escalates regardless of the computed state
    if has_power_off_attempt(signals):
        parts.append(EMERGENCY_CLAUSE)
    return "".join(parts)
