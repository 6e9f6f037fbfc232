"""Request shapes for the agent endpoint."""
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SignalType(str, Enum):
    FACE_LOCK_FAIL = "face_lock_fail"
    WRONG_PIN = "wrong_pin"
    SUDDEN_JERK = "sudden_jerk"
    SCREEN_ON_OFF_QUICK = "screen_on_off_quick"
    LOCATION_JUMP = "location_jump"
    SIM_CHANGE = "sim_change"
    POWER_OFF_ATTEMPT = "power_off_attempt"


class SignalMetadata(BaseModel):
    """Per-signal details. Only ``attemptCount`` is interpreted; other keys ride along."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    attempt_count: Optional[int] = Field(default=None, alias="attemptCount", ge=0, strict=True)


class TheftSignal(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: SignalType
    timestamp: float = Field(strict=True, allow_inf_nan=False)
    metadata: Optional[SignalMetadata] = None


class AgentContext(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    owner_name: str = Field(alias="ownerName")
    last_known_location: str = Field(alias="lastKnownLocation")
    battery_level: float = Field(alias="batteryLevel", ge=0, le=100, strict=True, allow_inf_nan=False)


class AgentRequest(BaseModel):
    signals: list[TheftSignal]
    context: AgentContext
