from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from curiosity_service.errors import ValidationError

# ─────────────────────────────────────────────────────────────
# Enumerations
# ─────────────────────────────────────────────────────────────
class Mode(str, Enum):
    STANDARD = "standard"
    STRANGER_DANGER = "stranger_danger"
    COLLISION = "collision"

    @classmethod
    def coerce(cls, value: Any) -> "Mode":
        """Exact, case-sensitive match; anything else is STANDARD."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if value == member.value:
                return member
        return cls.STANDARD

class VelocityTier(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

DEFAULT_TIER = VelocityTier.MEDIUM
DEFAULT_SCORE = 7
MIN_SCORE, MAX_SCORE = 1, 10

# ─────────────────────────────────────────────────────────────
# Core request / record
# ─────────────────────────────────────────────────────────────
class DiscoveryRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw_input: str
    mode: Mode = Mode.STANDARD

    @field_validator("mode", mode="before")
    @classmethod
    def _coerce_mode(cls, v: Any) -> Mode:
        return Mode.coerce(v)

    @classmethod
    def create(cls, raw_input: Optional[str], mode: Any = None) -> "DiscoveryRequest":
        text = (raw_input or "").strip()
        if not text:
            raise ValidationError("Please provide some input to launch from.")
        return cls(raw_input=text, mode=mode)

class DiscoveryRecord(BaseModel):
    """One curiosity vector, fully populated."""
    model_config = ConfigDict(frozen=True)

    title: str
    velocity_tier: VelocityTier = DEFAULT_TIER
    fields: Dict[str, str] = Field(default_factory=dict)   # ordered: collisionPoint, hook, firstStep
    serendipity_score: int = DEFAULT_SCORE

    @field_validator("serendipity_score")
    @classmethod
    def _clamp_score(cls, v: int) -> int:
        return max(MIN_SCORE, min(MAX_SCORE, v))

    @property
    def collision_point(self) -> str:
        return self.fields.get("collisionPoint", "")

    @property
    def hook(self) -> str:
        return self.fields.get("hook", "")

    @property
    def first_step(self) -> str:
        return self.fields.get("firstStep", "")

    @property
    def score_percent(self) -> int:
        return self.serendipity_score * 10

# ─────────────────────────────────────────────────────────────
# HTTP bodies
# ─────────────────────────────────────────────────────────────
class GenerateVectorsRequest(BaseModel):
    input: str = ""
    mode: Optional[str] = None   # unknown values fall back to "standard"

class GenerateVectorsResponse(BaseModel):
    mode: Mode
    model_id: str
    vectors: List[DiscoveryRecord] = []
