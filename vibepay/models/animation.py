from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from vibepay.domain.element import Element


class AnimationAction(str, Enum):
    START = "start"
    STOP = "stop"
    TOGGLE = "toggle"


class AnimationState(Enum):
    IDLE = "idle"
    ANIMATING = "animating"

    @classmethod
    def from_flag(cls, animating: bool) -> "AnimationState":
        return cls.ANIMATING if animating else cls.IDLE


class AnimationConfig(BaseModel):
    animation_type: str
    duration: float = Field(..., description="Duration in milliseconds.")
    easing: str = "ease"
    timestamp: str

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


@dataclass(frozen=True)
class AnimationStateResult:
    success: bool
    new_state: bool
    element: Element = field(repr=False)


class ComputedAnimationStyles(BaseModel):
    animation_name: str
    animation_duration: str
    animation_timing_function: str
    transform: str
    opacity: str

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class AnimationSettings(BaseModel):
    speed: float = Field(1.0, description="Multiplier applied to every computed duration.")
