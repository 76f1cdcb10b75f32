from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Mapping, Union

from vibepay.domain.element import Element
from vibepay.models.animation import (
    AnimationAction,
    AnimationConfig,
    AnimationStateResult,
    ComputedAnimationStyles,
)

logger = logging.getLogger(__name__)

ANIMATING_CLASS = "animating"

# CSS initial values for properties the renderer has not resolved
_STYLE_DEFAULTS: Mapping[str, str] = {
    "animation-name": "none",
    "animation-duration": "0s",
    "animation-timing-function": "ease",
    "transform": "none",
    "opacity": "1",
}


def calculate_animation_duration(
    base_duration: float,
    speed_multiplier: float,
    element_size: float,
) -> float:
    """Scale a base duration (ms) by speed and by element size, 100px being 1x.

    No bounds are applied. Zero or negative sizes give zero or negative
    durations; whoever schedules a timer with the result clamps it.
    """
    size_factor = element_size / 100
    return base_duration * speed_multiplier * size_factor


def create_animation_config(
    animation_type: str,
    duration: float,
    easing: str = "ease",
) -> AnimationConfig:
    return AnimationConfig(
        animation_type=animation_type,
        duration=duration,
        easing=easing,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


def get_computed_animation_styles(element: Element) -> ComputedAnimationStyles:
    resolved = element.computed_style

    def _read(prop: str) -> str:
        return str(resolved.get(prop, _STYLE_DEFAULTS[prop]))

    return ComputedAnimationStyles(
        animation_name=_read("animation-name"),
        animation_duration=_read("animation-duration"),
        animation_timing_function=_read("animation-timing-function"),
        transform=_read("transform"),
        opacity=_read("opacity"),
    )


def _parse_action(action: Union[AnimationAction, str]) -> AnimationAction | None:
    if isinstance(action, AnimationAction):
        return action
    try:
        return AnimationAction(action)
    except ValueError:
        return None


def manage_animation_state(
    element: Element,
    action: Union[AnimationAction, str],
) -> AnimationStateResult:
    current_state = element.class_list.contains(ANIMATING_CLASS)
    result = False

    parsed = _parse_action(action)
    if parsed is AnimationAction.START:
        element.class_list.add(ANIMATING_CLASS)
        result = True
    elif parsed is AnimationAction.STOP:
        element.class_list.remove(ANIMATING_CLASS)
        result = True
    elif parsed is AnimationAction.TOGGLE:
        element.class_list.toggle(ANIMATING_CLASS)
        result = not current_state
    else:
        logger.warning("Invalid animation action: %r", action)

    return AnimationStateResult(
        success=result,
        new_state=element.class_list.contains(ANIMATING_CLASS),
        element=element,
    )
