from datetime import datetime

import pytest
from pydantic import ValidationError

from vibepay.domain.element import Element
from vibepay.models.animation import AnimationAction
from vibepay.services.animation_service import (
    ANIMATING_CLASS,
    calculate_animation_duration,
    create_animation_config,
    get_computed_animation_styles,
    manage_animation_state,
)


@pytest.mark.parametrize(
    "base, mult, size, expected",
    [
        (500, 1.0, 100, 500.0),
        (500, 1.0, 20, 100.0),
        (1000, 0.5, 200, 1000.0),
        (300, 2.0, 0, 0.0),
        (300, 1.0, -50, -150.0),
    ],
)
def test_duration_formula(base, mult, size, expected):
    assert calculate_animation_duration(base, mult, size) == pytest.approx(expected)
    assert calculate_animation_duration(base, mult, size) == pytest.approx(base * mult * (size / 100))


def test_config_defaults_easing_and_stamps_iso_time():
    config = create_animation_config("fade", 500)
    assert config.easing == "ease"
    assert config.animation_type == "fade"
    assert config.duration == 500
    parsed = datetime.fromisoformat(config.timestamp)
    assert parsed.tzinfo is not None


def test_config_is_immutable_and_serialises_camel_case():
    config = create_animation_config("pulse", 500, "ease-in-out")
    with pytest.raises(ValidationError):
        config.easing = "linear"
    dumped = config.model_dump(by_alias=True)
    assert set(dumped) == {"animationType", "duration", "easing", "timestamp"}
    assert dumped["easing"] == "ease-in-out"


def test_computed_styles_snapshot():
    element = Element(computed_style={"animation-name": "spin", "opacity": "0.5"})
    styles = get_computed_animation_styles(element)
    assert styles.animation_name == "spin"
    assert styles.opacity == "0.5"
    assert styles.animation_duration == "0s"
    assert styles.animation_timing_function == "ease"
    assert styles.transform == "none"

    element.computed_style["animation-name"] = "fade"
    assert styles.animation_name == "spin"


def test_computed_styles_requires_an_element():
    with pytest.raises(AttributeError):
        get_computed_animation_styles(None)


def test_start_then_stop_leaves_class_absent():
    element = Element()
    started = manage_animation_state(element, "start")
    assert started.success is True
    assert started.new_state is True
    assert started.element is element

    stopped = manage_animation_state(element, AnimationAction.STOP)
    assert stopped.success is True
    assert stopped.new_state is False
    assert ANIMATING_CLASS not in element.class_list


@pytest.mark.parametrize("initially_animating", [False, True])
def test_even_toggles_restore_original_state(initially_animating):
    element = Element()
    if initially_animating:
        element.class_list.add(ANIMATING_CLASS)

    first = manage_animation_state(element, "toggle")
    assert first.new_state is (not initially_animating)
    assert first.success is first.new_state

    for _ in range(3):
        manage_animation_state(element, "toggle")
    assert element.class_list.contains(ANIMATING_CLASS) is initially_animating


def test_invalid_action_is_ignored_with_warning(caplog):
    element = Element()
    element.class_list.add(ANIMATING_CLASS, "other")

    with caplog.at_level("WARNING"):
        result = manage_animation_state(element, "bogus")

    assert result.success is False
    assert result.new_state is True
    assert list(element.class_list) == [ANIMATING_CLASS, "other"]
    assert "Invalid animation action" in caplog.text
