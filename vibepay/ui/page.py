"""Interaction handlers for the demo page.

Every element a handler touches is looked up once when the page is built, so
a document missing one of them fails at construction with
:class:`MissingElementError` instead of at the first click. Timed reversals
go through the page's :class:`AnimationController`; handlers that schedule
one must run inside an event loop.
"""
from __future__ import annotations

import asyncio
import logging
import random
from typing import List, Optional

from vibepay.domain.element import Document, Element, MissingElementError
from vibepay.models.animation import AnimationAction, AnimationStateResult
from vibepay.services.animation_service import (
    create_animation_config,
    get_computed_animation_styles,
    manage_animation_state,
)
from vibepay.services.counter_service import create_scoped_counter
from vibepay.services.form_validation import validate_registration
from vibepay.tasks.animation_timers import AnimationController
from vibepay.utils.colors import get_random_color, random_hsl

logger = logging.getLogger(__name__)

PAGE_ELEMENT_IDS = (
    "theme-toggle",
    "counter",
    "increment-btn",
    "decrement-btn",
    "reset-btn",
    "animate-box-btn",
    "animated-box",
    "flip-card-btn",
    "flip-container",
    "start-loading-btn",
    "stop-loading-btn",
    "loading-spinner",
    "show-popup-btn",
    "popup-modal",
    "close-popup-btn",
    "dropdown-btn",
    "dropdown-content",
    "user-form",
    "name",
    "email",
    "password",
    "confirm-password",
    "name-error",
    "email-error",
    "password-error",
    "confirm-password-error",
    "form-feedback",
)

POPUP_FADE_MS = 300
FLOATING_LIFETIME_MS = 3000
GLOW_MS = 1000

_FORM_FIELDS = ("name", "email", "password", "confirm-password")


def _first_with_class(document: Document, class_name: str, root: Optional[Element] = None) -> Element:
    matches = document.elements_with_class(class_name, root)
    if not matches:
        raise MissingElementError(f".{class_name}")
    return matches[0]


def _first_with_tag(document: Document, tag: str, root: Optional[Element] = None) -> Element:
    matches = document.elements_with_tag(tag, root)
    if not matches:
        raise MissingElementError(tag)
    return matches[0]


class InteractivePage:
    def __init__(
        self,
        document: Document,
        controller: Optional[AnimationController] = None,
        rng: Optional[random.Random] = None,
    ):
        self.document = document
        self.controller = controller if controller is not None else AnimationController()
        self._rng = rng if rng is not None else random.Random()

        self.elements = {element_id: document.require_element(element_id) for element_id in PAGE_ELEMENT_IDS}
        self.dropdown = _first_with_class(document, "dropdown")
        self.popup_close_span = _first_with_class(document, "close", self.elements["popup-modal"])
        self.header = _first_with_tag(document, "header")
        self.submit_button = next(
            (
                node
                for node in document.elements_with_tag("button", self.elements["user-form"])
                if node.attributes.get("type") == "submit"
            ),
            None,
        )
        if self.submit_button is None:
            raise MissingElementError("button[type=submit]")

        self.counter = create_scoped_counter(0)
        self.counter_config = create_animation_config("pulse", 500, "ease-in-out")
        self.faq_config = create_animation_config("slide", 400, "ease")
        self.dropdown_config = create_animation_config("fade", 300, "ease-out")
        self.form_config = create_animation_config("fade", 500, "ease-in-out")
        self.header_config = create_animation_config("colorChange", 1000, "linear")

        self._header_task: Optional[asyncio.Task] = None

    def __getitem__(self, element_id: str) -> Element:
        return self.elements[element_id]

    @property
    def faq_questions(self) -> List[Element]:
        return self.document.elements_with_class("faq-question")

    @property
    def tab_buttons(self) -> List[Element]:
        return self.document.elements_with_class("tab-btn")

    @property
    def tab_panes(self) -> List[Element]:
        return self.document.elements_with_class("tab-pane")

    @property
    def sections(self) -> List[Element]:
        return self.document.elements_with_tag("section")

    def _log_styles(self, label: str, element: Element) -> None:
        styles = get_computed_animation_styles(element)
        logger.debug("%s animation styles | %s", label, styles.model_dump(by_alias=True))

    # -- theme --------------------------------------------------------------

    def toggle_theme(self) -> bool:
        button = self["theme-toggle"]
        dark = self.document.body.class_list.toggle("dark-mode")
        button.class_list.add("glow")
        self.controller.manage(
            button,
            AnimationAction.START,
            revert_after_ms=self.controller.duration(500, 20),
            revert_classes=("glow",),
        )
        button.text = "Toggle Light Mode" if dark else "Toggle Dark Mode"
        return dark

    # -- counter ------------------------------------------------------------

    def _show_count(self, value: int) -> int:
        display = self["counter"]
        display.text = str(value)
        display.class_list.add("counter-animation")
        self.controller.manage(
            display,
            AnimationAction.START,
            revert_after_ms=self.controller.duration(self.counter_config.duration, display.offset_width),
            revert_classes=("counter-animation",),
        )
        return value

    def increment_counter(self) -> int:
        return self._show_count(self.counter.increment())

    def decrement_counter(self) -> int:
        return self._show_count(self.counter.decrement())

    def reset_counter(self) -> int:
        return self._show_count(self.counter.reset())

    # -- faq ----------------------------------------------------------------

    def toggle_faq(self, question: Element) -> AnimationStateResult:
        answer = question.next_element_sibling
        if answer is None:
            raise MissingElementError(f"answer for {question.text!r}")
        answer.class_list.toggle("active")
        question.class_list.toggle("active")
        result = self.controller.manage(answer, AnimationAction.TOGGLE)
        self._log_styles("FAQ", answer)
        return result

    # -- animation showcase -------------------------------------------------

    def animate_box(self) -> AnimationStateResult:
        box = self["animated-box"]
        box.class_list.add("animated")
        config = create_animation_config("boxAnimation", 1000, "ease")
        return self.controller.manage(
            box,
            AnimationAction.START,
            revert_after_ms=config.duration,
            revert_classes=("animated",),
        )

    def flip_card(self) -> AnimationStateResult:
        container = self["flip-container"]
        container.class_list.toggle("flipped")
        result = self.controller.manage(container, AnimationAction.TOGGLE)
        self._log_styles("Card flip", container)
        return result

    def start_loading(self) -> AnimationStateResult:
        spinner = self["loading-spinner"]
        spinner.class_list.add("active")
        result = self.controller.manage(spinner, AnimationAction.START)
        self._log_styles("Loading spinner", spinner)
        return result

    def stop_loading(self) -> AnimationStateResult:
        spinner = self["loading-spinner"]
        spinner.class_list.remove("active")
        return self.controller.manage(spinner, AnimationAction.STOP)

    # -- popup --------------------------------------------------------------

    def show_popup(self) -> AnimationStateResult:
        popup = self["popup-modal"]
        # a pending fade-out clean-up would otherwise fire on the reopened popup
        self.controller.cancel(popup, "hide")
        popup.class_list.remove("hide")
        popup.class_list.add("show")
        result = self.controller.manage(popup, AnimationAction.START)
        self._log_styles("Popup modal", popup)
        return result

    def close_popup(self) -> AnimationStateResult:
        popup = self["popup-modal"]
        popup.class_list.remove("show")
        popup.class_list.add("hide")
        result = self.controller.manage(popup, AnimationAction.STOP)
        self.controller.schedule(popup, POPUP_FADE_MS, channel="hide", remove_classes=("hide",), stop=False)
        return result

    # -- dropdown -----------------------------------------------------------

    def toggle_dropdown(self) -> AnimationStateResult:
        self.dropdown.class_list.toggle("show")
        return self.controller.manage(self["dropdown-content"], AnimationAction.TOGGLE)

    def select_dropdown_item(self, link: Element) -> str:
        self["dropdown-btn"].text = link.text
        self.dropdown.class_list.remove("show")
        self.controller.manage(self.dropdown, AnimationAction.STOP)
        return link.text

    # -- global clicks ------------------------------------------------------

    def handle_document_click(self, target: Element) -> None:
        """Close the popup on a backdrop click and the dropdown on any click outside it."""
        if target is self["popup-modal"]:
            self.close_popup()
        if target.closest("dropdown") is None:
            self.dropdown.class_list.remove("show")
            self.controller.manage(self.dropdown, AnimationAction.STOP)

    # -- tabs ---------------------------------------------------------------

    def select_tab(self, button: Element) -> Element:
        target_id = button.attributes.get("data-tab", "")
        pane = self.document.require_element(target_id)
        for other in self.tab_buttons:
            other.class_list.remove("active")
        for other in self.tab_panes:
            other.class_list.remove("active")
        button.class_list.add("active")
        pane.class_list.add("active")
        return pane

    # -- registration form --------------------------------------------------

    def _show_error(self, element: Element, message: str) -> None:
        element.text = message
        element.class_list.add("show")
        manage_animation_state(element, AnimationAction.START)

    def _hide_error(self, element: Element) -> None:
        element.text = ""
        element.class_list.remove("show")
        manage_animation_state(element, AnimationAction.STOP)

    def submit_form(self) -> bool:
        """Validate the registration form; on success simulate a delayed submission."""
        if self.submit_button.disabled:
            return False

        feedback = self["form-feedback"]
        feedback.text = ""
        feedback.class_list.clear()
        feedback.class_list.add("form-feedback")

        errors = validate_registration(*(self[field].value for field in _FORM_FIELDS))
        for field in _FORM_FIELDS:
            error_element = self[f"{field}-error"]
            if field in errors:
                self._show_error(error_element, errors[field])
            else:
                self._hide_error(error_element)

        if errors:
            feedback.text = "Please fix the errors above"
            feedback.class_list.add("error", "show")
            manage_animation_state(feedback, AnimationAction.START)
            self._log_styles("Form feedback", feedback)
            return False

        button = self.submit_button
        spinner = button.append_child(Element(tag="span"))
        spinner.class_list.add("loading")
        button.disabled = True
        self.controller.manage(button, AnimationAction.START)

        def _finish() -> None:
            feedback.text = "Form submitted successfully!"
            feedback.class_list.add("success", "show")
            button.remove_child(spinner)
            button.disabled = False
            manage_animation_state(feedback, AnimationAction.START)
            for field in _FORM_FIELDS:
                self[field].value = ""

        self.controller.schedule(
            button,
            self.controller.duration(2000, 100),
            channel="submit",
            callback=_finish,
        )
        return True

    # -- header and sections ------------------------------------------------

    def click_header(self, target: Element, text: str = "✨") -> Optional[Element]:
        if target is not self.header:
            return None
        rng = self._rng
        floating = Element(tag="div", text=text)
        floating.class_list.add("floating")
        floating.style.update(
            {
                "position": "absolute",
                "left": f"{rng.random() * 80 + 10}%",
                "top": f"{rng.random() * 80 + 10}%",
                "font-size": f"{rng.random() * 20 + 10}px",
                "color": random_hsl(rng),
            }
        )
        self.header.append_child(floating)

        def _remove() -> None:
            if floating.parent is not None:
                floating.parent.remove_child(floating)
            self.controller.forget(floating)

        self.controller.schedule(
            floating,
            FLOATING_LIFETIME_MS,
            channel="remove",
            stop=False,
            callback=_remove,
        )
        logger.debug("Floating element spawned | speed=%s", self.controller.settings.speed)
        return floating

    def enter_section(self, section: Element) -> AnimationStateResult:
        section.class_list.add("glow")
        self.controller.schedule(section, GLOW_MS, channel="glow", remove_classes=("glow",), stop=False)
        result = self.controller.manage(section, AnimationAction.START)
        self._log_styles("Section", section)
        return result

    def leave_section(self, section: Element) -> AnimationStateResult:
        return self.controller.manage(section, AnimationAction.STOP)

    @property
    def header_cycling(self) -> bool:
        return self._header_task is not None and not self._header_task.done()

    def toggle_header_colors(self) -> bool:
        """Start or stop the header gradient cycle; returns True when it is now running."""
        if self.header_cycling:
            self._header_task.cancel()
            self._header_task = None
            self.header.style.pop("background", None)
            self.controller.manage(self.header, AnimationAction.STOP)
            return False
        self._header_task = asyncio.create_task(self._cycle_header_colors())
        return True

    async def _cycle_header_colors(self) -> None:
        interval = max(self.header_config.duration, 0.0) / 1000
        while True:
            await asyncio.sleep(interval)
            try:
                first = get_random_color(self._rng)
                second = get_random_color(self._rng)
                self.header.style["background"] = f"linear-gradient(45deg, {first}, {second})"
                self.controller.manage(self.header, AnimationAction.TOGGLE)
            except Exception:
                logger.exception("Header colour cycle step failed")

    async def close(self) -> None:
        if self._header_task is not None:
            self._header_task.cancel()
            try:
                await self._header_task
            except asyncio.CancelledError:
                pass
            self._header_task = None
        await self.controller.shutdown()
