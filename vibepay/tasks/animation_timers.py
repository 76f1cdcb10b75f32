"""Per-element animation state plus the timers that reverse it.

Each element tracked by an :class:`AnimationController` carries an explicit
:class:`AnimationState` and at most one pending task per timer channel. A new
``start``/``stop``/``toggle`` on an element cancels the pending reversal on
the ``reversal`` channel before applying, so an older stop timer cannot fire
after a newer start and clear it.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Optional, Union

from vibepay.domain.element import Element
from vibepay.models.animation import (
    AnimationAction,
    AnimationSettings,
    AnimationState,
    AnimationStateResult,
)
from vibepay.services.animation_service import (
    ANIMATING_CLASS,
    calculate_animation_duration,
    manage_animation_state,
)

logger = logging.getLogger(__name__)

REVERSAL = "reversal"


@dataclass(eq=False)
class ElementAnimation:
    element: Element
    state: AnimationState = AnimationState.IDLE
    pending: Dict[str, asyncio.Task] = field(default_factory=dict)


class AnimationController:
    def __init__(self, settings: Optional[AnimationSettings] = None):
        self.settings = settings if settings is not None else AnimationSettings()
        self._tracked: Dict[Element, ElementAnimation] = {}

    def duration(self, base_duration: float, element_size: float) -> float:
        return calculate_animation_duration(base_duration, self.settings.speed, element_size)

    def track(self, element: Element) -> ElementAnimation:
        entry = self._tracked.get(element)
        if entry is None:
            entry = ElementAnimation(
                element=element,
                state=AnimationState.from_flag(element.class_list.contains(ANIMATING_CLASS)),
            )
            self._tracked[element] = entry
        return entry

    def state(self, element: Element) -> AnimationState:
        return self.track(element).state

    def is_pending(self, element: Element, channel: str = REVERSAL) -> bool:
        entry = self._tracked.get(element)
        if entry is None:
            return False
        task = entry.pending.get(channel)
        return task is not None and not task.done()

    def cancel(self, element: Element, channel: str = REVERSAL) -> bool:
        """Cancel the pending timer on ``channel``; True if one was cancelled."""
        entry = self._tracked.get(element)
        if entry is None:
            return False
        task = entry.pending.pop(channel, None)
        if task is None or task.done():
            return False
        task.cancel()
        return True

    def forget(self, element: Element) -> bool:
        """Drop the element and cancel its timers; True if it was tracked."""
        entry = self._tracked.pop(element, None)
        if entry is None:
            return False
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        for task in entry.pending.values():
            if task is not current and not task.done():
                task.cancel()
        entry.pending.clear()
        return True

    @property
    def tracked_count(self) -> int:
        return len(self._tracked)

    def manage(
        self,
        element: Element,
        action: Union[AnimationAction, str],
        *,
        revert_after_ms: Optional[float] = None,
        revert_classes: Iterable[str] = (),
    ) -> AnimationStateResult:
        """Apply ``action`` and optionally schedule its reversal.

        The reversal only gets scheduled when the element ends up animating;
        it removes ``revert_classes`` and stops the animation.
        """
        entry = self.track(element)
        if self.cancel(element):
            logger.debug("Cancelled stale reversal for element id=%s", element.id)

        result = manage_animation_state(element, action)
        entry.state = AnimationState.from_flag(result.new_state)

        if revert_after_ms is not None and result.new_state:
            self.schedule(element, revert_after_ms, remove_classes=revert_classes)
        return result

    def schedule(
        self,
        element: Element,
        delay_ms: float,
        *,
        channel: str = REVERSAL,
        remove_classes: Iterable[str] = (),
        stop: bool = True,
        callback: Optional[Callable[[], None]] = None,
    ) -> asyncio.Task:
        """Run a reversal on ``element`` after ``delay_ms`` (negative delays clamp to 0).

        Replaces whatever was pending on the same channel. Must be called with
        a running event loop.
        """
        entry = self.track(element)
        self.cancel(element, channel)
        delay = max(float(delay_ms), 0.0) / 1000
        task = asyncio.create_task(
            self._run_later(entry, channel, delay, tuple(remove_classes), stop, callback)
        )
        entry.pending[channel] = task
        return task

    async def _run_later(
        self,
        entry: ElementAnimation,
        channel: str,
        delay: float,
        remove_classes: tuple,
        stop: bool,
        callback: Optional[Callable[[], None]],
    ) -> None:
        try:
            await asyncio.sleep(delay)
            try:
                if remove_classes:
                    entry.element.class_list.remove(*remove_classes)
                if stop:
                    result = manage_animation_state(entry.element, AnimationAction.STOP)
                    entry.state = AnimationState.from_flag(result.new_state)
                if callback is not None:
                    callback()
            except Exception:
                logger.exception(
                    "Animation timer failed | element id=%s | channel=%s", entry.element.id, channel
                )
        finally:
            if entry.pending.get(channel) is asyncio.current_task():
                del entry.pending[channel]

    async def shutdown(self) -> None:
        tasks = []
        for entry in self._tracked.values():
            tasks.extend(task for task in entry.pending.values() if not task.done())
            entry.pending.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.debug("Animation controller stopped | cancelled=%s", len(tasks))
