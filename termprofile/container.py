"""A container that pairs a terminal screen with its vertical scrollbar."""

from __future__ import annotations

from contextlib import contextmanager
from enum import IntEnum
from typing import Any, Callable, Iterator, Optional

NotifyCallback = Callable[["ScreenContainer", str], None]

HSCROLLBAR_POLICY = "hscrollbar-policy"
VSCROLLBAR_POLICY = "vscrollbar-policy"
WINDOW_PLACEMENT = "window-placement"
WINDOW_PLACEMENT_SET = "window-placement-set"


class PolicyType(IntEnum):
    """When a scrollbar is shown."""

    ALWAYS = 0
    AUTOMATIC = 1
    NEVER = 2
    EXTERNAL = 3


class CornerType(IntEnum):
    """Where the content sits relative to its scrollbars."""

    TOP_LEFT = 0
    BOTTOM_LEFT = 1
    TOP_RIGHT = 2
    BOTTOM_RIGHT = 3


class ScreenContainer:
    """Holds a screen and a vertical scrollbar laid out side by side.

    The layout is a row of two children: the screen and the scrollbar.
    Placement and scrollbar policy decide the scrollbar's position in that
    row and whether it is visible.
    """

    def __init__(self, screen: Any) -> None:
        if screen is None:
            raise ValueError("a screen container needs a screen")
        self._screen = screen
        self._hscrollbar_policy = PolicyType.AUTOMATIC
        self._vscrollbar_policy = PolicyType.AUTOMATIC
        self._window_placement = CornerType.BOTTOM_RIGHT
        self._window_placement_set = False
        self._notify_callbacks: list[NotifyCallback] = []
        self._frozen: Optional[list[str]] = None
        # The screen is packed first, the scrollbar after it; both are shown.
        self._scrollbar_index = 1
        self._scrollbar_visible = True

    @property
    def screen(self) -> Any:
        return self._screen

    @property
    def hscrollbar_policy(self) -> PolicyType:
        return self._hscrollbar_policy

    @hscrollbar_policy.setter
    def hscrollbar_policy(self, value: PolicyType) -> None:
        self.set_policy(value, self._vscrollbar_policy)

    @property
    def vscrollbar_policy(self) -> PolicyType:
        return self._vscrollbar_policy

    @vscrollbar_policy.setter
    def vscrollbar_policy(self, value: PolicyType) -> None:
        self.set_policy(self._hscrollbar_policy, value)

    @property
    def window_placement(self) -> CornerType:
        return self._window_placement

    @property
    def window_placement_set(self) -> bool:
        return self._window_placement_set

    def connect_notify(self, callback: NotifyCallback) -> None:
        """Call ``callback(container, prop_name)`` when a property changes."""
        self._notify_callbacks.append(callback)

    def scrollbar_visible(self) -> bool:
        """True if the vertical scrollbar is shown."""
        return self._scrollbar_visible

    def scrollbar_index(self) -> int:
        """Position of the scrollbar in the row: 0 before the screen, 1 after it."""
        return self._scrollbar_index

    def _notify(self, prop_name: str) -> None:
        if self._frozen is not None:
            if prop_name not in self._frozen:
                self._frozen.append(prop_name)
            return
        for callback in list(self._notify_callbacks):
            callback(self, prop_name)

    @contextmanager
    def _frozen_notify(self) -> Iterator[None]:
        if self._frozen is not None:
            yield
            return
        self._frozen = []
        try:
            yield
        finally:
            pending, self._frozen = self._frozen, None
            for prop_name in pending:
                self._notify(prop_name)

    def set_policy(self, hpolicy: PolicyType, vpolicy: PolicyType) -> None:
        """Set the scrollbar policies; raises ValueError for an unsupported one."""
        hpolicy = PolicyType(hpolicy)
        vpolicy = PolicyType(vpolicy)
        if vpolicy is PolicyType.EXTERNAL:
            raise ValueError(f"unsupported vertical scrollbar policy: {vpolicy.name}")
        with self._frozen_notify():
            if self._hscrollbar_policy != hpolicy:
                self._hscrollbar_policy = hpolicy
                self._notify(HSCROLLBAR_POLICY)
            if self._vscrollbar_policy != vpolicy:
                self._vscrollbar_policy = vpolicy
                self._notify(VSCROLLBAR_POLICY)
            self._scrollbar_visible = vpolicy is not PolicyType.NEVER

    def set_window_placement(self, corner: CornerType) -> None:
        """Move the scrollbar to match ``corner`` without marking it as set."""
        corner = CornerType(corner)
        if corner in (CornerType.TOP_LEFT, CornerType.BOTTOM_LEFT):
            self._scrollbar_index = 1
        else:
            self._scrollbar_index = 0
        self._window_placement = corner
        self._notify(WINDOW_PLACEMENT)

    def set_window_placement_set(self, value: bool) -> None:
        """Record whether the placement was chosen explicitly."""
        self._window_placement_set = bool(value)
        self._notify(WINDOW_PLACEMENT_SET)

    def set_placement(self, corner: CornerType) -> None:
        """Set the window placement and mark it as explicitly chosen."""
        self.set_window_placement(corner)
        self.set_window_placement_set(True)