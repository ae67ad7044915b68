"""
ExternalStateGuard - separates "changed by the user" from "changed by code".

A component that both drives and observes the same native state (a check
menu item, a scrollbar, a toggle) wraps its own writes in `applying()`;
the change handler skips application callbacks while `active` is set.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator


class ExternalStateGuard:
    """
    Two-state flag: idle / applying external state.

    Usage:
        with self._guard.applying():
            self._action.setChecked(True)

        def _on_native_changed(self):
            if self._guard.active:
                return
            self.on_trigger()
    """

    def __init__(self) -> None:
        self._depth = 0

    @property
    def active(self) -> bool:
        return self._depth > 0

    @contextmanager
    def applying(self) -> Iterator[None]:
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
