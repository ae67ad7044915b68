"""
SpaceMouseSource — 3DConnexion six-DoF input through pyspacemouse.

Polls the device from a QTimer on the GUI thread and delivers translated
SixDofEvents to the windows that asked for them.

pyspacemouse is optional: without it (or without a device) open() simply
returns False and nothing is ever delivered.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from PyQt6 import QtCore, QtWidgets

from uiplatform import log
from uiplatform.base import Window
from uiplatform.events import SixDofEvent
from uiplatform.translate import translate_six_dof_button, translate_six_dof_motion

# pyspacemouse reports axes normalized to [-1, 1]; the device itself
# counts roughly +-350 per axis.
FULL_SCALE = 350.0


def _raw(value: float) -> float:
    return float(value) * FULL_SCALE


def events_from_state(
    state,
    previous_buttons: Sequence[int] = (),
    shift: bool = False,
    control: bool = False,
) -> List[SixDofEvent]:
    """
    Translate one pyspacemouse state snapshot.

    Args:
        state: Object with x/y/z/roll/pitch/yaw and an optional buttons list.
        previous_buttons: Button states of the previous snapshot.

    Returns:
        Motion event (if any axis is non-zero) followed by button edges.
    """
    events: List[SixDofEvent] = []

    tx, ty, tz = _raw(state.x), _raw(state.y), _raw(state.z)
    rx, ry, rz = _raw(state.roll), _raw(state.pitch), _raw(state.yaw)
    if any((tx, ty, tz, rx, ry, rz)):
        events.append(translate_six_dof_motion(tx, ty, tz, rx, ry, rz, shift, control))

    buttons = list(getattr(state, "buttons", None) or [])
    for number, pressed in enumerate(buttons):
        was_pressed = number < len(previous_buttons) and bool(previous_buttons[number])
        if bool(pressed) == was_pressed:
            continue
        event = translate_six_dof_button(number, bool(pressed), shift, control)
        if event is not None:
            events.append(event)

    return events


class SpaceMouseSource:
    """
    Usage:
        source = SpaceMouseSource()
        if source.open():
            source.attach(window)
        ...
        source.close()
    """

    def __init__(self, poll_interval_ms: int = 16):
        self._device_open = False
        self._pyspacemouse = None
        self._windows: List[Window] = []
        self._buttons: List[int] = []

        self._timer = QtCore.QTimer()
        self._timer.setInterval(poll_interval_ms)
        self._timer.timeout.connect(self.poll)

    def open(self) -> bool:
        """
        Open the first available device.

        Returns:
            True if the device is open.
        """
        if self._device_open:
            return True

        try:
            import pyspacemouse
            self._pyspacemouse = pyspacemouse

            if not pyspacemouse.open():
                return False
        except ImportError:
            log.debug("[SpaceMouse] pyspacemouse is not installed")
            return False
        except Exception as e:
            log.debug(f"[SpaceMouse] Failed to open device: {e}")
            return False

        self._device_open = True
        self._buttons = []
        self._timer.start()
        log.info("[SpaceMouse] device opened")
        return True

    def close(self) -> None:
        self._timer.stop()
        if self._device_open and self._pyspacemouse is not None:
            try:
                self._pyspacemouse.close()
            except Exception as e:
                log.debug(f"[SpaceMouse] Failed to close device: {e}")
        self._device_open = False
        self._windows.clear()

    @property
    def is_open(self) -> bool:
        return self._device_open

    def attach(self, window: Window) -> None:
        if window not in self._windows:
            self._windows.append(window)

    def detach(self, window: Window) -> None:
        if window in self._windows:
            self._windows.remove(window)

    def _target(self) -> Optional[Window]:
        for window in self._windows:
            widget = window.native_widget
            if window.is_visible() and widget is not None and widget.isActiveWindow():
                return window
        return None

    def poll(self) -> None:
        if not self._device_open or self._pyspacemouse is None:
            return

        try:
            state = self._pyspacemouse.read()
        except Exception as e:
            log.debug(f"[SpaceMouse] Failed to read device state: {e}")
            return

        modifiers = QtWidgets.QApplication.keyboardModifiers()
        shift = bool(modifiers & QtCore.Qt.KeyboardModifier.ShiftModifier)
        control = bool(modifiers & QtCore.Qt.KeyboardModifier.ControlModifier)

        events = events_from_state(state, self._buttons, shift, control)
        self._buttons = list(getattr(state, "buttons", None) or [])

        target = self._target()
        if target is None:
            return
        for event in events:
            target._dispatch_six_dof_event(event)
