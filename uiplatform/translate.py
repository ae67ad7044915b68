"""
Translation of Qt input payloads into neutral events.

Every function is pure: it takes the values carried by a native event
(ints or Qt enum flags) and returns one neutral event, or None when the
event is not translatable. On None the caller lets Qt handle the event
through its default path.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt

from uiplatform.events import (
    KeyboardEvent,
    KeyKind,
    KeyType,
    MouseButton,
    MouseEvent,
    MouseType,
    ScrollDirection,
    SixDofButton,
    SixDofEvent,
    SixDofType,
)

SIX_DOF_ROTATION_SCALE = 0.001

# Qt.Key values at or above this are not Unicode code points.
_SPECIAL_KEY_BASE = 0x01000000


def _bits(value) -> int:
    """Qt flag enum or plain int -> int."""
    return int(getattr(value, "value", value))


_SHIFT = _bits(Qt.KeyboardModifier.ShiftModifier)
_CONTROL = _bits(Qt.KeyboardModifier.ControlModifier)
# Set on every numeric keypad key; not a held modifier.
_KEYPAD = _bits(Qt.KeyboardModifier.KeypadModifier)

_LEFT = _bits(Qt.MouseButton.LeftButton)
_MIDDLE = _bits(Qt.MouseButton.MiddleButton)
_RIGHT = _bits(Qt.MouseButton.RightButton)

_F1 = _bits(Qt.Key.Key_F1)
_F12 = _bits(Qt.Key.Key_F12)

_SPECIAL_CHARACTERS = {
    _bits(Qt.Key.Key_Tab): "\t",
    _bits(Qt.Key.Key_Backtab): "\t",
    _bits(Qt.Key.Key_Escape): "\x1b",
    _bits(Qt.Key.Key_Backspace): "\b",
    _bits(Qt.Key.Key_Return): "\r",
    _bits(Qt.Key.Key_Enter): "\r",
    _bits(Qt.Key.Key_Delete): "\x7f",
}

_SHORTCUT_NAMES = {
    "\t": "Tab",
    "\x1b": "Esc",
    "\x7f": "Del",
    "\b": "Backspace",
    "\r": "Return",
    " ": "Space",
}


def _modifier_flags(modifiers) -> tuple[bool, bool]:
    mods = _bits(modifiers)
    return (mods & _SHIFT) != 0, (mods & _CONTROL) != 0


# --- Мышь -----------------------------------------------------------------


def translate_button(button, buttons) -> MouseButton:
    """
    Resolve the logical button.

    The explicit `button` of press/release events wins; motion events carry
    only the `buttons` state mask, so it is the fallback.
    """
    button = _bits(button)
    buttons = _bits(buttons)
    if button == _LEFT or (buttons & _LEFT):
        return MouseButton.LEFT
    if button == _MIDDLE or (buttons & _MIDDLE):
        return MouseButton.MIDDLE
    if button == _RIGHT or (buttons & _RIGHT):
        return MouseButton.RIGHT
    return MouseButton.NONE


def translate_mouse(
    type: MouseType,
    x: float,
    y: float,
    button=0,
    buttons=0,
    modifiers=0,
    scroll_delta: int = 0,
) -> MouseEvent:
    shift, control = _modifier_flags(modifiers)
    return MouseEvent(
        type=type,
        x=float(x),
        y=float(y),
        button=translate_button(button, buttons),
        shift_down=shift,
        control_down=control,
        scroll_delta=scroll_delta,
    )


def translate_scroll(delta_y: float, direction: Optional[ScrollDirection] = None) -> Optional[int]:
    """
    Map a vertical wheel payload to +1 / -1.

    delta_y follows the "content moves down" convention: negative means the
    wheel went up (away from the user). Horizontal or zero payloads are not
    translatable.
    """
    if delta_y < 0 or direction == ScrollDirection.UP:
        return 1
    if delta_y > 0 or direction == ScrollDirection.DOWN:
        return -1
    return None


def wheel_delta_y(angle_delta_y: int) -> float:
    """Qt angleDelta().y() (positive = away from user) -> delta_y in notches."""
    return -angle_delta_y / 120.0


# --- Клавиатура -----------------------------------------------------------


def translate_key(type: KeyType, key, modifiers) -> Optional[KeyboardEvent]:
    """
    Map a Qt key event to a KeyboardEvent.

    Only Shift and Control may be held; any other modifier leaves the event
    to Qt's own shortcut dispatch. The keypad flag is ignored. Characters
    are lower-cased.
    """
    mods = _bits(modifiers) & ~_KEYPAD
    if mods & ~(_SHIFT | _CONTROL):
        return None

    shift, control = _modifier_flags(mods)
    key = _bits(key)

    if 0 < key < _SPECIAL_KEY_BASE:
        return KeyboardEvent(
            type=type, key=KeyKind.CHARACTER, chr=chr(key).lower(),
            shift_down=shift, control_down=control,
        )

    if key in _SPECIAL_CHARACTERS:
        return KeyboardEvent(
            type=type, key=KeyKind.CHARACTER, chr=_SPECIAL_CHARACTERS[key],
            shift_down=shift, control_down=control,
        )

    if _F1 <= key <= _F12:
        return KeyboardEvent(
            type=type, key=KeyKind.FUNCTION, num=key - _F1 + 1,
            shift_down=shift, control_down=control,
        )

    return None


def accelerator_to_shortcut(accel: KeyboardEvent) -> str:
    """
    Build a QKeySequence string ("Ctrl+Shift+S", "F5", "Del") for a menu
    accelerator described as a KeyboardEvent.
    """
    parts = []
    if accel.control_down:
        parts.append("Ctrl")
    if accel.shift_down:
        parts.append("Shift")

    if accel.key == KeyKind.FUNCTION:
        parts.append(f"F{accel.num}")
    elif accel.chr in _SHORTCUT_NAMES:
        parts.append(_SHORTCUT_NAMES[accel.chr])
    else:
        parts.append(accel.chr.upper())

    return "+".join(parts)


# --- 6DOF -----------------------------------------------------------------


def translate_six_dof_motion(
    tx: float, ty: float, tz: float,
    rx: float, ry: float, rz: float,
    shift: bool = False,
    control: bool = False,
) -> SixDofEvent:
    """
    Device axes are right-handed, the application is left-handed:
    Z is flipped for both translation and rotation.
    """
    return SixDofEvent(
        type=SixDofType.MOTION,
        translation_x=float(tx),
        translation_y=float(ty),
        translation_z=float(tz) * -1.0,
        rotation_x=float(rx) * SIX_DOF_ROTATION_SCALE,
        rotation_y=float(ry) * SIX_DOF_ROTATION_SCALE,
        rotation_z=float(rz) * -SIX_DOF_ROTATION_SCALE,
        shift_down=shift,
        control_down=control,
    )


def translate_six_dof_button(
    number: int,
    pressed: bool,
    shift: bool = False,
    control: bool = False,
) -> Optional[SixDofEvent]:
    """Only device button 0 is mapped (to FIT)."""
    if number != 0:
        return None
    return SixDofEvent(
        type=SixDofType.PRESS if pressed else SixDofType.RELEASE,
        button=SixDofButton.FIT,
        shift_down=shift,
        control_down=control,
    )
