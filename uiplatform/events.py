"""Toolkit-independent input events delivered to window handlers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class MouseType(IntEnum):
    MOTION = 0
    PRESS = 1
    DBL_PRESS = 2
    RELEASE = 3
    SCROLL_VERT = 4
    LEAVE = 5


class MouseButton(IntEnum):
    NONE = 0
    LEFT = 1
    MIDDLE = 2
    RIGHT = 3


class KeyType(IntEnum):
    PRESS = 0
    RELEASE = 1


class KeyKind(IntEnum):
    CHARACTER = 0
    FUNCTION = 1


class SixDofType(IntEnum):
    MOTION = 0
    PRESS = 1
    RELEASE = 2


class SixDofButton(IntEnum):
    FIT = 0


class ScrollDirection(Enum):
    """Explicit wheel direction, for payloads that carry one instead of a delta."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass
class MouseEvent:
    """
    One pointer occurrence in window-local pixels.

    scroll_delta is +1 for a wheel step towards the top of the content
    and -1 for a step towards the bottom; zero for non-scroll events.
    """

    Type = MouseType
    Button = MouseButton

    type: MouseType
    x: float = 0.0
    y: float = 0.0
    button: MouseButton = MouseButton.NONE
    shift_down: bool = False
    control_down: bool = False
    scroll_delta: int = 0


@dataclass
class KeyboardEvent:
    """
    One key occurrence.

    For CHARACTER keys `chr` holds a single lower-cased character;
    for FUNCTION keys `num` holds the 1-based ordinal (F1 -> 1).
    Also used to describe menu accelerators.
    """

    Type = KeyType
    Key = KeyKind

    type: KeyType = KeyType.PRESS
    key: KeyKind = KeyKind.CHARACTER
    chr: str = ""
    num: int = 0
    shift_down: bool = False
    control_down: bool = False

    @classmethod
    def character(cls, ch: str, shift: bool = False, control: bool = False) -> "KeyboardEvent":
        return cls(key=KeyKind.CHARACTER, chr=ch.lower(), shift_down=shift, control_down=control)

    @classmethod
    def function(cls, num: int, shift: bool = False, control: bool = False) -> "KeyboardEvent":
        return cls(key=KeyKind.FUNCTION, num=num, shift_down=shift, control_down=control)


@dataclass
class SixDofEvent:
    """
    One 6DOF device occurrence.

    Translation and rotation use the application's left-handed convention.
    """

    Type = SixDofType
    Button = SixDofButton

    type: SixDofType
    translation_x: float = 0.0
    translation_y: float = 0.0
    translation_z: float = 0.0
    rotation_x: float = 0.0
    rotation_y: float = 0.0
    rotation_z: float = 0.0
    button: SixDofButton = SixDofButton.FIT
    shift_down: bool = False
    control_down: bool = False
