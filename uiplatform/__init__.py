"""
uiplatform - platform abstraction and input translation layer.

Toolkit-neutral windows, menus, dialogs, timers and a settings store,
with a PyQt6 implementation in uiplatform.backends.
"""

from uiplatform.base import (
    Cursor,
    FileDialog,
    Indicator,
    Menu,
    MenuBar,
    MenuItem,
    MessageDialog,
    MessageType,
    PlatformBackend,
    Response,
    Timer,
    Window,
    WindowKind,
    in_modal_loop,
)
from uiplatform.errors import ContractViolation, PlatformError, fatal_error
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
from uiplatform.guard import ExternalStateGuard
from uiplatform.settings import Settings, resolve_config_path

__all__ = [
    "Cursor",
    "FileDialog",
    "Indicator",
    "Menu",
    "MenuBar",
    "MenuItem",
    "MessageDialog",
    "MessageType",
    "PlatformBackend",
    "Response",
    "Timer",
    "Window",
    "WindowKind",
    "in_modal_loop",
    "ContractViolation",
    "PlatformError",
    "fatal_error",
    "KeyboardEvent",
    "KeyKind",
    "KeyType",
    "MouseButton",
    "MouseEvent",
    "MouseType",
    "ScrollDirection",
    "SixDofButton",
    "SixDofEvent",
    "SixDofType",
    "ExternalStateGuard",
    "Settings",
    "resolve_config_path",
]
