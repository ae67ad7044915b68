"""Platform backend registry."""

from __future__ import annotations
from typing import Optional

from uiplatform.base import PlatformBackend
from .qt import QtPlatform, QtTimer, load_icon
from .qt_dialogs import QtFileDialog, QtMessageDialog
from .qt_menu import QtMenu, QtMenuBar, QtMenuItem
from .qt_window import QtEditorOverlay, QtGLSurface, QtWindow
from .spacemouse import SpaceMouseSource

_default_platform: Optional[PlatformBackend] = None


def set_default_platform(platform: Optional[PlatformBackend]):
    global _default_platform
    _default_platform = platform


def get_default_platform() -> PlatformBackend:
    global _default_platform
    if _default_platform is None:
        _default_platform = QtPlatform()
    return _default_platform


__all__ = [
    "QtPlatform",
    "QtTimer",
    "QtWindow",
    "QtGLSurface",
    "QtEditorOverlay",
    "QtMenu",
    "QtMenuBar",
    "QtMenuItem",
    "QtMessageDialog",
    "QtFileDialog",
    "SpaceMouseSource",
    "load_icon",
    "set_default_platform",
    "get_default_platform",
]
