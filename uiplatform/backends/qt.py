"""PyQt6 platform: application object, timers and the entity factories."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image
from PyQt6 import QtCore, QtGui, QtWidgets

from uiplatform import log
from uiplatform.base import PlatformBackend, Timer, Window, WindowKind
from uiplatform.errors import fatal_error
from uiplatform.backends.qt_dialogs import QtFileDialog, QtMessageDialog
from uiplatform.backends.qt_menu import QtMenu, QtMenuBar
from uiplatform.backends.qt_window import QtWindow
from uiplatform.backends.spacemouse import SpaceMouseSource


def _has_display(environ=None) -> bool:
    environ = os.environ if environ is None else environ
    if not sys.platform.startswith("linux"):
        return True
    return any(environ.get(name) for name in ("DISPLAY", "WAYLAND_DISPLAY", "QT_QPA_PLATFORM"))


def _qt_app() -> QtWidgets.QApplication:
    app = QtWidgets.QApplication.instance()
    if app is None:
        if not _has_display():
            fatal_error("No usable display: set DISPLAY or WAYLAND_DISPLAY\n")
        # Shared GL contexts so GPU resources are visible from every window.
        QtWidgets.QApplication.setAttribute(
            QtCore.Qt.ApplicationAttribute.AA_ShareOpenGLContexts
        )
        app = QtWidgets.QApplication([])
    return app


def load_icon(path) -> Optional[QtGui.QIcon]:
    """
    Загружает иконку приложения через Pillow.

    Returns:
        QIcon или None, если файл не читается.
    """
    try:
        with Image.open(path) as image:
            rgba = image.convert("RGBA")
    except (OSError, ValueError) as e:
        log.warn(e, f"Cannot load application icon {path}")
        return None

    data = rgba.tobytes("raw", "RGBA")
    qimage = QtGui.QImage(
        data, rgba.width, rgba.height, rgba.width * 4, QtGui.QImage.Format.Format_RGBA8888
    ).copy()
    return QtGui.QIcon(QtGui.QPixmap.fromImage(qimage))


class QtTimer(Timer):
    def __init__(self):
        super().__init__()
        self._timer = QtCore.QTimer()
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._fire)

    @property
    def qtimer(self) -> QtCore.QTimer:
        return self._timer

    def wind_up(self, milliseconds: int) -> None:
        self._timer.stop()
        self._timer.start(max(0, int(milliseconds)))


class QtPlatform(PlatformBackend):
    """
    Платформа на PyQt6.

    Создаёт QApplication (если его ещё нет) и все сущности слоя: окна,
    меню, таймеры, диалоги. Меню-бар у каждого окна свой.
    """

    def __init__(
        self,
        app_name: str = "uiplatform",
        icon_path: Optional[Path] = None,
        app: Optional[QtWidgets.QApplication] = None,
    ):
        super().__init__(app_name)
        self._app = app if app is not None else _qt_app()
        self._app.setApplicationName(app_name)

        self.window_icon: Optional[QtGui.QIcon] = None
        if icon_path is not None:
            self.window_icon = load_icon(icon_path)
            if self.window_icon is not None:
                self._app.setWindowIcon(self.window_icon)

        self._space_mouse: Optional[SpaceMouseSource] = None

    @property
    def app(self) -> QtWidgets.QApplication:
        return self._app

    def create_window(self, kind: WindowKind = WindowKind.TOPLEVEL, parent: Optional[Window] = None) -> QtWindow:
        return QtWindow(self, kind, parent)

    def create_menu(self) -> QtMenu:
        return QtMenu()

    def get_or_create_main_menu(self) -> Tuple[QtMenuBar, bool]:
        return QtMenuBar(), False

    def create_timer(self) -> QtTimer:
        return QtTimer()

    def create_message_dialog(self, parent: Optional[Window] = None) -> QtMessageDialog:
        return QtMessageDialog(parent)

    def create_open_file_dialog(self, parent: Optional[Window] = None) -> QtFileDialog:
        return QtFileDialog(parent, is_save=False)

    def create_save_file_dialog(self, parent: Optional[Window] = None) -> QtFileDialog:
        return QtFileDialog(parent, is_save=True)

    # --- 3DConnexion ---

    def open_3dconnexion(self) -> None:
        if self._space_mouse is None:
            self._space_mouse = SpaceMouseSource()
        if not self._space_mouse.open():
            log.debug("[Platform] no six-DoF device available")

    def close_3dconnexion(self) -> None:
        if self._space_mouse is not None:
            self._space_mouse.close()
            self._space_mouse = None

    def request_3dconnexion_events(self, window: Window) -> None:
        if self._space_mouse is not None and self._space_mouse.is_open:
            self._space_mouse.attach(window)

    # --- Event loop ---

    def run(self) -> int:
        log.debug("[Platform] entering main loop")
        return self._app.exec()

    def exit(self) -> None:
        self._app.quit()

    def shutdown(self) -> None:
        self.close_3dconnexion()
        super().shutdown()
