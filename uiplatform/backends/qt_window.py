"""PyQt6 window: GL surface, inline editor overlay, scrollbar, menu bar slot."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Tuple

from OpenGL import GL as gl
from PyQt6 import QtCore, QtGui, QtWidgets
from PyQt6.QtOpenGLWidgets import QOpenGLWidget

from uiplatform import log
from uiplatform.base import Cursor, MenuBar, Window, WindowKind, prepare_title
from uiplatform.editor_geometry import Margins, editor_rect, measured_text
from uiplatform.events import KeyType, MouseType
from uiplatform.translate import translate_key, translate_mouse, translate_scroll, wheel_delta_y

if TYPE_CHECKING:
    from uiplatform.backends.qt import QtPlatform
    from uiplatform.backends.qt_menu import QtMenuBar

# QLineEdit keeps this much space between its frame and the text
# (QLineEditPrivate::horizontalMargin / verticalMargin).
_ENTRY_HORIZONTAL_MARGIN = 2
_ENTRY_VERTICAL_MARGIN = 1


class QtGLSurface(QOpenGLWidget):
    """Drawing surface; translates Qt input into neutral events."""

    def __init__(self, owner: "QtWindow", parent=None):
        super().__init__(parent)
        self._owner = owner
        self.setFocusPolicy(QtCore.Qt.FocusPolicy.StrongFocus)
        self.setMouseTracking(True)

        fmt = QtGui.QSurfaceFormat()
        fmt.setDepthBufferSize(24)
        self.setFormat(fmt)

    # --- События мыши ----------------------------------------------------

    def _pointer(self, type: MouseType, event, scroll_delta: int = 0) -> bool:
        pos = event.position()
        button = event.button() if hasattr(event, "button") else 0
        mouse_event = translate_mouse(
            type, pos.x(), pos.y(),
            button, event.buttons(), event.modifiers(),
            scroll_delta,
        )
        return self._owner._dispatch_mouse_event(mouse_event)

    def mouseMoveEvent(self, event):
        if not self._pointer(MouseType.MOTION, event):
            super().mouseMoveEvent(event)

    def mousePressEvent(self, event):
        if not self._pointer(MouseType.PRESS, event):
            super().mousePressEvent(event)

    def mouseDoubleClickEvent(self, event):
        if not self._pointer(MouseType.DBL_PRESS, event):
            super().mouseDoubleClickEvent(event)

    def mouseReleaseEvent(self, event):
        if not self._pointer(MouseType.RELEASE, event):
            super().mouseReleaseEvent(event)

    def wheelEvent(self, event):
        delta = translate_scroll(wheel_delta_y(event.angleDelta().y()))
        if delta is None or not self._pointer(MouseType.SCROLL_VERT, event, delta):
            super().wheelEvent(event)

    def leaveEvent(self, event):
        # QEvent.Leave carries no position; ask the cursor instead.
        pos = self.mapFromGlobal(QtGui.QCursor.pos())
        mouse_event = translate_mouse(
            MouseType.LEAVE, pos.x(), pos.y(),
            0, QtWidgets.QApplication.mouseButtons(), QtWidgets.QApplication.keyboardModifiers(),
        )
        if not self._owner._dispatch_mouse_event(mouse_event):
            super().leaveEvent(event)

    # --- Клавиатура ------------------------------------------------------

    def _key(self, type: KeyType, event) -> bool:
        key_event = translate_key(type, event.key(), event.modifiers())
        if key_event is None:
            return False
        return self._owner._dispatch_keyboard_event(key_event)

    def keyPressEvent(self, event):
        if not self._key(KeyType.PRESS, event):
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if not self._key(KeyType.RELEASE, event):
            super().keyReleaseEvent(event)

    # --- Рендер ----------------------------------------------------------

    def initializeGL(self):
        version = gl.glGetString(gl.GL_VERSION)
        if version:
            log.debug(f"[GL] context ready: OpenGL {version.decode(errors='replace')}")

    def paintGL(self):
        if self._owner.on_render is not None:
            self._owner._dispatch_render()
        else:
            gl.glClearColor(0.0, 0.0, 0.0, 1.0)
            gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)


class _EditorEntry(QtWidgets.QLineEdit):
    def __init__(self, overlay: "QtEditorOverlay"):
        super().__init__(overlay)
        self._overlay = overlay
        self.setFrame(False)

    def keyPressEvent(self, event):
        if event.key() == QtCore.Qt.Key.Key_Escape:
            self._overlay.stop_editing()
            return
        super().keyPressEvent(event)


class QtEditorOverlay(QtWidgets.QWidget):
    """
    GL surface with a floating QLineEdit on top.

    The entry is positioned in surface coordinates. While editing it holds
    the keyboard grab; pointer events still reach the surface.
    """

    def __init__(self, owner: "QtWindow", parent=None):
        super().__init__(parent)
        self._owner = owner
        self._surface = QtGLSurface(owner, self)

        self._entry = _EditorEntry(self)
        self._entry.hide()
        self._entry.returnPressed.connect(self._on_activate)

    @property
    def surface(self) -> QtGLSurface:
        return self._surface

    @property
    def entry(self) -> QtWidgets.QLineEdit:
        return self._entry

    def is_editing(self) -> bool:
        return not self._entry.isHidden()

    def _entry_padding(self) -> Margins:
        text = self._entry.textMargins()
        contents = self._entry.contentsMargins()
        return Margins(
            left=text.left() + contents.left() + _ENTRY_HORIZONTAL_MARGIN,
            top=text.top() + contents.top() + _ENTRY_VERTICAL_MARGIN,
            right=text.right() + contents.right() + _ENTRY_HORIZONTAL_MARGIN,
            bottom=text.bottom() + contents.bottom() + _ENTRY_VERTICAL_MARGIN,
        )

    def start_editing(
        self,
        x: float,
        y: float,
        font_height: float,
        min_width: float,
        is_monospace: bool,
        text: str,
    ) -> None:
        font = QtGui.QFont("monospace" if is_monospace else self.font().family())
        font.setStyleHint(
            QtGui.QFont.StyleHint.Monospace if is_monospace else QtGui.QFont.StyleHint.SansSerif
        )
        font.setPixelSize(max(1, int(font_height)))
        self._entry.setFont(font)

        metrics = QtGui.QFontMetricsF(font)
        rect = editor_rect(
            x, y,
            ascent=metrics.ascent(),
            text_width=metrics.horizontalAdvance(measured_text(text)),
            min_width=min_width,
            padding=self._entry_padding(),
        )
        self._entry.setGeometry(rect.x, rect.y, rect.width, self._entry.sizeHint().height())
        self._entry.setText(text)

        if not self.is_editing():
            self._entry.show()
            self._entry.setFocus(QtCore.Qt.FocusReason.OtherFocusReason)
            if self._entry.isVisible():
                self._entry.grabKeyboard()

    def stop_editing(self) -> None:
        if not self.is_editing():
            return
        self._entry.releaseKeyboard()
        self._entry.hide()
        self._surface.setFocus(QtCore.Qt.FocusReason.OtherFocusReason)

    def _on_activate(self) -> None:
        text = self._entry.text()
        # The handler may reopen the editor, so hide it first.
        self.stop_editing()
        self._owner._dispatch_editing_done(text)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._surface.setGeometry(0, 0, self.width(), self.height())

    def sizeHint(self):
        return self._surface.sizeHint()

    def minimumSizeHint(self):
        return self._surface.minimumSize()


class _QtTopLevel(QtWidgets.QWidget):
    """Native top-level: [menu bar] over [overlay | scrollbar]."""

    def __init__(self, owner: "QtWindow", parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self._owner = owner

        self._layout = QtWidgets.QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(0)

        row = QtWidgets.QHBoxLayout()
        row.setContentsMargins(0, 0, 0, 0)
        row.setSpacing(0)

        self.overlay = QtEditorOverlay(owner, self)
        self.scrollbar = QtWidgets.QScrollBar(QtCore.Qt.Orientation.Vertical, self)
        self.scrollbar.hide()
        row.addWidget(self.overlay, 1)
        row.addWidget(self.scrollbar, 0)
        self._layout.addLayout(row, 1)

        self._menu_bar: Optional[QtWidgets.QMenuBar] = None

    def set_menu_bar(self, menu_bar: Optional[QtWidgets.QMenuBar]) -> None:
        if self._menu_bar is not None:
            self._menu_bar.hide()
            self._menu_bar.setParent(None)
        self._menu_bar = menu_bar
        self._layout.setMenuBar(menu_bar)
        if menu_bar is not None:
            menu_bar.show()

    def closeEvent(self, event):
        if self._owner._dispatch_close():
            event.ignore()
            return
        super().closeEvent(event)

    def changeEvent(self, event):
        if event.type() == QtCore.QEvent.Type.WindowStateChange:
            is_full_screen = bool(self.windowState() & QtCore.Qt.WindowState.WindowFullScreen)
            self._owner._window_state_changed(is_full_screen)
        super().changeEvent(event)


class QtWindow(Window):
    def __init__(
        self,
        platform: "QtPlatform",
        kind: WindowKind = WindowKind.TOPLEVEL,
        parent: Optional["QtWindow"] = None,
    ):
        super().__init__()
        self._platform = platform
        self.menu_bar: Optional[MenuBar] = None

        parent_widget = parent.native_widget if parent is not None else None
        self._widget = _QtTopLevel(self, parent_widget)
        if kind == WindowKind.TOOL:
            self._widget.setWindowFlags(QtCore.Qt.WindowType.Tool)
        elif parent_widget is not None:
            self._widget.setWindowFlags(QtCore.Qt.WindowType.Window)

        icon = platform.window_icon
        if icon is not None:
            self._widget.setWindowIcon(icon)

        self._widget.scrollbar.valueChanged.connect(self._on_scrollbar_value_changed)

    @property
    def native_widget(self) -> QtWidgets.QWidget:
        return self._widget

    @property
    def overlay(self) -> QtEditorOverlay:
        return self._widget.overlay

    @property
    def surface(self) -> QtGLSurface:
        return self._widget.overlay.surface

    def _on_scrollbar_value_changed(self, value: int) -> None:
        self._dispatch_scrollbar_adjusted(float(value))

    # --- Visibility / state ---

    def get_pixel_density(self) -> float:
        screen = self._widget.screen()
        if screen is None:
            return 96.0
        return screen.logicalDotsPerInch()

    def get_device_pixel_ratio(self) -> float:
        return self._widget.devicePixelRatioF()

    def is_visible(self) -> bool:
        return self._widget.isVisible()

    def set_visible(self, visible: bool) -> None:
        self._widget.setVisible(visible)

    def focus(self) -> None:
        self._widget.raise_()
        self._widget.activateWindow()

    def set_full_screen(self, full_screen: bool) -> None:
        state = self._widget.windowState()
        if full_screen:
            self._widget.setWindowState(state | QtCore.Qt.WindowState.WindowFullScreen)
        else:
            self._widget.setWindowState(state & ~QtCore.Qt.WindowState.WindowFullScreen)

    def set_title(self, title: str) -> None:
        self._widget.setWindowTitle(prepare_title(title, self._platform.app_name))

    def set_menu_bar(self, menu_bar: Optional["QtMenuBar"]) -> None:
        self._widget.set_menu_bar(menu_bar.qmenubar if menu_bar is not None else None)
        self.menu_bar = menu_bar

    def get_content_size(self) -> Tuple[float, float]:
        return float(self.surface.width()), float(self.surface.height())

    def set_min_content_size(self, width: float, height: float) -> None:
        self.surface.setMinimumSize(int(width), int(height))

    # --- Geometry ---

    def get_position(self) -> Tuple[int, int]:
        pos = self._widget.pos()
        return pos.x(), pos.y()

    def get_size(self) -> Tuple[int, int]:
        return self._widget.width(), self._widget.height()

    def is_maximized(self) -> bool:
        return self._widget.isMaximized()

    def move(self, left: int, top: int) -> None:
        self._widget.move(left, top)

    def resize(self, width: int, height: int) -> None:
        self._widget.resize(width, height)

    def maximize(self) -> None:
        self._widget.setWindowState(self._widget.windowState() | QtCore.Qt.WindowState.WindowMaximized)

    # --- Cursor / tooltip ---

    def set_cursor(self, cursor: Cursor) -> None:
        if cursor == Cursor.HAND:
            shape = QtCore.Qt.CursorShape.PointingHandCursor
        else:
            shape = QtCore.Qt.CursorShape.ArrowCursor
        self.surface.setCursor(shape)

    def set_tooltip(self, text: str) -> None:
        self.surface.setToolTip(text)

    # --- Editor overlay ---

    def is_editor_visible(self) -> bool:
        return self.overlay.is_editing()

    def show_editor(self, x, y, font_height, min_width, is_monospace, text) -> None:
        self.overlay.start_editing(x, y, font_height, min_width, is_monospace, text)

    def hide_editor(self) -> None:
        self.overlay.stop_editing()

    # --- Scrollbar ---

    def set_scrollbar_visible(self, visible: bool) -> None:
        self._widget.scrollbar.setVisible(visible)

    def configure_scrollbar(self, min: float, max: float, page_size: float) -> None:
        # QScrollBar's maximum is the largest *value*, i.e. the document
        # end minus one page.
        scrollbar = self._widget.scrollbar
        lower = int(min)
        upper = int(max - page_size)
        if upper < lower:
            upper = lower
        scrollbar.setRange(lower, upper)
        scrollbar.setPageStep(int(page_size))
        scrollbar.setSingleStep(1)

    def get_scrollbar_position(self) -> float:
        return float(self._widget.scrollbar.value())

    def set_scrollbar_position(self, pos: float) -> None:
        self._widget.scrollbar.setValue(int(pos))

    # --- Rendering ---

    def invalidate(self) -> None:
        self.surface.update()

    def redraw(self) -> None:
        self.invalidate()
        QtWidgets.QApplication.processEvents(QtCore.QEventLoop.ProcessEventsFlag.AllEvents)
