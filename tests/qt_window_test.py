import math
from unittest.mock import MagicMock

import pytest
from PyQt6 import QtCore, QtGui, QtWidgets

from uiplatform.base import Cursor, WindowKind
from uiplatform.backends.qt_menu import QtMenuBar
from uiplatform.events import KeyKind, MouseButton, MouseType
from uiplatform.settings import Settings


@pytest.fixture
def window(platform):
    w = platform.create_window()
    yield w
    w.native_widget.deleteLater()


def test_title_has_application_suffix(window):
    window.set_title("part.slvs")
    assert window.native_widget.windowTitle() == "part.slvs — uiplatform-test"


def test_tool_window_flag(platform):
    parent = platform.create_window()
    tool = platform.create_window(WindowKind.TOOL, parent)
    flags = tool.native_widget.windowFlags()
    assert flags & QtCore.Qt.WindowType.Tool == QtCore.Qt.WindowType.Tool
    assert tool.native_widget.parentWidget() is parent.native_widget


def test_close_is_refused_when_handler_set(window):
    window.on_close = MagicMock()
    event = QtGui.QCloseEvent()
    QtWidgets.QApplication.sendEvent(window.native_widget, event)
    window.on_close.assert_called_once_with()
    assert not event.isAccepted()


def test_close_without_handler_is_accepted(window):
    event = QtGui.QCloseEvent()
    QtWidgets.QApplication.sendEvent(window.native_widget, event)
    assert event.isAccepted()


def test_scrollbar(window):
    received = []
    window.on_scrollbar_adjusted = received.append
    window.configure_scrollbar(0, 100, 10)

    scrollbar = window.native_widget.scrollbar
    assert scrollbar.minimum() == 0
    assert scrollbar.maximum() == 90
    assert scrollbar.pageStep() == 10

    window.set_scrollbar_position(42)
    assert window.get_scrollbar_position() == 42.0
    assert received == [42.0]


def test_scrollbar_page_larger_than_document(window):
    window.configure_scrollbar(0, 5, 10)
    scrollbar = window.native_widget.scrollbar
    assert scrollbar.minimum() == scrollbar.maximum() == 0


def test_menu_bar_replacement(window):
    first = QtMenuBar()
    first.add_sub_menu("&File")
    window.set_menu_bar(first)
    assert window.native_widget.layout().menuBar() is first.qmenubar

    second = QtMenuBar()
    window.set_menu_bar(second)
    assert window.native_widget.layout().menuBar() is second.qmenubar
    assert first.qmenubar.parent() is None

    window.set_menu_bar(None)
    assert window.native_widget.layout().menuBar() is None


def test_cursor_and_tooltip(window):
    window.set_cursor(Cursor.HAND)
    assert window.surface.cursor().shape() == QtCore.Qt.CursorShape.PointingHandCursor
    window.set_cursor(Cursor.POINTER)
    assert window.surface.cursor().shape() == QtCore.Qt.CursorShape.ArrowCursor

    window.set_tooltip("Constraint")
    assert window.surface.toolTip() == "Constraint"
    window.set_tooltip("")
    assert window.surface.toolTip() == ""


def test_freeze_hidden_window_writes_nothing(window):
    settings = Settings(None)
    window.freeze_position(settings, "Main")
    assert "Main_Left" not in settings


def test_mouse_press_is_translated(window):
    received = []
    window.on_mouse_event = lambda event: received.append(event) or True

    event = QtGui.QMouseEvent(
        QtCore.QEvent.Type.MouseButtonPress,
        QtCore.QPointF(5, 6), QtCore.QPointF(5, 6),
        QtCore.Qt.MouseButton.RightButton,
        QtCore.Qt.MouseButton.RightButton,
        QtCore.Qt.KeyboardModifier.ShiftModifier,
    )
    window.surface.mousePressEvent(event)

    assert len(received) == 1
    assert received[0].type == MouseType.PRESS
    assert received[0].button == MouseButton.RIGHT
    assert (received[0].x, received[0].y) == (5.0, 6.0)
    assert received[0].shift_down


def test_wheel_is_translated(window):
    received = []
    window.on_mouse_event = lambda event: received.append(event) or True

    event = QtGui.QWheelEvent(
        QtCore.QPointF(1, 2), QtCore.QPointF(1, 2),
        QtCore.QPoint(0, 0), QtCore.QPoint(0, 120),
        QtCore.Qt.MouseButton.NoButton,
        QtCore.Qt.KeyboardModifier.NoModifier,
        QtCore.Qt.ScrollPhase.NoScrollPhase,
        False,
    )
    window.surface.wheelEvent(event)

    assert received[0].type == MouseType.SCROLL_VERT
    assert received[0].scroll_delta == 1


def test_key_press_is_translated(window):
    received = []
    window.on_keyboard_event = lambda event: received.append(event) or True

    event = QtGui.QKeyEvent(
        QtCore.QEvent.Type.KeyPress, QtCore.Qt.Key.Key_F3.value, QtCore.Qt.KeyboardModifier.NoModifier
    )
    window.surface.keyPressEvent(event)
    assert received[0].key == KeyKind.FUNCTION
    assert received[0].num == 3


def test_editor_show_hide(window):
    assert not window.is_editor_visible()
    window.show_editor(10, 40, 14, 120, False, "12.5")
    assert window.is_editor_visible()
    entry = window.overlay.entry
    assert entry.text() == "12.5"
    assert entry.width() >= 120

    window.hide_editor()
    window.hide_editor()
    assert not window.is_editor_visible()


def test_editor_monospace_font(window):
    window.show_editor(0, 20, 12, 10, True, "abc")
    assert window.overlay.entry.font().pixelSize() == 12


def test_editor_return_commits(window):
    done = MagicMock()
    window.on_editing_done = done
    window.show_editor(10, 40, 14, 50, False, "hello")
    window.overlay.entry.returnPressed.emit()
    done.assert_called_once_with("hello")
    assert not window.is_editor_visible()


def test_editor_escape_cancels(window):
    done = MagicMock()
    window.on_editing_done = done
    window.show_editor(10, 40, 14, 50, False, "hello")
    escape = QtGui.QKeyEvent(
        QtCore.QEvent.Type.KeyPress, QtCore.Qt.Key.Key_Escape.value, QtCore.Qt.KeyboardModifier.NoModifier
    )
    window.overlay.entry.keyPressEvent(escape)
    assert not window.is_editor_visible()
    done.assert_not_called()


def test_full_screen_state_change_is_forwarded(window):
    seen = []
    window.on_full_screen = seen.append
    widget = window.native_widget
    widget.setWindowState(QtCore.Qt.WindowState.WindowFullScreen)
    QtWidgets.QApplication.sendEvent(
        widget, QtGui.QWindowStateChangeEvent(QtCore.Qt.WindowState.WindowNoState)
    )
    assert window.is_full_screen()
    assert seen[-1] is True


def test_keypad_enter_reaches_handler(window):
    received = []
    window.on_keyboard_event = lambda event: received.append(event) or True

    event = QtGui.QKeyEvent(
        QtCore.QEvent.Type.KeyPress, QtCore.Qt.Key.Key_Enter.value, QtCore.Qt.KeyboardModifier.KeypadModifier
    )
    window.surface.keyPressEvent(event)
    assert len(received) == 1
    assert received[0].chr == "\r"


def test_editor_can_be_reopened_from_editing_done(window):
    def reject_and_reopen(text):
        window.show_editor(10, 40, 14, 50, False, text + "?")

    window.on_editing_done = reject_and_reopen
    window.show_editor(10, 40, 14, 50, False, "abc")
    window.overlay.entry.returnPressed.emit()

    assert window.is_editor_visible()
    assert window.overlay.entry.text() == "abc?"


def test_editor_width_fits_text_plus_space(window):
    window.show_editor(10, 40, 14, 0, False, "ABC")
    entry = window.overlay.entry
    padding = window.overlay._entry_padding()
    advance = QtGui.QFontMetricsF(entry.font()).horizontalAdvance("ABC ")
    assert entry.width() == math.ceil(advance) + padding.left + padding.right


def test_editor_min_width_wins(window):
    window.show_editor(10, 40, 14, 500, False, "ABC")
    assert window.overlay.entry.width() == 500
