import sys
from unittest.mock import MagicMock

from PIL import Image
from PyQt6.QtTest import QTest

from uiplatform.backends import get_default_platform, set_default_platform
from uiplatform.backends.qt import QtTimer, _has_display, load_icon
from uiplatform.backends.qt_dialogs import QtFileDialog, QtMessageDialog
from uiplatform.backends.qt_menu import QtMenu, QtMenuBar
from uiplatform.backends.qt_window import QtWindow


def test_timer_fires_once(qapp):
    timer = QtTimer()
    timer.on_timeout = MagicMock()
    timer.wind_up(10)
    QTest.qWait(100)
    timer.on_timeout.assert_called_once_with()


def test_timer_re_arm_replaces_pending(qapp):
    timer = QtTimer()
    timer.on_timeout = MagicMock()
    timer.wind_up(20)
    timer.wind_up(40)
    assert timer.qtimer.isActive()
    QTest.qWait(200)
    timer.on_timeout.assert_called_once_with()


def test_factories(platform):
    window = platform.create_window()
    assert isinstance(window, QtWindow)
    assert isinstance(platform.create_menu(), QtMenu)
    assert isinstance(platform.create_timer(), QtTimer)
    assert isinstance(platform.create_message_dialog(window), QtMessageDialog)

    save = platform.create_save_file_dialog(window)
    assert isinstance(save, QtFileDialog)
    assert save.is_save_dialog()
    assert not platform.create_open_file_dialog(window).is_save_dialog()


def test_menu_bar_is_per_window(platform):
    menu_bar, unique = platform.get_or_create_main_menu()
    assert isinstance(menu_bar, QtMenuBar)
    assert unique is False


def test_settings_flushed_on_shutdown(platform, tmp_path):
    platform.settings.freeze_string("LastFile", "/tmp/a.slvs")
    platform.shutdown()
    assert (tmp_path / "uiplatform-test" / "settings.json").exists()


def test_six_dof_without_device(platform, monkeypatch):
    monkeypatch.setitem(sys.modules, "pyspacemouse", None)
    platform.open_3dconnexion()
    window = platform.create_window()
    platform.request_3dconnexion_events(window)
    platform.close_3dconnexion()


def test_default_platform_registry(platform):
    set_default_platform(platform)
    try:
        assert get_default_platform() is platform
    finally:
        set_default_platform(None)


def test_load_icon(qapp, tmp_path):
    path = tmp_path / "icon.png"
    Image.new("RGBA", (16, 16), (255, 0, 0, 255)).save(path)
    icon = load_icon(path)
    assert icon is not None
    assert not icon.isNull()


def test_load_icon_bad_file(qapp, tmp_path):
    path = tmp_path / "icon.png"
    path.write_bytes(b"not a png")
    assert load_icon(path) is None


def test_has_display(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    assert not _has_display({})
    assert _has_display({"DISPLAY": ":0"})
    assert _has_display({"WAYLAND_DISPLAY": "wayland-0"})
    assert _has_display({"QT_QPA_PLATFORM": "offscreen"})
