import os

# Qt-backed tests run without a real display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6 import QtWidgets


@pytest.fixture(scope="session")
def qapp():
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    yield app


@pytest.fixture
def platform(qapp, tmp_path, monkeypatch):
    from uiplatform.backends.qt import QtPlatform

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    p = QtPlatform(app_name="uiplatform-test", app=qapp)
    yield p
    p.shutdown()
