"""QMenu / QAction implementation of the menu model."""

from __future__ import annotations

from typing import Callable, List, Optional

from PyQt6.QtGui import QAction, QActionGroup, QCursor, QKeySequence
from PyQt6.QtWidgets import QMenu, QMenuBar

from uiplatform.base import Indicator, Menu, MenuBar, MenuItem
from uiplatform.events import KeyboardEvent
from uiplatform.translate import accelerator_to_shortcut


class QtMenuItem(MenuItem):
    """
    QAction-backed item.

    Radio items get their own exclusive-optional QActionGroup: that is what
    makes QMenu draw a radio mark, while exclusivity between siblings stays
    with the application.
    """

    def __init__(self, action: QAction):
        super().__init__()
        self._action = action
        self._radio_group: Optional[QActionGroup] = None
        self._action.triggered.connect(self._on_triggered)

    @property
    def action(self) -> QAction:
        return self._action

    def _on_triggered(self, checked: bool = False) -> None:
        self._on_native_activated()

    def set_accelerator(self, accel: KeyboardEvent) -> None:
        self._action.setShortcut(QKeySequence(accelerator_to_shortcut(accel)))

    def _apply_indicator(self, indicator: Indicator) -> None:
        if self._radio_group is not None:
            self._radio_group.removeAction(self._action)
            self._radio_group = None

        if indicator == Indicator.NONE:
            self._action.setCheckable(False)
            return

        self._action.setCheckable(True)
        if indicator == Indicator.RADIO_MARK:
            self._radio_group = QActionGroup(self._action)
            self._radio_group.setExclusionPolicy(QActionGroup.ExclusionPolicy.ExclusiveOptional)
            self._radio_group.addAction(self._action)

    def is_active(self) -> bool:
        return self._action.isChecked()

    def _apply_active(self, active: bool) -> None:
        self._action.setChecked(active)

    def set_enabled(self, enabled: bool) -> None:
        self._action.setEnabled(enabled)

    def is_enabled(self) -> bool:
        return self._action.isEnabled()


class QtMenu(Menu):
    def __init__(self, qmenu: Optional[QMenu] = None):
        self._menu = qmenu if qmenu is not None else QMenu()
        self._items: List[QtMenuItem] = []
        self._sub_menus: List["QtMenu"] = []

    @property
    def qmenu(self) -> QMenu:
        return self._menu

    @property
    def items(self) -> List[QtMenuItem]:
        return list(self._items)

    def add_item(self, label: str, on_trigger: Optional[Callable[[], None]] = None) -> QtMenuItem:
        # Labels use "&" mnemonic markup, which Qt understands natively.
        action = QAction(label, self._menu)
        item = QtMenuItem(action)
        item.on_trigger = on_trigger
        self._menu.addAction(action)
        self._items.append(item)
        return item

    def add_sub_menu(self, label: str) -> "QtMenu":
        sub_menu = QtMenu(QMenu(label, self._menu))
        action = self._menu.addMenu(sub_menu.qmenu)
        self._items.append(QtMenuItem(action))
        self._sub_menus.append(sub_menu)
        return sub_menu

    def add_separator(self) -> None:
        self._menu.addSeparator()

    def _run_popup(self) -> None:
        # QMenu.exec runs its own nested loop until selection or focus loss.
        self._menu.exec(QCursor.pos())

    def clear(self) -> None:
        for sub_menu in self._sub_menus:
            sub_menu.clear()
            sub_menu.qmenu.deleteLater()
        self._menu.clear()
        self._items.clear()
        self._sub_menus.clear()


class QtMenuBar(MenuBar):
    def __init__(self, qmenubar: Optional[QMenuBar] = None):
        self._bar = qmenubar if qmenubar is not None else QMenuBar()
        self._sub_menus: List[QtMenu] = []

    @property
    def qmenubar(self) -> QMenuBar:
        return self._bar

    def add_sub_menu(self, label: str) -> QtMenu:
        sub_menu = QtMenu(QMenu(label, self._bar))
        self._bar.addMenu(sub_menu.qmenu)
        self._sub_menus.append(sub_menu)
        return sub_menu

    def clear(self) -> None:
        for sub_menu in self._sub_menus:
            sub_menu.clear()
            sub_menu.qmenu.deleteLater()
        self._bar.clear()
        self._sub_menus.clear()
