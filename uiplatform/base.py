"""Abstract entities decoupling application UI logic from a specific toolkit."""

from __future__ import annotations

import atexit
from abc import ABC, abstractmethod
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from uiplatform import log
from uiplatform.errors import require
from uiplatform.events import KeyboardEvent, MouseEvent, SixDofEvent
from uiplatform.guard import ExternalStateGuard
from uiplatform.settings import Settings

# --- Модальные циклы --------------------------------------------------------

_modal_depth = 0


@contextmanager
def modal_loop() -> Iterator[None]:
    """Mark the duration of a nested event loop run by this layer."""
    global _modal_depth
    _modal_depth += 1
    try:
        yield
    finally:
        _modal_depth -= 1


def in_modal_loop() -> bool:
    return _modal_depth > 0


def prepare_title(title: str, app_name: str) -> str:
    return f"{title} — {app_name}"


# --- Меню -------------------------------------------------------------------


class Indicator(IntEnum):
    NONE = 0
    CHECK_MARK = 1
    RADIO_MARK = 2


class MenuItem(ABC):
    """
    Leaf menu node.

    on_trigger is called when the *user* activates the item. State changes
    made through set_active() never reach on_trigger.
    """

    Indicator = Indicator

    def __init__(self) -> None:
        self.on_trigger: Optional[Callable[[], None]] = None
        self._indicator = Indicator.NONE
        self._guard = ExternalStateGuard()

    @property
    def indicator(self) -> Indicator:
        return self._indicator

    @abstractmethod
    def set_accelerator(self, accel: KeyboardEvent) -> None:
        ...

    def set_indicator(self, indicator: Indicator) -> None:
        self._indicator = Indicator(indicator)
        self._apply_indicator(self._indicator)

    def set_active(self, active: bool) -> None:
        require(
            self._indicator != Indicator.NONE,
            "Cannot change state of a menu item without indicator",
        )
        if self.is_active() == active:
            return

        with self._guard.applying():
            self._apply_active(active)

    @abstractmethod
    def is_active(self) -> bool:
        ...

    @abstractmethod
    def set_enabled(self, enabled: bool) -> None:
        ...

    @abstractmethod
    def is_enabled(self) -> bool:
        ...

    @abstractmethod
    def _apply_indicator(self, indicator: Indicator) -> None:
        ...

    @abstractmethod
    def _apply_active(self, active: bool) -> None:
        ...

    def _on_native_activated(self) -> None:
        """Native "activated" notification."""
        if self._guard.active:
            return
        if self.on_trigger is not None:
            self.on_trigger()


class Menu(ABC):
    """Ordered list of items and sub-menus. Owns everything added to it."""

    @abstractmethod
    def add_item(self, label: str, on_trigger: Optional[Callable[[], None]] = None) -> MenuItem:
        ...

    @abstractmethod
    def add_sub_menu(self, label: str) -> "Menu":
        ...

    @abstractmethod
    def add_separator(self) -> None:
        ...

    def pop_up(self) -> None:
        """
        Show as a context menu and block until it is dismissed.

        Runs a nested event loop on the calling thread.
        """
        require(not in_modal_loop(), "Cannot pop up a menu inside another modal loop")
        with modal_loop():
            self._run_popup()

    @abstractmethod
    def _run_popup(self) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class MenuBar(ABC):
    @abstractmethod
    def add_sub_menu(self, label: str) -> Menu:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


# --- Окна -------------------------------------------------------------------


class WindowKind(IntEnum):
    TOPLEVEL = 0
    TOOL = 1


class Cursor(IntEnum):
    POINTER = 0
    HAND = 1


class Window(ABC):
    """
    Abstract top-level window: menu bar slot, GL drawing surface, inline
    text editor and a vertical scrollbar.

    Handlers are plain attributes set by the host.
    """

    Kind = WindowKind
    Cursor = Cursor

    def __init__(self) -> None:
        self.on_close: Optional[Callable[[], None]] = None
        self.on_full_screen: Optional[Callable[[bool], None]] = None
        self.on_mouse_event: Optional[Callable[[MouseEvent], bool]] = None
        self.on_keyboard_event: Optional[Callable[[KeyboardEvent], bool]] = None
        self.on_editing_done: Optional[Callable[[str], None]] = None
        self.on_scrollbar_adjusted: Optional[Callable[[float], None]] = None
        self.on_render: Optional[Callable[[], None]] = None
        self.on_six_dof_event: Optional[Callable[[SixDofEvent], None]] = None

        self._is_full_screen = False

    # --- Dispatch helpers used by backends ---

    def _dispatch_mouse_event(self, event: MouseEvent) -> bool:
        if self.on_mouse_event is not None:
            return bool(self.on_mouse_event(event))
        return False

    def _dispatch_keyboard_event(self, event: KeyboardEvent) -> bool:
        if self.on_keyboard_event is not None:
            return bool(self.on_keyboard_event(event))
        return False

    def _dispatch_six_dof_event(self, event: SixDofEvent) -> None:
        if self.on_six_dof_event is not None:
            self.on_six_dof_event(event)

    def _dispatch_editing_done(self, text: str) -> None:
        if self.on_editing_done is not None:
            self.on_editing_done(text)

    def _dispatch_scrollbar_adjusted(self, value: float) -> None:
        if self.on_scrollbar_adjusted is not None:
            self.on_scrollbar_adjusted(value)

    def _dispatch_render(self) -> None:
        if self.on_render is not None:
            self.on_render()

    def _dispatch_close(self) -> bool:
        """Returns True when the host took over the close request."""
        if self.on_close is not None:
            self.on_close()
            return True
        return False

    def _window_state_changed(self, is_full_screen: bool) -> None:
        """Mirror the native fullscreen flag and forward it."""
        self._is_full_screen = is_full_screen
        if self.on_full_screen is not None:
            self.on_full_screen(is_full_screen)

    # --- Visibility / state ---

    @abstractmethod
    def get_pixel_density(self) -> float:
        ...

    @abstractmethod
    def get_device_pixel_ratio(self) -> float:
        ...

    @abstractmethod
    def is_visible(self) -> bool:
        ...

    @abstractmethod
    def set_visible(self, visible: bool) -> None:
        ...

    @abstractmethod
    def focus(self) -> None:
        ...

    def is_full_screen(self) -> bool:
        return self._is_full_screen

    @abstractmethod
    def set_full_screen(self, full_screen: bool) -> None:
        ...

    @abstractmethod
    def set_title(self, title: str) -> None:
        ...

    @abstractmethod
    def set_menu_bar(self, menu_bar: Optional[MenuBar]) -> None:
        ...

    @abstractmethod
    def get_content_size(self) -> Tuple[float, float]:
        ...

    @abstractmethod
    def set_min_content_size(self, width: float, height: float) -> None:
        ...

    # --- Geometry ---

    @abstractmethod
    def get_position(self) -> Tuple[int, int]:
        ...

    @abstractmethod
    def get_size(self) -> Tuple[int, int]:
        ...

    @abstractmethod
    def is_maximized(self) -> bool:
        ...

    @abstractmethod
    def move(self, left: int, top: int) -> None:
        ...

    @abstractmethod
    def resize(self, width: int, height: int) -> None:
        ...

    @abstractmethod
    def maximize(self) -> None:
        ...

    def freeze_position(self, settings: Settings, key: str) -> None:
        """
        Save live geometry under <key>_Left/_Top/_Width/_Height/_Maximized.

        A hidden window has no meaningful geometry, so nothing is written.
        """
        if not self.is_visible():
            return

        left, top = self.get_position()
        width, height = self.get_size()
        is_maximized = self.is_maximized()

        settings.freeze_int(key + "_Left", left)
        settings.freeze_int(key + "_Top", top)
        settings.freeze_int(key + "_Width", width)
        settings.freeze_int(key + "_Height", height)
        settings.freeze_bool(key + "_Maximized", is_maximized)

    def thaw_position(self, settings: Settings, key: str) -> None:
        """Restore geometry saved by freeze_position(); maximize goes last."""
        left, top = self.get_position()
        width, height = self.get_size()

        left = settings.thaw_int(key + "_Left", left)
        top = settings.thaw_int(key + "_Top", top)
        width = settings.thaw_int(key + "_Width", width)
        height = settings.thaw_int(key + "_Height", height)

        self.move(left, top)
        self.resize(width, height)

        if settings.thaw_bool(key + "_Maximized", False):
            self.maximize()

    # --- Cursor / tooltip ---

    @abstractmethod
    def set_cursor(self, cursor: Cursor) -> None:
        ...

    @abstractmethod
    def set_tooltip(self, text: str) -> None:
        ...

    # --- Editor overlay ---

    @abstractmethod
    def is_editor_visible(self) -> bool:
        ...

    @abstractmethod
    def show_editor(
        self,
        x: float,
        y: float,
        font_height: float,
        min_width: float,
        is_monospace: bool,
        text: str,
    ) -> None:
        ...

    @abstractmethod
    def hide_editor(self) -> None:
        ...

    # --- Scrollbar ---

    @abstractmethod
    def set_scrollbar_visible(self, visible: bool) -> None:
        ...

    @abstractmethod
    def configure_scrollbar(self, min: float, max: float, page_size: float) -> None:
        ...

    @abstractmethod
    def get_scrollbar_position(self) -> float:
        ...

    @abstractmethod
    def set_scrollbar_position(self, pos: float) -> None:
        ...

    # --- Rendering ---

    @abstractmethod
    def invalidate(self) -> None:
        """Queue a render request."""
        ...

    @abstractmethod
    def redraw(self) -> None:
        """Queue a render request and pump one non-blocking event loop pass."""
        ...

    @property
    @abstractmethod
    def native_widget(self):
        ...


# --- Диалоги ----------------------------------------------------------------


class MessageType(IntEnum):
    INFORMATION = 0
    QUESTION = 1
    WARNING = 2
    ERROR = 3


class Response(IntEnum):
    NONE = 0
    OK = 1
    YES = 2
    NO = 3
    CANCEL = 4


class MessageDialog(ABC):
    """Builder-style message box with one blocking run_modal()."""

    Type = MessageType
    Response = Response

    @abstractmethod
    def set_type(self, type: MessageType) -> None:
        ...

    @abstractmethod
    def set_title(self, title: str) -> None:
        ...

    @abstractmethod
    def set_message(self, message: str) -> None:
        ...

    @abstractmethod
    def set_description(self, description: str) -> None:
        ...

    def add_button(self, label: str, response: Response, is_default: bool = False) -> None:
        require(response != Response.NONE, "Invalid response")
        self._add_button(label, Response(response), is_default)

    @abstractmethod
    def _add_button(self, label: str, response: Response, is_default: bool) -> None:
        ...

    def run_modal(self) -> Response:
        with modal_loop():
            return self._run()

    @abstractmethod
    def _run(self) -> Response:
        ...


def filter_patterns(extensions: Sequence[str]) -> List[str]:
    """Glob patterns for a filter; an empty extension matches everything."""
    patterns = []
    for extension in extensions:
        if extension:
            patterns.append("*." + extension)
            patterns.append("*." + extension.upper())
        else:
            patterns.append("*")
    return patterns


def replace_extension(filename: str, extension: str) -> str:
    """'part.txt', 'svg' -> 'part.svg'. Keeps the stem, drops directories."""
    path = Path(filename)
    stem = path.stem if path.suffix else path.name
    return f"{stem}.{extension}"


class FileDialog(ABC):
    """
    Open/save file chooser.

    Each filter is bound to one extension (the first one given). Switching
    the active filter rewrites the proposed file name's extension.
    """

    def __init__(self) -> None:
        self._extensions: List[str] = []

    @abstractmethod
    def set_title(self, title: str) -> None:
        ...

    @abstractmethod
    def set_current_name(self, name: str) -> None:
        ...

    @abstractmethod
    def get_current_name(self) -> str:
        ...

    @abstractmethod
    def get_filename(self) -> Path:
        ...

    @abstractmethod
    def set_filename(self, path: Path) -> None:
        ...

    @abstractmethod
    def get_current_folder(self) -> str:
        ...

    @abstractmethod
    def set_current_folder(self, folder: str) -> None:
        ...

    @abstractmethod
    def is_save_dialog(self) -> bool:
        ...

    def add_filter(self, name: str, extensions: Sequence[str]) -> None:
        require(len(extensions) > 0, "A filter needs at least one extension")
        patterns = filter_patterns(extensions)
        self._extensions.append(extensions[0])
        self._add_native_filter(f"{name} ({' '.join(patterns)})")

    @abstractmethod
    def _add_native_filter(self, description: str) -> None:
        ...

    @abstractmethod
    def _current_filter_index(self) -> int:
        ...

    @abstractmethod
    def _select_filter(self, index: int) -> None:
        ...

    def get_extension(self) -> str:
        if not self._extensions:
            return ""
        index = self._current_filter_index()
        if 0 <= index < len(self._extensions):
            return self._extensions[index]
        return self._extensions[0]

    def set_extension(self, extension: str) -> None:
        if not self._extensions:
            return
        if extension in self._extensions:
            self._select_filter(self._extensions.index(extension))
        else:
            self._select_filter(0)

    def _filter_changed(self) -> None:
        """Native "active filter changed" notification."""
        extension = self.get_extension()
        if extension == "":
            return

        name = self.get_current_name()
        if not name:
            return
        self.set_current_name(replace_extension(name, extension))

    def freeze_choices(self, settings: Settings, key: str) -> None:
        settings.freeze_string("Dialog_" + key + "_Folder", self.get_current_folder())
        settings.freeze_string("Dialog_" + key + "_Filter", self.get_extension())

    def thaw_choices(self, settings: Settings, key: str) -> None:
        folder = settings.thaw_string("Dialog_" + key + "_Folder")
        if folder:
            self.set_current_folder(folder)
        self.set_extension(settings.thaw_string("Dialog_" + key + "_Filter"))

    @abstractmethod
    def _untitled(self) -> str:
        """Localized default file stem."""
        ...

    def run_modal(self) -> bool:
        if self.is_save_dialog() and not Path(self.get_current_name()).stem:
            self.set_current_name(self._untitled() + "." + self.get_extension())

        with modal_loop():
            return self._run()

    @abstractmethod
    def _run(self) -> bool:
        ...


# --- Таймер -----------------------------------------------------------------


class Timer(ABC):
    """One-shot delay; wind_up() again replaces the pending firing."""

    def __init__(self) -> None:
        self.on_timeout: Optional[Callable[[], None]] = None

    @abstractmethod
    def wind_up(self, milliseconds: int) -> None:
        ...

    def _fire(self) -> None:
        if self.on_timeout is not None:
            self.on_timeout()


# --- Платформа --------------------------------------------------------------


class PlatformBackend(ABC):
    """
    Application-lifetime context object.

    Owns the settings store (created on first access, flushed by
    shutdown()) and creates every other platform entity.
    """

    def __init__(self, app_name: str = "uiplatform") -> None:
        self.app_name = app_name
        self._settings: Optional[Settings] = None
        self._shut_down = False
        atexit.register(self.shutdown)

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = Settings.open(self.app_name)
        return self._settings

    def shutdown(self) -> None:
        """Flush settings. Safe to call more than once."""
        if self._shut_down:
            return
        self._shut_down = True
        if self._settings is not None:
            log.debug("[Platform] flushing settings")
            self._settings.close()
        atexit.unregister(self.shutdown)

    @abstractmethod
    def create_window(self, kind: WindowKind = WindowKind.TOPLEVEL, parent: Optional[Window] = None) -> Window:
        ...

    @abstractmethod
    def create_menu(self) -> Menu:
        ...

    @abstractmethod
    def get_or_create_main_menu(self) -> Tuple[MenuBar, bool]:
        """Returns (menu bar, unique). unique is False for per-window bars."""
        ...

    @abstractmethod
    def create_timer(self) -> Timer:
        ...

    @abstractmethod
    def create_message_dialog(self, parent: Window) -> MessageDialog:
        ...

    @abstractmethod
    def create_open_file_dialog(self, parent: Window) -> FileDialog:
        ...

    @abstractmethod
    def create_save_file_dialog(self, parent: Window) -> FileDialog:
        ...

    def open_3dconnexion(self) -> None:
        pass

    def close_3dconnexion(self) -> None:
        pass

    def request_3dconnexion_events(self, window: Window) -> None:
        pass

    @abstractmethod
    def run(self) -> int:
        """Enter the main event loop."""
        ...

    @abstractmethod
    def exit(self) -> None:
        """Leave the main event loop."""
        ...
