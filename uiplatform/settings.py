"""
Хранилище настроек.

Типизированное key/value хранилище между сессиями. Файл настроек читается
целиком при создании и записывается целиком при закрытии:
- Linux: $XDG_CONFIG_HOME/<app>/settings.json или ~/.config/<app>/settings.json

Ошибки ввода-вывода логируются и не пробрасываются: настройки best-effort.
"""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path
from typing import Any, Mapping

from uiplatform import log

SETTINGS_FILE_NAME = "settings.json"

_INT32_MAX = 2 ** 31 - 1


def _to_int32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range."""
    value = int(value) & 0xFFFFFFFF
    if value > _INT32_MAX:
        value -= 2 ** 32
    return value


def _ensure_directory(directory: Path) -> bool:
    if directory.exists():
        if not directory.is_dir():
            log.warn(f"[Settings] {directory} is not a directory")
            return False
        return True

    try:
        directory.mkdir(parents=True)
    except OSError as e:
        log.warn(f"[Settings] cannot mkdir {directory}: {e}")
        return False
    return True


def resolve_config_path(app_name: str, environ: Mapping[str, str] | None = None) -> Path | None:
    """
    Найти путь к файлу настроек.

    Порядок: $XDG_CONFIG_HOME, затем $HOME/.config. Каталог приложения
    создаётся, если его нет.

    Returns:
        Путь к settings.json или None, если сохранять некуда.
    """
    if environ is None:
        environ = os.environ

    if environ.get("XDG_CONFIG_HOME"):
        config_home = Path(environ["XDG_CONFIG_HOME"])
    elif environ.get("HOME"):
        config_home = Path(environ["HOME"]) / ".config"
    else:
        log.warn("[Settings] neither XDG_CONFIG_HOME nor HOME are set")
        return None

    directory = config_home / app_name
    if not _ensure_directory(directory):
        return None

    return directory / SETTINGS_FILE_NAME


class Settings:
    """
    Менеджер настроек.

    Значения: int (signed 32-bit), bool, float, str. Запись ключа заменяет
    прежнее значение вместе с его типом. Чтение отсутствующего ключа или
    ключа другого типа возвращает default.

    Экземпляр создаётся явно (обычно PlatformBackend.settings) и
    закрывается через close(), который один раз сбрасывает файл на диск.
    """

    def __init__(self, path: Path | str | None = None):
        self._path: Path | None = Path(path) if path is not None else None
        self._values: dict[str, Any] = {}
        self._lock = threading.Lock()
        self._closed = False

        if self._path is None:
            log.info("[Settings] settings will not be saved")
        else:
            self._values = self._load(self._path)

    @classmethod
    def open(cls, app_name: str, environ: Mapping[str, str] | None = None) -> "Settings":
        """Создать хранилище в стандартном каталоге конфигурации."""
        return cls(resolve_config_path(app_name, environ))

    @property
    def path(self) -> Path | None:
        return self._path

    @staticmethod
    def _load(path: Path) -> dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            log.warn(f"[Settings] cannot load settings: {e}")
            return {}

        if not isinstance(data, dict):
            log.warn(f"[Settings] cannot load settings: {path} does not hold an object")
            return {}
        return data

    # --- Запись ---

    def _put(self, key: str, value: Any) -> None:
        with self._lock:
            self._values[key] = value

    def freeze_int(self, key: str, value: int) -> None:
        self._put(key, _to_int32(value))

    def freeze_bool(self, key: str, value: bool) -> None:
        self._put(key, bool(value))

    def freeze_float(self, key: str, value: float) -> None:
        self._put(key, float(value))

    def freeze_string(self, key: str, value: str) -> None:
        self._put(key, str(value))

    # --- Чтение ---

    def _get(self, key: str) -> Any:
        with self._lock:
            return self._values.get(key)

    def thaw_int(self, key: str, default: int) -> int:
        value = self._get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return default

    def thaw_bool(self, key: str, default: bool) -> bool:
        value = self._get(key)
        if isinstance(value, bool):
            return value
        return default

    def thaw_float(self, key: str, default: float) -> float:
        value = self._get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        return default

    def thaw_string(self, key: str, default: str = "") -> str:
        value = self._get(key)
        if isinstance(value, str):
            return value
        return default

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._values

    # --- Сохранение ---

    def save(self) -> bool:
        """
        Записать все настройки в файл.

        Returns:
            True, если файл записан.
        """
        if self._path is None:
            return False

        with self._lock:
            try:
                with open(self._path, "w", encoding="utf-8") as f:
                    json.dump(self._values, f, indent=2, sort_keys=True)
            except (OSError, TypeError, ValueError) as e:
                log.warn(f"[Settings] cannot save settings: {e}")
                return False
        return True

    def close(self) -> None:
        """Сохранить настройки один раз. Повторный вызов ничего не делает."""
        if self._closed:
            return
        self._closed = True
        self.save()

    def __enter__(self) -> "Settings":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
