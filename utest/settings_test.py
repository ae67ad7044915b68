import json
import shutil
import tempfile
import unittest
from pathlib import Path

from uiplatform.settings import Settings, resolve_config_path


class SettingsStoreTest(unittest.TestCase):
    """
    Типизированное хранилище: запись, чтение, поведение при ошибках файла.
    """

    def setUp(self):
        self.dir = Path(tempfile.mkdtemp())
        self.path = self.dir / "settings.json"

    def tearDown(self):
        shutil.rmtree(self.dir, ignore_errors=True)

    def test_round_trip(self):
        with Settings(self.path) as settings:
            settings.freeze_int("Width", 800)
            settings.freeze_bool("Maximized", True)
            settings.freeze_float("Scale", 1.25)
            settings.freeze_string("LastFile", "/home/user/part.slvs")

        settings = Settings(self.path)
        self.assertEqual(settings.thaw_int("Width", 0), 800)
        self.assertIs(settings.thaw_bool("Maximized", False), True)
        self.assertEqual(settings.thaw_float("Scale", 0.0), 1.25)
        self.assertEqual(settings.thaw_string("LastFile"), "/home/user/part.slvs")

    def test_missing_key_returns_default(self):
        settings = Settings(self.path)
        self.assertEqual(settings.thaw_int("Nope", 7), 7)
        self.assertEqual(settings.thaw_string("Nope"), "")
        self.assertFalse(self.path.exists())

    def test_type_mismatch_returns_default(self):
        settings = Settings(self.path)
        settings.freeze_string("Key", "text")
        self.assertEqual(settings.thaw_int("Key", 3), 3)
        settings.freeze_bool("Flag", True)
        self.assertEqual(settings.thaw_int("Flag", 5), 5)
        settings.freeze_int("Number", 1)
        self.assertIs(settings.thaw_bool("Number", False), False)

    def test_float_accepts_stored_int(self):
        settings = Settings(self.path)
        settings.freeze_int("Number", 2)
        self.assertEqual(settings.thaw_float("Number", 0.0), 2.0)

    def test_write_replaces_type(self):
        settings = Settings(self.path)
        settings.freeze_int("Key", 1)
        settings.freeze_string("Key", "one")
        self.assertEqual(settings.thaw_string("Key"), "one")
        self.assertEqual(settings.thaw_int("Key", -1), -1)

    def test_int_wraps_to_32_bits(self):
        settings = Settings(self.path)
        settings.freeze_int("Big", 2 ** 31)
        self.assertEqual(settings.thaw_int("Big", 0), -(2 ** 31))

    def test_corrupted_file_loads_empty_and_is_rewritten(self):
        self.path.write_text("{ not json", encoding="utf-8")
        settings = Settings(self.path)
        self.assertEqual(settings.thaw_int("Width", 10), 10)
        settings.freeze_int("Width", 20)
        settings.close()

        data = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(data, {"Width": 20})

    def test_non_object_file_loads_empty(self):
        self.path.write_text("[1, 2, 3]", encoding="utf-8")
        settings = Settings(self.path)
        self.assertEqual(settings.thaw_int("0", -1), -1)
        settings.close()
        self.assertEqual(json.loads(self.path.read_text(encoding="utf-8")), {})

    def test_close_is_idempotent(self):
        settings = Settings(self.path)
        settings.freeze_int("A", 1)
        settings.close()
        self.path.unlink()
        settings.close()
        self.assertFalse(self.path.exists())

    def test_unsaved_store(self):
        settings = Settings(None)
        settings.freeze_int("A", 1)
        self.assertEqual(settings.thaw_int("A", 0), 1)
        self.assertFalse(settings.save())

    def test_save_failure_is_reported_not_raised(self):
        settings = Settings(self.dir / "missing" / "settings.json")
        settings.freeze_int("A", 1)
        self.assertFalse(settings.save())


class ResolveConfigPathTest(unittest.TestCase):
    def setUp(self):
        self.dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.dir, ignore_errors=True)

    def test_xdg_config_home_first(self):
        environ = {"XDG_CONFIG_HOME": str(self.dir / "xdg"), "HOME": str(self.dir / "home")}
        path = resolve_config_path("cadapp", environ)
        self.assertEqual(path, self.dir / "xdg" / "cadapp" / "settings.json")
        self.assertTrue(path.parent.is_dir())

    def test_home_fallback(self):
        path = resolve_config_path("cadapp", {"HOME": str(self.dir)})
        self.assertEqual(path, self.dir / ".config" / "cadapp" / "settings.json")

    def test_no_location(self):
        self.assertIsNone(resolve_config_path("cadapp", {}))

    def test_file_in_place_of_directory(self):
        (self.dir / "cadapp").write_text("", encoding="utf-8")
        self.assertIsNone(resolve_config_path("cadapp", {"XDG_CONFIG_HOME": str(self.dir)}))

    def test_open_uses_resolved_path(self):
        settings = Settings.open("cadapp", {"XDG_CONFIG_HOME": str(self.dir)})
        self.assertEqual(settings.path, self.dir / "cadapp" / "settings.json")


if __name__ == "__main__":
    unittest.main()
