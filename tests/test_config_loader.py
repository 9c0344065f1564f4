import os
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path
from unittest import mock

from pydantic import ValidationError

from priority_loader.config import YamlConfigLoader
from priority_loader.config.models import ConfigLoadRequest
from priority_loader.core.models import PriorityMode

_YAML = """
logging:
  level: DEBUG
loader:
  origin_base_url: https://cdn.example.com/locales/
  assets_path: assets/i18n
  timeout_seconds: 10
  priority_load_type: network
  network_file_creation_date: "2024-05-01T12:00:00Z"
"""


class YamlConfigLoaderTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "config.yaml"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _request(self) -> ConfigLoadRequest:
        return ConfigLoadRequest(yaml_path=str(self.path), env_prefix="PLTEST__", dotenv_path=None)

    async def test_yaml_values_override_defaults(self) -> None:
        self.path.write_text(_YAML, encoding="utf-8")
        config = await YamlConfigLoader().load(self._request())
        self.assertEqual(config.logging.level, "DEBUG")
        self.assertEqual(config.loader.origin_base_url, "https://cdn.example.com/locales/")
        self.assertEqual(config.loader.timeout.total_seconds(), 10)
        self.assertEqual(config.loader.local_cache_duration.total_seconds(), 12 * 60 * 60)
        self.assertEqual(config.loader.priority_load_type, PriorityMode.NETWORK)
        self.assertEqual(
            config.loader.network_file_creation_date,
            datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        )

    async def test_env_overrides_string_values(self) -> None:
        self.path.write_text("loader:\n  assets_path: assets/i18n\n", encoding="utf-8")
        env = {
            "PLTEST__LOADER__ORIGIN_BASE_URL": "https://mirror.example.com/",
            "PLTEST__LOADER__PRIORITY_LOAD_TYPE": "default",
        }
        with mock.patch.dict(os.environ, env):
            config = await YamlConfigLoader().load(self._request())
        self.assertEqual(config.loader.origin_base_url, "https://mirror.example.com/")
        self.assertEqual(config.loader.priority_load_type, PriorityMode.DEFAULT)

    async def test_env_overrides_numeric_and_datetime_values(self) -> None:
        self.path.write_text("loader:\n  timeout_seconds: 30\n", encoding="utf-8")
        env = {
            "PLTEST__LOADER__TIMEOUT_SECONDS": "10",
            "PLTEST__LOADER__LOCAL_CACHE_DURATION_SECONDS": "60",
            "PLTEST__LOADER__NETWORK_FILE_CREATION_DATE": "2024-05-01T12:00:00Z",
            "PLTEST__LOGGING__FILE__ROTATION__BACKUP_COUNT": "2",
        }
        with mock.patch.dict(os.environ, env):
            config = await YamlConfigLoader().load(self._request())
        self.assertEqual(config.loader.timeout.total_seconds(), 10)
        self.assertEqual(config.loader.local_cache_duration.total_seconds(), 60)
        self.assertEqual(
            config.loader.network_file_creation_date,
            datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        )
        self.assertEqual(config.logging.file.rotation.backup_count, 2)

    async def test_env_override_with_invalid_number_fails_validation(self) -> None:
        self.path.write_text("{}\n", encoding="utf-8")
        with mock.patch.dict(os.environ, {"PLTEST__LOADER__TIMEOUT_SECONDS": "soon"}):
            with self.assertRaises(ValidationError):
                await YamlConfigLoader().load(self._request())

    async def test_env_override_cannot_replace_section(self) -> None:
        self.path.write_text("{}\n", encoding="utf-8")
        with mock.patch.dict(os.environ, {"PLTEST__LOADER": "x"}):
            with self.assertRaises(TypeError):
                await YamlConfigLoader().load(self._request())

    async def test_env_override_rejects_unknown_keys(self) -> None:
        self.path.write_text("{}\n", encoding="utf-8")
        with mock.patch.dict(os.environ, {"PLTEST__LOADER__NOPE": "x"}):
            with self.assertRaises(KeyError):
                await YamlConfigLoader().load(self._request())

    async def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            await YamlConfigLoader().load(self._request())

    async def test_top_level_must_be_mapping(self) -> None:
        self.path.write_text("- a\n- b\n", encoding="utf-8")
        with self.assertRaises(ValueError):
            await YamlConfigLoader().load(self._request())

    async def test_unknown_yaml_key_is_rejected(self) -> None:
        self.path.write_text("loader:\n  retries: 3\n", encoding="utf-8")
        with self.assertRaises(ValidationError):
            await YamlConfigLoader().load(self._request())

    async def test_dotenv_values_apply_without_overriding_environment(self) -> None:
        self.path.write_text("{}\n", encoding="utf-8")
        dotenv = Path(self._tmp.name) / ".env"
        dotenv.write_text("PLTEST__LOADER__CACHE_DIR=/tmp/from-dotenv\n", encoding="utf-8")
        request = ConfigLoadRequest(yaml_path=str(self.path), env_prefix="PLTEST__", dotenv_path=str(dotenv))
        with mock.patch.dict(os.environ, {}):
            config = await YamlConfigLoader().load(request)
        self.assertEqual(config.loader.cache_dir, "/tmp/from-dotenv")


if __name__ == "__main__":
    unittest.main()
