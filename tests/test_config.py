import os
import tempfile
import unittest
from unittest.mock import patch

from snapshell.config import Config, DEFAULT_API_URL, DEFAULT_MODEL, default_data_dir


class TestConfig(unittest.TestCase):
    """Test cases for the Config class."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.config_file = os.path.join(self.tmpdir.name, "config.toml")

    def tearDown(self):
        self.tmpdir.cleanup()

    def _env(self, **values):
        env = {"SNAPSHELL_CONFIG_FILE": self.config_file, "HOME": self.tmpdir.name}
        env.update(values)
        return env

    def test_default_values(self):
        """Test that default values are set correctly."""
        with patch.dict(os.environ, self._env(), clear=True):
            config = Config()

            self.assertEqual(config.api_key, "")
            self.assertEqual(config.model, DEFAULT_MODEL)
            self.assertEqual(config.api_url, DEFAULT_API_URL)
            self.assertEqual(config.timeout, 120.0)
            self.assertIsNone(config.system)
            self.assertIsNone(config.system_single)
            self.assertIsNone(config.system_multiline)
            self.assertTrue(config.history_file.endswith(os.path.join("snapshell", "history.jsonl")))
            self.assertFalse(config.verbose)

    def test_custom_values(self):
        """Test that custom values from environment variables are set correctly."""
        env_vars = self._env(
            SNAPSHELL_OPENROUTER_API_KEY="custom_key",
            SNAPSHELL_MODEL="custom-model",
            SNAPSHELL_API_URL="https://custom-api.example.com/v1/chat/completions",
            SNAPSHELL_TIMEOUT="15",
            SNAPSHELL_SYSTEM="generic",
            SNAPSHELL_SYSTEM_SINGLE="single",
            SNAPSHELL_SYSTEM_MULTILINE="multi",
            SNAPSHELL_HISTORY_FILE="/custom/history.jsonl",
            SNAPSHELL_LOG_DIR="/custom/logs",
            SNAPSHELL_VERBOSE="true",
        )

        with patch.dict(os.environ, env_vars, clear=True):
            config = Config()

            self.assertEqual(config.api_key, "custom_key")
            self.assertEqual(config.model, "custom-model")
            self.assertEqual(config.api_url, "https://custom-api.example.com/v1/chat/completions")
            self.assertEqual(config.timeout, 15.0)
            self.assertEqual(config.system, "generic")
            self.assertEqual(config.system_single, "single")
            self.assertEqual(config.system_multiline, "multi")
            self.assertEqual(config.history_file, "/custom/history.jsonl")
            self.assertEqual(config.log_dir, "/custom/logs")
            self.assertTrue(config.verbose)

    def test_config_file_values(self):
        """Values in the TOML file apply when the environment is silent."""
        with open(self.config_file, "w") as f:
            f.write('[api]\nSNAPSHELL_MODEL = "file-model"\n\n'
                    '[customization]\nSNAPSHELL_SYSTEM_MULTILINE = "from file"\n')

        with patch.dict(os.environ, self._env(), clear=True):
            config = Config()
            self.assertEqual(config.model, "file-model")
            self.assertEqual(config.system_multiline, "from file")

    def test_config_file_values_coerced_to_text(self):
        """Numbers and booleans in the TOML file become strings."""
        with open(self.config_file, "w") as f:
            f.write("SNAPSHELL_SYSTEM = 1\nSNAPSHELL_MODEL = 2\n\n[api]\nSNAPSHELL_SYSTEM_SINGLE = true\n")

        with patch.dict(os.environ, self._env(), clear=True):
            config = Config()
            self.assertEqual(config.system, "1")
            self.assertEqual(config.model, "2")
            self.assertEqual(config.system_single, "True")
            self.assertIsNone(config.system_multiline)

    def test_default_log_dir_is_outside_data_dir(self):
        with patch.dict(os.environ, self._env(), clear=True):
            config = Config()
        self.assertEqual(config.log_dir, os.path.join(self.tmpdir.name, ".config", "snapshell", "logs"))
        self.assertFalse(config.log_dir.startswith(os.path.dirname(config.history_file)))

    def test_environment_beats_config_file(self):
        with open(self.config_file, "w") as f:
            f.write('SNAPSHELL_MODEL = "file-model"\n')

        with patch.dict(os.environ, self._env(SNAPSHELL_MODEL="env-model"), clear=True):
            self.assertEqual(Config().model, "env-model")

    def test_malformed_config_file_is_ignored(self):
        with open(self.config_file, "w") as f:
            f.write("this is = = not toml [")

        with patch.dict(os.environ, self._env(), clear=True):
            config = Config()
            self.assertEqual(config.model, DEFAULT_MODEL)

    def test_config_file_is_not_created(self):
        with patch.dict(os.environ, self._env(), clear=True):
            Config()
        self.assertFalse(os.path.exists(self.config_file))

    def test_validate(self):
        """A missing key fails validation without raising."""
        with patch.dict(os.environ, self._env(SNAPSHELL_OPENROUTER_API_KEY="test_key"), clear=True):
            config = Config()
            self.assertTrue(config.validate())

            config.api_key = ""
            self.assertFalse(config.validate())

    def test_str_masks_api_key(self):
        with patch.dict(os.environ, self._env(SNAPSHELL_OPENROUTER_API_KEY="sk-or-1234567890"), clear=True):
            text = str(Config())
        self.assertNotIn("sk-or-1234567890", text)
        self.assertIn("sk-o...7890", text)


class TestDefaultDataDir(unittest.TestCase):
    """Test the per-platform data directory."""

    def test_linux_honours_xdg(self):
        with patch("snapshell.config.sys.platform", "linux"), \
                patch.dict(os.environ, {"XDG_DATA_HOME": "/xdg"}, clear=True):
            self.assertEqual(default_data_dir(), os.path.join("/xdg", "snapshell"))

    def test_linux_default(self):
        with patch("snapshell.config.sys.platform", "linux"), \
                patch.dict(os.environ, {"HOME": "/home/u"}, clear=True):
            self.assertEqual(default_data_dir(), os.path.join("/home/u", ".local", "share", "snapshell"))

    def test_macos(self):
        with patch("snapshell.config.sys.platform", "darwin"), \
                patch.dict(os.environ, {"HOME": "/Users/u"}, clear=True):
            self.assertEqual(
                default_data_dir(),
                os.path.join("/Users/u", "Library", "Application Support", "com.snapshell.snapshell"),
            )

    def test_windows(self):
        with patch("snapshell.config.sys.platform", "win32"), \
                patch.dict(os.environ, {"LOCALAPPDATA": "C:/Local"}, clear=True):
            self.assertEqual(default_data_dir(), os.path.join("C:/Local", "snapshell", "snapshell", "data"))


if __name__ == "__main__":
    unittest.main()
