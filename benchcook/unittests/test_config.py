import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from benchcook.config import CONFIG_ENV_VAR, CookConfig, load_config


class TestLoadConfig(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def _write_ini(self, content, name="bench.ini"):
        path = os.path.join(self.tmpdir, name)
        with open(path, "w") as f:
            f.write(content)
        return path

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        config = load_config()
        self.assertEqual(config, CookConfig(data_dir="data", output="data.js", jobs=1, log_level="INFO"))

    def test_ini_values(self):
        path = self._write_ini("[cook]\ndata_dir = /srv/data\noutput = out.js\njobs = 4\nlog_level = debug\n")
        config = load_config(path)

        self.assertEqual(config.data_dir, "/srv/data")
        self.assertEqual(config.output, "out.js")
        self.assertEqual(config.jobs, 4)
        self.assertEqual(config.log_level, "DEBUG")

    def test_partial_ini_keeps_defaults(self):
        config = load_config(self._write_ini("[cook]\noutput = out.js\n"))
        self.assertEqual(config.data_dir, "data")
        self.assertEqual(config.output, "out.js")

    def test_missing_section_uses_defaults(self):
        config = load_config(self._write_ini("[other]\nkey = value\n"))
        self.assertEqual(config, CookConfig())

    def test_env_var_is_used(self):
        path = self._write_ini("[cook]\njobs = 2\n")
        with patch.dict(os.environ, {CONFIG_ENV_VAR: path}):
            self.assertEqual(load_config().jobs, 2)

    def test_bad_jobs_raise(self):
        with self.assertRaises(ValueError):
            load_config(self._write_ini("[cook]\njobs = many\n"))

    def test_bad_log_level_raises(self):
        with self.assertRaises(ValueError):
            load_config(self._write_ini("[cook]\nlog_level = chatty\n"))

    def test_malformed_ini_raises(self):
        with self.assertRaises(ValueError):
            load_config(self._write_ini("jobs = 2\n"))

    def test_missing_file_raises(self):
        with self.assertRaises(OSError):
            load_config(os.path.join(self.tmpdir, "missing.ini"))


class TestCookConfigOverrides(unittest.TestCase):
    def test_none_overrides_are_ignored(self):
        config = CookConfig(output="keep.js").with_overrides(output=None, data_dir="runs")
        self.assertEqual(config.output, "keep.js")
        self.assertEqual(config.data_dir, "runs")

    def test_jobs_clamped_to_one(self):
        self.assertEqual(CookConfig().with_overrides(jobs=0).jobs, 1)
        self.assertEqual(CookConfig().with_overrides(jobs=-3).jobs, 1)

    def test_unknown_keys_ignored(self):
        config = CookConfig().with_overrides(config="x.ini")
        self.assertEqual(config, CookConfig())

    def test_original_is_unchanged(self):
        base = CookConfig()
        base.with_overrides(jobs=8)
        self.assertEqual(base.jobs, 1)


if __name__ == "__main__":
    unittest.main()
