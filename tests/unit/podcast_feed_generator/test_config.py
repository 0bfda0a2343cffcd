#!/usr/bin/env python3
"""Tests for the Config model and config file loading."""

import json
import os
import sys
import tempfile
import unittest
from unittest.mock import patch

import pytest
from pydantic import ValidationError

TESTS_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
if TESTS_DIR not in sys.path:
    sys.path.insert(0, TESTS_DIR)

from podcast_feed_generator import Config, config  # noqa: E402

pytestmark = [pytest.mark.unit]


def _clean_env():
    env = dict(os.environ)
    env.pop("LOG_LEVEL", None)
    env.pop("LOG_FILE", None)
    return env


class TestConfigModel(unittest.TestCase):
    """Test Config defaults, aliases and validators."""

    def test_defaults(self):
        with patch.dict(os.environ, _clean_env(), clear=True):
            cfg = Config()
        self.assertIsNone(cfg.input_path)
        self.assertIsNone(cfg.output_path)
        self.assertEqual(cfg.log_level, "INFO")
        self.assertIsNone(cfg.log_file)
        self.assertTrue(cfg.pretty_print)
        self.assertFalse(cfg.strict)

    def test_aliases_and_field_names(self):
        by_alias = Config(input="feed.json", output="out.xml")
        by_name = Config(input_path="feed.json", output_path="out.xml")
        self.assertEqual(by_alias.input_path, "feed.json")
        self.assertEqual(by_alias.output_path, "out.xml")
        self.assertEqual(by_alias, by_name)

    def test_paths_stripped(self):
        cfg = Config(input="  feed.json  ", output="   ")
        self.assertEqual(cfg.input_path, "feed.json")
        self.assertIsNone(cfg.output_path)

    def test_log_level_normalized(self):
        self.assertEqual(Config(log_level="debug").log_level, "DEBUG")

    def test_invalid_log_level(self):
        with self.assertRaises(ValidationError) as context:
            Config(log_level="LOUD")
        self.assertIn("log_level must be one of", str(context.exception))

    def test_log_level_from_environment(self):
        env = _clean_env()
        env["LOG_LEVEL"] = "warning"
        with patch.dict(os.environ, env, clear=True):
            self.assertEqual(Config().log_level, "WARNING")

    def test_explicit_log_level_beats_environment(self):
        env = _clean_env()
        env["LOG_LEVEL"] = "WARNING"
        with patch.dict(os.environ, env, clear=True):
            self.assertEqual(Config(log_level="ERROR").log_level, "ERROR")

    def test_log_file_from_environment(self):
        env = _clean_env()
        env["LOG_FILE"] = "/tmp/feedgen.log"
        with patch.dict(os.environ, env, clear=True):
            self.assertEqual(Config().log_file, "/tmp/feedgen.log")

    def test_unknown_field_rejected(self):
        with self.assertRaises(ValidationError):
            Config(rss_url="https://example.com/feed.xml")

    def test_frozen(self):
        cfg = Config(input="feed.json")
        with self.assertRaises(ValidationError):
            cfg.strict = True


class TestLoadConfigFile(unittest.TestCase):
    """Test load_config_file for JSON and YAML."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def _write(self, name, content):
        path = os.path.join(self.tmpdir.name, name)
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(content)
        return path

    def test_json(self):
        path = self._write("cfg.json", json.dumps({"input": "feed.json", "strict": True}))
        data = config.load_config_file(path)
        self.assertEqual(data, {"input": "feed.json", "strict": True})
        self.assertTrue(Config(**data).strict)

    def test_yaml(self):
        path = self._write("cfg.yaml", "input: feed.json\noutput: feed.xml\npretty_print: false\n")
        cfg = Config(**config.load_config_file(path))
        self.assertEqual(cfg.output_path, "feed.xml")
        self.assertFalse(cfg.pretty_print)

    def test_empty_yaml_is_empty_mapping(self):
        path = self._write("cfg.yml", "")
        self.assertEqual(config.load_config_file(path), {})

    def test_empty_path(self):
        with self.assertRaises(ValueError):
            config.load_config_file("")

    def test_missing_file(self):
        with self.assertRaises(ValueError) as context:
            config.load_config_file(os.path.join(self.tmpdir.name, "missing.json"))
        self.assertIn("not found", str(context.exception))

    def test_unsupported_extension(self):
        path = self._write("cfg.toml", "input = 'feed.json'\n")
        with self.assertRaises(ValueError) as context:
            config.load_config_file(path)
        self.assertIn("Unsupported", str(context.exception))

    def test_invalid_json(self):
        path = self._write("cfg.json", "{not json")
        with self.assertRaises(ValueError) as context:
            config.load_config_file(path)
        self.assertIn("Invalid JSON", str(context.exception))

    def test_invalid_yaml(self):
        path = self._write("cfg.yaml", "input: [unclosed\n")
        with self.assertRaises(ValueError) as context:
            config.load_config_file(path)
        self.assertIn("Invalid YAML", str(context.exception))

    def test_top_level_not_mapping(self):
        path = self._write("cfg.json", "[1, 2]")
        with self.assertRaises(ValueError) as context:
            config.load_config_file(path)
        self.assertIn("mapping", str(context.exception))
