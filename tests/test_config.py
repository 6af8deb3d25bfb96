# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for config module."""

import os
import sys
import tempfile
import unittest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from config import (
    GeneratorSettings, LayoutConfig, OutputConfig, ConfigValidationError,
    VALID_WORD_ORDERS, VALID_OUTPUT_FORMATS, create_argument_parser,
    load_config, load_word_list
)


class TestGeneratorSettings(unittest.TestCase):
    """Tests for GeneratorSettings class."""

    def test_defaults(self):
        """Test default settings values."""
        settings = GeneratorSettings()

        self.assertIsNone(settings.max_width)
        self.assertIsNone(settings.max_height)
        self.assertIsNone(settings.max_area)
        self.assertFalse(settings.allow_disconnected_groups)
        self.assertTrue(settings.forbid_flush_adjacency)
        self.assertTrue(settings.forbid_end_to_end)
        self.assertTrue(settings.forbid_end_to_side)
        self.assertFalse(settings.forbid_corner_touch)
        self.assertEqual(settings.min_words_used, 1)
        self.assertTrue(settings.require_all_words)
        self.assertEqual(settings.word_order, "longest_first")
        self.assertEqual(settings.validate(), [])

    def test_settings_are_frozen(self):
        settings = GeneratorSettings()

        with self.assertRaises(AttributeError):
            settings.max_width = 5

    def test_from_dict(self):
        settings = GeneratorSettings.from_dict({'max_width': 7, 'forbid_corner_touch': True})

        self.assertEqual(settings.max_width, 7)
        self.assertTrue(settings.forbid_corner_touch)

    def test_from_dict_unknown_key(self):
        with self.assertRaises(ConfigValidationError):
            GeneratorSettings.from_dict({'max_size': 7})

    def test_validation_errors(self):
        """Test validation catches bad caps, counts and orders."""
        errors = GeneratorSettings(
            max_width=0, max_area=-3, min_words_used=-1, word_order="random"
        ).validate()

        self.assertEqual(len(errors), 4)
        self.assertTrue(any("max_width" in e for e in errors))
        self.assertTrue(any("word_order" in e for e in errors))

    def test_valid_constants(self):
        self.assertIn("longest_first", VALID_WORD_ORDERS)
        self.assertIn("yaml", VALID_OUTPUT_FORMATS)


class TestLayoutConfig(unittest.TestCase):
    """Tests for LayoutConfig class."""

    def test_default_config(self):
        config = LayoutConfig()

        self.assertEqual(config.words, [])
        self.assertIsNone(config.word_file)
        self.assertEqual(config.count, 1)
        self.assertEqual(config.output.format, "text")
        self.assertEqual(config.validate(), [])

    def test_nested_config_from_dict(self):
        config = LayoutConfig(
            settings={'max_height': 4},
            output={'format': 'yaml'}
        )

        self.assertEqual(config.settings.max_height, 4)
        self.assertIsInstance(config.output, OutputConfig)
        self.assertEqual(config.output.format, "yaml")

    def test_validation_invalid_count(self):
        self.assertTrue(LayoutConfig(count=0).validate())
        self.assertEqual(LayoutConfig(count=None).validate(), [])

    def test_validation_invalid_format(self):
        config = LayoutConfig(output=OutputConfig(format="pdf", log_level="LOUD"))

        errors = config.validate()

        self.assertEqual(len(errors), 2)

    def test_to_dict(self):
        data = LayoutConfig(words=["abc"]).to_dict()

        self.assertEqual(data['words'], ["abc"])
        self.assertEqual(data['settings']['word_order'], "longest_first")
        self.assertEqual(data['output']['format'], "text")


class TestYAMLLoading(unittest.TestCase):
    """Tests for YAML configuration loading."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.temp_dir.cleanup()

    def _write(self, name, content):
        path = os.path.join(self.temp_dir.name, name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path

    def test_load_from_yaml(self):
        path = self._write("layouts.yaml", """
words:
  - hello
  - world
count: 3
settings:
  max_width: 7
  allow_disconnected_groups: true
output:
  format: yaml
""")

        config = LayoutConfig.from_yaml(path)

        self.assertEqual(config.words, ["hello", "world"])
        self.assertEqual(config.count, 3)
        self.assertEqual(config.settings.max_width, 7)
        self.assertTrue(config.settings.allow_disconnected_groups)
        self.assertEqual(config.output.format, "yaml")

    def test_missing_file(self):
        with self.assertRaises(ConfigValidationError):
            LayoutConfig.from_yaml(os.path.join(self.temp_dir.name, "missing.yaml"))

    def test_not_a_mapping(self):
        path = self._write("list.yaml", "- a\n- b\n")

        with self.assertRaises(ConfigValidationError):
            LayoutConfig.from_yaml(path)

    def test_invalid_yaml(self):
        path = self._write("broken.yaml", "words: [a, b\n")

        with self.assertRaises(ConfigValidationError):
            LayoutConfig.from_yaml(path)

    def test_unknown_setting(self):
        path = self._write("bad.yaml", "settings:\n  max_size: 3\n")

        with self.assertRaises(ConfigValidationError):
            LayoutConfig.from_yaml(path)

    def test_word_list_text(self):
        path = self._write("words.txt", "# animals\ncat\n\n  dog  \n")

        self.assertEqual(load_word_list(path), ["cat", "dog"])

    def test_word_list_yaml(self):
        listed = self._write("words.yaml", "- cat\n- dog\n")
        mapped = self._write("mapped.yml", "words:\n  - emu\n")

        self.assertEqual(load_word_list(listed), ["cat", "dog"])
        self.assertEqual(load_word_list(mapped), ["emu"])

    def test_word_list_errors(self):
        scalar = self._write("scalar.yaml", "just a string\n")

        with self.assertRaises(ConfigValidationError):
            load_word_list(scalar)
        with self.assertRaises(ConfigValidationError):
            load_word_list(os.path.join(self.temp_dir.name, "nope.txt"))


class TestCommandLine(unittest.TestCase):
    """Tests for argument parsing and merging."""

    def setUp(self):
        self.parser = create_argument_parser()
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_from_args(self):
        args = self.parser.parse_args([
            "cat", "tea", "--count", "4", "--max-width", "6",
            "--allow-flush", "--allow-subset", "--min-words", "2",
            "--format", "yaml", "--verbose"
        ])

        config = LayoutConfig.from_args(args)

        self.assertEqual(config.words, ["cat", "tea"])
        self.assertEqual(config.count, 4)
        self.assertEqual(config.settings.max_width, 6)
        self.assertFalse(config.settings.forbid_flush_adjacency)
        self.assertFalse(config.settings.require_all_words)
        self.assertEqual(config.settings.min_words_used, 2)
        self.assertEqual(config.output.format, "yaml")
        self.assertEqual(config.output.log_level, "DEBUG")

    def test_explored_limit_flag(self):
        config = LayoutConfig.from_args(
            self.parser.parse_args(["cat", "--explored-limit", "500"])
        )

        self.assertEqual(config.settings.explored_state_limit, 500)
        self.assertIsNone(GeneratorSettings().explored_state_limit)
        self.assertTrue(GeneratorSettings(explored_state_limit=0).validate())

    def test_all_flag(self):
        config = LayoutConfig.from_args(self.parser.parse_args(["cat", "--all"]))

        self.assertIsNone(config.count)

    def test_count_and_all_exclusive(self):
        with self.assertRaises(SystemExit):
            self.parser.parse_args(["cat", "--all", "--count", "2"])

    def test_cli_overrides_yaml(self):
        path = os.path.join(self.temp_dir.name, "layouts.yaml")
        with open(path, 'w', encoding='utf-8') as f:
            f.write("words: [hello, world]\ncount: 3\nsettings:\n  max_width: 7\n")

        config = load_config(self.parser.parse_args([
            "--config", path, "--max-height", "4", "--count", "5"
        ]))

        self.assertEqual(config.words, ["hello", "world"])
        self.assertEqual(config.count, 5)
        self.assertEqual(config.settings.max_width, 7)
        self.assertEqual(config.settings.max_height, 4)

    def test_yaml_kept_without_cli_values(self):
        path = os.path.join(self.temp_dir.name, "layouts.yaml")
        with open(path, 'w', encoding='utf-8') as f:
            f.write("words: [hello]\ncount: 3\n")

        config = load_config(self.parser.parse_args(["--config", path]))

        self.assertEqual(config.count, 3)
        self.assertEqual(config.words, ["hello"])

    def test_load_config_rejects_invalid(self):
        with self.assertRaises(ConfigValidationError):
            load_config(self.parser.parse_args(["cat", "--count", "0"]))
        with self.assertRaises(ConfigValidationError):
            load_config(self.parser.parse_args(["cat", "--max-width", "0"]))


if __name__ == '__main__':
    unittest.main()
