#!/usr/bin/env python3
"""Tests for persisted CLI settings."""

import json
import sys
import tempfile
import unittest
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from kiparse.config import Settings, default_settings_path, load_settings, save_settings


class TestSettings(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / 'kiparse' / 'settings.json'

    def tearDown(self):
        self._tmp.cleanup()

    def test_defaults_when_missing(self):
        self.assertEqual(load_settings(self.path), Settings())

    def test_save_then_load(self):
        settings = Settings(output_format='json', update_interval=2.5, verbose=True)
        written = save_settings(settings, self.path)
        self.assertEqual(written, self.path)
        self.assertEqual(load_settings(self.path), settings)

    def test_unknown_keys_ignored(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text(json.dumps({'output_format': 'markdown', 'window_x': 40}), encoding='utf-8')
        self.assertEqual(load_settings(self.path), Settings(output_format='markdown'))

    def test_unreadable_file_falls_back(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text('{not json', encoding='utf-8')
        with self.assertLogs('kiparse.config', level='WARNING'):
            settings = load_settings(self.path)
        self.assertEqual(settings, Settings())

    def test_non_object_falls_back(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text('[1, 2]', encoding='utf-8')
        with self.assertLogs('kiparse.config', level='WARNING'):
            self.assertEqual(load_settings(self.path), Settings())

    def test_default_path(self):
        path = default_settings_path()
        self.assertEqual(path.name, 'settings.json')
        self.assertEqual(path.parent.name, '.kiparse')


if __name__ == '__main__':
    unittest.main()
