import json
import logging
import os
import sys
import unittest
from unittest import mock

from workerscaler.common.logger import JsonFormatter, setup_logging


class TestJsonFormatter(unittest.TestCase):
    """Tests for the JSON log formatter."""

    def _record(self, msg, exc_info=None, **extra):
        record = logging.LogRecord('workerscaler', logging.INFO, __file__, 10, msg, None, exc_info)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_formats_record_as_json(self):
        output = json.loads(JsonFormatter().format(self._record('scale to 16')))

        self.assertEqual(output['message'], 'scale to 16')
        self.assertEqual(output['level'], 'INFO')
        self.assertEqual(output['name'], 'workerscaler')
        self.assertEqual(output['line'], 10)
        self.assertNotIn('exception', output)

    def test_includes_extra_fields(self):
        output = json.loads(JsonFormatter().format(self._record('tick', scale_to=176)))

        self.assertEqual(output['scale_to'], 176)
        self.assertNotIn('msg', output)

    def test_includes_exception(self):
        try:
            raise ConnectionError('queue down')
        except ConnectionError:
            record = self._record('tick failed', exc_info=sys.exc_info())

        output = json.loads(JsonFormatter().format(record))

        self.assertIn('ConnectionError: queue down', output['exception'])


class TestSetupLogging(unittest.TestCase):
    """Tests for logging setup."""

    def setUp(self):
        root = logging.getLogger()
        self._handlers = root.handlers[:]
        self._level = root.level
        root.handlers = []

    def tearDown(self):
        root = logging.getLogger()
        root.handlers = self._handlers
        root.setLevel(self._level)

    @mock.patch.dict(os.environ, {'LOG_LEVEL': 'debug', 'LOG_FORMAT': 'json'}, clear=True)
    def test_level_and_format_from_environment(self):
        setup_logging()

        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertTrue(root.handlers)
        self.assertTrue(all(isinstance(h.formatter, JsonFormatter) for h in root.handlers))

    @mock.patch.dict(os.environ, {}, clear=True)
    def test_text_format_by_default(self):
        setup_logging(level='WARNING')

        root = logging.getLogger()
        self.assertEqual(root.level, logging.WARNING)
        self.assertFalse(any(isinstance(h.formatter, JsonFormatter) for h in root.handlers))


if __name__ == '__main__':
    unittest.main()
