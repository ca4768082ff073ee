"""Test sanitize."""

import unittest

from .context import junitguard  # noqa: F401

from junitguard import sanitize  # noqa: I100


class TestSanitizeString(unittest.TestCase):
    """Test sanitize.sanitize_string and sanitize.sanitize_optional."""

    def test_sanitize_string(self):
        for raw, sanitized in [
                (None, ''),
                ('', ''),
                ('  padded\n', 'padded'),
                (42, '42'),
                ('x' * 50000, 'x' * 50000),
                ('x' * 50001, 'x' * 50000 + '...[truncated]'),
        ]:
            with self.subTest(raw=raw[:20] if isinstance(raw, str) else raw):
                self.assertEqual(sanitized, sanitize.sanitize_string(raw))

    def test_sanitize_optional(self):
        self.assertIsNone(sanitize.sanitize_optional(None))
        self.assertIsNone(sanitize.sanitize_optional(' \n '))
        self.assertEqual('message', sanitize.sanitize_optional(' message '))


class TestPropertyName(unittest.TestCase):
    """Test sanitize.valid_property_name."""

    def test_valid_property_name(self):
        for name, valid in [
                ('valid', True),
                ('x' * 100, True),
                ('x' * 101, False),
                ('', False),
                (None, False),
                ('__proto__', False),
                ('constructor', False),
                ('prototype', False),
                ('Prototype', True),
                ('__proto__x', True),
        ]:
            with self.subTest(name=name):
                self.assertEqual(valid, sanitize.valid_property_name(name))


class TestParseTime(unittest.TestCase):
    """Test sanitize.parse_time and sanitize.parse_declared_time."""

    def test_parse_time(self):
        for raw, parsed in [
                ('0.5', 0.5),
                ('0', 0.0),
                ('12', 12.0),
                ('1.23456789', 1.234568),
                ('-5', 0.0),
                ('NaN', 0.0),
                ('inf', 0.0),
                ('invalid', 0.0),
                ('', 0.0),
                (None, 0.0),
        ]:
            with self.subTest(raw=raw):
                self.assertEqual(parsed, sanitize.parse_time(raw))

    def test_parse_declared_time(self):
        self.assertIsNone(sanitize.parse_declared_time(None))
        self.assertIsNone(sanitize.parse_declared_time(''))
        self.assertIsNone(sanitize.parse_declared_time('invalid'))
        self.assertIsNone(sanitize.parse_declared_time('nan'))
        self.assertEqual(0.0, sanitize.parse_declared_time('0'))
        self.assertEqual(0.0, sanitize.parse_declared_time('-1'))
        self.assertEqual(2.5, sanitize.parse_declared_time('2.5'))

    def test_round_time(self):
        self.assertEqual(0.3, sanitize.round_time(0.1 + 0.2))
        self.assertEqual(sanitize.round_time(1 / 3), sanitize.round_time(sanitize.round_time(1 / 3)))
