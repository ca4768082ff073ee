"""Test netreq and URL ingestion."""

import unittest
from unittest.mock import MagicMock

import requests

from .context import junitguard  # noqa: F401
from .util import patch_config_get, read_data

from junitguard import ingest  # noqa: I100
from junitguard import netreq
from junitguard.resultdef import ErrorKind, Err, Ok

REPORT_URL = 'https://ci.example.com/artifacts/junit.xml'


def mock_session(chunks, content_type='application/xml', encoding=None, status_error=None):
    """Return a session whose get() returns a streamed response with the given chunks."""
    resp = MagicMock()
    resp.__enter__.return_value = resp
    resp.iter_content.return_value = iter(chunks)
    resp.headers = {'Content-Type': content_type}
    resp.encoding = encoding
    if status_error:
        resp.raise_for_status.side_effect = status_error
    session = MagicMock()
    session.get.return_value = resp
    return session


class TestSession(unittest.TestCase):

    def test_headers(self):
        with netreq.Session() as session:
            self.assertTrue(session.headers['User-Agent'].startswith('junitguard/'))

    def test_retries_from_config(self):
        with patch_config_get('http_retries', 7):
            with netreq.Session() as session:
                adapter = session.get_adapter(REPORT_URL)
                self.assertEqual(7, adapter.max_retries.total)

    def test_explicit_retries(self):
        with netreq.Session(total=1, backoff_factor=0) as session:
            adapter = session.get_adapter('http://example.com/')
            self.assertEqual(1, adapter.max_retries.total)


class TestGetText(unittest.TestCase):

    def test_chunks(self):
        session = mock_session([b'<test', b'suites/>'])
        with patch_config_get('http_timeout', 5):
            self.assertEqual('<testsuites/>', netreq.get_text(session, REPORT_URL, 100))
        session.get.assert_called_once_with(REPORT_URL, stream=True, timeout=5)

    def test_default_utf8(self):
        # requests guesses ISO-8859-1 for text/* without a charset
        session = mock_session(['é'.encode('utf-8')], content_type='text/xml',
                               encoding='ISO-8859-1')
        self.assertEqual('é', netreq.get_text(session, REPORT_URL, 100))

    def test_declared_charset(self):
        session = mock_session(['é'.encode('latin-1')],
                               content_type='text/xml; charset=ISO-8859-1',
                               encoding='ISO-8859-1')
        self.assertEqual('é', netreq.get_text(session, REPORT_URL, 100))

    def test_unknown_charset(self):
        session = mock_session([b'abc'], content_type='text/xml; charset=bogus',
                               encoding='bogus')
        self.assertEqual('abc', netreq.get_text(session, REPORT_URL, 100))

    def test_too_large(self):
        session = mock_session([b'x' * 60, b'x' * 60, b'x' * 60])
        with self.assertRaises(netreq.ResponseTooLarge):
            netreq.get_text(session, REPORT_URL, 100)

    def test_http_error(self):
        session = mock_session([], status_error=requests.exceptions.HTTPError('404 Not Found'))
        with self.assertRaises(netreq.RequestException):
            netreq.get_text(session, REPORT_URL, 100)


class TestIngestUrl(unittest.TestCase):

    def test_success(self):
        session = mock_session([read_data('junit-basic.xml').encode('utf-8')])
        result = ingest.ingest_url(REPORT_URL, session)
        self.assertIsInstance(result, Ok)
        self.assertEqual(9, result.data.totals.tests)
        self.assertEqual(1, result.data.totals.failed)
        self.assertEqual(15.682687, result.data.totals.time)

    def test_too_large(self):
        chunk = b'x' * netreq.CHUNK_SIZE
        count = ingest.guard.MAX_XML_SIZE // netreq.CHUNK_SIZE + 1
        session = mock_session([chunk] * count)
        result = ingest.ingest_url(REPORT_URL, session)
        self.assertIsInstance(result, Err)
        self.assertEqual(ErrorKind.SIZE_EXCEEDED, result.kind)
        self.assertTrue(result.error.startswith(f'Failed to ingest URL {REPORT_URL}: '))

    def test_network_error(self):
        session = MagicMock()
        session.get.side_effect = requests.exceptions.ConnectionError('Connection refused')
        result = ingest.ingest_url(REPORT_URL, session)
        self.assertIsInstance(result, Err)
        self.assertEqual(ErrorKind.NETWORK_ERROR, result.kind)
        self.assertEqual(f'Failed to ingest URL {REPORT_URL}: Connection refused', result.error)

    def test_http_error(self):
        session = mock_session([], status_error=requests.exceptions.HTTPError('500 Server Error'))
        result = ingest.ingest_url(REPORT_URL, session)
        self.assertIsInstance(result, Err)
        self.assertEqual(ErrorKind.NETWORK_ERROR, result.kind)

    def test_malicious(self):
        session = mock_session([b'<!DOCTYPE foo [<!ENTITY x "y">]><testsuites time="1"/>'])
        result = ingest.ingest_url(REPORT_URL, session)
        self.assertIsInstance(result, Err)
        self.assertEqual(ErrorKind.MALICIOUS_CONTENT, result.kind)
        self.assertIn(REPORT_URL, result.error)
