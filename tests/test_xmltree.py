"""Test xmltree."""

import unittest

from .context import junitguard  # noqa: F401

from junitguard import xmltree  # noqa: I100
from junitguard.resultdef import ErrorKind, Err, Ok


class TestXmlTree(unittest.TestCase):

    def test_helpers(self):
        result = xmltree.parse_forest('<a x="1"><b/><b/>text</a>')
        self.assertIsInstance(result, Ok)
        node = result.data[0]
        self.assertEqual('1', xmltree.attr(node, 'x'))
        self.assertIsNone(xmltree.attr(node, 'y'))
        self.assertEqual(2, len(xmltree.children(node, 'b')))
        self.assertEqual([], xmltree.children(node, 'c'))
        self.assertIsNone(xmltree.child(node, 'c'))
        self.assertEqual('text', xmltree.text(node))
        self.assertIsNone(xmltree.text(None))

    def test_comments_dropped(self):
        result = xmltree.parse_forest('<a>one<!-- comment -->two<?pi data?></a>')
        self.assertIsInstance(result, Ok)
        self.assertEqual('onetwo', xmltree.text(result.data[0]))

    def test_strip_declaration(self):
        self.assertEqual('\n<a/>', xmltree.strip_declaration('<?xml version="1.0"?>\n<a/>'))
        self.assertEqual('<a/>', xmltree.strip_declaration('\ufeff<?xml version="1.0"?><a/>'))
        self.assertEqual('<a/>', xmltree.strip_declaration('<a/>'))

    def test_parse_forest_single(self):
        result = xmltree.parse_forest('<?xml version="1.0"?><a><b/></a>')
        self.assertIsInstance(result, Ok)
        self.assertEqual(['a'], [n.tag for n in result.data])

    def test_parse_forest_siblings(self):
        result = xmltree.parse_forest('<?xml version="1.0"?>\n<a n="1"/>\n<b/>\n<a n="2"><c/></a>')
        self.assertIsInstance(result, Ok)
        self.assertEqual(['a', 'b', 'a'], [n.tag for n in result.data])
        self.assertEqual('2', xmltree.attr(result.data[2], 'n'))
        self.assertEqual(1, len(xmltree.children(result.data[2], 'c')))

    def test_parse_forest_errors(self):
        for text in ['', 'junk', '<a>', '<a></b>', '<a/><b>', '<a/><b></c>']:
            with self.subTest(text=text):
                result = xmltree.parse_forest(text)
                self.assertIsInstance(result, Err)
                self.assertEqual(ErrorKind.MALFORMED_XML, result.kind)

        # A broken sibling reports the error from the original document
        result = xmltree.parse_forest('<a/><b>')
        self.assertTrue(result.error.startswith('Malformed XML: junk after document element'))

    def test_parse_forest_entities(self):
        result = xmltree.parse_forest('<!DOCTYPE a [<!ENTITY e "x">]><a>&e;</a><b/>')
        self.assertIsInstance(result, Err)
        self.assertEqual(ErrorKind.MALICIOUS_CONTENT, result.kind)
