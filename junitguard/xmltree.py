"""Generic XML tree parsing, hardened against entity attacks.

The tree parser knows nothing about JUnit. Attribute values are left as strings, and
comments, processing instructions and the XML declaration never appear in the tree.
"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import Optional, Union
from xml.parsers.expat import errors as expat_errors

import defusedxml
import defusedxml.ElementTree as SafeET

from junitguard.resultdef import ErrorKind, Err, Ok, Result


Node = ET.Element

# An XML declaration is only allowed at the very start, so it must go before wrapping
XML_DECL_RE = re.compile(r'^\ufeff?\s*<\?xml\b[^>]*\?>')

# Parser error code for a second top-level element
JUNK_AFTER_ROOT = expat_errors.codes[expat_errors.XML_ERROR_JUNK_AFTER_DOC_ELEMENT]

# Placeholder root used to hold sibling top-level elements
FOREST_TAG = 'forest'


def strip_declaration(text: str) -> str:
    """Remove a leading XML declaration and byte-order mark, if any."""
    return XML_DECL_RE.sub('', text, count=1)


def parse_untrusted(text: str) -> Node:
    """Parse XML text with DTDs, entities and external references all forbidden.

    Raises: ET.ParseError or defusedxml.DefusedXmlException
    """
    return SafeET.fromstring(text, forbid_dtd=True, forbid_entities=True,
                             forbid_external=True)


def parse_error(e: Union[ET.ParseError, defusedxml.DefusedXmlException]) -> Err:
    """Convert a parser exception into an error result."""
    if isinstance(e, defusedxml.DefusedXmlException):
        # The input guard should already have caught this
        logging.debug('defusedxml refused the document: %r', e)
        return Err(ErrorKind.MALICIOUS_CONTENT,
                   'XML contains potentially malicious DOCTYPE or ENTITY declarations')
    return Err(ErrorKind.MALFORMED_XML, f'Malformed XML: {e}')


def parse_forest(text: str) -> Result[list[Node]]:
    """Parse XML text that may hold several sibling top-level elements.

    A document that is well-formed apart from having more than one top-level element is
    accepted, and all of them are returned in document order. Any other parse error is
    returned as it is.
    """
    try:
        return Ok([parse_untrusted(text)])
    except defusedxml.DefusedXmlException as e:
        return parse_error(e)
    except ET.ParseError as e:
        if e.code != JUNK_AFTER_ROOT:
            return parse_error(e)
        first_error = e

    try:
        forest = parse_untrusted(f'<{FOREST_TAG}>{strip_declaration(text)}</{FOREST_TAG}>')
    except (ET.ParseError, defusedxml.DefusedXmlException):
        # The siblings themselves are broken; report the original problem
        return parse_error(first_error)
    logging.debug('Document has %d top-level elements', len(forest))
    return Ok(list(forest))


def children(node: Node, tag: str) -> list[Node]:
    """Return all direct children with the given tag.

    An element appearing once and an element appearing many times both come back as a list.
    """
    return list(node.findall(tag))


def child(node: Node, tag: str) -> Optional[Node]:
    """Return the first direct child with the given tag, if any."""
    return node.find(tag)


def text(node: Optional[Node]) -> Optional[str]:
    """Return all the text contained within an element, or None if there is no element."""
    if node is None:
        return None
    return ''.join(node.itertext())


def attr(node: Node, name: str) -> Optional[str]:
    return node.get(name)
