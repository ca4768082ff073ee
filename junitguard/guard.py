"""Checks applied to raw XML text before it is given to any parser."""

import re

from junitguard.resultdef import ErrorKind, Err, Ok, Result


# Largest document that will be parsed, in characters
MAX_XML_SIZE = 10 * 1024 * 1024

# All DTDs are rejected, benign or not, which closes off XXE and entity expansion attacks
DANGEROUS_DECL_RE = re.compile(r'<!(?:DOCTYPE|ENTITY)', re.IGNORECASE)


def validate_input(xml_content: str) -> Result[str]:
    """Validate raw XML text for type, size and dangerous declarations.

    Returns: the unchanged text on success
    """
    if not isinstance(xml_content, str):
        return Err(ErrorKind.TYPE_ERROR, 'XML content must be a string')

    if len(xml_content) > MAX_XML_SIZE:
        return Err(ErrorKind.SIZE_EXCEEDED,
                   f'XML content exceeds maximum size of {MAX_XML_SIZE} bytes')

    if DANGEROUS_DECL_RE.search(xml_content):
        return Err(ErrorKind.MALICIOUS_CONTENT,
                   'XML contains potentially malicious DOCTYPE or ENTITY declarations')

    return Ok(xml_content)
