"""Ingest JUnit XML reports from text, files, directories and URLs.

Every function returns a Result; no exception escapes from here.
"""

import dataclasses
import logging
import os
from typing import Iterable, Optional

import requests

from junitguard import builder
from junitguard import guard
from junitguard import netreq
from junitguard import sanitize
from junitguard import totals
from junitguard import xmltree
from junitguard.reportdef import Report, Suite
from junitguard.resultdef import ErrorKind, Err, Ok, Result


ROOT_TAG = 'testsuites'
SUITE_TAG = 'testsuite'
REPORT_EXTENSION = '.xml'


def parse_junit_xml(xml_content: str) -> Result[Report]:
    """Parse a single JUnit XML document with a <testsuites> root.

    The time declared on the root becomes the time of the report. The report's
    cumulative time is the sum of its suites' cumulative times.
    """
    validation = guard.validate_input(xml_content)
    if isinstance(validation, Err):
        return validation

    forest = xmltree.parse_forest(validation.data)
    if isinstance(forest, Err):
        return forest
    top_nodes = forest.data

    if len(top_nodes) == 1 and top_nodes[0].tag == ROOT_TAG:
        root = top_nodes[0]
        suite_nodes = xmltree.children(root, SUITE_TAG)
    else:
        # Errors within bare suites are reported in preference to the missing wrapper
        root = None
        suite_nodes = [node for node in top_nodes if node.tag == SUITE_TAG]

    suites = []
    for node in suite_nodes:
        suite = builder.parse_suite(node)
        if isinstance(suite, Err):
            return suite
        suites.append(suite.data)

    if root is None:
        return Err(ErrorKind.MISSING_REQUIRED_ATTRIBUTE,
                   'XML must have a testsuites wrapper element with time attribute')

    root_time = sanitize.sanitize_string(xmltree.attr(root, 'time'))
    if not root_time:
        return Err(ErrorKind.MISSING_REQUIRED_ATTRIBUTE,
                   'testsuites element is missing required time attribute')

    report_totals = dataclasses.replace(
        totals.sum_totals(s.totals for s in suites),
        time=sanitize.parse_time(root_time))
    return Ok(Report(tuple(suites), report_totals))


def wrap_multi_root(xml_content: str) -> str:
    """Enclose a document in a synthetic <testsuites> root element."""
    return f'<{ROOT_TAG}>{xmltree.strip_declaration(xml_content)}</{ROOT_TAG}>'


def parse_document(xml_content: str) -> Result[Report]:
    """Parse a JUnit XML document, retrying once with a synthetic root on failure.

    This handles documents holding several sibling suites without a wrapper element.
    If both attempts fail, the error from the first attempt is returned.
    """
    first = parse_junit_xml(xml_content)
    if isinstance(first, Ok):
        return first

    if not isinstance(xml_content, str):
        return first

    logging.debug('Direct parse failed (%s); retrying with a synthetic root', first)
    second = parse_junit_xml(wrap_multi_root(xml_content))
    if isinstance(second, Ok):
        logging.info('Recovered multi-root document by adding a synthetic root')
        return second

    logging.debug('Retry with a synthetic root also failed (%s)', second)
    return first


def combine_suites(suites: Iterable[Suite]) -> Report:
    """Create a report from suites whose totals are summed."""
    suites = tuple(suites)
    return Report(suites, totals.sum_totals(s.totals for s in suites))


def ingest_file(file_path: str) -> Result[Report]:
    """Read and parse a single JUnit XML file."""
    prefix = f'Failed to ingest file {file_path}: '
    try:
        with open(file_path, encoding='utf-8-sig', errors='replace') as f:
            # Anything past the size limit is rejected unread
            xml_content = f.read(guard.MAX_XML_SIZE + 1)
    except OSError as e:
        return Err(ErrorKind.FILE_SYSTEM_ERROR, prefix + str(e))

    logging.debug('Parsing %s', file_path)
    result = parse_document(xml_content)
    if isinstance(result, Err):
        return result.prefixed(prefix)
    return result


def ingest_files(file_paths: Iterable[str]) -> Result[Report]:
    """Ingest several files into one report.

    Suites appear in the order of the files. The first file that fails stops ingestion and
    its error is returned.
    """
    suites = []
    for file_path in file_paths:
        result = ingest_file(file_path)
        if isinstance(result, Err):
            return result
        suites.extend(result.data.testsuites)
    return Ok(combine_suites(suites))


def find_reports(dir_path: str, sort: bool = False) -> list[str]:
    """Return the paths of all .xml files in a directory.

    Raises: OSError if the directory can't be read
    """
    with os.scandir(dir_path) as it:
        names = [entry.name for entry in it
                 if os.path.splitext(entry.name)[1].lower() == REPORT_EXTENSION
                 and entry.is_file()]
    if sort:
        names.sort()
    return [os.path.join(dir_path, name) for name in names]


def ingest_dir(dir_path: str, sort: bool = False) -> Result[Report]:
    """Ingest all the .xml files in a directory.

    Files are ingested in directory listing order, which depends on the filesystem, unless
    sort is True. A directory without any report files gives an empty report.
    """
    try:
        if not os.path.isdir(dir_path):
            # Raises FileNotFoundError if it doesn't exist at all
            os.stat(dir_path)
            return Err(ErrorKind.NOT_A_DIRECTORY, f'Path {dir_path} is not a directory')
        xml_files = find_reports(dir_path, sort)
    except OSError as e:
        return Err(ErrorKind.FILE_SYSTEM_ERROR, f'Failed to ingest directory {dir_path}: {e}')

    if not xml_files:
        logging.info('No report files found in %s', dir_path)
        return Ok(Report.empty())

    return ingest_files(xml_files)


def ingest_url(url: str, session: Optional[requests.Session] = None) -> Result[Report]:
    """Download and parse a single JUnit XML report."""
    prefix = f'Failed to ingest URL {url}: '
    if not session:
        session = netreq.Session()
    try:
        xml_content = netreq.get_text(session, url, guard.MAX_XML_SIZE)
    except netreq.ResponseTooLarge as e:
        return Err(ErrorKind.SIZE_EXCEEDED, prefix + str(e))
    except netreq.RequestException as e:
        return Err(ErrorKind.NETWORK_ERROR, prefix + str(e))

    logging.debug('Parsing report from %s', url)
    result = parse_document(xml_content)
    if isinstance(result, Err):
        return result.prefixed(prefix)
    return result
