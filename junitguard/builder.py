"""Builds the report model out of a generic JUnit XML element tree.

Only the attributes that are universally supported across JUnit producers are read:
  <testsuites time="">
    <testsuite name="" time="">
      <properties><property name="" value=""/></properties>
      <testcase name="" classname="" time="">
        <failure message="" type="">body</failure>   (or <error>, or <skipped message=""/>)
        <system-out/> <system-err/>
      </testcase>
      <testsuite>...</testsuite>
      <system-out/> <system-err/>
    </testsuite>
  </testsuites>
"""

import logging
import types
from typing import Optional

from junitguard import sanitize
from junitguard import totals
from junitguard import xmltree
from junitguard.reportdef import Properties, Suite, TestCase
from junitguard.resultdef import ErrorKind, Err, Ok, Result
from junitguard.testcasedef import Errored, Failed, Passed, Skipped, TestResult
from junitguard.xmltree import Node


MAX_NESTING_DEPTH = 20
MAX_PROPERTIES_COUNT = 1000


def parse_properties(node: Node) -> Result[Optional[Properties]]:
    """Parse all <property> elements within the <properties> children of a node.

    Properties with unacceptable names are dropped.
    Returns: a read-only mapping, or None if there were no valid properties
    """
    properties = {}  # type: dict[str, str]
    count = 0
    for props in xmltree.children(node, 'properties'):
        for prop in xmltree.children(props, 'property'):
            name = sanitize.sanitize_string(xmltree.attr(prop, 'name'))
            if not sanitize.valid_property_name(name):
                logging.debug('Ignoring property with bad name %.120r', name)
                continue

            count += 1
            if count > MAX_PROPERTIES_COUNT:
                return Err(ErrorKind.TOO_MANY_PROPERTIES,
                           f'Maximum properties count of {MAX_PROPERTIES_COUNT} exceeded')

            if (value := xmltree.attr(prop, 'value')) is None:
                value = xmltree.text(prop)
            properties[name] = sanitize.sanitize_string(value)

    if not properties:
        return Ok(None)
    return Ok(types.MappingProxyType(properties))


def parse_result(testcase: Node) -> TestResult:
    """Determine the test outcome from the marker element present.

    If more than one marker is present, failure beats error beats skipped.
    """
    if (marker := xmltree.child(testcase, 'failure')) is not None:
        return Failed(
            message=sanitize.sanitize_optional(xmltree.attr(marker, 'message')),
            type=sanitize.sanitize_optional(xmltree.attr(marker, 'type')),
            body=sanitize.sanitize_optional(xmltree.text(marker)))
    if (marker := xmltree.child(testcase, 'error')) is not None:
        return Errored(
            message=sanitize.sanitize_optional(xmltree.attr(marker, 'message')),
            type=sanitize.sanitize_optional(xmltree.attr(marker, 'type')),
            body=sanitize.sanitize_optional(xmltree.text(marker)))
    if (marker := xmltree.child(testcase, 'skipped')) is not None:
        return Skipped(message=sanitize.sanitize_optional(xmltree.attr(marker, 'message')))
    return Passed()


def parse_test(testcase: Node) -> Result[TestCase]:
    props = parse_properties(testcase)
    if isinstance(props, Err):
        return props

    return Ok(TestCase(
        name=sanitize.sanitize_string(xmltree.attr(testcase, 'name')),
        classname=sanitize.sanitize_string(xmltree.attr(testcase, 'classname')),
        time=sanitize.parse_time(xmltree.attr(testcase, 'time')),
        result=parse_result(testcase),
        properties=props.data,
        system_out=sanitize.sanitize_optional(
            xmltree.text(xmltree.child(testcase, 'system-out'))),
        system_err=sanitize.sanitize_optional(
            xmltree.text(xmltree.child(testcase, 'system-err')))))


def parse_suite(suite: Node, depth: int = 0) -> Result[Suite]:
    """Recursively parse a <testsuite> element and everything in it.

    depth is 0 for a top-level suite. The first error found anywhere in the tree is returned.
    """
    if depth > MAX_NESTING_DEPTH:
        return Err(ErrorKind.MAX_DEPTH_EXCEEDED,
                   f'Maximum nesting depth of {MAX_NESTING_DEPTH} exceeded')

    tests = []
    for testcase in xmltree.children(suite, 'testcase'):
        test = parse_test(testcase)
        if isinstance(test, Err):
            return test
        tests.append(test.data)

    nested = []
    for nested_suite in xmltree.children(suite, 'testsuite'):
        parsed = parse_suite(nested_suite, depth + 1)
        if isinstance(parsed, Err):
            return parsed
        nested.append(parsed.data)

    props = parse_properties(suite)
    if isinstance(props, Err):
        return props

    # The declared time must be known before the totals can be computed
    declared_time = sanitize.parse_declared_time(xmltree.attr(suite, 'time'))
    suite_totals = totals.compute_totals(tests, [s.totals for s in nested], declared_time)

    return Ok(Suite(
        name=sanitize.sanitize_string(xmltree.attr(suite, 'name')),
        properties=props.data,
        tests=tuple(tests),
        suites=tuple(nested) if nested else None,
        system_out=sanitize.sanitize_optional(xmltree.text(xmltree.child(suite, 'system-out'))),
        system_err=sanitize.sanitize_optional(xmltree.text(xmltree.child(suite, 'system-err'))),
        totals=suite_totals))
