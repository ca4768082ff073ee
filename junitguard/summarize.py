"""Human and machine readable summaries of ingested reports"""

import io
from typing import Any, Optional

from junitguard.reportdef import Report, Suite, TestCase, Totals
from junitguard.testcasedef import Passed, TestStatus


def summarize_totals(totals: Totals) -> list[str]:
    f = io.StringIO()
    print('OK:', totals.passed, file=f)
    print('FAILED:', totals.failed, file=f)
    print('ERRORED:', totals.error, file=f)
    print('SKIPPED:', totals.skipped, file=f)
    print('TOTAL:', totals.tests, file=f)
    print('TIME:', totals.time, file=f)
    if totals.cumulative_time != totals.time:
        print('CUMULATIVE TIME:', totals.cumulative_time, file=f)
    f.seek(0)
    return f.readlines()


def describe_test(test: TestCase) -> str:
    """Return a one-line description of a test that didn't pass."""
    desc = f'{test.result.status.value.upper()} {test.classname}::{test.name}'
    if message := getattr(test.result, 'message', None):
        desc += f' - {message.splitlines()[0]}'
    return desc


def summarize_suite(suite: Suite, details: bool, depth: int = 0) -> list[str]:
    indent = '  ' * depth
    t = suite.totals
    lines = [f'{indent}{suite.name}: {t.passed}/{t.tests} passed in {t.time}s\n']
    if details:
        lines.extend(f'{indent}  {describe_test(test)}\n'
                     for test in suite.tests if not isinstance(test.result, Passed))
    for nested in suite.suites or ():
        lines.extend(summarize_suite(nested, details, depth + 1))
    return lines


def summarize_report(report: Report, details: bool = False) -> list[str]:
    """Summarize a report, one line per suite followed by the overall totals.

    With details, every test that didn't pass is also listed under its suite.
    """
    lines = []
    for suite in report.testsuites:
        lines.extend(summarize_suite(suite, details))
    lines.extend(summarize_totals(report.totals))
    return lines


def show_report(report: Report, details: bool = False):
    print(''.join(summarize_report(report, details)), end='')


def properties_as_dict(properties) -> Optional[dict[str, str]]:
    return dict(properties) if properties is not None else None


def testcase_as_dict(test: TestCase) -> dict[str, Any]:
    result = {'status': test.result.status.value}  # type: dict[str, Any]
    if test.result.status is not TestStatus.PASSED:
        result['message'] = test.result.message
    if test.result.status in (TestStatus.FAILED, TestStatus.ERROR):
        result['type'] = test.result.type
        result['body'] = test.result.body
    return {
        'name': test.name,
        'classname': test.classname,
        'time': test.time,
        'result': result,
        'properties': properties_as_dict(test.properties),
        'systemOut': test.system_out,
        'systemErr': test.system_err,
    }


def totals_as_dict(totals: Totals) -> dict[str, Any]:
    return {
        'tests': totals.tests,
        'passed': totals.passed,
        'skipped': totals.skipped,
        'failed': totals.failed,
        'error': totals.error,
        'time': totals.time,
        'cumulativeTime': totals.cumulative_time,
    }


def suite_as_dict(suite: Suite) -> dict[str, Any]:
    return {
        'name': suite.name,
        'properties': properties_as_dict(suite.properties),
        'tests': [testcase_as_dict(t) for t in suite.tests],
        'suites': [suite_as_dict(s) for s in suite.suites] if suite.suites else None,
        'systemOut': suite.system_out,
        'systemErr': suite.system_err,
        'totals': totals_as_dict(suite.totals),
    }


def report_as_dict(report: Report) -> dict[str, Any]:
    """Convert a report into plain data that can be serialized as JSON."""
    return {
        'testsuites': [suite_as_dict(s) for s in report.testsuites],
        'totals': totals_as_dict(report.totals),
    }
