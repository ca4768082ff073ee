"""Aggregation of test counts and times over a suite tree.

Two time semantics coexist here. compute_totals() trusts a time declared in the report
and keeps the computed sum separately, while recompute_totals() trusts only the children.
"""

import dataclasses
from typing import Iterable, Optional, Sequence

from junitguard.reportdef import Suite, TestCase, Totals
from junitguard.sanitize import round_time
from junitguard.testcasedef import TestStatus


def count_tests(tests: Iterable[TestCase]) -> Totals:
    """Count the outcomes of a flat list of tests and sum their times."""
    counts = {status: 0 for status in TestStatus}
    cumulative_time = 0.0
    total = 0
    for test in tests:
        total += 1
        counts[test.result.status] += 1
        cumulative_time = round_time(cumulative_time + test.time)
    return Totals(
        tests=total,
        passed=counts[TestStatus.PASSED],
        skipped=counts[TestStatus.SKIPPED],
        failed=counts[TestStatus.FAILED],
        error=counts[TestStatus.ERROR],
        time=cumulative_time,
        cumulative_time=cumulative_time)


def sum_totals(totals: Iterable[Totals]) -> Totals:
    """Add together a number of Totals, field by field.

    Both time fields are summed independently.
    """
    result = Totals()
    for t in totals:
        result = Totals(
            tests=result.tests + t.tests,
            passed=result.passed + t.passed,
            skipped=result.skipped + t.skipped,
            failed=result.failed + t.failed,
            error=result.error + t.error,
            time=round_time(result.time + t.time),
            cumulative_time=round_time(result.cumulative_time + t.cumulative_time))
    return result


def compute_totals(tests: Sequence[TestCase], nested_totals: Sequence[Totals],
                   declared_time: Optional[float]) -> Totals:
    """Compute the totals for a suite from its tests and already-computed nested suites.

    Tests belonging to nested suites are counted only through nested_totals.
    The declared time, when there is one (even zero), becomes the time; otherwise the
    cumulative time is used for both.
    """
    combined = sum_totals([count_tests(tests), *nested_totals])
    if declared_time is None:
        return dataclasses.replace(combined, time=combined.cumulative_time)
    return dataclasses.replace(combined, time=round_time(declared_time))


def recompute_totals(suite: Suite) -> Suite:
    """Return a copy of the suite with totals rebuilt purely from its children.

    Any time declared for the suite or its nested suites is ignored, so time and
    cumulative_time come out equal at every level.
    """
    nested = tuple(recompute_totals(s) for s in suite.suites) if suite.suites else None
    totals = compute_totals(suite.tests, [s.totals for s in nested or ()], None)
    return dataclasses.replace(suite, suites=nested, totals=totals)
