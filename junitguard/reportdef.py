"""Type definitions of ingested reports.

Everything here is built once, bottom-up, and never modified afterward.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from junitguard.testcasedef import TestResult


Properties = Mapping[str, str]


@dataclass(frozen=True)
class Totals:
    """Aggregated results across a set of tests.

    tests == passed + skipped + failed + error always holds.
    """

    tests: int = 0            # total number of tests run
    passed: int = 0           # tests that passed
    skipped: int = 0          # tests that were skipped
    failed: int = 0           # tests with a failure
    error: int = 0            # tests with an error
    time: float = 0.0         # duration in seconds as declared in the report, if any
    cumulative_time: float = 0.0  # sum of the durations of all children in seconds


@dataclass(frozen=True)
class TestCase:
    """Class to hold the result of a single test."""
    __test__ = False

    name: str
    classname: str           # additional descriptor for the hierarchy of the test
    time: float              # test duration in seconds
    result: TestResult
    properties: Optional[Properties] = None
    system_out: Optional[str] = None
    system_err: Optional[str] = None


@dataclass(frozen=True)
class Suite:
    """A named grouping of tests and nested suites."""

    name: str
    properties: Optional[Properties]
    tests: tuple[TestCase, ...]
    suites: Optional[tuple['Suite', ...]]  # None when there are no nested suites
    system_out: Optional[str]
    system_err: Optional[str]
    totals: Totals


@dataclass(frozen=True)
class Report:
    """The complete set of top-level suites with overall totals."""

    testsuites: tuple[Suite, ...]
    totals: Totals

    @classmethod
    def empty(cls) -> 'Report':
        return cls((), Totals())
