"""Test case result data."""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Union


class TestStatus(Enum):
    """Enumeration of all possible outcomes of a test."""
    __test__ = False

    PASSED = 'passed'    # test succeeded
    SKIPPED = 'skipped'  # test was skipped
    FAILED = 'failed'    # an assertion in the test failed
    ERROR = 'error'      # the test raised an unexpected error


@dataclass(frozen=True)
class Passed:
    status: ClassVar[TestStatus] = TestStatus.PASSED


@dataclass(frozen=True)
class Skipped:
    status: ClassVar[TestStatus] = TestStatus.SKIPPED

    message: Optional[str] = None  # why the test was skipped


@dataclass(frozen=True)
class Failed:
    status: ClassVar[TestStatus] = TestStatus.FAILED

    message: Optional[str] = None  # failure message
    type: Optional[str] = None     # typically the assertion type  # noqa: A003
    body: Optional[str] = None     # extended description or stack trace


@dataclass(frozen=True)
class Errored:
    status: ClassVar[TestStatus] = TestStatus.ERROR

    message: Optional[str] = None  # error message
    type: Optional[str] = None     # typically the exception class  # noqa: A003
    body: Optional[str] = None     # extended description or stack trace


# Exactly one of these describes the outcome of every test
TestResult = Union[Passed, Skipped, Failed, Errored]
