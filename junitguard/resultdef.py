"""Success/failure values returned by every ingestion operation."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union


T = TypeVar('T')


class ErrorKind(Enum):
    """Enumeration of all the ways ingestion can fail."""

    TYPE_ERROR = 'TypeError'                    # input was not text
    SIZE_EXCEEDED = 'SizeExceeded'              # input larger than the allowed maximum
    MALICIOUS_CONTENT = 'MaliciousContent'      # DOCTYPE or ENTITY declaration found
    MAX_DEPTH_EXCEEDED = 'MaxDepthExceeded'     # suites nested too deeply
    TOO_MANY_PROPERTIES = 'TooManyProperties'   # too many properties on one element
    MISSING_REQUIRED_ATTRIBUTE = 'MissingRequiredAttribute'  # no root wrapper or its time
    NOT_A_DIRECTORY = 'NotADirectory'           # path given to ingest_dir is something else
    FILE_SYSTEM_ERROR = 'FileSystemError'       # not found, permission or other I/O failure
    MALFORMED_XML = 'MalformedXml'              # not well-formed at the token level
    NETWORK_ERROR = 'NetworkError'              # report could not be downloaded


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result holding the computed data."""

    data: T

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed result holding a human-readable error."""

    kind: ErrorKind
    error: str

    @property
    def success(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.error

    def prefixed(self, prefix: str) -> 'Err':
        """Return the same error with some context placed before the message."""
        return Err(self.kind, prefix + self.error)


Result = Union[Ok[T], Err]
