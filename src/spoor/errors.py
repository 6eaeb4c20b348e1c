"""Error definitions.

Every failure while compiling a book is fatal. Compiler stages raise one of
the ``SpoorError`` subclasses below; ``try_compile_book`` turns them into a
``BuildFailure`` value for callers that prefer to branch on a result.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Category of a compile failure."""

    STRUCTURE = "structure"  # malformed XML, wrong root shape
    SCHEMA = "schema"  # missing/duplicate elements and attributes, bad enum values
    FORMAT = "format"  # invalid language code, role, date or target
    REFERENCE = "reference"  # resource filename problems


class SpoorError(Exception):
    """Base class for all compile errors."""

    kind: ErrorKind = ErrorKind.STRUCTURE

    def __init__(
        self,
        message: str,
        element: str | None = None,
        value: str | None = None,
    ):
        self.message = message
        self.element = element
        self.value = value
        super().__init__(message)


class StructureError(SpoorError):
    """The XML could not be parsed or has the wrong overall shape."""

    kind = ErrorKind.STRUCTURE


class SchemaError(SpoorError):
    """An element or attribute is missing, duplicated or not recognized."""

    kind = ErrorKind.SCHEMA


class FormatError(SpoorError):
    """A field value does not match its grammar."""

    kind = ErrorKind.FORMAT


class ResourceError(SpoorError):
    """A resource file has an invalid, unsupported or duplicate name."""

    kind = ErrorKind.REFERENCE


@dataclass(frozen=True)
class BuildFailure:
    """Result value describing why a compile failed."""

    kind: ErrorKind
    message: str
    element: str | None = None
    value: str | None = None

    @classmethod
    def from_error(cls, error: SpoorError) -> "BuildFailure":
        return cls(
            kind=error.kind,
            message=error.message,
            element=error.element,
            value=error.value,
        )
