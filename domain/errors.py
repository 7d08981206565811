"""Domain Errors

Every error raised by the core carries an ErrorKind so the HTTP layer can map
it to a status code without checking concrete classes.
"""
from domain.enums import ErrorKind


class DomainError(Exception):
    """Base class for errors surfaced by the core"""

    kind: ErrorKind = ErrorKind.INFRASTRUCTURE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError, ValueError):
    """A business rule was violated"""

    kind = ErrorKind.VALIDATION


class EmptyPatchError(ValidationError):
    """A patch was submitted without any field set"""

    def __init__(self, message: str = "patch must set at least one field"):
        super().__init__(message)


class FormatError(DomainError, ValueError):
    """A wire value (date string) could not be parsed"""

    kind = ErrorKind.FORMAT


class NotFoundError(DomainError, LookupError):
    """The addressed row does not exist"""

    kind = ErrorKind.NOT_FOUND


class InfrastructureError(DomainError, RuntimeError):
    """The store could not be reached or failed unexpectedly"""

    kind = ErrorKind.INFRASTRUCTURE
