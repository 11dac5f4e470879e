"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class IncorrectArgumentsError(DomainException):
    """Operation called with the wrong number of arguments"""

    pass


class MalformedInputError(DomainException):
    """Argument could not be decoded (base64 or JSON)"""

    pass


class UnsupportedOperationError(DomainException):
    """Operation name is not known to the gateway"""

    def __init__(self, function: str):
        super().__init__("Unsupported operation")
        self.function = function


class AccountNotFoundError(DomainException):
    """Requested account record does not exist in the ledger store"""

    pass


class LedgerUnavailableError(DomainException):
    """Ledger store returned an error or is unreachable"""

    pass


class LedgerWriteError(DomainException):
    """A ledger put failed while committing a transfer"""

    def __init__(self, message: str, applied: list[str]):
        super().__init__(message)
        self.applied = applied


class LedgerCorruptionError(DomainException):
    """Stored record could not be decoded at a point where it must exist.

    Not recoverable locally: the caller gets a hard error instead of a
    business Failure.
    """

    pass
