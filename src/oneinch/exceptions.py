"""Error taxonomy for the 1inch client and CLI.

Every error carries an explicit ``kind`` discriminator and, where one
exists, the originating failure as ``cause`` (also chained via
``raise ... from``).
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Category of a failure."""

    TIMEOUT = "timeout"              # request exceeded the client timeout
    API_ERROR = "api_error"          # error response or unreachable API
    CONSTRUCTION = "construction"    # required request parameter missing
    RESOLUTION = "resolution"        # token symbol not resolvable
    CONFIGURATION = "configuration"  # bad or missing settings
    TRANSACTION = "transaction"      # submitted transaction reverted


class OneInchError(Exception):
    """Base class for all errors raised by this package."""

    kind: ErrorKind = ErrorKind.API_ERROR

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind.value}, message={self.message!r})"


class OneInchTimeoutError(OneInchError):
    """Raised when a request exceeds the configured timeout."""

    kind = ErrorKind.TIMEOUT


class OneInchApiError(OneInchError):
    """Raised when the API answers with an error, or cannot be reached.

    ``status_code`` and ``response`` are None when no response was received.
    """

    kind = ErrorKind.API_ERROR

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        status_code: Optional[int] = None,
        response: Any = None,
    ):
        super().__init__(message, cause)
        self.status_code = status_code
        self.response = response

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.status_code is not None:
            data["status_code"] = self.status_code
        return data


class ConstructionError(OneInchError, ValueError):
    """Raised before any network access when a required parameter is missing."""

    kind = ErrorKind.CONSTRUCTION

    def __init__(self, field: str):
        super().__init__(f"required parameter: {field}")
        self.field = field


class ResolutionError(OneInchError, LookupError):
    """Raised when a token symbol cannot be resolved to a single token."""

    kind = ErrorKind.RESOLUTION

    def __init__(self, symbol: str, message: Optional[str] = None):
        super().__init__(message or f"token not found: {symbol}")
        self.symbol = symbol


class ConfigurationError(OneInchError):
    """Raised when settings needed for an operation are missing or invalid."""

    kind = ErrorKind.CONFIGURATION


class TransactionFailedError(OneInchError):
    """Raised when a submitted transaction is mined but reverted."""

    kind = ErrorKind.TRANSACTION
