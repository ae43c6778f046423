"""
Building blocks shared by the async workflows.

- WorkflowError: the error value a workflow stores instead of raising
- describe_error(): the one place exceptions become user-facing errors
- RequestGeneration: stamps requests so superseded results are dropped
"""

import logging
from enum import Enum

from pydantic import BaseModel, Field

from .exceptions import (
    AccountDeletedError,
    AuraError,
    AuthenticationError,
    ConfigurationError,
    UNEXPECTED_MESSAGE,
    ValidationError,
)

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """How the presentation layer should react to an error."""

    CONFIGURATION = "configuration"
    AUTHENTICATION = "authentication"   # re-authenticate, never a server fault
    DELETED_ACCOUNT = "deleted_account"  # terminal, force sign-out
    TRANSIENT = "transient"              # recoverable, user may retry


class WorkflowError(BaseModel):
    """An error captured at a workflow boundary."""

    kind: ErrorKind = Field(..., description="Error category")
    message: str = Field(..., description="User-facing message")
    code: str = Field(default="UNKNOWN", description="Machine-readable code for logs")

    model_config = {"frozen": True}

    @property
    def requires_reauth(self) -> bool:
        return self.kind in (ErrorKind.AUTHENTICATION, ErrorKind.DELETED_ACCOUNT)


def describe_error(error: Exception, context: str) -> WorkflowError:
    """
    Translate an exception caught at a workflow boundary.

    Validation failures are shown to the user as a generic unexpected
    error but logged as a contract mismatch with the backend.

    Args:
        error: The caught exception
        context: Workflow name, used in log lines

    Returns:
        WorkflowError ready to store in workflow state
    """
    if isinstance(error, ValidationError):
        logger.error(
            f"{context}: response failed validation "
            f"(code={error.code}, field={error.field}): {error.reason}"
        )
        return WorkflowError(
            kind=ErrorKind.TRANSIENT,
            message=UNEXPECTED_MESSAGE,
            code=error.code,
        )

    if isinstance(error, ConfigurationError):
        logger.error(f"{context}: {error.message}")
        return WorkflowError(
            kind=ErrorKind.CONFIGURATION,
            message=error.message,
            code=error.code,
        )

    if isinstance(error, AccountDeletedError):
        logger.warning(f"{context}: account record is gone")
        return WorkflowError(
            kind=ErrorKind.DELETED_ACCOUNT,
            message=error.message,
            code=error.code,
        )

    if isinstance(error, AuthenticationError):
        logger.info(f"{context}: authentication required ({error.code})")
        return WorkflowError(
            kind=ErrorKind.AUTHENTICATION,
            message=error.message,
            code=error.code,
        )

    if isinstance(error, AuraError):
        logger.warning(f"{context}: {error.code}: {error.message}")
        return WorkflowError(
            kind=ErrorKind.TRANSIENT,
            message=error.message,
            code=error.code,
        )

    logger.exception(f"{context}: unexpected failure")
    return WorkflowError(
        kind=ErrorKind.TRANSIENT,
        message=str(error) or UNEXPECTED_MESSAGE,
        code=error.__class__.__name__,
    )


class RequestGeneration:
    """
    Monotonic request stamp.

    Each invocation takes a new stamp with next(); when the response
    arrives it is applied only if is_current(stamp) still holds.
    invalidate() makes every outstanding stamp stale.
    """

    def __init__(self) -> None:
        self._value = 0

    @property
    def value(self) -> int:
        return self._value

    def next(self) -> int:
        self._value += 1
        return self._value

    def is_current(self, stamp: int) -> bool:
        return stamp == self._value

    def invalidate(self) -> None:
        self._value += 1
