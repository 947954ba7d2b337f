"""
Module: errors.py
Description: Exception types raised by sqsbridge.

Every error carries a short, stable message. Underlying causes are
attached with with_context(), which chains the original exception so
callers can still inspect it through __cause__.
"""

from typing import Optional


class SQSBridgeError(Exception):
    """Base class for all sqsbridge errors."""

    message = "sqsbridge error"

    def __init__(self, message: Optional[str] = None, context: Optional[str] = None):
        self.message = message or self.message
        self.context = context
        super().__init__(self.message if context is None else f"{self.message}: {context}")

    def with_context(self, cause: BaseException) -> "SQSBridgeError":
        """
        Return a copy of this error that carries the cause.

        Example:
            >>> raise InvalidCredentialsError().with_context(err) from err
        """
        err = type(self)(self.message, context=str(cause) or type(cause).__name__)
        err.__cause__ = cause
        return err


class InvalidCredentialsError(SQSBridgeError):
    """AWS credentials could not be retrieved or are incomplete."""

    message = "invalid aws credentials"


class MarshalError(SQSBridgeError):
    """A value does not match the data type it was declared with."""

    message = "value does not match the declared data type"


class UndefinedTopicError(SQSBridgeError):
    """No topic ARN was provided and one cannot be derived."""

    message = "topic is undefined"


class UndefinedQueueError(SQSBridgeError):
    """No queue URL was provided and one cannot be derived."""

    message = "queue is undefined"
