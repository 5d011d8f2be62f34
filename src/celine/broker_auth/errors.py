"""Exceptions raised inside the authorization delegate.

Only InvalidAccessKindError reaches callers of the validators; the others are
converted to a denial where they occur.
"""


class BrokerAuthError(Exception):
    """Base exception for broker auth errors."""

    def __init__(self, message: str, reason: str | None = None):
        super().__init__(message)
        self.reason = reason or message


class PayloadBuildError(BrokerAuthError):
    """The request payload could not be built."""

    pass


class ResourceAcquisitionError(BrokerAuthError):
    """An HTTP client handle could not be created."""

    pass


class InvalidAccessKindError(BrokerAuthError, ValueError):
    """Access kind outside read, write, subscribe."""

    pass
