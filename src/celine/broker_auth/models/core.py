"""Core domain models for broker authorization decisions."""

from dataclasses import dataclass
from enum import Enum

from celine.broker_auth.errors import InvalidAccessKindError


class DecisionOutcome(str, Enum):
    """Result of a single decision call."""

    ALLOWED = "allowed"
    DENIED = "denied"

    @property
    def allowed(self) -> bool:
        return self is DecisionOutcome.ALLOWED


class AccessKind(str, Enum):
    """Kind of topic access requested by an authenticated client."""

    READ = "read"
    WRITE = "write"
    SUBSCRIBE = "subscribe"

    @property
    def wire_name(self) -> str:
        """Name sent to the remote authority in the ``access`` field."""
        return ACCESS_WIRE_NAMES[self]

    @classmethod
    def parse(cls, value: "AccessKind | str") -> "AccessKind":
        """Coerce a value name into an AccessKind.

        Raises:
            InvalidAccessKindError: If the value is not read, write or subscribe
        """
        if isinstance(value, AccessKind):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidAccessKindError(f"Unknown access kind: {value!r}") from None


ACCESS_WIRE_NAMES: dict[AccessKind, str] = {
    AccessKind.READ: "read",
    AccessKind.WRITE: "write",
    AccessKind.SUBSCRIBE: "sub",
}


class RequestSchema(str, Enum):
    """Payload layout sent to the remote authority."""

    CREDENTIAL = "credential"
    ACCESS = "access"


@dataclass(frozen=True)
class HttpStatus:
    """The remote authority answered with an HTTP status."""

    code: int


@dataclass(frozen=True)
class TransportFailure:
    """No usable answer from the remote authority.

    Covers connection errors, timeouts, DNS failures, unreachable endpoints
    and local failures (client creation, payload build).
    """

    reason: str


TransportResult = HttpStatus | TransportFailure
