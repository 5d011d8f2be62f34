"""Domain and payload models."""

from .core import (
    ACCESS_WIRE_NAMES,
    AccessKind,
    DecisionOutcome,
    HttpStatus,
    RequestSchema,
    TransportFailure,
    TransportResult,
)
from .requests import (
    AccessCheckData,
    AccessCheckRequest,
    CheckRequest,
    CredentialCheckData,
    CredentialCheckRequest,
    DeviceInfo,
)

__all__ = [
    "ACCESS_WIRE_NAMES",
    "AccessKind",
    "AccessCheckData",
    "AccessCheckRequest",
    "CheckRequest",
    "CredentialCheckData",
    "CredentialCheckRequest",
    "DecisionOutcome",
    "DeviceInfo",
    "HttpStatus",
    "RequestSchema",
    "TransportFailure",
    "TransportResult",
]
