"""Authorization delegate: request construction and decision mapping."""

from .builder import RequestBuilder, escape_field
from .correlation import CorrelationIdGenerator, is_correlation_id
from .decision import DecisionMapper, map_outcome
from .transport import HttpTransport, request_headers
from .validators import AccessValidator, CredentialValidator

__all__ = [
    "AccessValidator",
    "CorrelationIdGenerator",
    "CredentialValidator",
    "DecisionMapper",
    "HttpTransport",
    "RequestBuilder",
    "escape_field",
    "is_correlation_id",
    "map_outcome",
    "request_headers",
]
