"""CELINE broker authorization delegate.

Forwards MQTT credential and topic-access checks to a remote HTTP authority
and turns its answer into an allow/deny decision, denying on any failure.
"""

from celine.broker_auth.config import BrokerAuthSettings
from celine.broker_auth.delegate import AccessValidator, CredentialValidator
from celine.broker_auth.models import AccessKind, DecisionOutcome
from celine.broker_auth.plugin import BrokerAuthPlugin

__all__ = [
    "AccessKind",
    "AccessValidator",
    "BrokerAuthPlugin",
    "BrokerAuthSettings",
    "CredentialValidator",
    "DecisionOutcome",
]
