"""Broker-facing adapter.

Exposes the decision points the broker's auth plugin hooks call into: user
password checks, topic ACL checks and PSK lookup.
"""

import logging
from collections.abc import Mapping
from enum import IntEnum
from typing import Any

from celine.broker_auth.audit import configure_logging
from celine.broker_auth.config import BrokerAuthSettings
from celine.broker_auth.delegate import AccessValidator, CredentialValidator, HttpTransport
from celine.broker_auth.errors import InvalidAccessKindError
from celine.broker_auth.models import AccessKind

logger = logging.getLogger(__name__)


class MosquittoAcl(IntEnum):
    """Mosquitto ACL access constants."""

    READ = 0x01
    WRITE = 0x02
    SUBSCRIBE = 0x04


_ACL_TO_KIND: dict[MosquittoAcl, AccessKind] = {
    MosquittoAcl.READ: AccessKind.READ,
    MosquittoAcl.WRITE: AccessKind.WRITE,
    MosquittoAcl.SUBSCRIBE: AccessKind.SUBSCRIBE,
}


def acl_to_access_kind(access: int) -> AccessKind:
    """Map a mosquitto ACL constant onto an AccessKind.

    Raises:
        InvalidAccessKindError: For any value other than 1, 2 or 4
    """
    try:
        return _ACL_TO_KIND[MosquittoAcl(access)]
    except ValueError:
        raise InvalidAccessKindError(f"Unknown mosquitto ACL access: {access!r}") from None


class BrokerAuthPlugin:
    """Delegates broker auth decisions to the remote authority."""

    def __init__(
        self,
        settings: BrokerAuthSettings,
        transport: HttpTransport | None = None,
    ):
        self._settings = settings
        transport = transport or HttpTransport(timeout=settings.request_timeout)
        self._credentials = CredentialValidator(settings, transport=transport)
        self._access = AccessValidator(settings, transport=transport)

    @classmethod
    def from_options(cls, options: Mapping[str, Any], **kwargs: Any) -> "BrokerAuthPlugin":
        """Initialize from the broker's auth_opt_* options and configure logging."""
        settings = BrokerAuthSettings.from_plugin_options(options)
        configure_logging(log_level=settings.log_level, json_format=settings.log_json)
        logger.info(
            "http_user_uri = %s, http_acl_uri = %s, timeout = %ss",
            settings.user_uri,
            settings.acl_uri,
            settings.request_timeout,
        )
        return cls(settings, **kwargs)

    @property
    def settings(self) -> BrokerAuthSettings:
        return self._settings

    def unpwd_check(self, username: str | None, password: str | None) -> bool:
        """True when the broker should accept the connection."""
        return self._credentials.check(username, password).allowed

    def acl_check(
        self,
        access: int,
        client_id: str,
        username: str | None,
        topic: str,
    ) -> bool:
        """True when the broker should allow the topic access."""
        kind = acl_to_access_kind(access)
        return self._access.check(client_id, username, topic, kind).allowed

    def psk_key_get(self, hint: str, identity: str) -> str | None:
        """PSK authentication is not supported; always refuses."""
        logger.debug("PSK key requested for identity=%s hint=%s, refusing", identity, hint)
        return None
