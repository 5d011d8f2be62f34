"""Credential and access validators backed by the remote authority."""

import logging
import time
from collections.abc import Callable
from typing import Any

from celine.broker_auth.audit import DecisionLogger
from celine.broker_auth.config import BrokerAuthSettings
from celine.broker_auth.delegate.builder import RequestBuilder
from celine.broker_auth.delegate.correlation import CorrelationIdGenerator, default_generator
from celine.broker_auth.delegate.decision import DecisionMapper
from celine.broker_auth.delegate.transport import HttpTransport
from celine.broker_auth.errors import PayloadBuildError
from celine.broker_auth.models import AccessKind, DecisionOutcome

logger = logging.getLogger(__name__)


class _RemoteValidator:
    """Shared pipeline: build payload, POST, map the outcome, log once."""

    check_name = ""

    def __init__(
        self,
        settings: BrokerAuthSettings,
        transport: HttpTransport | None = None,
        builder: RequestBuilder | None = None,
        generator: CorrelationIdGenerator | None = None,
        mapper: DecisionMapper | None = None,
        decision_logger: DecisionLogger | None = None,
    ):
        self._settings = settings
        self._transport = transport or HttpTransport(timeout=settings.request_timeout)
        self._builder = builder or RequestBuilder()
        self._generator = generator or default_generator
        self._mapper = mapper or DecisionMapper()
        self._decision_logger = decision_logger or DecisionLogger(
            log_credentials=settings.unsafe_log_credentials
        )

    @property
    def settings(self) -> BrokerAuthSettings:
        return self._settings

    def _short_circuit(
        self, outcome: DecisionOutcome, reason: str, started: float, **fields: Any
    ) -> DecisionOutcome:
        self._decision_logger.log_decision(
            self.check_name,
            request_id=None,
            outcome=outcome,
            result=None,
            latency_ms=(time.perf_counter() - started) * 1000,
            reason=reason,
            **fields,
        )
        return outcome

    def _remote_decision(
        self,
        url: str,
        build: Callable[[str], bytes],
        started: float,
        **fields: Any,
    ) -> DecisionOutcome:
        request_id = self._generator.next()

        try:
            body = build(request_id)
        except PayloadBuildError as e:
            self._decision_logger.log_error(self.check_name, request_id, e.reason, **fields)
            return DecisionOutcome.DENIED

        result = self._transport.post(url, body, request_id)
        outcome = self._mapper.map(result)

        self._decision_logger.log_decision(
            self.check_name,
            request_id=request_id,
            outcome=outcome,
            result=result,
            latency_ms=(time.perf_counter() - started) * 1000,
            **fields,
        )
        return outcome


class CredentialValidator(_RemoteValidator):
    """Is (username, password) valid according to the remote authority?"""

    check_name = "credential"

    def check(self, username: str | None, password: str | None) -> DecisionOutcome:
        """Check a username/password pair.

        A missing username or password denies without contacting the
        remote authority.
        """
        started = time.perf_counter()
        if username is None or password is None:
            return self._short_circuit(
                DecisionOutcome.DENIED,
                "missing username or password",
                started,
                username=username,
            )

        if self._settings.unsafe_log_credentials:
            logger.debug("Credential check: username=%s, password=%s", username, password)

        return self._remote_decision(
            self._settings.user_uri,
            lambda request_id: self._builder.credential_payload(username, password, request_id),
            started,
            username=username,
            password=password,
        )


class AccessValidator(_RemoteValidator):
    """May (client_id, username) perform access_kind on topic?"""

    check_name = "access"

    def check(
        self,
        client_id: str,
        username: str | None,
        topic: str,
        access_kind: AccessKind | str,
    ) -> DecisionOutcome:
        """Check topic access for an authenticated client.

        Anonymous clients (no username) are allowed without contacting the
        remote authority; operators disable anonymous connections at the
        broker if that is not wanted.

        Raises:
            InvalidAccessKindError: If access_kind is not read, write or subscribe
        """
        started = time.perf_counter()
        kind = AccessKind.parse(access_kind)

        if username is None:
            return self._short_circuit(
                DecisionOutcome.ALLOWED,
                "anonymous client",
                started,
                client_id=client_id,
                topic=topic,
                access=kind.value,
            )

        logger.debug(
            "Access check: clientid=%s, username=%s, topic=%s, access=%s",
            client_id,
            username,
            topic,
            kind.wire_name,
        )

        return self._remote_decision(
            self._settings.acl_uri,
            lambda request_id: self._builder.access_payload(
                client_id, username, topic, kind.wire_name, request_id
            ),
            started,
            client_id=client_id,
            username=username,
            topic=topic,
            access=kind.value,
        )
