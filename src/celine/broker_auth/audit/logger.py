"""Structured logging for broker authorization decisions."""

import logging
from typing import Any

import structlog

from celine.broker_auth.models import DecisionOutcome, HttpStatus, TransportResult

REDACTED = "***"


def resolve_log_level(log_level: str | int) -> int:
    """Resolve a level name ("info") or numeric value (20, "20") to an int."""
    if isinstance(log_level, int):
        return log_level
    raw = str(log_level).strip().upper()
    level = getattr(logging, raw, None)
    if isinstance(level, int):
        return level
    try:
        return int(raw)
    except ValueError:
        return logging.INFO


def configure_logging(*, log_level: str | int, json_format: bool) -> None:
    # Resolve log level via stdlib logging (NOT structlog)
    level = resolve_log_level(log_level)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    processors = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class DecisionLogger:
    """Emits one structured record per decision call."""

    def __init__(
        self,
        enabled: bool = True,
        log_credentials: bool = False,
        logger: Any = None,
    ):
        """Initialize decision logger.

        Args:
            enabled: Whether decision logging is enabled
            log_credentials: Log plaintext passwords (unsafe, debugging only)
            logger: Optional custom logger
        """
        self._enabled = enabled
        self._log_credentials = log_credentials
        self._logger = logger or structlog.get_logger("broker_auth.decision")

    def redact(self, secret: str | None) -> str | None:
        if secret is None or self._log_credentials:
            return secret
        return REDACTED

    def log_decision(
        self,
        check: str,
        request_id: str | None,
        outcome: DecisionOutcome,
        result: TransportResult | None,
        latency_ms: float,
        **fields: Any,
    ) -> None:
        """Log a decision.

        Args:
            check: "credential" or "access"
            request_id: Correlation identifier (None when short-circuited)
            outcome: Decision returned to the broker
            result: Transport outcome, None when no request was made
            latency_ms: Time spent in the decision call
            **fields: Identifying fields (username, client_id, topic, ...)
        """
        if not self._enabled:
            return

        log_data: dict[str, Any] = {
            "event": "broker_auth_decision",
            "check": check,
            "request_id": request_id,
            "allowed": outcome.allowed,
            "latency_ms": round(latency_ms, 2),
        }

        if result is None:
            log_data["reason"] = "no request"
        elif isinstance(result, HttpStatus):
            log_data["status"] = result.code
        else:
            log_data["reason"] = result.reason

        if "password" in fields:
            fields["password"] = self.redact(fields["password"])
        log_data.update(fields)

        # Log at appropriate level
        if outcome.allowed:
            self._logger.info(**log_data)
        else:
            self._logger.warning(**log_data)

    def log_error(
        self,
        check: str,
        request_id: str | None,
        error: str,
        **fields: Any,
    ) -> None:
        """Log a local failure that forced a denial."""
        if not self._enabled:
            return

        log_data: dict[str, Any] = {
            "event": "broker_auth_error",
            "check": check,
            "request_id": request_id,
            "error": error,
        }
        if "password" in fields:
            fields["password"] = self.redact(fields["password"])
        log_data.update(fields)

        self._logger.error(**log_data)
