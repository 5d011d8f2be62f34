"""Request payload construction."""

import logging
from collections.abc import Mapping
from urllib.parse import quote

from pydantic import ValidationError

from celine.broker_auth.errors import PayloadBuildError
from celine.broker_auth.models import (
    AccessCheckData,
    AccessCheckRequest,
    CheckRequest,
    CredentialCheckData,
    CredentialCheckRequest,
    RequestSchema,
)

logger = logging.getLogger(__name__)

_SCHEMAS: dict[RequestSchema, tuple[type, type[CheckRequest]]] = {
    RequestSchema.CREDENTIAL: (CredentialCheckData, CredentialCheckRequest),
    RequestSchema.ACCESS: (AccessCheckData, AccessCheckRequest),
}


def escape_field(value: str) -> str:
    """Percent-escape an untrusted field.

    Every byte of the UTF-8 encoding outside ``A-Z a-z 0-9 - . _ ~`` is
    encoded as ``%XX``, so quotes, backslashes and control characters never
    reach the JSON body verbatim.
    """
    return quote(value, safe="", encoding="utf-8", errors="strict")


class RequestBuilder:
    """Builds serialized check payloads."""

    def build(
        self,
        schema: RequestSchema,
        fields: Mapping[str, str],
        correlation_id: str,
    ) -> bytes:
        """Build the JSON body for a check request.

        Args:
            schema: Payload layout (credential or access check)
            fields: Raw field values keyed by payload field name
            correlation_id: Request identifier stamped into ``requestId``

        Returns:
            UTF-8 encoded JSON payload

        Raises:
            PayloadBuildError: If a field is missing or invalid, or the
                payload cannot be allocated
        """
        data_model, request_model = _SCHEMAS[schema]
        try:
            escaped = {name: escape_field(value) for name, value in fields.items()}
            request = request_model(
                data=data_model(**escaped),
                requestId=escape_field(correlation_id),
            )
            return request.model_dump_json().encode("utf-8")
        except (ValidationError, TypeError, UnicodeError) as e:
            raise PayloadBuildError(
                f"Invalid {schema.value} payload fields: {e}", reason="invalid payload"
            ) from e
        except MemoryError as e:
            logger.warning("Failed to allocate %s payload", schema.value)
            raise PayloadBuildError(
                "Payload allocation failed", reason="allocation failure"
            ) from e

    def credential_payload(self, username: str, password: str, correlation_id: str) -> bytes:
        return self.build(
            RequestSchema.CREDENTIAL,
            {"userName": username, "token": password},
            correlation_id,
        )

    def access_payload(
        self,
        client_id: str,
        username: str,
        topic: str,
        access: str,
        correlation_id: str,
    ) -> bytes:
        return self.build(
            RequestSchema.ACCESS,
            {"clientId": client_id, "userName": username, "topic": topic, "access": access},
            correlation_id,
        )
