"""FastAPI routes for the stub remote authority."""

import logging

from fastapi import APIRouter, Depends, Request, Response

from celine.broker_auth.models import AccessCheckRequest, CredentialCheckRequest
from celine.broker_auth.stub.authority import ReceivedRequest, StubAuthority

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Stub Authority"])


def get_authority() -> StubAuthority:
    """Get stub authority from app state."""
    # This will be overridden by dependency injection in main.py
    raise NotImplementedError("Authority not configured")


@router.post("/validUser")
async def valid_user(
    body: CredentialCheckRequest,
    request: Request,
    response: Response,
    authority: StubAuthority = Depends(get_authority),
) -> dict[str, str]:
    """Verify a username/token pair.

    Returns:
    - 200 if the credentials are accepted
    - the configured status (401 with a user table) otherwise
    """
    authority.record(
        ReceivedRequest(
            path=request.url.path,
            request_id=body.requestId,
            headers=dict(request.headers),
            payload=body.model_dump(),
        )
    )
    status_code = authority.user_decision(body.data.userName, body.data.token)
    logger.debug("validUser: user=%s status=%d", body.data.userName, status_code)
    response.status_code = status_code
    return {"requestId": body.requestId}


@router.post("/validACL")
async def valid_acl(
    body: AccessCheckRequest,
    request: Request,
    response: Response,
    authority: StubAuthority = Depends(get_authority),
) -> dict[str, str]:
    """Verify topic access for a client.

    Returns:
    - 200 if the access is allowed
    - the configured status (403 with an ACL table) otherwise
    """
    authority.record(
        ReceivedRequest(
            path=request.url.path,
            request_id=body.requestId,
            headers=dict(request.headers),
            payload=body.model_dump(),
        )
    )
    status_code = authority.acl_decision(body.data.userName, body.data.topic, body.data.access)
    logger.debug(
        "validACL: user=%s topic=%s access=%s status=%d",
        body.data.userName,
        body.data.topic,
        body.data.access,
        status_code,
    )
    response.status_code = status_code
    return {"requestId": body.requestId}
