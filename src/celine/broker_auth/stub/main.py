"""FastAPI application for the stub remote authority."""

import logging

from fastapi import FastAPI

from celine.broker_auth.stub.authority import StubAuthority
from celine.broker_auth.stub.routes import get_authority, router

logger = logging.getLogger(__name__)


def create_app(authority: StubAuthority | None = None) -> FastAPI:
    """Create and configure the stub authority application.

    Args:
        authority: Decision tables and request log; a permissive one by default

    Returns:
        Configured FastAPI application
    """
    authority = authority or StubAuthority()

    app = FastAPI(
        title="CELINE Broker Auth Stub Authority",
        description="Stand-in for the remote user/ACL verification service",
        version="0.1.0",
    )

    app.state.authority = authority
    app.dependency_overrides[get_authority] = lambda: app.state.authority

    app.include_router(router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "received": len(app.state.authority.received),
        }

    return app


def run(host: str = "127.0.0.1", port: int = 5555, authority: StubAuthority | None = None) -> None:
    import uvicorn

    logger.info("Starting stub authority on %s:%d", host, port)
    uvicorn.run(create_app(authority), host=host, port=port)


if __name__ == "__main__":
    run()
