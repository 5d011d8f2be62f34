"""Stub remote authority for development and end-to-end tests."""

from .authority import ReceivedRequest, StubAuthority
from .main import create_app

__all__ = [
    "ReceivedRequest",
    "StubAuthority",
    "create_app",
]
