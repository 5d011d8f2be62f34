"""In-memory remote authority used for development and tests."""

import threading
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import unquote


@dataclass
class ReceivedRequest:
    """A check request as seen by the stub."""

    path: str
    request_id: str
    headers: dict[str, str]
    payload: dict[str, Any]


class StubAuthority:
    """Answers credential and ACL checks from fixed tables or fixed statuses.

    Without a table, every check is answered with the configured status.
    """

    def __init__(
        self,
        user_status: int = 200,
        acl_status: int = 200,
        users: dict[str, str] | None = None,
        acl: dict[str, dict[str, list[str]]] | None = None,
    ):
        """Initialize stub authority.

        Args:
            user_status: Status returned by the user endpoint when no table is set
            acl_status: Status returned by the ACL endpoint when no table is set
            users: Optional username -> password table (200 on match, else 401)
            acl: Optional username -> access wire name (read, write, sub) ->
                allowed topics table (200 on match, else 403)
        """
        self.user_status = user_status
        self.acl_status = acl_status
        self.users = users
        self.acl = acl
        self._received: list[ReceivedRequest] = []
        self._lock = threading.Lock()

    @property
    def received(self) -> list[ReceivedRequest]:
        with self._lock:
            return list(self._received)

    def record(self, request: ReceivedRequest) -> None:
        with self._lock:
            self._received.append(request)

    def reset(self) -> None:
        with self._lock:
            self._received.clear()

    def user_decision(self, user_name: str, token: str) -> int:
        if self.users is None:
            return self.user_status
        expected = self.users.get(unquote(user_name))
        return 200 if expected is not None and expected == unquote(token) else 401

    def acl_decision(self, user_name: str, topic: str, access: str) -> int:
        if self.acl is None:
            return self.acl_status
        topics = self.acl.get(unquote(user_name), {}).get(unquote(access), [])
        return 200 if unquote(topic) in topics else 403
