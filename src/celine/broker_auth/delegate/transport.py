"""HTTP transport towards the remote authority."""

import logging
import threading
from collections.abc import Callable

import httpx

from celine.broker_auth.errors import ResourceAcquisitionError
from celine.broker_auth.models import HttpStatus, TransportFailure, TransportResult

logger = logging.getLogger(__name__)

ClientFactory = Callable[[float], httpx.Client]


def default_client_factory(timeout: float) -> httpx.Client:
    """Create a fresh HTTP client bounded by ``timeout`` seconds."""
    return httpx.Client(timeout=httpx.Timeout(timeout))


def request_headers(correlation_id: str) -> dict[str, str]:
    """Headers sent with every check request."""
    return {
        "Accept": "application/json",
        "Content-Type": "application/json; charset=utf-8",
        "charset": "utf-8",
        "X-Request-ID": correlation_id,
    }


class HttpTransport:
    """Issues one POST per decision call and reports its outcome.

    A client is created per call on a short-lived worker thread and closed on
    every exit path; no state is shared between concurrent calls.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        client_factory: ClientFactory | None = None,
    ):
        """Initialize transport.

        Args:
            timeout: Request timeout in seconds
            client_factory: Builds the per-call client; overridable for tests
        """
        self._timeout = timeout
        self._client_factory = client_factory or default_client_factory

    @property
    def timeout(self) -> float:
        return self._timeout

    def _open_client(self) -> httpx.Client:
        try:
            return self._client_factory(self._timeout)
        except Exception as e:
            raise ResourceAcquisitionError(
                f"Failed to initialize HTTP client: {e}", reason="client init failed"
            ) from e

    def _send(self, url: str, body: bytes, correlation_id: str) -> TransportResult:
        """Issue the request and return as soon as the status line is in.

        The response body is never read.
        """
        try:
            with self._open_client() as client:
                with client.stream(
                    "POST", url, content=body, headers=request_headers(correlation_id)
                ) as response:
                    return HttpStatus(code=response.status_code)
        except ResourceAcquisitionError as e:
            logger.warning("%s", e)
            return TransportFailure(reason=e.reason)
        except httpx.TimeoutException as e:
            logger.debug("Request to %s timed out: %s", url, e)
            return TransportFailure(reason="timeout")
        except httpx.HTTPError as e:
            logger.debug("Request to %s failed: %s", url, e)
            return TransportFailure(reason=f"{type(e).__name__}: {e}")
        except (httpx.InvalidURL, ValueError) as e:
            logger.debug("Invalid endpoint %s: %s", url, e)
            return TransportFailure(reason=f"invalid endpoint: {e}")
        except Exception as e:
            logger.exception("Request to %s failed unexpectedly: %s", url, e)
            return TransportFailure(reason=f"unexpected error: {type(e).__name__}")

    def post(self, url: str, body: bytes, correlation_id: str) -> TransportResult:
        """POST a JSON body and return the HTTP status or the failure reason.

        The whole call, connect to status line, is bounded by ``timeout``
        seconds of wall-clock time. Past the deadline the caller gets a
        timeout failure; the worker finishes on its own and its result is
        discarded.
        """
        outcome: list[TransportResult] = []
        worker = threading.Thread(
            target=lambda: outcome.append(self._send(url, body, correlation_id)),
            name=f"broker-auth-{correlation_id}",
            daemon=True,
        )
        try:
            worker.start()
        except RuntimeError as e:
            logger.warning("Failed to start request worker: %s", e)
            return TransportFailure(reason="worker start failed")
        worker.join(self._timeout)

        if worker.is_alive():
            logger.debug("Request to %s exceeded %ss deadline", url, self._timeout)
            return TransportFailure(reason="timeout")
        if not outcome:
            return TransportFailure(reason="no result")
        return outcome[0]
