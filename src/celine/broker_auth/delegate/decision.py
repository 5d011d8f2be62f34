"""Mapping of transport outcomes to decisions."""

from celine.broker_auth.models import DecisionOutcome, HttpStatus, TransportResult

HTTP_OK = 200


def map_outcome(result: TransportResult) -> DecisionOutcome:
    """Convert a transport outcome into a decision.

    Only an HTTP 200 allows. Any other status, and any transport failure,
    denies. A 403 from the authority and a 500 from a broken authority are
    not told apart.
    """
    if isinstance(result, HttpStatus) and result.code == HTTP_OK:
        return DecisionOutcome.ALLOWED
    return DecisionOutcome.DENIED


class DecisionMapper:
    """Callable wrapper around map_outcome for injection into validators."""

    def map(self, result: TransportResult) -> DecisionOutcome:
        return map_outcome(result)

    __call__ = map
