import pytest

from celine.broker_auth.delegate.decision import DecisionMapper, map_outcome
from celine.broker_auth.models import DecisionOutcome, HttpStatus, TransportFailure


def test_200_allows():
    assert map_outcome(HttpStatus(200)) is DecisionOutcome.ALLOWED
    assert DecisionOutcome.ALLOWED.allowed is True


@pytest.mark.parametrize("code", [201, 204, 301, 400, 401, 403, 404, 500, 503])
def test_other_statuses_deny(code):
    assert map_outcome(HttpStatus(code)) is DecisionOutcome.DENIED


@pytest.mark.parametrize("reason", ["timeout", "ConnectError: refused", "client init failed"])
def test_transport_failures_deny(reason):
    outcome = map_outcome(TransportFailure(reason))
    assert outcome is DecisionOutcome.DENIED
    assert outcome.allowed is False


def test_mapper_is_callable():
    mapper = DecisionMapper()
    assert mapper.map(HttpStatus(200)) is DecisionOutcome.ALLOWED
    assert mapper(HttpStatus(403)) is DecisionOutcome.DENIED
