import logging

import pytest
import structlog

from celine.broker_auth.errors import InvalidAccessKindError
from celine.broker_auth.models import AccessKind
from celine.broker_auth import plugin as plugin_module
from celine.broker_auth.plugin import BrokerAuthPlugin, MosquittoAcl, acl_to_access_kind


def test_acl_read_maps_to_read():
    assert acl_to_access_kind(1) is AccessKind.READ


def test_acl_write_maps_to_write():
    assert acl_to_access_kind(2) is AccessKind.WRITE


def test_acl_subscribe_maps_to_subscribe():
    assert acl_to_access_kind(MosquittoAcl.SUBSCRIBE) is AccessKind.SUBSCRIBE


@pytest.mark.parametrize("access", [0, 3, 8])
def test_unknown_acl_raises(access):
    with pytest.raises(InvalidAccessKindError):
        acl_to_access_kind(access)


@pytest.fixture
def logging_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(plugin_module, "configure_logging", lambda **kwargs: calls.append(kwargs))
    return calls


def test_from_options_logs_endpoints(caplog, logging_calls):
    with caplog.at_level(logging.INFO, logger="celine.broker_auth.plugin"):
        plugin = BrokerAuthPlugin.from_options(
            {"http_user_uri": "http://auth/user", "http_acl_uri": "http://auth/acl"}
        )

    assert plugin.settings.user_uri == "http://auth/user"
    assert plugin.settings.acl_uri == "http://auth/acl"
    assert "http_user_uri = http://auth/user" in caplog.text


def test_from_options_configures_logging(logging_calls):
    plugin = BrokerAuthPlugin.from_options(
        {"http_log_level": "DEBUG", "http_log_json": "true", "http_unsafe_log_credentials": "false"}
    )

    assert logging_calls == [{"log_level": "DEBUG", "json_format": True}]
    assert plugin.settings.unsafe_log_credentials is False


def test_from_options_applies_log_level(monkeypatch):
    captured = {}

    def fake_basicConfig(*, level=None, **kwargs):
        captured["level"] = level

    monkeypatch.setattr(logging, "basicConfig", fake_basicConfig)
    monkeypatch.setattr(structlog, "configure", lambda **kwargs: captured.update(structlog=kwargs))

    BrokerAuthPlugin.from_options({"http_log_level": "debug"})

    assert captured["level"] == logging.DEBUG
    assert "structlog" in captured


def test_from_options_default_logging(logging_calls):
    BrokerAuthPlugin.from_options({})
    assert logging_calls == [{"log_level": "INFO", "json_format": False}]


def test_unpwd_check(settings, authority, stub_transport):
    plugin = BrokerAuthPlugin(settings, transport=stub_transport)

    assert plugin.unpwd_check("alice", "secret") is True
    authority.user_status = 401
    assert plugin.unpwd_check("alice", "secret") is False
    assert plugin.unpwd_check(None, "secret") is False
    assert len(authority.received) == 2


def test_acl_check(settings, authority, stub_transport):
    plugin = BrokerAuthPlugin(settings, transport=stub_transport)

    assert plugin.acl_check(MosquittoAcl.SUBSCRIBE, "client-1", "alice", "a/b") is True
    assert authority.received[0].payload["data"]["access"] == "sub"

    authority.acl_status = 403
    assert plugin.acl_check(MosquittoAcl.WRITE, "client-1", "alice", "a/b") is False
    assert plugin.acl_check(MosquittoAcl.WRITE, "client-2", None, "a/b") is True
    assert len(authority.received) == 2


def test_psk_not_supported(settings):
    plugin = BrokerAuthPlugin(settings)
    assert plugin.psk_key_get("hint", "identity") is None
