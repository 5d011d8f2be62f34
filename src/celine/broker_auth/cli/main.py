"""CELINE Broker Auth CLI - Main entrypoint.

Usage:
    celine-broker-auth check-user alice secret
    celine-broker-auth check-acl client-1 sensors/temp read --username alice
    celine-broker-auth stub --port 5555 --status 200
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
import yaml

from celine.broker_auth.audit import configure_logging
from celine.broker_auth.config import BrokerAuthSettings
from celine.broker_auth.delegate import AccessValidator, CredentialValidator
from celine.broker_auth.errors import InvalidAccessKindError
from celine.broker_auth.models import AccessKind, DecisionOutcome

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="celine-broker-auth",
    help="CELINE broker authorization delegate tools",
    add_completion=False,
)


def _load_options(options_file: Path | None) -> dict[str, Any]:
    """Load broker plugin options (http_user_uri, http_acl_uri, http_timeout) from YAML."""
    if options_file is None:
        return {}
    data = yaml.safe_load(options_file.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise typer.BadParameter(f"{options_file} must contain a mapping of options")
    return {str(k): v for k, v in data.items()}


def _build_settings(
    options_file: Path | None,
    user_uri: str | None = None,
    acl_uri: str | None = None,
    timeout: float | None = None,
    verbose: bool = False,
) -> BrokerAuthSettings:
    """Build settings from environment, options file and CLI overrides."""
    overrides: dict[str, Any] = {
        "user_uri": user_uri,
        "acl_uri": acl_uri,
        "request_timeout": timeout,
    }
    if verbose:
        overrides["log_level"] = "DEBUG"
    return BrokerAuthSettings.from_plugin_options(_load_options(options_file), **overrides)


def _finish(outcome: DecisionOutcome) -> None:
    typer.echo(outcome.value)
    raise typer.Exit(code=0 if outcome.allowed else 1)


OptionsFile = Annotated[
    Optional[Path],
    typer.Option("--options-file", "-o", help="YAML file with plugin options", exists=True),
]
Timeout = Annotated[Optional[float], typer.Option("--timeout", help="Request timeout in seconds")]
Verbose = Annotated[bool, typer.Option("--verbose", "-v", help="Verbose output")]


@app.command("check-user")
def check_user(
    username: Annotated[str, typer.Argument(help="MQTT username")],
    password: Annotated[str, typer.Argument(help="MQTT password")],
    user_uri: Annotated[Optional[str], typer.Option("--user-uri", help="User-verification endpoint")] = None,
    timeout: Timeout = None,
    options_file: OptionsFile = None,
    verbose: Verbose = False,
) -> None:
    """Run a credential check against the remote authority."""
    settings = _build_settings(options_file, user_uri=user_uri, timeout=timeout, verbose=verbose)
    configure_logging(log_level=settings.log_level, json_format=settings.log_json)

    _finish(CredentialValidator(settings).check(username, password))


@app.command("check-acl")
def check_acl(
    client_id: Annotated[str, typer.Argument(help="MQTT client ID")],
    topic: Annotated[str, typer.Argument(help="MQTT topic")],
    access: Annotated[str, typer.Argument(help="read, write or subscribe")],
    username: Annotated[Optional[str], typer.Option("--username", "-u", help="MQTT username (omit for anonymous)")] = None,
    acl_uri: Annotated[Optional[str], typer.Option("--acl-uri", help="ACL-verification endpoint")] = None,
    timeout: Timeout = None,
    options_file: OptionsFile = None,
    verbose: Verbose = False,
) -> None:
    """Run a topic access check against the remote authority."""
    try:
        kind = AccessKind.parse(access)
    except InvalidAccessKindError as e:
        raise typer.BadParameter(str(e), param_hint="ACCESS") from e

    settings = _build_settings(options_file, acl_uri=acl_uri, timeout=timeout, verbose=verbose)
    configure_logging(log_level=settings.log_level, json_format=settings.log_json)

    _finish(AccessValidator(settings).check(client_id, username, topic, kind))


@app.command("stub")
def stub(
    host: Annotated[str, typer.Option("--host", help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", help="Bind port")] = 5555,
    status: Annotated[int, typer.Option("--status", help="Status for every user check")] = 200,
    acl_status: Annotated[Optional[int], typer.Option("--acl-status", help="Status for every ACL check")] = None,
    verbose: Verbose = False,
) -> None:
    """Run a stub remote authority answering with fixed statuses."""
    from celine.broker_auth.stub import StubAuthority
    from celine.broker_auth.stub.main import run

    configure_logging(log_level="DEBUG" if verbose else "INFO", json_format=False)
    authority = StubAuthority(
        user_status=status,
        acl_status=status if acl_status is None else acl_status,
    )
    run(host=host, port=port, authority=authority)


def create_app() -> None:
    """CLI entrypoint."""
    app()


if __name__ == "__main__":
    create_app()
