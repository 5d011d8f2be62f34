"""Request payload models sent to the remote authority."""

from pydantic import BaseModel, ConfigDict, Field

CHANNEL = "MQTT_NOTIFY"
LANGUAGE = "vi"


class DeviceInfo(BaseModel):
    """Device block expected by the remote authority, always empty for MQTT."""

    osVersion: str = ""
    os: str = ""
    deviceName: str = ""
    deviceId: str = ""


class CredentialCheckData(BaseModel):
    """Credential check body (escaped values)."""

    model_config = ConfigDict(extra="forbid")

    userName: str = Field(..., description="Escaped MQTT username")
    token: str = Field(..., description="Escaped MQTT password")


class AccessCheckData(BaseModel):
    """Access check body (escaped values)."""

    model_config = ConfigDict(extra="forbid")

    clientId: str = Field(..., description="Escaped MQTT client ID")
    userName: str = Field(..., description="Escaped MQTT username")
    topic: str = Field(..., description="Escaped MQTT topic")
    access: str = Field(..., description="Access kind wire name (read, write, sub)")


class CheckRequest(BaseModel):
    """Envelope shared by both check payloads."""

    data: CredentialCheckData | AccessCheckData
    deviceInfo: DeviceInfo = Field(default_factory=DeviceInfo)
    language: str = LANGUAGE
    ipRequest: str = ""
    channel: str = CHANNEL
    requestId: str = Field(..., description="Correlation identifier")


class CredentialCheckRequest(CheckRequest):
    """Payload POSTed to the user-verification endpoint."""

    data: CredentialCheckData


class AccessCheckRequest(CheckRequest):
    """Payload POSTed to the ACL-verification endpoint."""

    data: AccessCheckData
