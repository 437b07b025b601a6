"""Pydantic models for solver configuration and better-wapi API payloads."""

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, Field

RECORD_TTL = 300

# =============================================================================
# Enums
# =============================================================================


class ChallengeAction(StrEnum):
    """Action requested by the hosting runtime."""

    PRESENT = "Present"
    CLEANUP = "CleanUp"


# =============================================================================
# Solver configuration
# =============================================================================


class SecretRef(BaseModel):
    """Reference to one key inside a namespaced secret."""

    name: str = ""
    key: str = ""

    model_config = {"frozen": True}


class SolverConfig(BaseModel):
    """Per-challenge solver configuration.

    Decoded from the opaque JSON blob attached to each challenge. Every
    field defaults to its zero value so an absent blob still decodes.
    """

    base_url: str = Field(default="", alias="baseUrl")
    user_login_secret_ref: SecretRef = Field(default_factory=SecretRef, alias="userLoginSecretRef")
    user_secret_secret_ref: SecretRef = Field(
        default_factory=SecretRef, alias="userSecretSecretRef"
    )

    model_config = {"frozen": True, "populate_by_name": True}


class ChallengeRequest(BaseModel):
    """Challenge handed to the solver by the hosting runtime.

    Only resolved_fqdn, key, resource_namespace and config drive the
    record workflow; the remaining fields are carried for logging.
    """

    resolved_fqdn: str = Field(alias="resolvedFQDN")
    key: str
    resource_namespace: str = Field(default="", alias="resourceNamespace")
    config: Any = None

    uid: str | None = None
    action: ChallengeAction | None = None
    type: str | None = None
    dns_name: str | None = Field(default=None, alias="dnsName")
    resolved_zone: str | None = Field(default=None, alias="resolvedZone")
    allow_ambient_credentials: bool = Field(default=False, alias="allowAmbientCredentials")

    model_config = {"populate_by_name": True}


# =============================================================================
# better-wapi API payloads
# =============================================================================


class AuthRequest(BaseModel):
    """Body of POST /api/auth/token."""

    login: str
    secret: str


class AuthResponse(BaseModel):
    """Successful response of POST /api/auth/token."""

    token: str


class RecordRequest(BaseModel):
    """Body shared by record create and delete.

    Field order is the wire order.
    """

    autocommit: bool = True
    data: str
    subdomain: str
    ttl: int = RECORD_TTL
    type: Literal["TXT"] = "TXT"
