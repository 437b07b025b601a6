"""Process-level settings, read once at startup."""

import logging
import os
from collections.abc import Mapping

from pydantic import BaseModel, ValidationError, field_validator

from better_wapi.exceptions import StartupConfigError


class WebhookSettings(BaseModel):
    """Startup configuration of the webhook process.

    Args:
        group_name: API group the solver registers under.
        log_level: Level for the command-line log handler.
    """

    group_name: str
    log_level: str = "INFO"

    model_config = {"frozen": True}

    @field_validator("group_name")
    @classmethod
    def _group_name_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("GROUP_NAME must be specified")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.strip().upper() or "INFO"
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown log level: {value}")
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "WebhookSettings":
        """Load settings from the environment.

        Args:
            environ: Environment mapping (defaults to os.environ).

        Returns:
            Validated settings.

        Raises:
            StartupConfigError: If GROUP_NAME is missing or blank, or
                LOG_LEVEL is not a known level.
        """
        env = os.environ if environ is None else environ
        if not env.get("GROUP_NAME", "").strip():
            raise StartupConfigError("GROUP_NAME must be specified")

        try:
            return cls(group_name=env["GROUP_NAME"], log_level=env.get("LOG_LEVEL", "INFO"))
        except ValidationError as e:
            raise StartupConfigError(f"invalid settings: {e}") from e
