"""Pytest fixtures for better_wapi test suite."""

import logging
import logging.handlers
from collections.abc import Generator

import pytest

from better_wapi.models import ChallengeRequest
from better_wapi.secrets.memory import MemorySecretStore
from better_wapi.settings import WebhookSettings
from better_wapi.solver import BetterWapiSolver

BASE_URL = "http://wapi.test"
NAMESPACE = "cert-manager"


@pytest.fixture
def settings() -> WebhookSettings:
    """Return startup settings for tests."""
    return WebhookSettings(group_name="acme.example.com")


@pytest.fixture
def solver_config() -> dict:
    """Return a solver config blob as attached to a challenge."""
    return {
        "baseUrl": f"{BASE_URL}/",
        "userLoginSecretRef": {"name": "wapi-credentials", "key": "login"},
        "userSecretSecretRef": {"name": "wapi-credentials", "key": "secret"},
    }


@pytest.fixture
def secret_store() -> MemorySecretStore:
    """Return a secret store holding better-wapi credentials."""
    return MemorySecretStore(
        {(NAMESPACE, "wapi-credentials"): {"login": "user", "secret": "s3cret"}}
    )


@pytest.fixture
def solver(settings: WebhookSettings, secret_store: MemorySecretStore) -> BetterWapiSolver:
    """Return a solver backed by the in-memory secret store."""
    return BetterWapiSolver(settings, secret_store=secret_store)


@pytest.fixture
def challenge_request(solver_config: dict) -> ChallengeRequest:
    """Return a challenge for _acme-challenge.foo.example.com."""
    return ChallengeRequest(
        resolved_fqdn="_acme-challenge.foo.example.com.",
        key="proof123",
        resource_namespace=NAMESPACE,
        config=solver_config,
    )


class LogCapture:
    """Helper class to capture and inspect log records."""

    def __init__(self, handler: logging.handlers.MemoryHandler) -> None:
        self._handler = handler

    @property
    def records(self) -> list[logging.LogRecord]:
        """Get all captured log records."""
        return self._handler.buffer

    def get_records(
        self, level: int | None = None, name: str | None = None
    ) -> list[logging.LogRecord]:
        """Get log records filtered by level and/or logger name.

        Args:
            level: Filter by log level (e.g., logging.INFO).
            name: Filter by logger name prefix (e.g., "better_wapi.client").

        Returns:
            List of matching log records.
        """
        records = self.records
        if level is not None:
            records = [r for r in records if r.levelno == level]
        if name is not None:
            records = [r for r in records if r.name.startswith(name)]
        return records

    def get_messages(self, level: int | None = None, name: str | None = None) -> list[str]:
        """Get log messages filtered by level and/or logger name."""
        return [r.getMessage() for r in self.get_records(level, name)]

    def clear(self) -> None:
        """Clear all captured log records."""
        self._handler.buffer.clear()


@pytest.fixture
def log_capture() -> Generator[LogCapture]:
    """Capture logs from the better_wapi package during a test.

    Usage:
        def test_something(log_capture):
            # do something that logs
            assert "TXT record created" in log_capture.get_messages(logging.INFO)
    """
    handler = logging.handlers.MemoryHandler(capacity=1000)
    handler.setLevel(logging.DEBUG)

    package_logger = logging.getLogger("better_wapi")
    original_level = package_logger.level
    package_logger.setLevel(logging.DEBUG)
    package_logger.addHandler(handler)

    try:
        yield LogCapture(handler)
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(original_level)
        handler.close()
