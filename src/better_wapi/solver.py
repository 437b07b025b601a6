"""DNS-01 challenge solver for better-wapi."""

import json
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from kubernetes.client import Configuration
from pydantic import ValidationError

from better_wapi._logging import Timer, get_fqdn_extra, get_logger, reset_fqdn, set_fqdn
from better_wapi.client import WapiClient
from better_wapi.exceptions import ClientInitError, ConfigDecodeError, WebhookError
from better_wapi.fqdn import split_fqdn
from better_wapi.models import ChallengeAction, ChallengeRequest, SolverConfig
from better_wapi.secrets.base import SecretStore, resolve_secret
from better_wapi.secrets.kubernetes import KubernetesSecretStore
from better_wapi.settings import WebhookSettings

logger = get_logger(__name__)


class Solver(ABC):
    """Interface the hosting webhook runtime calls into."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Solver name used for registration with the runtime."""
        ...

    @abstractmethod
    def initialize(
        self, cluster_config: Configuration, stop_event: threading.Event | None = None
    ) -> None:
        """Prepare the solver before any challenge is handled.

        Args:
            cluster_config: Kubernetes client configuration for the cluster.
            stop_event: Set by the runtime when it shuts down.
        """
        ...

    @abstractmethod
    def present(self, request: ChallengeRequest) -> None:
        """Publish the TXT record for a challenge."""
        ...

    @abstractmethod
    def cleanup(self, request: ChallengeRequest) -> None:
        """Remove the TXT record published by present()."""
        ...


def load_config(raw: Any) -> SolverConfig:
    """Decode the per-challenge solver configuration.

    Args:
        raw: The opaque config value: None, a mapping, or JSON text/bytes.

    Returns:
        The decoded config; a zero-valued config when raw is None or JSON null.

    Raises:
        ConfigDecodeError: If raw is not valid JSON or has the wrong shape.
    """
    if isinstance(raw, bytes | bytearray | str):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise ConfigDecodeError(f"error decoding solver config: {e}") from e

    if raw is None:
        return SolverConfig()
    if isinstance(raw, SolverConfig):
        return raw
    if not isinstance(raw, Mapping):
        raise ConfigDecodeError(
            f"error decoding solver config: expected an object, got {type(raw).__name__}"
        )

    try:
        return SolverConfig.model_validate(dict(raw))
    except ValidationError as e:
        raise ConfigDecodeError(f"error decoding solver config: {e}") from e


@contextmanager
def _stage(prefix: str) -> Iterator[None]:
    """Prefix any WebhookError raised inside the block with a stage name."""
    try:
        yield
    except WebhookError as e:
        raise e.with_prefix(prefix) from e


class BetterWapiSolver(Solver):
    """Solve DNS-01 challenges by managing TXT records through better-wapi.

    Each present/cleanup call is self-contained: it decodes the config,
    reads both credentials, authenticates and sends one record request.
    Nothing is kept between calls, so cleanup targets the record by
    recomputing the same subdomain and value from the same request.

    Args:
        settings: Validated process settings.
        secret_store: Store to resolve credentials from. When None, a
            Kubernetes store is built by initialize().
    """

    NAME = "better-wapi"

    def __init__(self, settings: WebhookSettings, secret_store: SecretStore | None = None):
        self.settings = settings
        self.secret_store = secret_store
        self.stop_event: threading.Event | None = None

    @property
    def name(self) -> str:
        return self.NAME

    def initialize(
        self, cluster_config: Configuration, stop_event: threading.Event | None = None
    ) -> None:
        """Build the Kubernetes secret store.

        Raises:
            ClientInitError: If the store cannot be constructed.
        """
        self.secret_store = KubernetesSecretStore.from_configuration(cluster_config)
        self.stop_event = stop_event
        logger.info(
            "Solver initialized",
            extra={"solver": self.NAME, "group_name": self.settings.group_name},
        )

    def close(self) -> None:
        """Release the secret store."""
        if self.secret_store is not None:
            self.secret_store.close()

    def present(self, request: ChallengeRequest) -> None:
        self._run(ChallengeAction.PRESENT, request)

    def cleanup(self, request: ChallengeRequest) -> None:
        self._run(ChallengeAction.CLEANUP, request)

    def _run(self, action: ChallengeAction, request: ChallengeRequest) -> None:
        token = set_fqdn(request.resolved_fqdn)
        try:
            logger.info(
                "Handling challenge",
                extra={"action": str(action), "uid": request.uid, **get_fqdn_extra()},
            )
            with Timer() as t:
                self._handle(action, request)
            logger.info(
                "Challenge handled",
                extra={"action": str(action), "elapsed_ms": t.elapsed_ms, **get_fqdn_extra()},
            )
        except WebhookError as e:
            logger.error(
                "Challenge failed",
                extra={"action": str(action), "error": str(e), **get_fqdn_extra()},
            )
            raise
        finally:
            reset_fqdn(token)

    def _handle(self, action: ChallengeAction, request: ChallengeRequest) -> None:
        if self.secret_store is None:
            raise ClientInitError("solver is not initialized")

        with _stage("error loading config"):
            config = load_config(request.config)

        namespace = request.resource_namespace
        with _stage("error getting user login secret"):
            login = resolve_secret(self.secret_store, config.user_login_secret_ref, namespace)
        with _stage("error getting user secret secret"):
            secret = resolve_secret(self.secret_store, config.user_secret_secret_ref, namespace)

        with _stage("invalid challenge fqdn"):
            domain, subdomain = split_fqdn(request.resolved_fqdn)

        client = WapiClient(config.base_url)
        with _stage("authorization failed"):
            bearer = client.authorize(login, secret)

        if action is ChallengeAction.PRESENT:
            with _stage("failed to create DNS record"):
                client.create_record(bearer, domain, subdomain, request.key)
        else:
            with _stage("failed to delete DNS record"):
                client.delete_record(bearer, domain, subdomain, request.key)
