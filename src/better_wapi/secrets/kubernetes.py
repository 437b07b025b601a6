"""Kubernetes secret store backed by the official client's CoreV1Api."""

import base64
import binascii

from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from kubernetes.config import ConfigException
from urllib3.exceptions import HTTPError as Urllib3HTTPError

from better_wapi._logging import Timer, get_logger
from better_wapi.exceptions import ClientInitError, SecretKeyNotFoundError, SecretNotFoundError
from better_wapi.secrets.base import SecretStore

logger = get_logger(__name__)


def load_cluster_configuration(kubeconfig: str | None = None) -> client.Configuration:
    """Load the ambient cluster configuration.

    Uses the pod's service account when running in a cluster, otherwise
    the given kubeconfig file (or the default ~/.kube/config).

    Args:
        kubeconfig: Path to a kubeconfig file. Skips in-cluster discovery.

    Returns:
        A populated kubernetes client Configuration.

    Raises:
        ClientInitError: If no configuration can be loaded.
    """
    configuration = client.Configuration()
    try:
        if kubeconfig is None:
            try:
                config.load_incluster_config(client_configuration=configuration)
                return configuration
            except ConfigException:
                logger.debug("Not running in a cluster, falling back to kubeconfig")
        config.load_kube_config(config_file=kubeconfig, client_configuration=configuration)
    except (ConfigException, OSError) as e:
        raise ClientInitError(f"error loading kubernetes configuration: {e}") from e
    return configuration


class KubernetesSecretStore(SecretStore):
    """Read Secrets through the Kubernetes core/v1 API.

    Args:
        core_api: CoreV1Api used for the lookups.
        api_client: ApiClient backing core_api, closed by close().
    """

    def __init__(self, core_api: client.CoreV1Api, api_client: client.ApiClient | None = None):
        self._core = core_api
        self._api_client = api_client

    @classmethod
    def from_configuration(cls, configuration: client.Configuration) -> "KubernetesSecretStore":
        """Construct a store for the given cluster.

        Args:
            configuration: Cluster connection settings.

        Returns:
            A ready KubernetesSecretStore.

        Raises:
            ClientInitError: If the API client cannot be constructed.
        """
        try:
            api_client = client.ApiClient(configuration)
        except (OSError, ValueError) as e:
            raise ClientInitError(f"error creating kubernetes client: {e}") from e

        logger.info("Kubernetes client created", extra={"host": configuration.host})
        return cls(client.CoreV1Api(api_client), api_client)

    def close(self) -> None:
        """Close the underlying API client."""
        if self._api_client is not None:
            self._api_client.close()

    def get_secret(self, namespace: str, name: str, key: str) -> bytes:
        context = {"namespace": namespace, "name": name, "key": key}

        try:
            with Timer() as t:
                secret = self._core.read_namespaced_secret(name, namespace)
        except ApiException as e:
            raise SecretNotFoundError(
                f"failed to get secret {namespace}/{name}: status {e.status}: {e.reason}",
                **context,
            ) from e
        except (Urllib3HTTPError, OSError) as e:
            raise SecretNotFoundError(
                f"failed to get secret {namespace}/{name}: {e}", **context
            ) from e

        logger.debug(
            "Secret lookup finished",
            extra={"namespace": namespace, "secret": name, "elapsed_ms": t.elapsed_ms},
        )

        data = secret.data or {}
        if key not in data:
            raise SecretKeyNotFoundError(
                f"key {key} not found in secret {namespace}/{name}", **context
            )

        # V1Secret.data holds the API's base64 strings as-is
        try:
            return base64.b64decode(data[key], validate=True)
        except (binascii.Error, TypeError) as e:
            raise SecretNotFoundError(
                f"failed to decode key {key} of secret {namespace}/{name}: {e}", **context
            ) from e
