"""In-memory secret store."""

from collections.abc import Mapping

from better_wapi.exceptions import SecretKeyNotFoundError, SecretNotFoundError
from better_wapi.secrets.base import SecretStore


class MemorySecretStore(SecretStore):
    """Secret store backed by a dict.

    Used as a test double for the Kubernetes store.

    Args:
        secrets: Mapping of (namespace, name) to the secret's key-value data.
            String values are stored UTF-8 encoded.
    """

    def __init__(self, secrets: Mapping[tuple[str, str], Mapping[str, str | bytes]] | None = None):
        self._secrets: dict[tuple[str, str], dict[str, bytes]] = {}
        for (namespace, name), data in (secrets or {}).items():
            self.put(namespace, name, data)

    def put(self, namespace: str, name: str, data: Mapping[str, str | bytes]) -> None:
        """Store or replace a secret.

        Args:
            namespace: Namespace of the secret.
            name: Name of the secret.
            data: Key-value payload.
        """
        self._secrets[(namespace, name)] = {
            k: v.encode("utf-8") if isinstance(v, str) else v for k, v in data.items()
        }

    def get_secret(self, namespace: str, name: str, key: str) -> bytes:
        data = self._secrets.get((namespace, name))
        if data is None:
            raise SecretNotFoundError(
                f"failed to get secret {namespace}/{name}: not found",
                namespace=namespace,
                name=name,
                key=key,
            )
        if key not in data:
            raise SecretKeyNotFoundError(
                f"key {key} not found in secret {namespace}/{name}",
                namespace=namespace,
                name=name,
                key=key,
            )
        return data[key]
