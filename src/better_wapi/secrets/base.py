"""Abstract base class for secret stores."""

from abc import ABC, abstractmethod

from better_wapi._logging import get_logger
from better_wapi.exceptions import SecretLookupError
from better_wapi.models import SecretRef

logger = get_logger(__name__)


class SecretStore(ABC):
    """Abstract interface for namespaced key-value secret lookup."""

    @abstractmethod
    def get_secret(self, namespace: str, name: str, key: str) -> bytes:
        """Read one value from a named secret.

        Args:
            namespace: Namespace the secret lives in.
            name: Name of the secret object.
            key: Key inside the secret's data.

        Returns:
            The raw value stored under key.

        Raises:
            SecretNotFoundError: If the secret does not exist or the
                lookup itself failed.
            SecretKeyNotFoundError: If the secret has no such key.
        """
        ...

    def close(self) -> None:
        """Release any resources held by the store."""
        return None


def resolve_secret(store: SecretStore, ref: SecretRef, namespace: str) -> str:
    """Resolve a SecretRef to its plaintext value.

    Performs exactly one lookup; nothing is cached.

    Args:
        store: Secret store to read from.
        ref: Name and key of the value.
        namespace: Namespace of the challenge resource.

    Returns:
        The value decoded as UTF-8.

    Raises:
        SecretLookupError: If the lookup fails or the value is not UTF-8.
    """
    logger.debug(
        "Resolving secret",
        extra={"namespace": namespace, "secret": ref.name, "key": ref.key},
    )
    value = store.get_secret(namespace, ref.name, ref.key)
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SecretLookupError(
            f"value of key {ref.key} in secret {namespace}/{ref.name} is not valid UTF-8",
            namespace=namespace,
            name=ref.name,
            key=ref.key,
        ) from e
