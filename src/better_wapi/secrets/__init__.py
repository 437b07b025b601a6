"""Secret stores used to resolve better-wapi credentials."""

from better_wapi.secrets.base import SecretStore, resolve_secret
from better_wapi.secrets.kubernetes import KubernetesSecretStore, load_cluster_configuration
from better_wapi.secrets.memory import MemorySecretStore

__all__ = [
    "KubernetesSecretStore",
    "MemorySecretStore",
    "SecretStore",
    "load_cluster_configuration",
    "resolve_secret",
]
