"""Webhook solver exceptions."""

import httpx


class WebhookError(Exception):
    """Base exception for all solver failures.

    Every error is terminal for the current present/cleanup call. Retrying
    is left to the hosting runtime.
    """

    def with_prefix(self, prefix: str) -> "WebhookError":
        """Return a copy of this error with a stage prefix on its message.

        The copy keeps the concrete class so callers can still catch
        e.g. SecretLookupError after the orchestrator has wrapped it.

        Args:
            prefix: Stage description, e.g. "authorization failed".

        Returns:
            A new exception of the same type.
        """
        wrapped = type(self).__new__(type(self))
        wrapped.__dict__.update(self.__dict__)
        wrapped.args = (f"{prefix}: {self}",)
        return wrapped


class StartupConfigError(WebhookError):
    """Required process configuration is missing or invalid."""

    pass


class ClientInitError(WebhookError):
    """The secret store client could not be constructed."""

    pass


class ConfigDecodeError(WebhookError):
    """The per-challenge solver configuration could not be decoded."""

    pass


class InvalidFqdnError(WebhookError):
    """The challenge FQDN cannot be split into domain and subdomain."""

    pass


class SecretLookupError(WebhookError):
    """A credential could not be read from the secret store."""

    def __init__(self, message: str, namespace: str = "", name: str = "", key: str = ""):
        self.namespace = namespace
        self.name = name
        self.key = key
        super().__init__(message)


class SecretNotFoundError(SecretLookupError):
    """The secret object does not exist or the lookup failed."""

    pass


class SecretKeyNotFoundError(SecretLookupError):
    """The secret exists but has no value for the requested key."""

    pass


class AuthenticationError(WebhookError):
    """Exchanging login and secret for a bearer token failed."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class RecordError(WebhookError):
    """A DNS record request was rejected or could not be sent."""

    operation = "record"

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "RecordError":
        """Create a RecordError from an unexpected API response.

        Args:
            response: The httpx Response with a non-success status.

        Returns:
            RecordError instance (of the calling subclass).
        """
        body = response.text
        return cls(
            f"{cls.operation} failed with status {response.status_code}: {body}",
            status_code=response.status_code,
            body=body,
        )


class RecordCreateError(RecordError):
    """Creating the TXT record failed."""

    operation = "create record"


class RecordDeleteError(RecordError):
    """Deleting the TXT record failed."""

    operation = "delete record"
