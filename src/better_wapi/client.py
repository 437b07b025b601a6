"""HTTP client for the better-wapi DNS management API."""

import httpx
from pydantic import ValidationError

from better_wapi._logging import Timer, get_fqdn_extra, get_logger
from better_wapi.exceptions import AuthenticationError, RecordCreateError, RecordDeleteError
from better_wapi.models import AuthRequest, AuthResponse, RecordRequest

logger = get_logger(__name__)


class WapiClient:
    """Client for the better-wapi token and record endpoints.

    Every call is a single attempt: nothing is retried and no token is
    cached, so one instance can be built per challenge call.

    Args:
        base_url: Base URL of the better-wapi service. A trailing slash is
            stripped.
        auth_timeout: Timeout in seconds for the token request (default:
            None, wait indefinitely).
        record_timeout: Timeout in seconds for record requests (default: 60).
    """

    def __init__(
        self,
        base_url: str,
        auth_timeout: float | None = None,
        record_timeout: float = 60,
    ):
        self.base_url = base_url.rstrip("/")
        self.auth_timeout = auth_timeout
        self.record_timeout = record_timeout

    def _record_url(self, domain: str) -> str:
        return f"{self.base_url}/api/v1/domain/{domain}/record"

    def authorize(self, login: str, secret: str) -> str:
        """Exchange login and secret for a bearer token.

        Args:
            login: better-wapi user login.
            secret: better-wapi user secret.

        Returns:
            The bearer token.

        Raises:
            AuthenticationError: On transport failure, any status other
                than 200, or a body without a token.
        """
        url = f"{self.base_url}/api/auth/token"
        payload = AuthRequest(login=login, secret=secret).model_dump()

        try:
            with Timer() as t:
                response = httpx.post(url, json=payload, timeout=self.auth_timeout)
        except httpx.HTTPError as e:
            raise AuthenticationError(f"auth request failed: {e}") from e

        logger.debug(
            "Auth request finished",
            extra={
                "status_code": response.status_code,
                "elapsed_ms": t.elapsed_ms,
                **get_fqdn_extra(),
            },
        )

        if response.status_code != 200:
            raise AuthenticationError(
                f"auth request failed with status: {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return AuthResponse.model_validate_json(response.content).token
        except ValidationError as e:
            raise AuthenticationError(
                f"failed to unmarshal auth response: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    def _send_record(
        self,
        method: str,
        token: str,
        domain: str,
        subdomain: str,
        value: str,
    ) -> httpx.Response:
        """Send a record request to the record endpoint of a domain.

        Args:
            method: "POST" or "DELETE".
            token: Bearer token from authorize().
            domain: Registrable domain, interpolated into the path as-is.
            subdomain: Record name relative to the domain.
            value: TXT record content.

        Returns:
            The httpx Response, whatever its status.
        """
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        record = RecordRequest(data=value, subdomain=subdomain)

        with Timer() as t:
            response = httpx.request(
                method,
                self._record_url(domain),
                headers=headers,
                json=record.model_dump(),
                timeout=self.record_timeout,
            )

        logger.debug(
            "Record request finished",
            extra={
                "method": method,
                "domain": domain,
                "subdomain": subdomain,
                "status_code": response.status_code,
                "elapsed_ms": t.elapsed_ms,
                **get_fqdn_extra(),
            },
        )
        return response

    def create_record(self, token: str, domain: str, subdomain: str, value: str) -> None:
        """Create a TXT record.

        The API is not asked whether the record exists first; a second
        call for the same challenge sends a second create.

        Raises:
            RecordCreateError: On transport failure or any status other
                than 201.
        """
        try:
            response = self._send_record("POST", token, domain, subdomain, value)
        except httpx.HTTPError as e:
            raise RecordCreateError(f"create record request failed: {e}") from e

        if response.status_code != 201:
            raise RecordCreateError.from_response(response)

        logger.info(
            "TXT record created",
            extra={"domain": domain, "subdomain": subdomain, **get_fqdn_extra()},
        )

    def delete_record(self, token: str, domain: str, subdomain: str, value: str) -> None:
        """Delete a TXT record.

        The record is identified by subdomain, data and type in the
        request body; better-wapi performs the matching.

        Raises:
            RecordDeleteError: On transport failure or any status other
                than 200.
        """
        try:
            response = self._send_record("DELETE", token, domain, subdomain, value)
        except httpx.HTTPError as e:
            raise RecordDeleteError(f"delete record request failed: {e}") from e

        if response.status_code != 200:
            raise RecordDeleteError.from_response(response)

        logger.info(
            "TXT record deleted",
            extra={"domain": domain, "subdomain": subdomain, **get_fqdn_extra()},
        )
