"""
Core HTTP client for the GitLab v4 API.

Handles authentication headers, request execution, status classification,
response decoding and error mapping.
"""

import http.client
import json
import logging
import urllib.error
import urllib.request
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import Any, Protocol, TypeVar

logger = logging.getLogger(__name__)

# Configuration
DEFAULT_HOST = "https://gitlab.com"
API_PREFIX = "/api/v4"
DEFAULT_TIMEOUT = 60

# Statuses the remote API uses to report a failure. Everything else is success.
FAULT_STATUSES = frozenset({400, 401, 403, 404, 405, 409, 422, 500})

T = TypeVar("T")


# =============================================================================
# Errors
# =============================================================================


class GitlabError(Exception):
    """Base error class for GitLab client errors."""

    kind = "error"

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result: dict[str, Any] = {"error": self.message, "kind": self.kind}
        if self.details:
            result["details"] = self.details
        return result


class APIError(GitlabError):
    """Fault reported by the remote API through an HTTP error status."""

    kind = "fault"

    def __init__(self, message: str, status: int = 0, details: dict | None = None):
        super().__init__(message, details)
        self.status = status

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result = super().to_dict()
        if self.status:
            result["status"] = self.status
        return result


class CodecError(GitlabError):
    """A body could not be encoded or decoded into the expected shape."""

    kind = "codec"


class TransportError(GitlabError):
    """The HTTP call itself failed (DNS, connection, TLS, timeout)."""

    kind = "transport"


class ResponseIOError(GitlabError):
    """Local I/O failure while reading a response."""

    kind = "io"


class ValidationError(GitlabError):
    """Validation error for local input issues (not API errors)."""

    kind = "validation"


def _flatten_message(value: Any) -> str:
    # GitLab validation errors look like {"name": ["has already been taken"]}
    if isinstance(value, dict):
        parts = []
        for key, item in value.items():
            if isinstance(item, list):
                item = ", ".join(str(i) for i in item)
            parts.append(f"{key}: {item}")
        return "; ".join(parts)
    if isinstance(value, list):
        return ", ".join(str(i) for i in value)
    return str(value)


def fault_message(status: int, body: bytes) -> tuple[str, dict[str, Any]]:
    """
    Extract a human-readable message from an error response body.

    Tries the ``{"message": ...}`` shape first, then ``{"error": ...}``,
    and falls back to the status reason phrase.

    Returns:
        Tuple of (message, details) where details is the decoded body
        when it is a JSON object

    """
    try:
        data = json.loads(body.decode("utf-8")) if body else None
    except (UnicodeDecodeError, json.JSONDecodeError):
        data = None

    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message:
            return message, data
        if isinstance(message, (dict, list)) and message:
            return _flatten_message(message), data

        error = data.get("error")
        if isinstance(error, str) and error:
            description = data.get("error_description")
            if description:
                return f"{error}: {description}", data
            return error, data

    try:
        phrase = HTTPStatus(status).phrase
    except ValueError:
        phrase = "Request failed"
    return f"{status} {phrase}", data if isinstance(data, dict) else {}


# =============================================================================
# Credentials
# =============================================================================


class CredentialKind(Enum):
    """How requests are authenticated."""

    ANONYMOUS = "anonymous"
    OAUTH_TOKEN = "oauth_token"
    ACCESS_TOKEN = "access_token"


@dataclass(frozen=True)
class Credentials:
    """
    Credentials for GitLab authentication.

    Build with one of the named constructors:

        Credentials.anonymous()
        Credentials.oauth_token("...")
        Credentials.access_token("...")

    """

    kind: CredentialKind = CredentialKind.ANONYMOUS
    token: str | None = None

    def __post_init__(self) -> None:
        if self.kind is CredentialKind.ANONYMOUS and self.token is not None:
            raise ValidationError("Anonymous credentials cannot carry a token")
        if self.kind is not CredentialKind.ANONYMOUS and not self.token:
            raise ValidationError(f"{self.kind.value} credentials require a token")

    @classmethod
    def anonymous(cls) -> "Credentials":
        return cls(CredentialKind.ANONYMOUS)

    @classmethod
    def oauth_token(cls, token: str) -> "Credentials":
        return cls(CredentialKind.OAUTH_TOKEN, token)

    @classmethod
    def access_token(cls, token: str) -> "Credentials":
        return cls(CredentialKind.ACCESS_TOKEN, token)

    def __repr__(self) -> str:
        if self.token is None:
            return f"Credentials({self.kind.value})"
        return f"Credentials({self.kind.value}, token=***)"

    def auth_headers(self) -> dict[str, str]:
        """Return the authentication header for this credential, if any."""
        if self.kind is CredentialKind.OAUTH_TOKEN:
            return {"Authorization": f"Bearer {self.token}"}
        if self.kind is CredentialKind.ACCESS_TOKEN:
            return {"PRIVATE-TOKEN": str(self.token)}
        return {}


def request_headers(credentials: Credentials) -> dict[str, str]:
    """Build the full header set for a request."""
    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
    headers.update(credentials.auth_headers())
    return headers


# =============================================================================
# Transport
# =============================================================================


class Transport(Protocol):
    """Executes one HTTP request and returns the raw status and body."""

    def execute(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> tuple[int, bytes]: ...


class UrllibTransport:
    """Default transport built on urllib.request."""

    def __init__(self, timeout: int = DEFAULT_TIMEOUT):
        self.timeout = timeout

    def execute(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> tuple[int, bytes]:
        """
        Make an HTTP request.

        HTTP error statuses are returned, not raised; classifying them is
        the caller's job.

        Raises:
            TransportError: When the request cannot be completed
            ResponseIOError: When the response body cannot be read

        """
        req = urllib.request.Request(url, data=body, headers=headers, method=method)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                return response.status, self._read(response)

        except urllib.error.HTTPError as e:
            return e.code, self._read(e)

        except urllib.error.URLError as e:
            raise TransportError(f"Connection error: {e.reason}") from e

        except TimeoutError as e:
            raise TransportError(f"Request timed out after {self.timeout} seconds") from e

        except http.client.HTTPException as e:
            raise TransportError(f"HTTP protocol error: {e!r}") from e

        # Resets and TLS errors while reading the status line are not wrapped in URLError
        except OSError as e:
            raise TransportError(f"Connection error: {e}") from e

    @staticmethod
    def _read(response: Any) -> bytes:
        try:
            return response.read()
        except TimeoutError as e:
            raise TransportError("Timed out reading response body") from e
        except OSError as e:
            raise ResponseIOError(f"Failed to read response body: {e}") from e


# =============================================================================
# Request Executor
# =============================================================================


def normalize_host(host: str) -> str:
    """Strip trailing slashes and append the API version prefix."""
    return f"{host.rstrip('/')}{API_PREFIX}"


def _identity(data: Any) -> Any:
    return data


class APIClient:
    """
    Low-level HTTP client for the GitLab v4 API.

    Handles:
    - Authentication via OAuth or private token
    - HTTP methods (GET, POST, DELETE)
    - Status classification and error mapping
    - JSON decoding into typed results
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        transport: Transport | None = None,
        credentials: Credentials | None = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the API client.

        Args:
            host: GitLab instance URL, without the /api/v4 prefix
            transport: HTTP transport (defaults to UrllibTransport)
            credentials: Authentication (defaults to anonymous)
            timeout: Request timeout for the default transport, in seconds

        """
        self.host = normalize_host(host)
        self.transport = transport if transport is not None else UrllibTransport(timeout=timeout)
        self.credentials = credentials if credentials is not None else Credentials.anonymous()

    def _build_url(self, resource: str) -> str:
        """Build full URL from a host-relative resource."""
        return f"{self.host}{resource}"

    def _make_request(
        self,
        method: str,
        resource: str,
        body: bytes | None = None,
        parser: Callable[[Any], T] = _identity,
        allow_empty: bool = False,
    ) -> T | None:
        """
        Make an HTTP request to the API and decode the result.

        Args:
            method: HTTP method (GET, POST, DELETE)
            resource: Host-relative path with optional query string
            body: Serialized request body for POST
            parser: Converts decoded JSON into the result type
            allow_empty: Return None for an empty success body

        Returns:
            Parsed result

        Raises:
            APIError: On a fault status
            CodecError: When the body does not decode into the result
            TransportError: When the request cannot be completed
            ResponseIOError: When the response cannot be read

        """
        url = self._build_url(resource)
        logger.debug("%s %s", method, url)

        status, raw = self.transport.execute(method, url, request_headers(self.credentials), body)
        logger.debug("%s %s -> %s", method, url, status)

        if status in FAULT_STATUSES:
            message, details = fault_message(status, raw)
            logger.debug("Fault %s from %s: %s", status, url, message)
            raise APIError(message, status=status, details=details)

        if not raw.strip() and allow_empty:
            return None

        try:
            data = json.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise CodecError(f"Response is not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise CodecError(f"Invalid JSON response: {e}") from e

        try:
            return parser(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise CodecError(
                f"Unexpected response shape: {e!r}",
                details={"response": data} if isinstance(data, dict) else None,
            ) from e

    # =========================================================================
    # HTTP Methods
    # =========================================================================

    def get(self, resource: str, parser: Callable[[Any], T] = _identity) -> T:
        """Make a GET request."""
        return self._make_request("GET", resource, parser=parser)

    def post(
        self,
        resource: str,
        data: dict[str, Any] | None = None,
        parser: Callable[[Any], T] = _identity,
    ) -> T:
        """Make a POST request with a JSON body."""
        try:
            body = json.dumps(data if data is not None else {}).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise CodecError(f"Request body is not JSON serializable: {e}") from e
        return self._make_request("POST", resource, body=body, parser=parser)

    def delete(self, resource: str, parser: Callable[[Any], T] = _identity) -> T | None:
        """Make a DELETE request. Returns None when the response has no body."""
        return self._make_request("DELETE", resource, parser=parser, allow_empty=True)
