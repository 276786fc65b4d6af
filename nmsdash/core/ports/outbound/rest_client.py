"""
REST client port - outbound HTTP access to the monitoring backend.

The monitoring API adapter only talks to this interface, so the transport
can be swapped (or faked in tests) without touching request construction.
"""

import base64
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class HttpMethod(Enum):
    """Methods the backend API is called with."""

    GET = "GET"
    PUT = "PUT"


@dataclass
class HttpRequest:
    """Outbound HTTP request."""

    method: HttpMethod
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, Any] = field(default_factory=dict)
    body: Any | None = None
    timeout: float | None = None

    request_id: str = ""


@dataclass
class HttpResponse:
    """HTTP response with a decoded body (None when empty)."""

    status_code: int
    headers: dict[str, str]
    body: Any

    request_id: str = ""
    elapsed_ms: float = 0.0

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_empty(self) -> bool:
        return self.status_code == 204 or self.body in (None, "", b"")

    def json(self) -> Any:
        """Body as JSON, or None for an empty response."""
        if self.is_empty:
            return None
        if isinstance(self.body, (bytes, str)):
            return json.loads(self.body)
        return self.body


@dataclass
class RestClientConfig:
    """REST client configuration."""

    base_url: str = ""
    timeout: float = 30.0

    default_headers: dict[str, str] = field(
        default_factory=lambda: {"Accept": "application/json"}
    )

    # "basic" or "bearer"
    auth_type: str | None = None
    auth_credentials: dict[str, str] = field(default_factory=dict)

    verify_ssl: bool = True


class IRestClientPort(ABC):
    """
    REST client port interface.

    Implementations raise RequestFailedError for transport failures and
    non-2xx responses.

    Usage:
        ```python
        class NodesApi:
            def __init__(self, rest_client: IRestClientPort):
                self.rest = rest_client

            async def fetch(self):
                response = await self.rest.get("api/v2/nodes")
                return response.json()
        ```
    """

    # === Lifecycle ===

    @abstractmethod
    async def configure(self, config: RestClientConfig) -> None:
        """Apply configuration. Must be called before any request."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release connections."""
        ...

    @abstractmethod
    async def is_ready(self) -> bool:
        ...

    # === HTTP Methods ===

    @abstractmethod
    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        """
        HTTP GET.

        Args:
            url: Path relative to base_url, or an absolute URL
            params: Query parameters
            headers: Extra headers
            timeout: Request timeout in seconds

        Returns:
            HttpResponse
        """
        ...

    @abstractmethod
    async def put(
        self,
        url: str,
        body: Any | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        """HTTP PUT."""
        ...

    @abstractmethod
    async def request(self, request: HttpRequest) -> HttpResponse:
        """Send a prepared request through the interceptor chain."""
        ...

    # === Interceptors ===

    @abstractmethod
    def add_request_interceptor(self, interceptor: "RequestInterceptor") -> None:
        ...

    @abstractmethod
    def add_response_interceptor(self, interceptor: "ResponseInterceptor") -> None:
        ...

    # === Metrics ===

    @abstractmethod
    async def get_metrics(self) -> dict[str, Any]:
        """
        Client counters.

        Returns:
            {
                "total_requests": int,
                "successful_requests": int,
                "failed_requests": int,
                "avg_response_time_ms": float,
            }
        """
        ...


# === Interceptor Types ===


class RequestInterceptor(ABC):
    """Transforms a request before it is sent."""

    @abstractmethod
    async def intercept(self, request: HttpRequest) -> HttpRequest:
        ...


class ResponseInterceptor(ABC):
    """Inspects or transforms a response before it is returned."""

    @abstractmethod
    async def intercept(
        self,
        request: HttpRequest,
        response: HttpResponse,
    ) -> HttpResponse:
        ...


# === Built-in Interceptors ===


class AuthInterceptor(RequestInterceptor):
    """Adds an Authorization header."""

    def __init__(self, auth_type: str, credentials: dict[str, str]):
        """
        Args:
            auth_type: "basic" or "bearer"
            credentials: username/password, or token
        """
        if auth_type not in ("basic", "bearer"):
            raise ValueError(f"Unsupported auth type: {auth_type}")
        self.auth_type = auth_type
        self.credentials = credentials

    async def intercept(self, request: HttpRequest) -> HttpRequest:
        if self.auth_type == "bearer":
            token = self.credentials.get("token", "")
            request.headers["Authorization"] = f"Bearer {token}"
        else:
            username = self.credentials.get("username", "")
            password = self.credentials.get("password", "")
            encoded = base64.b64encode(f"{username}:{password}".encode()).decode()
            request.headers["Authorization"] = f"Basic {encoded}"
        return request


class LoggingRequestInterceptor(RequestInterceptor):
    def __init__(self, logger: Optional[Any] = None):
        self.logger = logger

    async def intercept(self, request: HttpRequest) -> HttpRequest:
        if self.logger:
            self.logger.debug(
                "rest_request",
                method=request.method.value,
                url=request.url,
                params=request.params,
                request_id=request.request_id,
            )
        return request


class LoggingResponseInterceptor(ResponseInterceptor):
    def __init__(self, logger: Optional[Any] = None):
        self.logger = logger

    async def intercept(
        self,
        request: HttpRequest,
        response: HttpResponse,
    ) -> HttpResponse:
        if self.logger:
            self.logger.debug(
                "rest_response",
                method=request.method.value,
                url=request.url,
                status_code=response.status_code,
                elapsed_ms=response.elapsed_ms,
                request_id=request.request_id,
            )
        return response
