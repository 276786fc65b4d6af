"""aiohttp implementation of the REST client port."""

import asyncio
import json
import time
from typing import Any, Optional
from uuid import uuid4

import aiohttp
import structlog

from nmsdash.core.domain.models import RequestFailedError
from nmsdash.core.ports.outbound.rest_client import (
    AuthInterceptor,
    HttpMethod,
    HttpRequest,
    HttpResponse,
    IRestClientPort,
    LoggingRequestInterceptor,
    LoggingResponseInterceptor,
    RequestInterceptor,
    ResponseInterceptor,
    RestClientConfig,
)

logger = structlog.get_logger(__name__)


def encode_params(params: dict[str, Any]) -> dict[str, str | int | float]:
    """Make query parameters acceptable to aiohttp (no bools, no None)."""
    encoded: dict[str, str | int | float] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        elif isinstance(value, (int, float, str)):
            encoded[key] = value
        else:
            encoded[key] = str(value)
    return encoded


class AiohttpRestClient(IRestClientPort):
    """
    REST client backed by a single aiohttp session.

    The session is opened lazily on the first request and reused until
    close(). Requests are not retried.
    """

    def __init__(self, config: Optional[RestClientConfig] = None):
        self._config = config or RestClientConfig()
        self._session: Optional[aiohttp.ClientSession] = None
        self._auth: Optional[AuthInterceptor] = self._build_auth(self._config)

        self._request_interceptors: list[RequestInterceptor] = [
            LoggingRequestInterceptor(logger)
        ]
        self._response_interceptors: list[ResponseInterceptor] = [
            LoggingResponseInterceptor(logger)
        ]

        self._metrics: dict[str, Any] = {
            "total_requests": 0,
            "successful_requests": 0,
            "failed_requests": 0,
            "total_response_time_ms": 0.0,
        }

    @staticmethod
    def _build_auth(config: RestClientConfig) -> Optional[AuthInterceptor]:
        if not config.auth_type:
            return None
        return AuthInterceptor(config.auth_type, config.auth_credentials)

    @property
    def config(self) -> RestClientConfig:
        return self._config

    # === Lifecycle ===

    async def configure(self, config: RestClientConfig) -> None:
        await self.close()
        self._config = config
        self._auth = self._build_auth(config)
        logger.info("rest_client_configured", base_url=config.base_url)

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None
            logger.debug("rest_client_closed")

    async def is_ready(self) -> bool:
        return self._session is not None and not self._session.closed

    async def __aenter__(self) -> "AiohttpRestClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._config.timeout),
                headers=self._config.default_headers,
            )
        return self._session

    def build_url(self, url: str) -> str:
        """Resolve a relative path against the configured base URL."""
        if url.startswith(("http://", "https://")):
            return url
        base = self._config.base_url.rstrip("/")
        return f"{base}/{url.lstrip('/')}"

    # === HTTP Methods ===

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        return await self.request(
            HttpRequest(
                method=HttpMethod.GET,
                url=url,
                params=params or {},
                headers=headers or {},
                timeout=timeout,
            )
        )

    async def put(
        self,
        url: str,
        body: Any | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        return await self.request(
            HttpRequest(
                method=HttpMethod.PUT,
                url=url,
                body=body,
                params=params or {},
                headers=headers or {},
                timeout=timeout,
            )
        )

    async def request(self, request: HttpRequest) -> HttpResponse:
        request.request_id = request.request_id or uuid4().hex[:12]
        request.url = self.build_url(request.url)

        if self._auth is not None:
            request = await self._auth.intercept(request)
        for interceptor in self._request_interceptors:
            request = await interceptor.intercept(request)

        kwargs: dict[str, Any] = {
            "params": encode_params(request.params),
            "headers": request.headers,
        }
        if request.body is not None:
            kwargs["json"] = request.body
        if request.timeout is not None:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=request.timeout)
        if not self._config.verify_ssl:
            kwargs["ssl"] = False

        self._metrics["total_requests"] += 1
        started = time.perf_counter()

        try:
            session = self._get_session()
            async with session.request(request.method.value, request.url, **kwargs) as resp:
                raw = await resp.read()
                response = HttpResponse(
                    status_code=resp.status,
                    headers=dict(resp.headers),
                    body=self._decode_body(raw, resp.content_type),
                    request_id=request.request_id,
                    elapsed_ms=(time.perf_counter() - started) * 1000,
                )
                reason = resp.reason or ""
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._metrics["failed_requests"] += 1
            logger.warning(
                "rest_request_failed",
                method=request.method.value,
                url=request.url,
                error=str(e) or type(e).__name__,
            )
            raise RequestFailedError(request.url, None, str(e) or type(e).__name__) from e

        for response_interceptor in self._response_interceptors:
            response = await response_interceptor.intercept(request, response)

        self._metrics["total_response_time_ms"] += response.elapsed_ms

        if not response.is_success:
            self._metrics["failed_requests"] += 1
            logger.warning(
                "rest_request_rejected",
                method=request.method.value,
                url=request.url,
                status_code=response.status_code,
            )
            raise RequestFailedError(request.url, response.status_code, reason)

        self._metrics["successful_requests"] += 1
        return response

    @staticmethod
    def _decode_body(raw: bytes, content_type: str) -> Any:
        if not raw:
            return None
        text = raw.decode("utf-8", errors="replace")
        if "json" in content_type:
            try:
                return json.loads(text)
            except ValueError:
                return text
        return text

    # === Interceptors ===

    def add_request_interceptor(self, interceptor: RequestInterceptor) -> None:
        self._request_interceptors.append(interceptor)

    def add_response_interceptor(self, interceptor: ResponseInterceptor) -> None:
        self._response_interceptors.append(interceptor)

    # === Metrics ===

    async def get_metrics(self) -> dict[str, Any]:
        completed = self._metrics["successful_requests"] + self._metrics["failed_requests"]
        avg = self._metrics["total_response_time_ms"] / completed if completed else 0.0
        return {
            "total_requests": self._metrics["total_requests"],
            "successful_requests": self._metrics["successful_requests"],
            "failed_requests": self._metrics["failed_requests"],
            "avg_response_time_ms": round(avg, 2),
        }
