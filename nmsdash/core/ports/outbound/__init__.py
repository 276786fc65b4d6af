"""Outbound ports - interfaces for external system connections."""

from nmsdash.core.ports.outbound.monitoring_api import IMonitoringApiPort
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

__all__ = [
    # Monitoring API
    "IMonitoringApiPort",
    # REST Client
    "IRestClientPort",
    "RestClientConfig",
    "HttpRequest",
    "HttpResponse",
    "HttpMethod",
    "RequestInterceptor",
    "ResponseInterceptor",
    "AuthInterceptor",
    "LoggingRequestInterceptor",
    "LoggingResponseInterceptor",
]
