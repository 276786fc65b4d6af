"""Adapters - concrete implementations of ports."""

from nmsdash.core.adapters.aiohttp_rest_client import AiohttpRestClient
from nmsdash.core.adapters.monitoring_api_adapter import RestMonitoringApiAdapter

__all__ = [
    "AiohttpRestClient",
    "RestMonitoringApiAdapter",
]
