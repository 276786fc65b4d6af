"""Core module - domain catalog, ports and adapters."""

# Adapters
from nmsdash.core.adapters import AiohttpRestClient, RestMonitoringApiAdapter

# Ports
from nmsdash.core.ports import IMonitoringApiPort, IRestClientPort, IStateRegistryPort

__all__ = [
    # Ports
    "IMonitoringApiPort",
    "IRestClientPort",
    "IStateRegistryPort",
    # Adapters
    "AiohttpRestClient",
    "RestMonitoringApiAdapter",
]
