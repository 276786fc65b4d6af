"""Ports - hexagonal architecture interfaces."""

from nmsdash.core.ports.inbound import IStateRegistryPort
from nmsdash.core.ports.outbound import IMonitoringApiPort, IRestClientPort

__all__ = [
    "IStateRegistryPort",
    "IMonitoringApiPort",
    "IRestClientPort",
]
