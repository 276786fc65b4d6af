"""Inbound ports - interfaces the dashboard exposes."""

from nmsdash.core.ports.inbound.state_registry import IStateRegistryPort

__all__ = ["IStateRegistryPort"]
