"""
nmsdash - network monitoring dashboard client

Typed catalog of the monitoring backend's entities, query construction for
paginated/sorted/filtered requests, and a store composing independent state
modules (search, nodes, events, interface-services, spinner).
"""

__version__ = "0.1.0"

from nmsdash.config import DashboardSettings, load_settings
from nmsdash.core.adapters import AiohttpRestClient, RestMonitoringApiAdapter
from nmsdash.core.domain import (
    Alarm,
    AlarmModificationQueryVariable,
    AlarmQueryParameters,
    Category,
    ConfigurationError,
    DuplicateModuleError,
    Edge,
    Event,
    FeatherSortObject,
    IfService,
    IpInterface,
    MapNode,
    StateModuleNotFoundError,
    NmsDashError,
    Node,
    NodeAvailability,
    NodePage,
    Outage,
    PageEnvelope,
    QueryParameters,
    RequestFailedError,
    SearchResultResponse,
    ShapeMismatchError,
    SnmpInterface,
    SortDirection,
    SortProps,
    TopologyGraph,
    Vertice,
)
from nmsdash.logging_config import configure_logging
from nmsdash.sdk import BaseStateModule, action, getter, mutation, state_module
from nmsdash.store import Store, create_store

__all__ = [
    # Store
    "Store",
    "create_store",
    "BaseStateModule",
    "state_module",
    "action",
    "mutation",
    "getter",
    # Entities
    "Alarm",
    "Category",
    "Edge",
    "Event",
    "IfService",
    "IpInterface",
    "MapNode",
    "Node",
    "NodeAvailability",
    "Outage",
    "SearchResultResponse",
    "SnmpInterface",
    "TopologyGraph",
    "Vertice",
    # Envelopes
    "NodePage",
    "PageEnvelope",
    # Query
    "AlarmModificationQueryVariable",
    "AlarmQueryParameters",
    "FeatherSortObject",
    "QueryParameters",
    "SortDirection",
    "SortProps",
    # Adapters
    "AiohttpRestClient",
    "RestMonitoringApiAdapter",
    # Configuration
    "DashboardSettings",
    "load_settings",
    "configure_logging",
    # Errors
    "NmsDashError",
    "ShapeMismatchError",
    "RequestFailedError",
    "ConfigurationError",
    "DuplicateModuleError",
    "StateModuleNotFoundError",
]
