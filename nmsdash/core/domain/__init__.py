"""Domain layer - entity catalog, envelopes and query models."""

from nmsdash.core.domain.envelopes import (
    ENVELOPE_COLLECTION_KEYS,
    AlarmPage,
    EventPage,
    IfServicePage,
    IpInterfacePage,
    NodePage,
    OutagePage,
    PageEnvelope,
    SnmpInterfacePage,
    parse_entity,
    parse_list,
    parse_page,
)
from nmsdash.core.domain.models import (
    Alarm,
    Category,
    ConfigurationError,
    Coordinates,
    DuplicateModuleError,
    Event,
    IfService,
    InterfaceAvailability,
    IpInterface,
    MapNode,
    StateModuleNotFoundError,
    NmsDashError,
    Node,
    NodeAvailability,
    Outage,
    RequestFailedError,
    SearchContext,
    SearchResult,
    SearchResultResponse,
    ServiceAvailability,
    ShapeMismatchError,
    SnmpInterface,
    UnknownOperationError,
    WireModel,
)
from nmsdash.core.domain.query import (
    AlarmModificationQueryVariable,
    AlarmQueryParameters,
    FeatherSortObject,
    QueryParameters,
    SortDirection,
    SortProps,
    direction_to_sort_order,
    sort_order_to_direction,
)
from nmsdash.core.domain.topology import (
    Edge,
    EdgeEndpoint,
    GraphNodesResponse,
    TopologyGraph,
    Vertice,
)

__all__ = [
    # Entities
    "WireModel",
    "Alarm",
    "Category",
    "Coordinates",
    "Event",
    "IfService",
    "InterfaceAvailability",
    "IpInterface",
    "MapNode",
    "Node",
    "NodeAvailability",
    "Outage",
    "SearchContext",
    "SearchResult",
    "SearchResultResponse",
    "ServiceAvailability",
    "SnmpInterface",
    # Envelopes
    "ENVELOPE_COLLECTION_KEYS",
    "PageEnvelope",
    "AlarmPage",
    "EventPage",
    "IfServicePage",
    "IpInterfacePage",
    "NodePage",
    "OutagePage",
    "SnmpInterfacePage",
    "parse_entity",
    "parse_list",
    "parse_page",
    # Query
    "AlarmModificationQueryVariable",
    "AlarmQueryParameters",
    "FeatherSortObject",
    "QueryParameters",
    "SortDirection",
    "SortProps",
    "direction_to_sort_order",
    "sort_order_to_direction",
    # Topology
    "Edge",
    "EdgeEndpoint",
    "GraphNodesResponse",
    "TopologyGraph",
    "Vertice",
    # Errors
    "NmsDashError",
    "ShapeMismatchError",
    "RequestFailedError",
    "ConfigurationError",
    "DuplicateModuleError",
    "StateModuleNotFoundError",
    "UnknownOperationError",
]
