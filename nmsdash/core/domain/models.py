"""Domain models for monitoring backend entities."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """
    Base for every payload exchanged with the monitoring backend.

    Field names are snake_case in memory and camelCase on the wire.
    Keys the backend adds later are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize using backend field names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Category(WireModel):
    """Node category with the groups allowed to see it."""

    id: int
    name: Optional[str] = None
    authorized_groups: list[str] = Field(default_factory=list)


class Node(WireModel):
    """Monitored node."""

    id: str
    label: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None
    foreign_source: Optional[str] = None
    foreign_id: Optional[str] = None
    label_source: Optional[str] = None
    create_time: Optional[int] = None
    last_capabilities_scan: Optional[str] = None
    primary_interface: Optional[int] = None
    sys_objectid: Optional[str] = None
    sys_description: Optional[str] = None
    sys_name: Optional[str] = None
    sys_contact: Optional[str] = None
    sys_location: Optional[str] = None
    categories: list[Category] = Field(default_factory=list)

    # Opaque passthrough
    asset_record: Any = None
    last_egress_flow: Any = None
    last_ingress_flow: Any = None


class Event(WireModel):
    """Event raised against a node."""

    id: int
    node_id: int
    node_label: Optional[str] = None
    uei: Optional[str] = None
    label: Optional[str] = None
    severity: Optional[str] = None
    source: Optional[str] = None
    description: Optional[str] = None
    display: Optional[str] = None
    location: Optional[str] = None
    log: Optional[str] = None
    log_message: Optional[str] = None
    parameters: list[Any] = Field(default_factory=list)
    create_time: Optional[int] = None
    time: Optional[int] = None


class Alarm(WireModel):
    """Alarm on a node. ``last_event`` is forwarded as received."""

    id: str
    node_id: int
    node_label: Optional[str] = None
    severity: Optional[str] = None
    uei: Optional[str] = None
    count: Optional[int] = None
    log_message: Optional[str] = None
    last_event: Any = None


class SnmpInterface(WireModel):
    """SNMP view of a physical interface."""

    id: int
    if_index: Optional[int] = None
    if_admin_status: Optional[int] = None
    if_oper_status: Optional[int] = None
    if_speed: Optional[int] = None
    if_type: Optional[int] = None
    collect: Optional[bool] = None
    collect_flag: Optional[str] = None
    collection_user_specified: Optional[bool] = None
    has_flows: Optional[bool] = None
    has_ingress_flows: Optional[bool] = None
    has_egress_flows: Optional[bool] = None
    last_capsd_poll: Optional[int] = None
    last_snmp_poll: Optional[int] = None
    poll: Optional[bool] = None

    # Opaque passthrough
    if_alias: Any = None
    if_descr: Any = None
    if_name: Any = None
    phys_addr: Any = None
    last_egress_flow: Any = None
    last_ingress_flow: Any = None


class IpInterface(WireModel):
    """IP interface of a node, owning at most one SNMP interface."""

    id: str
    node_id: int
    ip_address: Optional[str] = None
    if_index: Optional[str] = None
    is_managed: Optional[str] = None
    is_down: Optional[bool] = None
    host_name: Optional[str] = None
    last_capsd_poll: Optional[int] = None
    monitored_service_count: Optional[int] = None
    snmp_interface: Optional[SnmpInterface] = None
    snmp_primary: Optional[str] = None
    last_egress_flow: Any = None
    last_ingress_flow: Any = None


class Outage(WireModel):
    """Service outage, denormalized with node and interface details."""

    outage_id: int
    node_id: int
    ip_address: Optional[str] = None
    hostname: Optional[str] = None
    service_name: Optional[str] = None
    # Wire name kept as the backend spells it.
    service_is: Optional[int] = None
    node_label: Optional[str] = None
    location: Optional[str] = None


class IfService(WireModel):
    """Monitored service on an IP interface."""

    id: str
    ip_address: Optional[str] = None
    ip_interface_id: Optional[int] = None
    is_down: Optional[bool] = None
    is_monitored: Optional[bool] = None
    node: Optional[str] = None
    service_name: Optional[str] = None
    status: Optional[str] = None
    status_code: Optional[str] = None


class ServiceAvailability(WireModel):
    id: int
    name: Optional[str] = None
    availability: Optional[float] = None


class InterfaceAvailability(WireModel):
    id: int
    address: Optional[str] = None
    availability: Optional[float] = None
    services: list[ServiceAvailability] = Field(default_factory=list)


class NodeAvailability(WireModel):
    """
    Availability percentages for a node and its interfaces.

    Values are percentages as sent by the backend; no range is enforced.
    """

    id: int
    availability: Optional[float] = None
    ipinterfaces: list[InterfaceAvailability] = Field(default_factory=list)
    service_count: Optional[int] = Field(None, alias="service-count")
    service_down_count: Optional[int] = Field(None, alias="service-down-count")


class Coordinates(WireModel):
    latitude: float
    longitude: float


class MapNode(WireModel):
    """Node projection placed on a geographic map."""

    id: str
    # [longitude, latitude]
    coordinates: tuple[float, float]
    foreign_source: Optional[str] = None
    foreign_id: Optional[str] = None
    label: Optional[str] = None
    last_capabilities_scan: Optional[str] = None
    primary_interface: Optional[int] = None
    sys_objectid: Optional[str] = None
    sys_description: Optional[str] = None
    sys_name: Optional[str] = None
    alarm: list[Alarm] = Field(default_factory=list)

    # Opaque passthrough
    label_source: Any = None
    sys_contact: Any = None
    sys_location: Any = None

    @property
    def position(self) -> Coordinates:
        """Coordinates as a latitude/longitude pair."""
        longitude, latitude = self.coordinates
        return Coordinates(latitude=latitude, longitude=longitude)


class SearchContext(WireModel):
    name: str
    weight: int = 0


class SearchResult(WireModel):
    identifier: str
    label: Optional[str] = None
    url: Optional[str] = None
    weight: int = 0
    matches: Any = None
    properties: Any = None


class SearchResultResponse(WireModel):
    """One context group of search results."""

    label: Optional[str] = None
    context: SearchContext
    empty: bool = False
    more: bool = False
    results: list[SearchResult] = Field(default_factory=list)


# Exception classes
class NmsDashError(Exception):
    """Base exception for nmsdash errors."""

    pass


class ShapeMismatchError(NmsDashError):
    """Backend payload does not match the expected entity shape."""

    def __init__(self, entity: str, errors: Optional[list[Any]] = None):
        self.entity = entity
        self.errors = errors or []
        super().__init__(
            f"Payload does not match {entity} ({len(self.errors)} error(s))"
        )


class RequestFailedError(NmsDashError):
    """Request to the monitoring backend failed."""

    def __init__(
        self,
        url: str,
        status_code: Optional[int] = None,
        reason: str = "",
    ):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        status = f" [{status_code}]" if status_code is not None else ""
        super().__init__(f"Request to {url} failed{status}: {reason}")


class ConfigurationError(NmsDashError):
    """Invalid store or client configuration."""

    pass


class DuplicateModuleError(ConfigurationError):
    """A state module is already registered under this key."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"State module already registered: {key}")


class StateModuleNotFoundError(ConfigurationError):
    """No state module registered under this key."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"State module not found: {key}")


class UnknownOperationError(NmsDashError):
    """A state module has no action, mutation or getter with this name."""

    def __init__(self, key: str, kind: str, name: str):
        self.key = key
        self.kind = kind
        self.name = name
        super().__init__(f"Unknown {kind} '{name}' on state module '{key}'")
