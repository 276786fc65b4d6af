"""Node inventory state and per-node details."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from nmsdash.core.domain.envelopes import (
    IpInterfacePage,
    NodePage,
    OutagePage,
    SnmpInterfacePage,
)
from nmsdash.core.domain.models import (
    IpInterface,
    Node,
    NodeAvailability,
    Outage,
    SnmpInterface,
)
from nmsdash.core.domain.query import QueryParameters
from nmsdash.sdk.decorators import action, getter, mutation, state_module
from nmsdash.sdk.module import BaseStateModule

QueryArg = Optional[QueryParameters | dict[str, Any]]


class NodesState(BaseModel):
    # Node list page
    nodes: list[Node] = Field(default_factory=list)
    total_count: int = 0
    offset: int = 0

    # Selected node details
    node: Optional[Node] = None
    ip_interfaces: list[IpInterface] = Field(default_factory=list)
    ip_interfaces_total_count: int = 0
    snmp_interfaces: list[SnmpInterface] = Field(default_factory=list)
    snmp_interfaces_total_count: int = 0
    outages: list[Outage] = Field(default_factory=list)
    outages_total_count: int = 0
    availability: Optional[NodeAvailability] = None


@state_module(key="nodes", description="Node list and details of the selected node")
class NodesModule(BaseStateModule):
    """
    Holds the node list page plus everything the node detail view shows.

    Every fetch replaces the corresponding collection wholesale.
    """

    def initial_state(self) -> NodesState:
        return NodesState()

    # === Mutations ===

    @mutation()
    def save_nodes(self, page: NodePage) -> None:
        self._state.nodes = list(page.nodes)
        self._state.total_count = page.total_count
        self._state.offset = page.offset

    @mutation()
    def save_node(self, node: Optional[Node]) -> None:
        self._state.node = node

    @mutation()
    def save_ip_interfaces(self, page: IpInterfacePage) -> None:
        self._state.ip_interfaces = list(page.ip_interfaces)
        self._state.ip_interfaces_total_count = page.total_count

    @mutation()
    def save_snmp_interfaces(self, page: SnmpInterfacePage) -> None:
        self._state.snmp_interfaces = list(page.snmp_interfaces)
        self._state.snmp_interfaces_total_count = page.total_count

    @mutation()
    def save_outages(self, page: OutagePage) -> None:
        self._state.outages = list(page.outages)
        self._state.outages_total_count = page.total_count

    @mutation()
    def save_availability(self, availability: Optional[NodeAvailability]) -> None:
        self._state.availability = availability

    # === Actions ===

    @action()
    async def get_nodes(self, query: QueryArg = None) -> NodePage:
        params = QueryParameters.coerce(query)
        return await self.fetch(
            "get_nodes",
            lambda: self.context.api.get_nodes(params),
            "save_nodes",
        )

    @action()
    async def get_node_by_id(self, node_id: str | int) -> Node:
        return await self.fetch(
            "get_node_by_id",
            lambda: self.context.api.get_node_by_id(str(node_id)),
            "save_node",
        )

    @action()
    async def get_node_ip_interfaces(self, query: QueryArg = None) -> IpInterfacePage:
        params = QueryParameters.coerce(query)
        return await self.fetch(
            "get_node_ip_interfaces",
            lambda: self.context.api.get_ip_interfaces(params),
            "save_ip_interfaces",
        )

    @action()
    async def get_node_snmp_interfaces(self, query: QueryArg = None) -> SnmpInterfacePage:
        params = QueryParameters.coerce(query)
        return await self.fetch(
            "get_node_snmp_interfaces",
            lambda: self.context.api.get_snmp_interfaces(params),
            "save_snmp_interfaces",
        )

    @action()
    async def get_node_outages(self, node_id: str | int) -> OutagePage:
        return await self.fetch(
            "get_node_outages",
            lambda: self.context.api.get_node_outages(str(node_id)),
            "save_outages",
        )

    @action()
    async def get_node_availability(self, node_id: str | int) -> NodeAvailability:
        return await self.fetch(
            "get_node_availability",
            lambda: self.context.api.get_node_availability(str(node_id)),
            "save_availability",
        )

    # === Getters ===

    @getter()
    def nodes(self) -> list[Node]:
        return list(self._state.nodes)

    @getter()
    def total_count(self) -> int:
        return self._state.total_count

    @getter()
    def node(self) -> Optional[Node]:
        return self._state.node

    @getter()
    def ip_interfaces(self) -> list[IpInterface]:
        return list(self._state.ip_interfaces)

    @getter()
    def snmp_interfaces(self) -> list[SnmpInterface]:
        return list(self._state.snmp_interfaces)

    @getter()
    def outages(self) -> list[Outage]:
        return list(self._state.outages)

    @getter()
    def availability(self) -> Optional[NodeAvailability]:
        return self._state.availability
