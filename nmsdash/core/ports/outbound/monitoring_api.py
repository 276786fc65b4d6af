"""Monitoring backend outbound port interface."""

from abc import ABC, abstractmethod
from typing import Optional

from nmsdash.core.domain.envelopes import (
    AlarmPage,
    EventPage,
    IfServicePage,
    IpInterfacePage,
    NodePage,
    OutagePage,
    SnmpInterfacePage,
)
from nmsdash.core.domain.models import Node, NodeAvailability, SearchResultResponse
from nmsdash.core.domain.query import AlarmModificationQueryVariable, QueryParameters
from nmsdash.core.domain.topology import GraphNodesResponse


class IMonitoringApiPort(ABC):
    """
    Outbound port to the monitoring backend.

    Every method returns validated domain models. Implementations raise
    RequestFailedError when the request fails and ShapeMismatchError when
    the response does not match the expected shape.
    """

    @abstractmethod
    async def get_nodes(self, query: Optional[QueryParameters] = None) -> NodePage:
        """
        Fetch a page of nodes.

        Args:
            query: Pagination, filter and sort parameters

        Returns:
            Page of nodes
        """
        pass

    @abstractmethod
    async def get_node_by_id(self, node_id: str) -> Node:
        pass

    @abstractmethod
    async def get_events(self, query: Optional[QueryParameters] = None) -> EventPage:
        pass

    @abstractmethod
    async def get_alarms(self, query: Optional[QueryParameters] = None) -> AlarmPage:
        pass

    @abstractmethod
    async def modify_alarm(self, variable: AlarmModificationQueryVariable) -> None:
        """
        Acknowledge, clear or escalate an alarm.

        Args:
            variable: Alarm id and the single action flag to apply
        """
        pass

    @abstractmethod
    async def get_ip_interfaces(
        self, query: Optional[QueryParameters] = None
    ) -> IpInterfacePage:
        pass

    @abstractmethod
    async def get_snmp_interfaces(
        self, query: Optional[QueryParameters] = None
    ) -> SnmpInterfacePage:
        pass

    @abstractmethod
    async def get_if_services(
        self, query: Optional[QueryParameters] = None
    ) -> IfServicePage:
        pass

    @abstractmethod
    async def get_node_outages(self, node_id: str) -> OutagePage:
        pass

    @abstractmethod
    async def get_node_availability(self, node_id: str) -> NodeAvailability:
        pass

    @abstractmethod
    async def search(self, term: str) -> list[SearchResultResponse]:
        """
        Run a free-text search across all backend search providers.

        Args:
            term: Search expression

        Returns:
            One result group per search context
        """
        pass

    @abstractmethod
    async def get_graph_nodes(self, node_id: str) -> GraphNodesResponse:
        pass
