"""Payload builders and a fake monitoring API shared by the tests."""

import asyncio
from typing import Any, Optional

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
from nmsdash.core.ports.outbound.monitoring_api import IMonitoringApiPort


def node_payload(node_id: int, label: Optional[str] = None) -> dict[str, Any]:
    return {
        "id": str(node_id),
        "label": label or f"node-{node_id}",
        "location": "Default",
        "type": "A",
        "foreignSource": "servers",
        "foreignId": f"fid-{node_id}",
        "labelSource": "U",
        "createTime": 1700000000000,
        "lastCapabilitiesScan": "2024-01-01T00:00:00.000Z",
        "primaryInterface": 1,
        "sysObjectid": ".1.3.6.1.4.1.8072.3.2.10",
        "sysDescription": "Linux",
        "sysName": f"host{node_id}",
        "sysContact": "noc@example.com",
        "sysLocation": "rack 4",
        "assetRecord": {"building": "HQ", "floor": 2},
        "categories": [{"id": 1, "name": "Servers", "authorizedGroups": ["admin"]}],
    }


def node_page_payload(
    count: int, offset: int = 0, total_count: Optional[int] = None
) -> dict[str, Any]:
    return {
        "count": count,
        "offset": offset,
        "totalCount": total_count if total_count is not None else count,
        "node": [node_payload(offset + i + 1) for i in range(count)],
    }


def event_payload(event_id: int, node_id: int = 1) -> dict[str, Any]:
    return {
        "id": event_id,
        "uei": "uei.opennms.org/nodes/nodeDown",
        "label": "Node down",
        "severity": "MAJOR",
        "source": "poller",
        "nodeId": node_id,
        "nodeLabel": f"node-{node_id}",
        "logMessage": "Node is down.",
        "parameters": [{"name": "reason", "value": "timeout"}],
        "createTime": 1700000000000,
        "time": 1700000000000,
    }


def if_service_payload(service_id: int, is_down: bool = False) -> dict[str, Any]:
    return {
        "id": str(service_id),
        "ipAddress": "10.0.0.1",
        "ipInterfaceId": 7,
        "isDown": is_down,
        "isMonitored": True,
        "node": "node-1",
        "serviceName": "ICMP",
        "status": "A",
        "statusCode": "A",
    }


class FakeMonitoringApi(IMonitoringApiPort):
    """In-memory API returning canned pages and recording every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.node_page = NodePage.model_validate(node_page_payload(2))
        self.event_page = EventPage.model_validate(
            {"count": 1, "offset": 0, "totalCount": 1, "event": [event_payload(1)]}
        )
        self.if_service_page = IfServicePage.model_validate(
            {
                "count": 2,
                "offset": 0,
                "totalCount": 2,
                "monitored-service": [if_service_payload(1), if_service_payload(2, is_down=True)],
            }
        )
        self.search_results = [
            SearchResultResponse.model_validate(
                {
                    "label": "Nodes",
                    "context": {"name": "Node", "weight": 10},
                    "empty": False,
                    "more": False,
                    "results": [
                        {
                            "identifier": "1",
                            "label": "node-1",
                            "url": "element/node.jsp?node=1",
                            "weight": 1,
                            "matches": [{"id": "label", "value": "node-1"}],
                            "properties": {"label": "node-1"},
                        }
                    ],
                }
            )
        ]
        self.error: Optional[Exception] = None
        # When set, get_nodes waits on the event registered for its call index
        self.gates: dict[int, asyncio.Event] = {}
        self.node_pages_by_call: dict[int, NodePage] = {}

    def _record(self, name: str, arg: Any = None) -> None:
        self.calls.append((name, arg))
        if self.error is not None:
            raise self.error

    async def get_nodes(self, query: Optional[QueryParameters] = None) -> NodePage:
        index = len([c for c in self.calls if c[0] == "get_nodes"])
        self._record("get_nodes", query)
        if index in self.gates:
            await self.gates[index].wait()
        return self.node_pages_by_call.get(index, self.node_page)

    async def get_node_by_id(self, node_id: str) -> Node:
        self._record("get_node_by_id", node_id)
        return Node.model_validate(node_payload(int(node_id)))

    async def get_events(self, query: Optional[QueryParameters] = None) -> EventPage:
        self._record("get_events", query)
        return self.event_page

    async def get_alarms(self, query: Optional[QueryParameters] = None) -> AlarmPage:
        self._record("get_alarms", query)
        return AlarmPage.empty()

    async def modify_alarm(self, variable: AlarmModificationQueryVariable) -> None:
        self._record("modify_alarm", variable)

    async def get_ip_interfaces(
        self, query: Optional[QueryParameters] = None
    ) -> IpInterfacePage:
        self._record("get_ip_interfaces", query)
        return IpInterfacePage.model_validate(
            {
                "count": 1,
                "offset": 0,
                "totalCount": 1,
                "ipInterface": [
                    {
                        "id": "11",
                        "nodeId": 1,
                        "ipAddress": "10.0.0.1",
                        "isDown": False,
                        "snmpInterface": {"id": 3, "ifIndex": 2, "ifName": "eth0"},
                    }
                ],
            }
        )

    async def get_snmp_interfaces(
        self, query: Optional[QueryParameters] = None
    ) -> SnmpInterfacePage:
        self._record("get_snmp_interfaces", query)
        return SnmpInterfacePage.empty()

    async def get_if_services(
        self, query: Optional[QueryParameters] = None
    ) -> IfServicePage:
        self._record("get_if_services", query)
        return self.if_service_page

    async def get_node_outages(self, node_id: str) -> OutagePage:
        self._record("get_node_outages", node_id)
        return OutagePage.model_validate(
            {
                "count": 1,
                "offset": 0,
                "totalCount": 1,
                "outage": [
                    {
                        "outageId": 99,
                        "nodeId": int(node_id),
                        "ipAddress": "10.0.0.1",
                        "hostname": "host1",
                        "serviceName": "HTTP",
                    }
                ],
            }
        )

    async def get_node_availability(self, node_id: str) -> NodeAvailability:
        self._record("get_node_availability", node_id)
        return NodeAvailability.model_validate(
            {
                "id": int(node_id),
                "availability": 99.5,
                "ipinterfaces": [],
                "service-count": 3,
                "service-down-count": 1,
            }
        )

    async def search(self, term: str) -> list[SearchResultResponse]:
        self._record("search", term)
        return self.search_results

    async def get_graph_nodes(self, node_id: str) -> GraphNodesResponse:
        self._record("get_graph_nodes", node_id)
        return GraphNodesResponse()


