"""REST implementation of the monitoring API port."""

from typing import Any, Optional

import structlog

from nmsdash.core.domain.envelopes import (
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
    Node,
    NodeAvailability,
    SearchResultResponse,
    ShapeMismatchError,
)
from nmsdash.core.domain.query import AlarmModificationQueryVariable, QueryParameters
from nmsdash.core.domain.topology import GraphNodesResponse
from nmsdash.core.ports.outbound.monitoring_api import IMonitoringApiPort
from nmsdash.core.ports.outbound.rest_client import HttpResponse, IRestClientPort

logger = structlog.get_logger(__name__)

V2_PATH = "api/v2"
REST_PATH = "rest"


class RestMonitoringApiAdapter(IMonitoringApiPort):
    """
    Monitoring API over the backend's REST endpoints.

    Paginated collections come from the v2 API; outages, availability,
    search and graphs from the legacy REST API. Both are resolved against
    the REST client's base URL.
    """

    def __init__(
        self,
        rest_client: IRestClientPort,
        v2_path: str = V2_PATH,
        rest_path: str = REST_PATH,
    ):
        """
        Args:
            rest_client: Configured REST client
            v2_path: Path prefix of the v2 API
            rest_path: Path prefix of the legacy REST API
        """
        self._rest = rest_client
        self._v2_path = v2_path.strip("/")
        self._rest_path = rest_path.strip("/")

    def _v2(self, resource: str) -> str:
        return f"{self._v2_path}/{resource}"

    def _legacy(self, resource: str) -> str:
        return f"{self._rest_path}/{resource}"

    @staticmethod
    def _payload(response: HttpResponse, entity: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ShapeMismatchError(entity, [{"msg": "response body is not JSON"}]) from e

    async def _get_page(
        self,
        path: str,
        envelope_cls: type[PageEnvelope],
        query: Optional[QueryParameters],
    ) -> Any:
        params = QueryParameters.coerce(query).to_params()
        response = await self._rest.get(path, params=params)
        page = parse_page(envelope_cls, self._payload(response, envelope_cls.__name__))
        logger.debug(
            "page_fetched",
            path=path,
            count=page.count,
            offset=page.offset,
            total_count=page.total_count,
        )
        return page

    # === Collections ===

    async def get_nodes(self, query: Optional[QueryParameters] = None) -> NodePage:
        return await self._get_page(self._v2("nodes"), NodePage, query)

    async def get_events(self, query: Optional[QueryParameters] = None) -> EventPage:
        return await self._get_page(self._v2("events"), EventPage, query)

    async def get_alarms(self, query: Optional[QueryParameters] = None) -> AlarmPage:
        return await self._get_page(self._v2("alarms"), AlarmPage, query)

    async def get_ip_interfaces(
        self, query: Optional[QueryParameters] = None
    ) -> IpInterfacePage:
        return await self._get_page(self._v2("ipinterfaces"), IpInterfacePage, query)

    async def get_snmp_interfaces(
        self, query: Optional[QueryParameters] = None
    ) -> SnmpInterfacePage:
        return await self._get_page(self._v2("snmpinterfaces"), SnmpInterfacePage, query)

    async def get_if_services(
        self, query: Optional[QueryParameters] = None
    ) -> IfServicePage:
        return await self._get_page(self._v2("ifservices"), IfServicePage, query)

    async def get_node_outages(self, node_id: str) -> OutagePage:
        return await self._get_page(self._legacy(f"outages/forNode/{node_id}"), OutagePage, None)

    # === Single entities ===

    async def get_node_by_id(self, node_id: str) -> Node:
        response = await self._rest.get(self._v2(f"nodes/{node_id}"))
        return parse_entity(Node, self._payload(response, "Node"))

    async def get_node_availability(self, node_id: str) -> NodeAvailability:
        response = await self._rest.get(self._legacy(f"availability/nodes/{node_id}"))
        return parse_entity(NodeAvailability, self._payload(response, "NodeAvailability"))

    async def get_graph_nodes(self, node_id: str) -> GraphNodesResponse:
        response = await self._rest.get(self._legacy(f"graphs/nodes/{node_id}"))
        payload = self._payload(response, "GraphNodesResponse")
        if payload is None:
            return GraphNodesResponse()
        return parse_entity(GraphNodesResponse, payload)

    async def search(self, term: str) -> list[SearchResultResponse]:
        response = await self._rest.get(self._legacy("search"), params={"_s": term})
        return parse_list(SearchResultResponse, self._payload(response, "SearchResultResponse"))

    # === Alarm actions ===

    async def modify_alarm(self, variable: AlarmModificationQueryVariable) -> None:
        params = variable.query_parameters.to_params()
        if not params:
            raise ValueError("Alarm modification carries no action flag")

        await self._rest.put(self._v2(f"alarms/{variable.path_variable}"), params=params)

        logger.info(
            "alarm_modified",
            alarm_id=variable.path_variable,
            actions=sorted(params),
        )
