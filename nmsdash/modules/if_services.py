"""Monitored interface services state."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from nmsdash.core.domain.envelopes import IfServicePage
from nmsdash.core.domain.models import IfService
from nmsdash.core.domain.query import QueryParameters
from nmsdash.sdk.decorators import action, getter, mutation, state_module
from nmsdash.sdk.module import BaseStateModule


class IfServicesState(BaseModel):
    if_services: list[IfService] = Field(default_factory=list)
    total_count: int = 0
    offset: int = 0


@state_module(key="interface-services", description="Monitored services per interface")
class IfServicesModule(BaseStateModule):
    def initial_state(self) -> IfServicesState:
        return IfServicesState()

    @mutation()
    def save_if_services(self, page: IfServicePage) -> None:
        self._state.if_services = list(page.services)
        self._state.total_count = page.total_count
        self._state.offset = page.offset

    @action()
    async def get_if_services(
        self, query: Optional[QueryParameters | dict[str, Any]] = None
    ) -> IfServicePage:
        params = QueryParameters.coerce(query)
        return await self.fetch(
            "get_if_services",
            lambda: self.context.api.get_if_services(params),
            "save_if_services",
        )

    @getter()
    def if_services(self) -> list[IfService]:
        return list(self._state.if_services)

    @getter()
    def total_count(self) -> int:
        return self._state.total_count

    @getter()
    def down_services(self) -> list[IfService]:
        return [service for service in self._state.if_services if service.is_down]
