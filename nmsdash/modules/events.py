"""Event list state."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from nmsdash.core.domain.envelopes import EventPage
from nmsdash.core.domain.models import Event
from nmsdash.core.domain.query import QueryParameters
from nmsdash.sdk.decorators import action, getter, mutation, state_module
from nmsdash.sdk.module import BaseStateModule


class EventsState(BaseModel):
    events: list[Event] = Field(default_factory=list)
    total_count: int = 0
    offset: int = 0


@state_module(key="events", description="Paginated event list")
class EventsModule(BaseStateModule):
    def initial_state(self) -> EventsState:
        return EventsState()

    @mutation()
    def save_events(self, page: EventPage) -> None:
        self._state.events = list(page.events)
        self._state.total_count = page.total_count
        self._state.offset = page.offset

    @action()
    async def get_events(
        self, query: Optional[QueryParameters | dict[str, Any]] = None
    ) -> EventPage:
        params = QueryParameters.coerce(query)
        return await self.fetch(
            "get_events",
            lambda: self.context.api.get_events(params),
            "save_events",
        )

    @getter()
    def events(self) -> list[Event]:
        return list(self._state.events)

    @getter()
    def total_count(self) -> int:
        return self._state.total_count
