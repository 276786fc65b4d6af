"""State modules composed into the dashboard store."""

from nmsdash.modules.events import EventsModule, EventsState
from nmsdash.modules.if_services import IfServicesModule, IfServicesState
from nmsdash.modules.nodes import NodesModule, NodesState
from nmsdash.modules.search import SearchModule, SearchState
from nmsdash.modules.spinner import SpinnerModule, SpinnerState

# Registration order of the default store
DEFAULT_MODULES: tuple[type, ...] = (
    SearchModule,
    NodesModule,
    EventsModule,
    IfServicesModule,
    SpinnerModule,
)

__all__ = [
    "DEFAULT_MODULES",
    "EventsModule",
    "EventsState",
    "IfServicesModule",
    "IfServicesState",
    "NodesModule",
    "NodesState",
    "SearchModule",
    "SearchState",
    "SpinnerModule",
    "SpinnerState",
]
