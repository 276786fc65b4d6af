"""Base state module class and the context handed to it by the store."""

import copy
import itertools
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Optional, TypeVar

import structlog
from pydantic import BaseModel

from nmsdash.core.domain.models import (
    ConfigurationError,
    NmsDashError,
    UnknownOperationError,
)
from nmsdash.core.ports.outbound.monitoring_api import IMonitoringApiPort
from nmsdash.sdk.decorators import ACTION, GETTER, MUTATION, get_module_metadata

logger = structlog.get_logger(__name__)

T = TypeVar("T")

SPINNER_KEY = "spinner"


class ModuleContext:
    """
    Context provided to state modules on registration.

    It gives a module access to:
    - The monitoring API port
    - Root dispatch, for reporting to other modules (e.g. the spinner)
    """

    def __init__(
        self,
        store: Any,  # IStateRegistryPort
        api: Optional[IMonitoringApiPort] = None,
    ):
        self._store = store
        self._api = api

    @property
    def api(self) -> IMonitoringApiPort:
        """
        Monitoring API port.

        Raises:
            ConfigurationError: If the store was built without one
        """
        if self._api is None:
            raise ConfigurationError("No monitoring API configured for this store")
        return self._api

    def has_module(self, key: str) -> bool:
        return self._store.has_module(key)

    async def dispatch(self, path: str, *args: Any, **kwargs: Any) -> Any:
        """Dispatch an action on any registered module."""
        return await self._store.dispatch(path, *args, **kwargs)


class BaseStateModule(ABC):
    """
    Base class for state modules.

    A module owns its state exclusively: readers get copies, and only
    methods marked with @mutation change it.

    Usage:
        @state_module(key="events")
        class EventsModule(BaseStateModule):
            def initial_state(self) -> EventsState:
                return EventsState()

            @mutation()
            def save_events(self, page: EventPage) -> None:
                self._state.events = list(page.events)

            @action()
            async def get_events(self, query=None) -> EventPage:
                return await self.fetch(
                    "get_events",
                    lambda: self.context.api.get_events(query),
                    "save_events",
                )
    """

    def __init__(self) -> None:
        metadata = get_module_metadata(type(self))
        if metadata is None:
            raise ConfigurationError(
                f"{type(self).__name__} is not decorated with @state_module"
            )
        self._metadata = metadata
        self._context: Optional[ModuleContext] = None
        self._state = self.initial_state()
        # Monotonic across reset()
        self._token_counter = itertools.count(1)
        # Latest issued request token per action
        self._tokens: dict[str, int] = {}

    @abstractmethod
    def initial_state(self) -> BaseModel:
        """Build the empty state for this module."""
        ...

    @property
    def key(self) -> str:
        return self._metadata["key"]

    @property
    def description(self) -> str:
        return self._metadata["description"]

    @property
    def state(self) -> BaseModel:
        """Deep copy of the current state."""
        return self._state.model_copy(deep=True)

    @property
    def context(self) -> ModuleContext:
        """
        Context set by the store.

        Raises:
            ConfigurationError: If the module is not registered
        """
        if self._context is None:
            raise ConfigurationError(f"State module '{self.key}' is not registered")
        return self._context

    @property
    def is_registered(self) -> bool:
        return self._context is not None

    def set_context(self, context: ModuleContext) -> None:
        self._context = context

    def operations(self, kind: str) -> list[str]:
        """Names of this module's actions, mutations or getters."""
        return sorted(self._metadata[kind])

    def _resolve(self, kind: str, name: str) -> Callable[..., Any]:
        attr_name = self._metadata[kind].get(name)
        if attr_name is None:
            raise UnknownOperationError(self.key, kind, name)
        return getattr(self, attr_name)

    # === Operations ===

    def commit(self, name: str, *args: Any) -> None:
        """Apply a mutation."""
        self._resolve(MUTATION, name)(*args)
        logger.debug("state_committed", module=self.key, mutation=name)

    async def dispatch(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Run an action."""
        return await self._resolve(ACTION, name)(*args, **kwargs)

    def get(self, name: str) -> Any:
        """Read a getter. The result is a deep copy of the slice data."""
        return copy.deepcopy(self._resolve(GETTER, name)())

    def reset(self) -> None:
        """Drop all state and forget in-flight requests."""
        self._state = self.initial_state()
        self._tokens.clear()

    # === Fetch helpers ===

    @asynccontextmanager
    async def loading(self) -> AsyncIterator[None]:
        """
        Keep the loading indicator up while the block runs.

        The indicator is released on success and on failure alike.
        """
        notify = self.is_registered and self.context.has_module(SPINNER_KEY)
        if notify:
            await self.context.dispatch(f"{SPINNER_KEY}/start")
        try:
            yield
        finally:
            if notify:
                await self.context.dispatch(f"{SPINNER_KEY}/stop")

    def _issue_token(self, action_name: str) -> int:
        token = next(self._token_counter)
        self._tokens[action_name] = token
        return token

    def _is_latest(self, action_name: str, token: int) -> bool:
        return self._tokens.get(action_name) == token

    async def fetch(
        self,
        action_name: str,
        request: Callable[[], Awaitable[T]],
        mutation_name: str,
    ) -> T:
        """
        Run a backend request and commit its result.

        When the same action is in flight more than once, only the most
        recently issued request commits; earlier responses are returned to
        their callers but not applied.

        Raises:
            RequestFailedError: If the request fails
            ShapeMismatchError: If the response has the wrong shape
        """
        token = self._issue_token(action_name)
        try:
            async with self.loading():
                result = await request()
        except NmsDashError as e:
            logger.warning(
                "state_action_failed",
                module=self.key,
                action=action_name,
                error=str(e),
            )
            raise

        if self._is_latest(action_name, token):
            # The caller keeps `result`; the slice owns its own copy
            self.commit(mutation_name, copy.deepcopy(result))
        else:
            logger.debug(
                "stale_response_discarded",
                module=self.key,
                action=action_name,
                token=token,
            )
        return result
