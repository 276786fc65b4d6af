"""Dashboard store - composes state modules into one addressable state."""

from typing import Any, Iterable, Optional

import structlog
from pydantic import BaseModel

from nmsdash.core.domain.models import (
    ConfigurationError,
    DuplicateModuleError,
    StateModuleNotFoundError,
)
from nmsdash.core.ports.inbound.state_registry import IStateRegistryPort
from nmsdash.core.ports.outbound.monitoring_api import IMonitoringApiPort
from nmsdash.modules import DEFAULT_MODULES
from nmsdash.sdk.decorators import ACTION, GETTER, MUTATION
from nmsdash.sdk.module import BaseStateModule, ModuleContext

logger = structlog.get_logger(__name__)


class Store(IStateRegistryPort):
    """
    Registry of state modules.

    The store only routes calls; it never moves data between modules and
    has no transaction spanning them.

    Usage:
        store = create_store(api)
        await store.dispatch("nodes/get_nodes", {"limit": 10})
        nodes = store.get("nodes/nodes")
    """

    def __init__(
        self,
        api: Optional[IMonitoringApiPort] = None,
        modules: Iterable[BaseStateModule] = (),
    ):
        """
        Initialize the store.

        Args:
            api: Monitoring API port handed to every module
            modules: Modules to register, in order
        """
        self._api = api
        self._modules: dict[str, BaseStateModule] = {}

        for module in modules:
            self.register_module(module)

    @property
    def api(self) -> Optional[IMonitoringApiPort]:
        return self._api

    @property
    def keys(self) -> list[str]:
        """Module keys in registration order."""
        return list(self._modules)

    # === Registration ===

    def register_module(self, module: BaseStateModule) -> str:
        """Register a state module under its key."""
        if not isinstance(module, BaseStateModule):
            raise ConfigurationError(
                f"Expected a BaseStateModule, got {type(module).__name__}"
            )

        key = module.key
        if key in self._modules:
            logger.error("state_module_duplicate", key=key)
            raise DuplicateModuleError(key)
        if module.is_registered:
            raise ConfigurationError(f"State module '{key}' belongs to another store")

        module.set_context(ModuleContext(store=self, api=self._api))
        self._modules[key] = module

        logger.info(
            "state_module_registered",
            key=key,
            actions=len(module.operations(ACTION)),
            mutations=len(module.operations(MUTATION)),
            getters=len(module.operations(GETTER)),
        )

        return key

    def module(self, key: str) -> BaseStateModule:
        try:
            return self._modules[key]
        except KeyError:
            raise StateModuleNotFoundError(key) from None

    def has_module(self, key: str) -> bool:
        return key in self._modules

    # === Routing ===

    def _split(self, path: str) -> tuple[BaseStateModule, str]:
        key, sep, name = path.partition("/")
        if not sep or not name:
            raise ValueError(f"Expected '<module>/<operation>', got {path!r}")
        return self.module(key), name

    def commit(self, path: str, *args: Any) -> None:
        module, name = self._split(path)
        module.commit(name, *args)

    async def dispatch(self, path: str, *args: Any, **kwargs: Any) -> Any:
        module, name = self._split(path)
        logger.debug("action_dispatched", module=module.key, action=name)
        return await module.dispatch(name, *args, **kwargs)

    def get(self, path: str) -> Any:
        module, name = self._split(path)
        return module.get(name)

    @property
    def state(self) -> dict[str, BaseModel]:
        return {key: module.state for key, module in self._modules.items()}

    def reset(self) -> None:
        """Return every module to its initial state."""
        for module in self._modules.values():
            module.reset()
        logger.info("store_reset", modules=len(self._modules))


def create_store(api: Optional[IMonitoringApiPort] = None) -> Store:
    """
    Build the dashboard store with the standard modules.

    Modules are registered in a fixed order: search, nodes, events,
    interface-services, spinner.
    """
    return Store(api=api, modules=[module_cls() for module_cls in DEFAULT_MODULES])
