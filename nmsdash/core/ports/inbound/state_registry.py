"""State registry inbound port interface."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel


class IStateRegistryPort(ABC):
    """
    Inbound port for the application state store.

    This port defines the interface for:
    - Registering state modules under unique keys
    - Addressing a module's actions, mutations and getters by path
    - Reading a snapshot of the composed state

    Paths have the form ``"<module key>/<operation name>"``, for example
    ``"nodes/get_nodes"``.
    """

    @abstractmethod
    def register_module(self, module: Any) -> str:
        """
        Register a state module.

        Args:
            module: BaseStateModule instance

        Returns:
            Key the module was registered under

        Raises:
            DuplicateModuleError: If the key is already taken
        """
        pass

    @abstractmethod
    def module(self, key: str) -> Any:
        """
        Get a registered module.

        Raises:
            StateModuleNotFoundError: If no module has this key
        """
        pass

    @abstractmethod
    def has_module(self, key: str) -> bool:
        pass

    @abstractmethod
    def commit(self, path: str, *args: Any) -> None:
        """Apply a mutation synchronously."""
        pass

    @abstractmethod
    async def dispatch(self, path: str, *args: Any, **kwargs: Any) -> Any:
        """
        Run an action.

        Returns:
            Whatever the action returns
        """
        pass

    @abstractmethod
    def get(self, path: str) -> Any:
        """Read a getter."""
        pass

    @property
    @abstractmethod
    def state(self) -> dict[str, BaseModel]:
        """Snapshot of every module's state, keyed by module key."""
        pass
