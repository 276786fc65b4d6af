"""Decorators for defining state modules and their operations."""

import inspect
from typing import Any, Callable, Optional, TypeVar

# Type variables for decorated functions
F = TypeVar("F", bound=Callable[..., Any])

ACTION = "action"
MUTATION = "mutation"
GETTER = "getter"

# Module metadata storage
_MODULE_REGISTRY: dict[type, dict[str, Any]] = {}


def state_module(
    key: str,
    description: str = "",
) -> Callable[[type], type]:
    """
    Decorator to mark a class as a state module.

    Usage:
        @state_module(key="events")
        class EventsModule(BaseStateModule):
            @action()
            async def get_events(self, query):
                ...

    Args:
        key: Unique key the module is addressed by in the store
        description: Optional module description

    Returns:
        Decorated class with module metadata
    """
    if not key or "/" in key:
        raise ValueError(f"Invalid state module key: {key!r}")

    def decorator(cls: type) -> type:
        metadata: dict[str, Any] = {
            "key": key,
            "description": description,
            ACTION: {},
            MUTATION: {},
            GETTER: {},
        }

        # Scan for operation decorators
        for attr_name in dir(cls):
            attr = getattr(cls, attr_name, None)
            operation = getattr(attr, "_nmsdash_operation", None)
            if operation is None:
                continue

            operations = metadata[operation["kind"]]
            if operation["name"] in operations:
                raise ValueError(
                    f"Duplicate {operation['kind']} '{operation['name']}' on {cls.__name__}"
                )
            operations[operation["name"]] = attr_name

        _MODULE_REGISTRY[cls] = metadata
        cls._nmsdash_module = metadata  # type: ignore[attr-defined]

        return cls

    return decorator


def _operation(kind: str, name: Optional[str], is_async: bool) -> Callable[[F], F]:
    def decorator(func: F) -> F:
        op_name = name or func.__name__

        if inspect.iscoroutinefunction(func) != is_async:
            expected = "an async" if is_async else "a synchronous"
            raise TypeError(f"{kind.capitalize()} '{op_name}' must be {expected} function")

        func._nmsdash_operation = {  # type: ignore[attr-defined]
            "kind": kind,
            "name": op_name,
        }
        return func

    return decorator


def action(name: Optional[str] = None) -> Callable[[F], F]:
    """
    Mark an async method as an action.

    Actions talk to the backend and commit mutations with the result.
    """
    return _operation(ACTION, name, is_async=True)


def mutation(name: Optional[str] = None) -> Callable[[F], F]:
    """
    Mark a method as a mutation.

    Mutations are the only code that changes module state. They are
    synchronous so a commit is never interleaved with another coroutine.
    """
    return _operation(MUTATION, name, is_async=False)


def getter(name: Optional[str] = None) -> Callable[[F], F]:
    """Mark a method as a read accessor."""
    return _operation(GETTER, name, is_async=False)


def get_module_metadata(cls: type) -> Optional[dict[str, Any]]:
    """
    Get state module metadata from a class.

    Args:
        cls: Class to get metadata from

    Returns:
        Module metadata if decorated, None otherwise
    """
    return _MODULE_REGISTRY.get(cls)


def is_state_module(cls: type) -> bool:
    return cls in _MODULE_REGISTRY
