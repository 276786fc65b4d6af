"""SDK for writing state modules."""

from nmsdash.sdk.decorators import action, getter, mutation, state_module
from nmsdash.sdk.module import BaseStateModule, ModuleContext

__all__ = [
    "BaseStateModule",
    "ModuleContext",
    "action",
    "getter",
    "mutation",
    "state_module",
]
