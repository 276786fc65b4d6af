"""Loading indicator state."""

from pydantic import BaseModel

from nmsdash.sdk.decorators import action, getter, mutation, state_module
from nmsdash.sdk.module import SPINNER_KEY, BaseStateModule


class SpinnerState(BaseModel):
    in_flight: int = 0
    spinner_is_visible: bool = False


@state_module(key=SPINNER_KEY, description="Loading indicator for in-flight requests")
class SpinnerModule(BaseStateModule):
    """
    Counts overlapping requests; the spinner shows while any is in flight.
    """

    def initial_state(self) -> SpinnerState:
        return SpinnerState()

    @mutation()
    def set_spinner_state(self, in_flight: int) -> None:
        in_flight = max(in_flight, 0)
        self._state.in_flight = in_flight
        self._state.spinner_is_visible = in_flight > 0

    @action()
    async def start(self) -> None:
        self.commit("set_spinner_state", self._state.in_flight + 1)

    @action()
    async def stop(self) -> None:
        self.commit("set_spinner_state", self._state.in_flight - 1)

    @getter()
    def is_visible(self) -> bool:
        return self._state.spinner_is_visible

    @getter()
    def in_flight(self) -> int:
        return self._state.in_flight
