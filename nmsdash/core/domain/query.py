"""
Query construction models.

Two sort conventions meet here: the table widget reports direction as
``sortOrder`` (1 ascending, -1 descending) while the backend expects an
``order`` token ("asc" / "desc"). The conversion lives in this module and
nowhere else.
"""

from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from nmsdash.core.domain.models import WireModel


class SortDirection(str, Enum):
    """Sort direction tokens emitted by the table widget."""

    ASCENDING = "asc"
    DESCENDING = "desc"
    NONE = "none"


SortOrder = Literal[1, -1]

_ORDER_TO_DIRECTION: dict[int, SortDirection] = {
    1: SortDirection.ASCENDING,
    -1: SortDirection.DESCENDING,
}
_DIRECTION_TO_ORDER: dict[SortDirection, int] = {
    direction: order for order, direction in _ORDER_TO_DIRECTION.items()
}


def _normalize_direction(value: Any) -> Any:
    if isinstance(value, str) and not isinstance(value, SortDirection):
        return value.strip().lower()
    return value


def sort_order_to_direction(sort_order: int) -> SortDirection:
    """
    Map a table ``sortOrder`` to a direction token.

    Raises:
        ValueError: If sort_order is not 1 or -1
    """
    try:
        return _ORDER_TO_DIRECTION[sort_order]
    except KeyError:
        raise ValueError(f"sortOrder must be 1 or -1, got {sort_order!r}") from None


def direction_to_sort_order(direction: SortDirection) -> int:
    """
    Map a direction token back to a table ``sortOrder``.

    Raises:
        ValueError: For SortDirection.NONE, which has no numeric form
    """
    direction = SortDirection(_normalize_direction(direction))
    try:
        return _DIRECTION_TO_ORDER[direction]
    except KeyError:
        raise ValueError(f"{direction.value!r} has no sortOrder equivalent") from None


class FeatherSortObject(WireModel):
    """Sort descriptor produced by the sort UI."""

    property: str
    value: SortDirection

    @field_validator("value", mode="before")
    @classmethod
    def _normalize_value(cls, value: Any) -> Any:
        return _normalize_direction(value)


class SortProps(FeatherSortObject):
    """
    Sort event from the data table, with its pagination context.

    The widget reports the sort twice, as ``property``/``value`` and as
    ``sortField``/``sortOrder``. Both must describe the same sort.
    """

    filters: dict[str, Any] = Field(default_factory=dict)
    first: int = Field(0, ge=0)
    rows: int = Field(ge=0)
    sort_field: Optional[str] = None
    sort_order: SortOrder

    # Opaque passthrough
    multi_sort_meta: Any = None
    original_event: Any = None

    @model_validator(mode="after")
    def _check_consistent(self) -> "SortProps":
        if self.sort_field is not None and self.sort_field != self.property:
            raise ValueError(
                f"sortField {self.sort_field!r} does not match property {self.property!r}"
            )
        if self.value != sort_order_to_direction(self.sort_order):
            raise ValueError(
                f"sortOrder {self.sort_order} does not match direction {self.value.value!r}"
            )
        return self


class QueryParameters(BaseModel):
    """
    Parameters for a paginated, sorted, filtered list request.

    Unrecognized keys are kept and forwarded to the backend as-is.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    limit: Optional[int] = Field(None, ge=0)
    offset: Optional[int] = Field(None, ge=0)
    search: Optional[str] = Field(None, alias="_s")
    order_by: Optional[str] = Field(None, alias="orderBy")
    order: Optional[SortDirection] = None

    @field_validator("order", mode="before")
    @classmethod
    def _normalize_order(cls, value: Any) -> Any:
        return _normalize_direction(value)

    @classmethod
    def coerce(
        cls, value: "QueryParameters | dict[str, Any] | None"
    ) -> "QueryParameters":
        """Accept parameters as a model, a plain mapping or None."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        return cls.model_validate(value)

    def to_params(self) -> dict[str, Any]:
        """Outbound wire mapping; unset keys are omitted."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    def merge(self, **overrides: Any) -> "QueryParameters":
        """Return a copy with the given keys replaced."""
        values = self.model_dump(exclude_none=True)
        values.update(overrides)
        return type(self).model_validate(values)

    def to_sort_object(self) -> Optional[FeatherSortObject]:
        """Re-derive the sort descriptor, or None if unsorted."""
        if self.order_by is None or self.order is None:
            return None
        return FeatherSortObject(property=self.order_by, value=self.order)

    @classmethod
    def from_sort(
        cls,
        sort: FeatherSortObject,
        base: Optional["QueryParameters"] = None,
    ) -> "QueryParameters":
        """
        Apply a sort descriptor. SortDirection.NONE clears ordering.

        Args:
            sort: Descriptor from the sort UI
            base: Parameters to keep (filter, pagination)
        """
        base = base or cls()
        if sort.value == SortDirection.NONE:
            return base.merge(order_by=None, order=None)
        return base.merge(order_by=sort.property, order=sort.value)

    @classmethod
    def from_table_event(
        cls,
        props: SortProps,
        base: Optional["QueryParameters"] = None,
    ) -> "QueryParameters":
        """
        Build parameters from a table sort/page event.

        ``first`` and ``rows`` become offset and limit; the sort comes from
        ``property`` and ``value``, which SortProps keeps consistent with
        ``sortField`` and ``sortOrder``.
        """
        base = base or cls()
        return base.merge(
            offset=props.first,
            limit=props.rows,
            order_by=props.property,
            order=props.value,
        )


class AlarmQueryParameters(WireModel):
    """Alarm action flags. Only flags that were set are sent."""

    ack: Optional[bool] = None
    clear: Optional[bool] = None
    escalate: Optional[bool] = None

    def to_params(self) -> dict[str, bool]:
        return self.model_dump(exclude_none=True)


class AlarmModificationQueryVariable(WireModel):
    """Request to acknowledge, clear or escalate one alarm."""

    path_variable: str
    query_parameters: AlarmQueryParameters = Field(default_factory=AlarmQueryParameters)

    @classmethod
    def acknowledge(cls, alarm_id: str | int) -> "AlarmModificationQueryVariable":
        return cls(path_variable=alarm_id, query_parameters=AlarmQueryParameters(ack=True))

    @classmethod
    def unacknowledge(cls, alarm_id: str | int) -> "AlarmModificationQueryVariable":
        return cls(path_variable=alarm_id, query_parameters=AlarmQueryParameters(ack=False))

    @classmethod
    def clear(cls, alarm_id: str | int) -> "AlarmModificationQueryVariable":
        return cls(path_variable=alarm_id, query_parameters=AlarmQueryParameters(clear=True))

    @classmethod
    def escalate(cls, alarm_id: str | int) -> "AlarmModificationQueryVariable":
        return cls(
            path_variable=alarm_id, query_parameters=AlarmQueryParameters(escalate=True)
        )
