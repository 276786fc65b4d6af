"""
Pagination envelopes and the response parsing boundary.

Every list endpoint of the backend wraps its collection in the same
``{count, offset, totalCount}`` envelope. Only the collection key differs
per entity, and some keys carry punctuation, so each envelope maps the
wire key onto an idiomatic attribute explicitly.
"""

from typing import Any, ClassVar, Optional, TypeVar

import structlog
from pydantic import BaseModel, Field, TypeAdapter, ValidationError, model_validator

from nmsdash.core.domain.models import (
    Alarm,
    Event,
    IfService,
    IpInterface,
    Node,
    Outage,
    ShapeMismatchError,
    SnmpInterface,
    WireModel,
)

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class PageEnvelope(WireModel):
    """
    One page of a backend collection.

    Invariants checked on construction:
    - offset >= 0 and count >= 0
    - count <= total_count
    - the collection holds exactly ``count`` items
    """

    collection_field: ClassVar[str] = ""

    count: int = Field(ge=0)
    offset: int = Field(0, ge=0)
    total_count: int = Field(ge=0)

    @property
    def items(self) -> list[Any]:
        """The page collection, whatever its attribute name."""
        return getattr(self, self.collection_field)

    @property
    def has_more(self) -> bool:
        """Whether the backend holds items past this page."""
        return self.offset + self.count < self.total_count

    @classmethod
    def collection_key(cls) -> str:
        """Wire key of the collection for this envelope."""
        field = cls.model_fields[cls.collection_field]
        return field.alias or cls.collection_field

    @classmethod
    def empty(cls: type[M]) -> M:
        return cls(count=0, offset=0, total_count=0)

    @model_validator(mode="after")
    def _check_page(self) -> "PageEnvelope":
        if self.count > self.total_count:
            raise ValueError(
                f"count ({self.count}) exceeds totalCount ({self.total_count})"
            )
        if len(self.items) != self.count:
            raise ValueError(
                f"'{self.collection_key()}' holds {len(self.items)} items, "
                f"count is {self.count}"
            )
        return self


class NodePage(PageEnvelope):
    collection_field: ClassVar[str] = "nodes"
    nodes: list[Node] = Field(default_factory=list, alias="node")


class EventPage(PageEnvelope):
    collection_field: ClassVar[str] = "events"
    events: list[Event] = Field(default_factory=list, alias="event")


class AlarmPage(PageEnvelope):
    # The backend publishes alarm pages under the "node" key.
    collection_field: ClassVar[str] = "alarms"
    alarms: list[Alarm] = Field(default_factory=list, alias="node")


class SnmpInterfacePage(PageEnvelope):
    collection_field: ClassVar[str] = "snmp_interfaces"
    snmp_interfaces: list[SnmpInterface] = Field(
        default_factory=list, alias="snmpInterface"
    )


class IpInterfacePage(PageEnvelope):
    collection_field: ClassVar[str] = "ip_interfaces"
    ip_interfaces: list[IpInterface] = Field(default_factory=list, alias="ipInterface")


class OutagePage(PageEnvelope):
    collection_field: ClassVar[str] = "outages"
    outages: list[Outage] = Field(default_factory=list, alias="outage")


class IfServicePage(PageEnvelope):
    collection_field: ClassVar[str] = "services"
    services: list[IfService] = Field(default_factory=list, alias="monitored-service")


ENVELOPE_COLLECTION_KEYS: dict[type[PageEnvelope], str] = {
    envelope: envelope.collection_key()
    for envelope in (
        NodePage,
        EventPage,
        AlarmPage,
        SnmpInterfacePage,
        IpInterfacePage,
        OutagePage,
        IfServicePage,
    )
}


def parse_entity(model_cls: type[M], payload: Any) -> M:
    """
    Validate a backend payload against an entity shape.

    Raises:
        ShapeMismatchError: If the payload does not conform
    """
    try:
        return model_cls.model_validate(payload)
    except ValidationError as e:
        logger.warning(
            "payload_shape_mismatch",
            entity=model_cls.__name__,
            error_count=e.error_count(),
        )
        raise ShapeMismatchError(model_cls.__name__, e.errors()) from e


def parse_page(envelope_cls: type[PageEnvelope], payload: Optional[Any]) -> PageEnvelope:
    """
    Validate a list response. An absent body means an empty page.

    Raises:
        ShapeMismatchError: If the payload does not conform
    """
    if payload is None:
        return envelope_cls.empty()
    return parse_entity(envelope_cls, payload)


def parse_list(model_cls: type[M], payload: Optional[Any]) -> list[M]:
    """Validate a bare JSON array of entities."""
    if payload is None:
        return []
    try:
        return TypeAdapter(list[model_cls]).validate_python(payload)  # type: ignore[valid-type]
    except ValidationError as e:
        logger.warning(
            "payload_shape_mismatch",
            entity=f"list[{model_cls.__name__}]",
            error_count=e.error_count(),
        )
        raise ShapeMismatchError(f"list[{model_cls.__name__}]", e.errors()) from e
