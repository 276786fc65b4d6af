import pytest
from pydantic import ValidationError

from nmsdash.core.domain.query import (
    AlarmModificationQueryVariable,
    AlarmQueryParameters,
    FeatherSortObject,
    QueryParameters,
    SortDirection,
    SortProps,
    direction_to_sort_order,
    sort_order_to_direction,
)


def test_to_params_uses_backend_keys() -> None:
    query = QueryParameters(
        limit=10,
        offset=20,
        search="label==router*",
        order_by="label",
        order="desc",
    )

    assert query.to_params() == {
        "limit": 10,
        "offset": 20,
        "_s": "label==router*",
        "orderBy": "label",
        "order": "desc",
    }


def test_unset_parameters_are_omitted() -> None:
    assert QueryParameters().to_params() == {}
    assert QueryParameters(limit=5).to_params() == {"limit": 5}


def test_direction_tokens_are_case_insensitive() -> None:
    assert QueryParameters(order="ASC").order is SortDirection.ASCENDING
    assert FeatherSortObject(property="label", value=" Desc ").value is SortDirection.DESCENDING


def test_unknown_direction_is_rejected() -> None:
    with pytest.raises(ValidationError):
        QueryParameters(order="sideways")


def test_negative_pagination_is_rejected() -> None:
    with pytest.raises(ValidationError):
        QueryParameters(limit=-1)
    with pytest.raises(ValidationError):
        QueryParameters(offset=-5)


def test_unrecognized_keys_are_forwarded() -> None:
    query = QueryParameters.coerce({"limit": 10, "nodeId": 7, "_s": "ipAddress==10.*"})

    assert query.search == "ipAddress==10.*"
    assert query.to_params() == {"limit": 10, "_s": "ipAddress==10.*", "nodeId": 7}


def test_coerce_accepts_none_and_models() -> None:
    query = QueryParameters(limit=3)

    assert QueryParameters.coerce(query) is query
    assert QueryParameters.coerce(None).to_params() == {}


def test_merge_replaces_and_keeps_other_keys() -> None:
    base = QueryParameters(limit=10, search="label==a*", nodeId=2)

    merged = base.merge(offset=30, search=None)

    assert merged.to_params() == {"limit": 10, "offset": 30, "nodeId": 2}
    assert base.offset is None


def test_sort_order_maps_to_direction_both_ways() -> None:
    for sort_order in (1, -1):
        assert direction_to_sort_order(sort_order_to_direction(sort_order)) == sort_order
    for direction in (SortDirection.ASCENDING, SortDirection.DESCENDING):
        assert sort_order_to_direction(direction_to_sort_order(direction)) is direction


def test_sort_order_one_is_ascending() -> None:
    assert sort_order_to_direction(1) is SortDirection.ASCENDING
    assert sort_order_to_direction(-1) is SortDirection.DESCENDING


def test_invalid_sort_order_is_rejected() -> None:
    with pytest.raises(ValueError):
        sort_order_to_direction(0)


def test_none_direction_has_no_sort_order() -> None:
    with pytest.raises(ValueError):
        direction_to_sort_order(SortDirection.NONE)


def test_table_event_becomes_query_and_back() -> None:
    props = SortProps(
        property="label",
        value="desc",
        first=40,
        rows=20,
        sort_field="label",
        sort_order=-1,
    )

    query = QueryParameters.from_table_event(props)

    assert query.to_params() == {
        "limit": 20,
        "offset": 40,
        "orderBy": "label",
        "order": "desc",
    }
    sort = query.to_sort_object()
    assert sort is not None
    assert sort.property == props.sort_field
    assert direction_to_sort_order(sort.value) == props.sort_order


def test_table_event_keeps_filter_from_base() -> None:
    props = SortProps.model_validate(
        {"property": "severity", "value": "asc", "first": 0, "rows": 10, "sortOrder": 1}
    )
    base = QueryParameters(search="severity>=MAJOR")

    query = QueryParameters.from_table_event(props, base)

    assert query.search == "severity>=MAJOR"
    assert query.order_by == "severity"
    assert query.order is SortDirection.ASCENDING


def test_table_event_rejects_invalid_sort_order() -> None:
    with pytest.raises(ValidationError):
        SortProps(property="label", value="asc", rows=10, sort_order=0)


@pytest.mark.parametrize(
    ("value", "sort_order"),
    [("asc", 1), ("desc", -1)],
)
def test_table_event_sort_round_trips_to_property_and_value(
    value: str, sort_order: int
) -> None:
    props = SortProps(property="label", value=value, rows=10, sort_order=sort_order)

    sort = QueryParameters.from_table_event(props).to_sort_object()

    assert sort is not None
    assert (sort.property, sort.value) == (props.property, props.value)


def test_table_event_requires_sort_order() -> None:
    with pytest.raises(ValidationError):
        SortProps(property="label", value="desc", rows=10)


def test_table_event_direction_must_match_sort_order() -> None:
    with pytest.raises(ValidationError):
        SortProps(property="label", value="desc", rows=10, sort_order=1)
    with pytest.raises(ValidationError):
        SortProps(property="label", value="none", rows=10, sort_order=-1)


def test_table_event_sort_field_must_match_property() -> None:
    with pytest.raises(ValidationError):
        SortProps(
            property="label",
            value="asc",
            rows=10,
            sort_field="createTime",
            sort_order=1,
        )


def test_sort_none_clears_ordering() -> None:
    base = QueryParameters(limit=10, order_by="label", order="asc")

    query = QueryParameters.from_sort(FeatherSortObject(property="label", value="none"), base)

    assert query.to_params() == {"limit": 10}
    assert query.to_sort_object() is None


def test_sort_object_applies_ordering() -> None:
    query = QueryParameters.from_sort(FeatherSortObject(property="createTime", value="desc"))

    assert query.to_params() == {"orderBy": "createTime", "order": "desc"}


def test_acknowledge_sends_only_the_ack_flag() -> None:
    variable = AlarmModificationQueryVariable.acknowledge(12)

    assert variable.path_variable == "12"
    assert variable.query_parameters.to_params() == {"ack": True}


def test_alarm_flag_constructors() -> None:
    assert AlarmModificationQueryVariable.unacknowledge("1").query_parameters.to_params() == {
        "ack": False
    }
    assert AlarmModificationQueryVariable.clear("1").query_parameters.to_params() == {
        "clear": True
    }
    assert AlarmModificationQueryVariable.escalate("1").query_parameters.to_params() == {
        "escalate": True
    }


def test_alarm_modification_wire_shape() -> None:
    variable = AlarmModificationQueryVariable.clear("55")

    assert variable.to_wire() == {
        "pathVariable": "55",
        "queryParameters": {"clear": True},
    }


def test_alarm_parameters_without_flags_are_empty() -> None:
    assert AlarmQueryParameters().to_params() == {}
