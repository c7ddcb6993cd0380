from datetime import datetime, timezone

from media_services.api.odata import (
    entity_address,
    format_datetime,
    parse_datetime,
    quote_literal,
    unwrap_payload,
)


def test_quote_literal_wraps_in_single_quotes() -> None:
    assert quote_literal("abc123") == "'abc123'"


def test_quote_literal_keeps_colons_of_identifiers() -> None:
    assert quote_literal("nb:kid:UUID:42") == "'nb:kid:UUID:42'"


def test_quote_literal_doubles_and_encodes_single_quotes() -> None:
    assert quote_literal("it's") == "'it%27%27s'"


def test_quote_literal_encodes_reserved_characters() -> None:
    assert quote_literal("a&b=c d") == "'a%26b%3Dc%20d'"


def test_entity_address() -> None:
    assert entity_address("Assets", "nb:cid:UUID:1") == "/Assets('nb:cid:UUID:1')"


def test_unwrap_payload_verbose_collection() -> None:
    payload = {"d": {"results": [{"Id": "1"}, {"Id": "2"}]}}

    assert unwrap_payload(payload) == [{"Id": "1"}, {"Id": "2"}]


def test_unwrap_payload_verbose_single_entity() -> None:
    payload = {"d": {"__metadata": {"uri": "x"}, "Id": "1", "Name": "a"}}

    assert unwrap_payload(payload) == [payload["d"]]


def test_unwrap_payload_verbose_function_result() -> None:
    payload = {"d": {"RebindContentKey": "AAEC"}}

    assert unwrap_payload(payload) == ["AAEC"]


def test_unwrap_payload_json_light() -> None:
    assert unwrap_payload({"value": [{"Id": "1"}]}) == [{"Id": "1"}]
    assert unwrap_payload({"value": "AAEC"}) == ["AAEC"]


def test_parse_datetime_handles_odata_date() -> None:
    assert parse_datetime("/Date(1350000000000)/") == datetime(
        2012, 10, 12, 0, 0, tzinfo=timezone.utc
    )


def test_parse_datetime_handles_iso_format() -> None:
    assert parse_datetime("2013-01-02T03:04:05Z") == datetime(
        2013, 1, 2, 3, 4, 5, tzinfo=timezone.utc
    )


def test_parse_datetime_returns_none_for_missing_value() -> None:
    assert parse_datetime(None) is None
    assert parse_datetime("") is None


def test_format_datetime_uses_utc() -> None:
    assert format_datetime(datetime(2013, 1, 2, 3, 4, 5)) == "2013-01-02T03:04:05Z"
