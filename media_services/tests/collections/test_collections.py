"""Tests for entity collections and lazy queries."""

import asyncio
from datetime import timedelta

import pytest

from media_services.config import MediaServicesConfig
from media_services.context import MediaContext
from media_services.exceptions import NotFoundError, ValidationError
from media_services.models import (
    AccessPermissions,
    AccessPolicy,
    Asset,
    AssetCreationOptions,
    ContentKey,
    LocatorType,
    NotificationEndPointType,
)
from media_services.tests.utils.fakes import (
    MockTransport,
    RecordingConnection,
    RecordingConnectionFactory,
    odata_entity,
    odata_results,
)


def _asset(i: int) -> dict:
    return {"Id": f"nb:cid:UUID:{i}", "Name": f"asset-{i}"}


@pytest.fixture
def paged_context(mock_transport: MockTransport) -> MediaContext:
    config = MediaServicesConfig(
        api_url="https://media.test/API/", acs_base_address="https://acs.test", page_size=2
    )
    return MediaContext("account", "key", config=config, transport=mock_transport)


# Enumeration


def test_creating_query_issues_no_request(
    context: MediaContext, recording_factory: RecordingConnectionFactory
) -> None:
    query = context.assets.query(filter="Name eq 'x'")
    iterator = iter(query)

    assert recording_factory.calls == []

    recording_factory.results = [_asset(1)]
    assert next(iterator).id == "nb:cid:UUID:1"
    assert len(recording_factory.calls) == 1


def test_iteration_is_restartable_and_queries_again(
    context: MediaContext, recording_factory: RecordingConnectionFactory
) -> None:
    recording_factory.results = [_asset(1), _asset(2)]

    first = [a.id for a in context.assets]
    recording_factory.results = [_asset(3)]
    second = [a.id for a in context.assets]

    assert first == ["nb:cid:UUID:1", "nb:cid:UUID:2"]
    assert second == ["nb:cid:UUID:3"]
    assert len(recording_factory.calls) == 2
    assert recording_factory.connections_created == 2


def test_iteration_fetches_pages_on_demand(
    paged_context: MediaContext, mock_transport: MockTransport
) -> None:
    mock_transport.add_token_response()
    mock_transport.add_response(json_data=odata_results(_asset(1), _asset(2)))
    mock_transport.add_response(json_data=odata_results(_asset(3)))

    iterator = iter(paged_context.assets)
    assert next(iterator).name == "asset-1"
    assert next(iterator).name == "asset-2"
    assert len(mock_transport.api_requests) == 1

    assert [a.name for a in iterator] == ["asset-3"]
    pages = [r.url.params for r in mock_transport.api_requests]
    assert [(p["$skip"], p["$top"]) for p in pages] == [("0", "2"), ("2", "2")]


def test_query_sends_filter_order_and_top(
    paged_context: MediaContext, mock_transport: MockTransport
) -> None:
    mock_transport.add_token_response()
    mock_transport.add_response(json_data=odata_results(_asset(1), _asset(2)))
    mock_transport.add_response(json_data=odata_results(_asset(3)))

    query = (
        paged_context.assets.query(filter="State eq 1")
        .filter("startswith(Name, 'a')")
        .order_by("Created desc")
        .take(3)
    )
    assert len(list(query)) == 3

    params = mock_transport.api_requests[1].url.params
    assert params["$filter"] == "(State eq 1) and (startswith(Name, 'a'))"
    assert params["$orderby"] == "Created desc"
    assert params["$top"] == "1"


def test_top_zero_issues_no_request(
    context: MediaContext, recording_factory: RecordingConnectionFactory
) -> None:
    assert list(context.assets.query(top=0)) == []
    assert recording_factory.calls == []


def test_negative_top_is_rejected(context: MediaContext) -> None:
    with pytest.raises(ValueError):
        context.assets.query(top=-1)


@pytest.mark.asyncio
async def test_async_iteration_binds_entities(
    context: MediaContext, recording_factory: RecordingConnectionFactory
) -> None:
    recording_factory.results = [{"Id": "k1"}, {"Id": "k2"}]

    keys = [key async for key in context.content_keys]

    assert [k.id for k in keys] == ["k1", "k2"]
    assert all(isinstance(k, ContentKey) and k.context is context for k in keys)


def test_first_returns_none_for_empty_result(
    context: MediaContext, recording_factory: RecordingConnectionFactory
) -> None:
    assert context.jobs.query().first() is None
    assert recording_factory.calls[0][2]["$top"] == 1


def test_first_with_top_zero_returns_none_without_request(
    context: MediaContext, recording_factory: RecordingConnectionFactory
) -> None:
    recording_factory.results = [_asset(1)]

    assert context.assets.query(top=0).first() is None
    assert recording_factory.calls == []


def test_iteration_never_exceeds_top_when_server_returns_more(
    context: MediaContext, recording_factory: RecordingConnectionFactory
) -> None:
    recording_factory.results = [_asset(i) for i in range(5)]

    assets = list(context.assets.query().take(2))

    assert [a.id for a in assets] == ["nb:cid:UUID:0", "nb:cid:UUID:1"]
    assert len(recording_factory.calls) == 1


@pytest.mark.asyncio
async def test_async_iteration_never_exceeds_top_when_server_returns_more(
    context: MediaContext, recording_factory: RecordingConnectionFactory
) -> None:
    recording_factory.results = [_asset(i) for i in range(5)]

    assets = [a async for a in context.assets.query(top=3)]

    assert len(assets) == 3


def test_query_refinements_keep_timeout(context: MediaContext) -> None:
    query = context.assets.query(timeout=5.0).filter("State eq 1").order_by("Name").take(2)

    assert query._timeout == 5.0


@pytest.fixture
def slow_factory(context: MediaContext, monkeypatch: pytest.MonkeyPatch) -> None:
    async def _slow_execute(self, uri, *, params=None):
        await asyncio.sleep(1)

    monkeypatch.setattr(context, "_connection_factory", RecordingConnectionFactory())
    monkeypatch.setattr(RecordingConnection, "execute", _slow_execute)


@pytest.mark.asyncio
@pytest.mark.usefixtures("slow_factory")
async def test_async_iteration_honours_timeout(context: MediaContext) -> None:
    with pytest.raises(TimeoutError):
        async for _ in context.assets.query(timeout=0.01):
            pass


@pytest.mark.usefixtures("slow_factory")
def test_iteration_honours_timeout(context: MediaContext) -> None:
    with pytest.raises(TimeoutError):
        list(context.assets.query(timeout=0.01))


@pytest.mark.asyncio
@pytest.mark.usefixtures("slow_factory")
async def test_first_async_honours_timeout(context: MediaContext) -> None:
    with pytest.raises(TimeoutError):
        await context.jobs.query().first_async(timeout=0.01)


# Lookup


def test_get_returns_bound_entity(context: MediaContext, mock_transport: MockTransport) -> None:
    mock_transport.add_token_response()
    mock_transport.add_response(json_data=odata_entity({"Id": "nb:kid:UUID:1", "Name": "k"}))

    key = context.content_keys.get("nb:kid:UUID:1")

    assert key is not None
    assert key.name == "k"
    assert key.context is context
    assert mock_transport.api_requests[0].url.raw_path == b"/API/ContentKeys('nb:kid:UUID:1')"


def test_get_returns_none_when_missing(
    context: MediaContext, recording_factory: RecordingConnectionFactory
) -> None:
    recording_factory.error = NotFoundError("missing")

    assert context.assets.get("nb:cid:UUID:404") is None


def test_get_requires_identifier(context: MediaContext) -> None:
    with pytest.raises(ValueError):
        context.assets.get("")


@pytest.mark.asyncio
async def test_get_async_honours_timeout(
    context: MediaContext, monkeypatch: pytest.MonkeyPatch
) -> None:
    factory = RecordingConnectionFactory()

    async def _slow_execute(self, uri, *, params=None):
        await asyncio.sleep(1)

    monkeypatch.setattr(context, "_connection_factory", factory)
    monkeypatch.setattr(RecordingConnection, "execute", _slow_execute)

    with pytest.raises(TimeoutError):
        await context.assets.get_async("nb:cid:UUID:1", timeout=0.01)


# Creation


def test_create_asset_posts_and_binds_result(
    context: MediaContext, recording_factory: RecordingConnectionFactory
) -> None:
    recording_factory.created = [{"Id": "nb:cid:UUID:9", "Name": "movie", "Options": 1}]

    asset = context.assets.create("movie", AssetCreationOptions.STORAGE_ENCRYPTED)

    assert recording_factory.calls == [
        ("add_object", "Assets", {"Name": "movie", "Options": 1}),
        ("save_changes",),
    ]
    assert asset.id == "nb:cid:UUID:9"
    assert asset.context is context


def test_create_asset_requires_name(
    context: MediaContext, recording_factory: RecordingConnectionFactory
) -> None:
    with pytest.raises(ValueError):
        context.assets.create("")

    assert recording_factory.calls == []


def test_create_access_policy(
    context: MediaContext, recording_factory: RecordingConnectionFactory
) -> None:
    recording_factory.created = [
        {"Id": "nb:pid:UUID:1", "Name": "read", "DurationInMinutes": 60.0, "Permissions": 1}
    ]

    policy = context.access_policies.create("read", timedelta(hours=1), AccessPermissions.READ)

    assert recording_factory.calls[0] == (
        "add_object",
        "AccessPolicies",
        {"Name": "read", "DurationInMinutes": 60.0, "Permissions": 1},
    )
    assert policy.duration == timedelta(hours=1)


def test_create_access_policy_rejects_non_positive_duration(context: MediaContext) -> None:
    with pytest.raises(ValueError):
        context.access_policies.create("read", timedelta(0), AccessPermissions.READ)


def test_create_locator_links_asset_and_policy(
    context: MediaContext, recording_factory: RecordingConnectionFactory
) -> None:
    asset = Asset(id="nb:cid:UUID:1")
    asset.bind_context(context)
    policy = AccessPolicy(id="nb:pid:UUID:1")
    policy.bind_context(context)
    recording_factory.created = [
        {"Id": "nb:lid:UUID:1", "Type": 1, "AssetId": asset.id, "AccessPolicyId": policy.id}
    ]

    locator = context.locators.create(LocatorType.SAS, asset, policy)

    assert recording_factory.calls[0] == (
        "add_object",
        "Locators",
        {"Type": 1, "AssetId": "nb:cid:UUID:1", "AccessPolicyId": "nb:pid:UUID:1"},
    )
    assert locator.locator_type is LocatorType.SAS


def test_create_locator_rejects_unbound_asset(
    context: MediaContext, recording_factory: RecordingConnectionFactory
) -> None:
    policy = AccessPolicy(id="nb:pid:UUID:1")
    policy.bind_context(context)

    with pytest.raises(ValidationError):
        context.locators.create(LocatorType.SAS, Asset(id="nb:cid:UUID:1"), policy)

    assert recording_factory.calls == []


def test_create_notification_end_point(
    context: MediaContext, recording_factory: RecordingConnectionFactory
) -> None:
    recording_factory.created = [
        {"Id": "nb:nepid:UUID:1", "Name": "q", "EndPointType": 1, "EndPointAddress": "jobs"}
    ]

    end_point = context.notification_end_points.create(
        "q", NotificationEndPointType.AZURE_QUEUE, "jobs"
    )

    assert end_point.end_point_address == "jobs"


def test_create_ingest_manifest(
    context: MediaContext, recording_factory: RecordingConnectionFactory
) -> None:
    recording_factory.created = [{"Id": "nb:mid:UUID:1", "Name": "bulk"}]

    manifest = context.ingest_manifests.create("bulk")

    assert recording_factory.calls[0] == ("add_object", "IngestManifests", {"Name": "bulk"})
    assert manifest.context is context


# Deletion through a collection


def test_collection_delete_forwards_to_entity(
    context: MediaContext, recording_factory: RecordingConnectionFactory
) -> None:
    key = ContentKey(id="nb:kid:UUID:1")
    key.bind_context(context)

    context.content_keys.delete(key)

    assert [c[0] for c in recording_factory.calls] == ["attach_to", "delete_object", "save_changes"]
    assert key.is_deleted


def test_collection_delete_rejects_other_kind(
    context: MediaContext, recording_factory: RecordingConnectionFactory
) -> None:
    asset = Asset(id="nb:cid:UUID:1")
    asset.bind_context(context)

    with pytest.raises(ValidationError):
        context.content_keys.delete(asset)

    assert recording_factory.calls == []


def test_collection_outliving_context_fails_fast(config: MediaServicesConfig) -> None:
    collection = MediaContext("account", "key", config=config).assets

    with pytest.raises(ValidationError):
        list(collection)
