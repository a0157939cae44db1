import re
from unittest.mock import AsyncMock, MagicMock

import pytest
from aioresponses import aioresponses

from hydrus_api.client import HydrusClient
from hydrus_api.endpoints.adding_tags import TagAction
from hydrus_api.endpoints.adding_times import SetTimeRequestBuilder, TimestampType
from hydrus_api.endpoints.searching_and_fetching_files import FileMetadataInfo
from hydrus_api.exceptions import BuilderConsumedError
from hydrus_api.file import HydrusFile
from hydrus_api.models import FileStatus, ServiceName, Tag

BASE_URL = "http://127.0.0.1:45869"
ACCESS_KEY = "0123456789abcdef"
METADATA_URL = re.compile(r"^" + re.escape(f"{BASE_URL}/get_files/file_metadata") + r"\?.*$")

METADATA = {
    "file_id": 42,
    "hash": "abc123",
    "is_trashed": False,
    "service_names_to_statuses_to_tags": {
        "my tags": {"0": ["character:megumin", "ark mage"]},
        "public tag repository": {"0": ["explosion"], "1": ["series:konosuba"]},
    },
}


def sent_requests(m):
    return [call for calls in m.requests.values() for call in calls]


def test_from_raw_status_and_hash():
    client = MagicMock(spec=HydrusClient)
    assert HydrusFile.from_raw_status_and_hash(client, 0, "h").status is FileStatus.READY_FOR_IMPORT
    assert HydrusFile.from_raw_status_and_hash(client, 3, "h").status is FileStatus.DELETED
    assert HydrusFile.from_raw_status_and_hash(client, 2, "h").status is FileStatus.IN_DATABASE


def test_from_metadata_trashed():
    client = MagicMock(spec=HydrusClient)
    info = FileMetadataInfo(file_id=1, hash="h", is_trashed=True)
    file = HydrusFile.from_metadata(client, info)
    assert file.status is FileStatus.DELETED
    assert file.cached_metadata is info


def test_requires_identifier():
    with pytest.raises(ValueError):
        HydrusFile(MagicMock(spec=HydrusClient))


@pytest.mark.asyncio
async def test_hash_resolved_through_metadata_once():
    with aioresponses() as m:
        # registered once: a second metadata request would fail to match
        m.get(METADATA_URL, payload={"metadata": [METADATA]})
        async with HydrusClient(BASE_URL, ACCESS_KEY) as client:
            file = client.file_by_id(42)
            assert await file.hash() == "abc123"
            assert await file.hash() == "abc123"
            tags = await file.tags()

    assert file.status is FileStatus.IN_DATABASE
    assert Tag("megumin", "character") in tags
    assert Tag("konosuba", "series") in tags
    assert len(tags) == 4
    assert sent_requests(m)[0].kwargs["params"] == {"file_ids": "[42]"}


@pytest.mark.asyncio
async def test_update_refetches_metadata():
    trashed = dict(METADATA, is_trashed=True)
    with aioresponses() as m:
        m.get(METADATA_URL, payload={"metadata": [METADATA]})
        m.get(METADATA_URL, payload={"metadata": [trashed]})
        async with HydrusClient(BASE_URL, ACCESS_KEY) as client:
            file = client.file("abc123")
            await file.metadata()
            assert file.status is FileStatus.IN_DATABASE
            await file.update()

    assert file.status is FileStatus.DELETED


@pytest.mark.asyncio
async def test_services_with_tags():
    client = MagicMock(spec=HydrusClient)
    file = HydrusFile.from_metadata(client, FileMetadataInfo.from_json(METADATA))
    mapping = await file.services_with_tags()
    assert set(mapping) == {ServiceName.my_tags(), ServiceName.public_tag_repository()}
    assert mapping[ServiceName.my_tags()] == [Tag("megumin", "character"), Tag("ark mage")]


@pytest.mark.asyncio
async def test_add_and_modify_tags():
    client = MagicMock(spec=HydrusClient)
    client.add_tags = AsyncMock()
    file = HydrusFile.from_hash(client, "abc123")

    await file.add_tags(ServiceName.my_tags(), [Tag.from_string("character:megumin")])
    await file.modify_tags(ServiceName.my_tags(), TagAction.DELETE_FROM_LOCAL_TAGS, [Tag("ark mage")])

    first, second = [call.args[0] for call in client.add_tags.await_args_list]
    assert first.to_json() == {"hashes": ["abc123"], "service_names_to_tags": {"my tags": ["character:megumin"]}}
    assert second.to_json() == {
        "hashes": ["abc123"],
        "service_names_to_actions_to_tags": {"my tags": {"1": ["ark mage"]}},
    }


@pytest.mark.asyncio
async def test_urls_and_state_changes():
    client = MagicMock(spec=HydrusClient)
    client.associate_urls = AsyncMock()
    client.disassociate_urls = AsyncMock()
    client.delete_files = AsyncMock()
    client.undelete_files = AsyncMock()
    client.archive_files = AsyncMock()
    client.unarchive_files = AsyncMock()
    file = HydrusFile.from_hash(client, "abc123")

    await file.associate_urls(["https://a"])
    await file.disassociate_urls(["https://b"])
    await file.archive()
    await file.unarchive()
    await file.delete(reason="duplicate")
    assert file.status is FileStatus.DELETED
    await file.undelete()
    assert file.status is FileStatus.IN_DATABASE

    client.associate_urls.assert_awaited_once_with(["https://a"], ["abc123"])
    client.disassociate_urls.assert_awaited_once_with(["https://b"], ["abc123"])
    client.delete_files.assert_awaited_once_with(["abc123"], reason="duplicate")
    client.archive_files.assert_awaited_once_with(["abc123"])
    client.unarchive_files.assert_awaited_once_with(["abc123"])
    client.undelete_files.assert_awaited_once_with(["abc123"])


@pytest.mark.asyncio
async def test_set_time_adds_own_hash_and_sends():
    with aioresponses() as m:
        m.post(f"{BASE_URL}/edit_times/set_time", status=200)
        async with HydrusClient(BASE_URL, ACCESS_KEY) as client:
            file = client.file("abc123")
            builder = SetTimeRequestBuilder.for_last_viewed_time(canvas_type=1).set_timestamp(5000)
            await file.set_time(builder)

    assert sent_requests(m)[0].kwargs["json"] == {
        "timestamp_type": int(TimestampType.LAST_VIEWED),
        "hashes": ["abc123"],
        "timestamp_ms": "5000",
        "canvas_type": 1,
    }
    with pytest.raises(BuilderConsumedError):
        builder.build()
