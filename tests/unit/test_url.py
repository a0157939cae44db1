import re

import pytest
from aioresponses import aioresponses

from hydrus_api.client import HydrusClient
from hydrus_api.exceptions import BuilderConsumedError
from hydrus_api.file import HydrusFile
from hydrus_api.models import FileStatus, PageIdentifier, ServiceName, Tag, UrlType
from hydrus_api.url import Url

BASE_URL = "http://127.0.0.1:45869"
ACCESS_KEY = "0123456789abcdef"

PIXIV_URL = "https://www.pixiv.net/member_illust.php?illust_id=83406361&mode=medium"

URL_INFO = {
    "normalised_url": "https://www.pixiv.net/artworks/83406361",
    "url_type": 0,
    "url_type_string": "post url",
    "match_name": "pixiv file page",
    "can_parse": True,
}


def sent_requests(m):
    return [call for calls in m.requests.values() for call in calls]


def query(path):
    return re.compile(r"^" + re.escape(f"{BASE_URL}/{path}") + r"(\?.*)?$")


@pytest.mark.asyncio
async def test_url_lookup_returns_handle():
    with aioresponses() as m:
        m.get(query("add_urls/get_url_info"), payload=URL_INFO)
        async with HydrusClient(BASE_URL, ACCESS_KEY) as client:
            url = await client.url(PIXIV_URL)

    assert isinstance(url, Url)
    assert url.url == PIXIV_URL
    assert url.normalised_url == "https://www.pixiv.net/artworks/83406361"
    assert url.url_type is UrlType.POST
    assert url.match_name == "pixiv file page"
    assert url.can_parse is True
    assert sent_requests(m)[0].kwargs["params"] == {"url": PIXIV_URL}


@pytest.mark.asyncio
async def test_url_import_sends_add_url_and_reports_type():
    with aioresponses() as m:
        m.get(query("add_urls/get_url_info"), payload=URL_INFO, repeat=True)
        m.post(f"{BASE_URL}/add_urls/add_url", payload={
            "human_result_text": "\"https://www.pixiv.net/artworks/83406361\" URL added successfully.",
            "normalised_url": "https://www.pixiv.net/artworks/83406361",
        })
        async with HydrusClient(BASE_URL, ACCESS_KEY) as client:
            url = await client.url(PIXIV_URL)
            result = await (
                url.import_()
                .page(PageIdentifier.name("Rusty Import"))
                .show_page(True)
                .add_additional_tag(ServiceName.my_tags(), Tag.from_string("ark mage"))
                .add_additional_tag(ServiceName.my_tags(), Tag.from_string("character:megumin"))
                .run()
            )

    assert result.normalised_url
    assert result.url_type is UrlType.POST
    add_url_body = next(call.kwargs["json"] for call in sent_requests(m) if call.kwargs.get("json"))
    assert add_url_body == {
        "url": PIXIV_URL,
        "show_destination_page": True,
        "destination_page_name": "Rusty Import",
        "service_names_to_additional_tags": {"my tags": ["ark mage", "character:megumin"]},
    }


@pytest.mark.asyncio
async def test_import_url_can_only_run_once():
    with aioresponses() as m:
        m.post(f"{BASE_URL}/add_urls/add_url", payload={
            "human_result_text": "URL added successfully.",
            "normalised_url": PIXIV_URL,
        })
        m.get(query("add_urls/get_url_info"), payload=URL_INFO)
        async with HydrusClient(BASE_URL, ACCESS_KEY) as client:
            builder = client.import_url(PIXIV_URL)
            url = await builder.run()
            with pytest.raises(BuilderConsumedError):
                await builder.run()

    assert url.url_type is UrlType.POST
    assert len(sent_requests(m)) == 2


@pytest.mark.asyncio
async def test_url_files_returns_file_handles():
    with aioresponses() as m:
        m.get(query("add_urls/get_url_files"), payload={
            "normalised_url": URL_INFO["normalised_url"],
            "url_file_statuses": [
                {"status": 2, "hash": "abc", "note": "url recognised"},
                {"status": 3, "hash": "def", "note": "previously deleted"},
            ],
        })
        async with HydrusClient(BASE_URL, ACCESS_KEY) as client:
            url = Url(client, PIXIV_URL, URL_INFO["normalised_url"], UrlType.POST)
            files = await url.files()

    assert [f.file_hash for f in files] == ["abc", "def"]
    assert [f.status for f in files] == [FileStatus.IN_DATABASE, FileStatus.DELETED]


@pytest.mark.asyncio
async def test_url_associate_with_files():
    with aioresponses() as m:
        m.post(f"{BASE_URL}/add_urls/associate_url", status=200)
        m.post(f"{BASE_URL}/add_urls/associate_url", status=200)
        async with HydrusClient(BASE_URL, ACCESS_KEY) as client:
            url = Url(client, PIXIV_URL, URL_INFO["normalised_url"])
            await url.associate([HydrusFile.from_hash(client, "abc")])
            await url.disassociate([HydrusFile.from_hash(client, "abc")])

    bodies = [call.kwargs["json"] for call in sent_requests(m)]
    assert bodies == [
        {"hashes": ["abc"], "urls_to_add": [PIXIV_URL]},
        {"hashes": ["abc"], "urls_to_delete": [PIXIV_URL]},
    ]


def test_url_repr_and_defaults():
    url = Url(client=None, url="https://a.b/c", normalised_url="https://a.b/c")  # type: ignore[arg-type]
    assert url.url_type is UrlType.UNKNOWN
    assert url.can_parse is False
    assert repr(url) == "Url('https://a.b/c', type=UNKNOWN)"
