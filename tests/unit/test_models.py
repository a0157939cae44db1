from datetime import datetime, timezone
from typing import Any, Dict

import pytest

from hydrus_api.endpoints.access_management import ApiVersionResponse, VerifyAccessKeyResponse
from hydrus_api.endpoints.adding_files import AddFileRequest, AddFileResponse
from hydrus_api.endpoints.common import FileHashesRequest
from hydrus_api.endpoints.searching_and_fetching_files import (
    FileMetadataInfo,
    FileMetadataRequest,
    FileMetadataResponse,
)
from hydrus_api.helpers import (
    encode_query_params,
    require_field,
    tag_list_to_string_list,
    timestamp_to_string,
)
from hydrus_api.models import PageIdentifier, ServiceName, Tag


def test_tag_from_string_namespaced() -> None:
    tag = Tag.from_string("character:megumin")
    assert tag.namespace == "character"
    assert tag.name == "megumin"
    assert str(tag) == "character:megumin"


def test_tag_from_string_plain_and_odd() -> None:
    assert Tag.from_string("ark mage") == Tag("ark mage")
    assert str(Tag.from_string(":)")) == ":)"
    assert Tag.from_string("series:re:zero") == Tag("re:zero", "series")


def test_service_name_constructors() -> None:
    assert str(ServiceName.my_tags()) == "my tags"
    assert ServiceName.all_known_tags() == ServiceName("all known tags")
    assert {ServiceName.my_files(), ServiceName("my files")} == {ServiceName("my files")}


def test_page_identifier_json() -> None:
    assert PageIdentifier.name("downloads").to_json() == {"destination_page_name": "downloads"}
    assert PageIdentifier.key("ff00").to_json() == {"destination_page_key": "ff00"}


def test_encode_query_params() -> None:
    params = encode_query_params({
        "hashes": ["a", "b"],
        "file_ids": (1, 2),
        "only_return_identifiers": True,
        "hide_service_keys_tags": False,
        "file_service_name": None,
        "url": "https://a.b/?c=d",
    })
    assert params == {
        "hashes": '["a", "b"]',
        "file_ids": "[1, 2]",
        "only_return_identifiers": "true",
        "hide_service_keys_tags": "false",
        "url": "https://a.b/?c=d",
    }
    assert encode_query_params(None) == {}


def test_timestamp_to_string() -> None:
    assert timestamp_to_string(None) is None
    assert timestamp_to_string("42") == "42"
    assert timestamp_to_string(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)) == "1000"


def test_tag_list_to_string_list() -> None:
    assert tag_list_to_string_list([Tag("a", "ns"), "b"]) == ["ns:a", "b"]


def test_api_version_from_json_invalid_inputs() -> None:
    with pytest.raises(TypeError):
        ApiVersionResponse.from_json([1, 2])
    with pytest.raises(ValueError):
        ApiVersionResponse.from_json({"version": 1})
    with pytest.raises(ValueError):
        ApiVersionResponse.from_json({"version": "1", "hydrus_version": 2})


def test_require_field_rejects_bool_for_int() -> None:
    assert require_field({"status": 2}, "status", int) == 2
    assert require_field({"flag": True}, "flag", bool) is True
    with pytest.raises(ValueError):
        require_field({"status": True}, "status", int)
    with pytest.raises(ValueError):
        ApiVersionResponse.from_json({"version": True, "hydrus_version": 1})
    with pytest.raises(ValueError):
        AddFileResponse.from_json({"status": False, "hash": "h"})


def test_verify_access_key_from_json() -> None:
    resp = VerifyAccessKeyResponse.from_json({
        "basic_permissions": [0, 1, 3],
        "human_description": "API Permissions (autotagger): add tags to files, import files",
    })
    assert resp.basic_permissions == [0, 1, 3]


def test_add_file_request_shapes() -> None:
    assert AddFileRequest.from_path("/tmp/a.png").to_json() == {"path": "/tmp/a.png"}
    assert AddFileRequest.from_bytes(b"abc").to_json() == b"abc"
    with pytest.raises(ValueError):
        AddFileRequest().to_json()


def test_add_file_response_failed_statuses() -> None:
    assert AddFileResponse.from_json({"status": 4, "hash": "h"}).failed
    assert AddFileResponse.from_json({"status": 7, "hash": "h", "note": "vetoed"}).failed
    assert not AddFileResponse.from_json({"status": 2, "hash": "h", "note": None}).failed


def test_file_hashes_request_optional_fields() -> None:
    assert FileHashesRequest.of(iter(["a"])).to_json() == {"hashes": ["a"]}
    assert FileHashesRequest.of(["a"], file_service_name="my files").to_json() == {
        "hashes": ["a"],
        "file_service_name": "my files",
    }


def test_file_metadata_request_needs_one_identifier() -> None:
    assert FileMetadataRequest(hashes=["a"]).to_json() == {"hashes": ["a"]}
    assert FileMetadataRequest(file_ids=[1], only_return_identifiers=True).to_json() == {
        "file_ids": [1],
        "only_return_identifiers": True,
    }
    with pytest.raises(ValueError):
        FileMetadataRequest().to_json()
    with pytest.raises(ValueError):
        FileMetadataRequest(hashes=["a"], file_ids=[1]).to_json()


def test_file_metadata_from_json() -> None:
    data: Dict[str, Any] = {
        "file_id": 123,
        "hash": "4c77267f93415de0bc33b7725b8c331a809a924084bee03ab2f5fae1c6019eb2",
        "size": 63405,
        "mime": "image/jpeg",
        "ext": ".jpg",
        "width": 640,
        "height": 480,
        "duration": None,
        "has_audio": False,
        "num_frames": None,
        "num_words": None,
        "is_inbox": True,
        "is_local": True,
        "is_trashed": False,
        "known_urls": ["https://gelbooru.com/index.php?page=post&s=view&id=4841557"],
        "service_names_to_statuses_to_tags": {
            "my tags": {"0": ["favourites"], "2": ["process this later"]},
        },
    }
    info = FileMetadataInfo.from_json(data)
    assert info.file_id == 123
    assert info.mime == "image/jpeg"
    assert info.is_inbox
    assert info.duration is None
    assert info.service_names_to_statuses_to_tags["my tags"]["2"] == ["process this later"]


def test_file_metadata_response_rejects_bad_shapes() -> None:
    with pytest.raises(ValueError):
        FileMetadataResponse.from_json({"metadata": [{"hash": "a"}]})
    with pytest.raises(TypeError):
        FileMetadataResponse.from_json({"metadata": [{"file_id": 1, "hash": "a",
                                                      "service_names_to_statuses_to_tags": ["x"]}]})
