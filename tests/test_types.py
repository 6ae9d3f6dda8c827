"""Tests for metadata and listing response models."""

from datetime import datetime, timezone

from fbstorage import ListingPage, ObjectMetadata


def test_metadata_from_dict():
    data = {
        "name": "root/test.json",
        "bucket": "demo.appspot.com",
        "contentType": "application/json",
        "size": "8",
        "timeCreated": "2024-05-01T10:20:30.123Z",
        "updated": "2024-05-01T10:20:30.123Z",
        "md5Hash": "abc==",
        "downloadTokens": "tok-1",
        "metageneration": "1",
    }
    meta = ObjectMetadata.from_dict(data)

    assert meta.name == "root/test.json"
    assert meta.content_type == "application/json"
    assert meta.size == 8
    assert meta.time_created == datetime(2024, 5, 1, 10, 20, 30, 123000, tzinfo=timezone.utc)
    assert meta.extra == {"metageneration": "1"}
    assert meta.raw == data
    assert meta.download_token == "tok-1"


def test_first_download_token_is_used():
    meta = ObjectMetadata.from_dict({"name": "x", "downloadTokens": "first, second,third"})
    assert meta.download_token == "first"


def test_missing_download_token():
    assert ObjectMetadata.from_dict({"name": "x"}).download_token is None
    assert ObjectMetadata.from_dict({"name": "x", "downloadTokens": ""}).download_token is None


def test_listing_page_from_dict():
    page = ListingPage.from_dict(
        {
            "kind": "storage#objects",
            "prefixes": ["root/a/", "root/b/"],
            "items": [{"name": "root/c.txt"}],
            "nextPageToken": "page-2",
        }
    )
    assert page.prefixes == ["root/a/", "root/b/"]
    assert [item.name for item in page.items] == ["root/c.txt"]
    assert page.next_page_token == "page-2"


def test_listing_page_empty():
    page = ListingPage.from_dict({})
    assert page.prefixes == []
    assert page.items == []
    assert page.next_page_token is None
