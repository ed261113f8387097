"""Tests for BoxesApiClient and ImageUploader."""

from unittest.mock import MagicMock

import pytest
import requests

from boxtracker.client.api import BoxesApiClient, BoxesApiError, ImageUploader
from boxtracker.client.state import PendingImage


@pytest.fixture
def api(client):
    return BoxesApiClient("", session=client)


@pytest.fixture
def photo():
    return PendingImage(filename="box.jpg", content=b"jpeg", content_type="image/jpeg")


def _response(status_code=200, payload=None, json_error=False):
    resp = MagicMock()
    resp.status_code = status_code
    if json_error:
        resp.json.side_effect = ValueError("not json")
    else:
        resp.json.return_value = payload
    return resp


def test_create_update_toggle_delete(api):
    created = api.create_box(5, "Kitchen", "dishes")
    assert created.number == 5
    assert created.image_url is None

    updated = api.update_box(created.id, "Office", "books", "https://img.example.com/b.jpg")
    assert updated.room == "Office"
    assert updated.image_url == "https://img.example.com/b.jpg"

    assert api.set_hidden(created.id, True).hidden is True
    assert api.list_boxes(include_hidden=False) == []
    assert [b.id for b in api.list_boxes(include_hidden=True)] == [created.id]

    api.delete_box(created.id)
    assert api.list_boxes() == []


def test_error_body_becomes_api_error(api):
    with pytest.raises(BoxesApiError) as exc_info:
        api.update_box(999999, "Office", "books")
    assert exc_info.value.status_code == 404
    assert str(exc_info.value) == "Box not found"


def test_transport_failure_becomes_api_error():
    session = MagicMock()
    session.request.side_effect = requests.ConnectionError("refused")
    api = BoxesApiClient("http://localhost:9", session=session)
    with pytest.raises(BoxesApiError):
        api.list_boxes()


def test_non_list_response_is_rejected():
    session = MagicMock()
    session.request.return_value = _response(payload={"error": "nope"})
    api = BoxesApiClient("http://localhost:8000/", session=session)
    with pytest.raises(BoxesApiError, match="Expected a list"):
        api.list_boxes()
    session.request.assert_called_once_with(
        "GET",
        "http://localhost:8000/api/boxes",
        timeout=30,
        params={"includeHidden": "true"},
    )


def test_upload_posts_file_field(photo):
    session = MagicMock()
    session.post.return_value = _response(payload={"url": "https://img.example.com/x.jpg"})
    uploader = ImageUploader("http://uploads.local/api/upload", session=session, timeout=5)

    assert uploader.upload(photo) == "https://img.example.com/x.jpg"
    session.post.assert_called_once_with(
        "http://uploads.local/api/upload",
        files={"file": ("box.jpg", b"jpeg", "image/jpeg")},
        timeout=5,
    )


@pytest.mark.parametrize(
    "response",
    [
        _response(status_code=500, payload={"error": "disk full"}),
        _response(json_error=True),
        _response(payload={}),
    ],
)
def test_upload_failures_return_none(photo, response):
    session = MagicMock()
    session.post.return_value = response
    assert ImageUploader("http://uploads.local", session=session).upload(photo) is None


def test_upload_transport_failure_returns_none(photo):
    session = MagicMock()
    session.post.side_effect = requests.Timeout("slow")
    assert ImageUploader("http://uploads.local", session=session).upload(photo) is None


def test_malformed_list_item_becomes_api_error():
    session = MagicMock()
    session.request.return_value = _response(payload=[{"id": 1}])
    api = BoxesApiClient("http://localhost:8000", session=session)
    with pytest.raises(BoxesApiError, match="Malformed box"):
        api.list_boxes()


def test_malformed_create_response_becomes_api_error():
    session = MagicMock()
    session.request.return_value = _response(status_code=201, payload={})
    api = BoxesApiClient("http://localhost:8000", session=session)
    with pytest.raises(BoxesApiError, match="Malformed box"):
        api.create_box(1, "Kitchen", "plates")
