from unittest.mock import Mock

import pytest
import requests

from docinbox.adapters.godocs_client import GodocsClient
from docinbox.domain.errors import StoreError


def _response(status_code: int = 200, payload=None, content: bytes = b"", headers=None) -> Mock:
    response = Mock(status_code=status_code, content=content, text="boom")
    response.headers = headers or {}
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def _client(*responses) -> tuple[GodocsClient, Mock]:
    session = Mock()
    session.request.side_effect = list(responses)
    return GodocsClient("http://godocs:8000/", timeout=5, session=session), session


def test_fetch_tags_populates_cache() -> None:
    client, session = _client(
        _response(payload=[{"id": 3, "name": "bank", "color": "#0f0", "tag_group": "Finance"}])
    )

    tags = client.fetch_tags()

    assert tags[0].tag_group == "Finance"
    assert client.known_tags()[3].name == "bank"
    session.request.assert_called_once_with("GET", "http://godocs:8000/api/tags", timeout=5)


def test_fetch_untagged_maps_page() -> None:
    client, session = _client(
        _response(
            payload={
                "documents": [{"ulid": "D1", "name": "scan.pdf", "document_type": ".pdf"}],
                "totalCount": 7,
            }
        )
    )

    page = client.fetch_untagged(1, 1)

    assert page.total_count == 7
    assert page.documents[0].ulid == "D1"
    _, kwargs = session.request.call_args
    assert kwargs["params"] == {"page": 1, "pageSize": 1}


def test_fetch_document_status_maps_fields() -> None:
    client, _ = _client(
        _response(
            payload={
                "ulid": "D1",
                "documentType": ".png",
                "hasText": True,
                "hasThumbnail": False,
                "viewURL": "/document/view/D1",
            }
        )
    )

    status = client.fetch_document_status("D1")

    assert status.document_type == ".png"
    assert status.has_text is True
    assert status.view_url == "/document/view/D1"


def test_fetch_document_text_missing_is_empty() -> None:
    client, _ = _client(_response(status_code=404))

    assert client.fetch_document_text("D1") == ""


def test_fetch_document_tags_null_body_is_empty() -> None:
    client, _ = _client(_response(payload=None))

    assert client.fetch_document_tags("D1") == []


def test_add_tag_posts_tag_id() -> None:
    client, session = _client(_response(status_code=201))

    client.add_tag("D1", 18)

    session.request.assert_called_once_with(
        "POST",
        "http://godocs:8000/api/documents/D1/tags",
        timeout=5,
        json={"tag_id": 18},
    )


@pytest.mark.parametrize("status_code", [400, 404, 500])
def test_error_status_raises_store_error(status_code) -> None:
    client, _ = _client(_response(status_code=status_code))

    with pytest.raises(StoreError):
        client.remove_tag("D1", 18)


def test_transport_error_raises_store_error() -> None:
    session = Mock()
    session.request.side_effect = requests.ConnectionError("refused")
    client = GodocsClient("http://godocs:8000", session=session)

    with pytest.raises(StoreError, match="refused"):
        client.fetch_tags()


def test_create_tag_sends_group_and_caches() -> None:
    client, session = _client(
        _response(payload={"id": 42, "name": "travel", "color": "#123456", "tag_group": "Trips"})
    )

    tag = client.create_tag("travel", "#123456", "Trips")

    assert tag.tag_id == 42
    assert client.known_tags()[42] == tag
    _, kwargs = session.request.call_args
    assert kwargs["json"] == {"name": "travel", "color": "#123456", "tag_group": "Trips"}


def test_download_document_returns_bytes_and_type() -> None:
    client, _ = _client(
        _response(content=b"%PDF", headers={"Content-Type": "application/pdf"})
    )

    assert client.download_document("D1") == (b"%PDF", "application/pdf")


def test_undecodable_json_raises_store_error() -> None:
    client, _ = _client(_response(payload=ValueError("bad json")))

    with pytest.raises(StoreError, match="decode"):
        client.fetch_document_status("D1")
