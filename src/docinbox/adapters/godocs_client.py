from __future__ import annotations

import threading
from typing import Any

import requests

from docinbox.domain.errors import StoreError
from docinbox.domain.models import DocumentRef, DocumentStatus, Tag, UntaggedPage
from docinbox.ports.store_port import DocumentStorePort


class GodocsClient(DocumentStorePort):
    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._tags: dict[int, Tag] = {}
        self._tags_lock = threading.Lock()

    @property
    def base_url(self) -> str:
        return self._base_url

    def fetch_tags(self) -> list[Tag]:
        payload = self._get_json("/api/tags", context="fetch tags")
        tags = [_tag_from_json(item) for item in payload or []]
        with self._tags_lock:
            self._tags = {tag.tag_id: tag for tag in tags}
        return tags

    def known_tags(self) -> dict[int, Tag]:
        with self._tags_lock:
            return dict(self._tags)

    def fetch_untagged(self, page: int, page_size: int) -> UntaggedPage:
        payload = self._get_json(
            "/api/documents/untagged",
            context="fetch untagged documents",
            params={"page": page, "pageSize": page_size},
        )
        payload = payload or {}
        documents = [
            DocumentRef(
                ulid=item.get("ulid", ""),
                name=item.get("name", ""),
                document_type=item.get("document_type", ""),
                folder=item.get("folder", ""),
            )
            for item in payload.get("documents") or []
        ]
        return UntaggedPage(documents=documents, total_count=int(payload.get("totalCount", 0)))

    def fetch_document_status(self, ulid: str) -> DocumentStatus:
        payload = self._get_json(f"/api/document/{ulid}/status", context="fetch document status")
        payload = payload or {}
        return DocumentStatus(
            ulid=payload.get("ulid", ulid),
            document_type=payload.get("documentType", ""),
            has_text=bool(payload.get("hasText", False)),
            has_thumbnail=bool(payload.get("hasThumbnail", False)),
            thumbnail_url=payload.get("thumbnailURL", ""),
            view_url=payload.get("viewURL", ""),
            ingress_time=payload.get("ingressTime", ""),
            document_date=payload.get("documentDate", ""),
        )

    def fetch_document_text(self, ulid: str) -> str:
        response = self._request(
            "GET",
            f"/api/document/{ulid}/text",
            context="fetch document text",
            allow_404=True,
        )
        if response.status_code == 404:
            return ""
        payload = _decode_json(response, context="fetch document text")
        if isinstance(payload, dict):
            text = payload.get("text")
            if isinstance(text, str):
                return text
        return ""

    def upload_document_text(self, ulid: str, text: str) -> None:
        self._request(
            "PUT",
            f"/api/document/{ulid}/text",
            context="upload document text",
            json={"text": text},
        )

    def update_document_date(self, ulid: str, date: str) -> None:
        self._request(
            "PUT",
            f"/api/document/{ulid}/date",
            context="update document date",
            json={"date": date},
        )

    def fetch_document_tags(self, ulid: str) -> list[Tag]:
        response = self._request("GET", f"/api/documents/{ulid}/tags", context="fetch document tags")
        try:
            payload = response.json()
        except ValueError:
            return []
        # godocs answers null for a document without tags
        if not isinstance(payload, list):
            return []
        return [_tag_from_json(item) for item in payload]

    def add_tag(self, ulid: str, tag_id: int) -> None:
        self._request(
            "POST",
            f"/api/documents/{ulid}/tags",
            context="add tag",
            json={"tag_id": tag_id},
        )

    def remove_tag(self, ulid: str, tag_id: int) -> None:
        self._request("DELETE", f"/api/documents/{ulid}/tags/{tag_id}", context="remove tag")

    def fetch_tag_groups(self) -> list[str]:
        response = self._request("GET", "/api/tags/groups", context="fetch tag groups")
        try:
            payload = response.json()
        except ValueError:
            return []
        if not isinstance(payload, list):
            return []
        return [str(group) for group in payload]

    def create_tag(self, name: str, color: str, group: str = "") -> Tag:
        body: dict[str, Any] = {"name": name, "color": color}
        if group:
            body["tag_group"] = group
        response = self._request("POST", "/api/tags", context="create tag", json=body)
        tag = _tag_from_json(_decode_json(response, context="create tag") or {})
        with self._tags_lock:
            self._tags[tag.tag_id] = tag
        return tag

    def download_document(self, ulid: str) -> tuple[bytes, str]:
        response = self._request("GET", f"/document/view/{ulid}", context="download document")
        if response.status_code != 200:
            raise StoreError(f"Download failed with status {response.status_code} for {ulid}.")
        return response.content, response.headers.get("Content-Type", "")

    def fetch_thumbnail(self, ulid: str) -> tuple[bytes, str]:
        response = self._request("GET", f"/api/document/{ulid}/thumbnail", context="fetch thumbnail")
        return response.content, response.headers.get("Content-Type", "")

    def _get_json(self, path: str, context: str, params: dict | None = None) -> Any:
        response = self._request("GET", path, context=context, params=params)
        return _decode_json(response, context=context)

    def _request(
        self,
        method: str,
        path: str,
        context: str,
        allow_404: bool = False,
        **kwargs: Any,
    ) -> requests.Response:
        try:
            response = self._session.request(
                method,
                f"{self._base_url}{path}",
                timeout=self._timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            raise StoreError(f"Failed to {context}: {exc}") from exc
        if allow_404 and response.status_code == 404:
            return response
        self._raise_for_status(response, context=context)
        return response

    @staticmethod
    def _raise_for_status(response: requests.Response, context: str) -> None:
        if response.status_code == 404:
            raise StoreError(f"Resource not found while attempting to {context}.")
        if response.status_code >= 400:
            raise StoreError(
                f"{context} failed ({response.status_code}): {response.text.strip()}"
            )


def _decode_json(response: requests.Response, context: str) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise StoreError(f"Failed to decode response to {context}.") from exc


def _tag_from_json(item: dict) -> Tag:
    return Tag(
        tag_id=int(item.get("id", 0)),
        name=item.get("name", ""),
        color=item.get("color", ""),
        tag_group=item.get("tag_group", "") or "",
        sort_order=int(item.get("sort_order", 0) or 0),
    )
