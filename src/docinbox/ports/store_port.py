from __future__ import annotations

from typing import Protocol

from docinbox.domain.models import DocumentStatus, Tag, UntaggedPage


class DocumentStorePort(Protocol):
    def fetch_tags(self) -> list[Tag]:
        """Return all server tags and refresh the local tag cache."""

    def known_tags(self) -> dict[int, Tag]:
        """Return the cached tags keyed by id."""

    def fetch_untagged(self, page: int, page_size: int) -> UntaggedPage:
        """Return one page of untagged documents plus the total count."""

    def fetch_document_status(self, ulid: str) -> DocumentStatus:
        """Return text/thumbnail/date status for a document."""

    def fetch_document_text(self, ulid: str) -> str:
        """Return extracted full text, or an empty string if none exists."""

    def upload_document_text(self, ulid: str, text: str) -> None:
        """Store extracted full text for a document."""

    def update_document_date(self, ulid: str, date: str) -> None:
        """Set the document date (YYYY-MM-DD)."""

    def fetch_document_tags(self, ulid: str) -> list[Tag]:
        """Return tags currently applied to a document."""

    def add_tag(self, ulid: str, tag_id: int) -> None:
        """Apply a tag to a document."""

    def remove_tag(self, ulid: str, tag_id: int) -> None:
        """Remove a tag from a document."""

    def fetch_tag_groups(self) -> list[str]:
        """Return the names of configured tag groups."""

    def create_tag(self, name: str, color: str, group: str = "") -> Tag:
        """Create a tag and return it."""

    def download_document(self, ulid: str) -> tuple[bytes, str]:
        """Return raw document bytes and the response content type."""
