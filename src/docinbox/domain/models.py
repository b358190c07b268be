from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass
class DocumentRef:
    ulid: str
    name: str
    document_type: str
    folder: str = ""


@dataclass
class DocumentStatus:
    ulid: str
    document_type: str
    has_text: bool
    has_thumbnail: bool
    thumbnail_url: str = ""
    view_url: str = ""
    ingress_time: str = ""
    document_date: str = ""


@dataclass
class UntaggedPage:
    documents: list[DocumentRef]
    total_count: int


@dataclass
class Tag:
    tag_id: int
    name: str
    color: str = ""
    tag_group: str = ""
    sort_order: int = 0


@dataclass(frozen=True)
class TagSetEntry:
    tag_id: int
    name: str
    color: str = ""


@dataclass(frozen=True)
class RecentTagSet:
    tags: tuple[TagSetEntry, ...]
    label: str


@dataclass
class Shortcut:
    key: str
    tag_id: int
    name: str = ""
    color: str = ""


@dataclass(frozen=True)
class TagAddAction:
    doc_id: str
    doc_name: str
    tag_id: int
    tag_name: str

    @property
    def description(self) -> str:
        return self.doc_name or self.doc_id


@dataclass(frozen=True)
class ItemMoveAction:
    file_name: str
    from_dir: str
    to_dir: str

    @property
    def description(self) -> str:
        return self.file_name


UndoAction = TagAddAction | ItemMoveAction


class EnrichmentOutcome(str, Enum):
    DOWNLOAD_FAILED = "download_failed"
    UNSUPPORTED_TYPE = "unsupported_type"
    OCR_FAILED = "ocr_failed"
    NO_TEXT = "no_text"
    TEXT_UPLOAD_FAILED = "text_upload_failed"
    INFERENCE_FAILED = "inference_failed"
    NO_DATE = "no_date"
    DATE_UPLOAD_FAILED = "date_upload_failed"
    DATE_SET = "date_set"


@dataclass
class EditTagItem:
    tag_id: int
    name: str
    color: str
    group: str
    active: bool


@dataclass
class EditTagGroup:
    name: str
    tags: list[EditTagItem] = field(default_factory=list)


@dataclass
class InboxItem:
    ulid: str
    name: str
    document_type: str
    folder: str = ""
    ingress_time: str = ""
    thumbnail_url: str = ""
    view_url: str = ""
    text_preview: str = ""
    has_thumbnail: bool = False
    has_hires_thumb: bool = False
    processing: bool = False
    llm_working: bool = False
    document_date: str = ""
    date_is_inferred: bool = False


@dataclass
class InboxView:
    remaining: int
    done: bool
    item: InboxItem | None = None
    groups: list[EditTagGroup] = field(default_factory=list)
    tag_groups: list[str] = field(default_factory=list)
    recent_sets: list[RecentTagSet] = field(default_factory=list)
    undoable: bool = False
    undo_info: str = ""
