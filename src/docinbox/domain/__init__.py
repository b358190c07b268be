from .dates import parse_inferred_date
from .models import (
    DocumentRef,
    DocumentStatus,
    EnrichmentOutcome,
    InboxView,
    ItemMoveAction,
    RecentTagSet,
    Shortcut,
    Tag,
    TagAddAction,
    TagSetEntry,
)
from .stages import Stage
from .tag_sets import push_recent, tag_set_label

__all__ = [
    "DocumentRef",
    "DocumentStatus",
    "EnrichmentOutcome",
    "InboxView",
    "ItemMoveAction",
    "RecentTagSet",
    "Shortcut",
    "Stage",
    "Tag",
    "TagAddAction",
    "TagSetEntry",
    "parse_inferred_date",
    "push_recent",
    "tag_set_label",
]
