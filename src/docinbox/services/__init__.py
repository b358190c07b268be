from .background import BackgroundRunner
from .enrichment_service import EnrichmentService
from .stage_tracker import StageTracker
from .tag_history import TagHistory
from .thumbnail_cache import ThumbnailCache
from .triage_service import TriageService
from .triage_state import ProvenanceRegistry, TriageState
from .undo_service import UndoService

__all__ = [
    "BackgroundRunner",
    "EnrichmentService",
    "ProvenanceRegistry",
    "StageTracker",
    "TagHistory",
    "ThumbnailCache",
    "TriageService",
    "TriageState",
    "UndoService",
]
