"""
Itihaasa models.

Usage:
    from app.models import Language, HeritageContent, PlaceDetails, SelectionState
    from app.models import ChatMessage, ReconstructionJob, RestoredImage
"""

# --- Enums ---
from app.models.enums import (
    Language,
    ChatRole,
    SelectionPhase,
    SelectionErrorKind,
    JobStatus,
)

# --- Result models ---
from app.models.results import RestoredImage

# --- Domain models ---
from app.models.domain import (
    UNDOCUMENTED_PHRASE, Poet, HeritageContent,
    WikiImage, PlaceDetails, SelectionError, SelectionState,
    PlaceSelectRequest, LanguageChangeRequest, PlaceSearchResult, CacheStats,
    ChatMessage, ChatSendRequest, ChatSendResponse, ChatTranscriptView,
    ReconstructionJob, ReconstructionStartRequest, ReconstructionJobView,
)

__all__ = [
    # Enums
    "Language", "ChatRole", "SelectionPhase", "SelectionErrorKind", "JobStatus",
    # Results
    "RestoredImage",
    # Domain
    "UNDOCUMENTED_PHRASE", "Poet", "HeritageContent",
    "WikiImage", "PlaceDetails", "SelectionError", "SelectionState",
    "PlaceSelectRequest", "LanguageChangeRequest", "PlaceSearchResult", "CacheStats",
    "ChatMessage", "ChatSendRequest", "ChatSendResponse", "ChatTranscriptView",
    "ReconstructionJob", "ReconstructionStartRequest", "ReconstructionJobView",
]
