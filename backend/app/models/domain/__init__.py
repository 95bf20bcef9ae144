"""Domain models: places, heritage reports, chat and reconstruction jobs."""

from app.models.domain.heritage import UNDOCUMENTED_PHRASE, Poet, HeritageContent
from app.models.domain.place import (
    WikiImage,
    PlaceDetails,
    SelectionError,
    SelectionState,
    PlaceSelectRequest,
    LanguageChangeRequest,
    PlaceSearchResult,
    CacheStats,
)
from app.models.domain.chat import ChatMessage, ChatSendRequest, ChatSendResponse, ChatTranscriptView
from app.models.domain.reconstruction import (
    ReconstructionJob,
    ReconstructionStartRequest,
    ReconstructionJobView,
)

__all__ = [
    "UNDOCUMENTED_PHRASE", "Poet", "HeritageContent",
    "WikiImage", "PlaceDetails", "SelectionError", "SelectionState",
    "PlaceSelectRequest", "LanguageChangeRequest", "PlaceSearchResult", "CacheStats",
    "ChatMessage", "ChatSendRequest", "ChatSendResponse", "ChatTranscriptView",
    "ReconstructionJob", "ReconstructionStartRequest", "ReconstructionJobView",
]
