"""Place selection domain models."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from app.models.domain.heritage import HeritageContent
from app.models.enums import Language, SelectionErrorKind, SelectionPhase


class WikiImage(BaseModel):
    """A representative image resolved to a direct-fetchable URL."""

    model_config = ConfigDict(frozen=True)

    url: str
    caption: str


class PlaceDetails(BaseModel):
    """A selected place.

    summary and images are fetched once per place; content belongs to
    content_language only.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    summary: str = ""
    images: tuple[WikiImage, ...] = ()
    content: Optional[HeritageContent] = None
    content_language: Optional[Language] = None


class SelectionError(BaseModel):
    """Terminal failure of the latest selection request."""

    model_config = ConfigDict(frozen=True)

    kind: SelectionErrorKind
    message: str


class SelectionState(BaseModel):
    """Read-only snapshot of the selection orchestrator."""

    model_config = ConfigDict(frozen=True)

    generation: int = 0
    language: Language = Language.EN
    phase: SelectionPhase = SelectionPhase.IDLE
    pending_place: Optional[str] = None
    selected: Optional[PlaceDetails] = None
    error: Optional[SelectionError] = None
    last_cache_hit: Optional[bool] = None


class PlaceSelectRequest(BaseModel):
    """Payload for selecting a place by name."""

    name: str = Field(min_length=1, max_length=300)


class LanguageChangeRequest(BaseModel):
    """Payload for switching the content language."""

    language: Language


class PlaceSearchResult(BaseModel):
    """Candidate place names ordered by source relevance."""

    query: str
    places: list[str] = Field(default_factory=list)


class CacheStats(BaseModel):
    """Counters exposed by the content cache."""

    entries: int = 0
    hits: int = 0
    misses: int = 0
