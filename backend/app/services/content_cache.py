"""In-memory heritage report cache keyed by (place, language)."""

from typing import NamedTuple, Optional

from app.models import CacheStats, HeritageContent, Language


class CacheKey(NamedTuple):
    place_id: str
    language: Language


class ContentCache:
    """Unbounded memo of generated reports. Lives for the process only."""

    def __init__(self):
        self._entries: dict[CacheKey, HeritageContent] = {}
        self._hits = 0
        self._misses = 0

    def get(self, place_id: str, language: Language) -> Optional[HeritageContent]:
        value = self._entries.get(CacheKey(place_id, Language(language)))
        if value is None:
            self._misses += 1
        else:
            self._hits += 1
        return value

    def put(self, place_id: str, language: Language, content: HeritageContent) -> None:
        self._entries[CacheKey(place_id, Language(language))] = content

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def stats(self) -> CacheStats:
        return CacheStats(entries=len(self._entries), hits=self._hits, misses=self._misses)
