"""
Place selection orchestrator.

Owns the selected place, its language-independent data (summary, images)
and its language-dependent heritage report. Every request is tagged with
the generation counter at issue time; a result is applied only while its
tag is still current, so a slow response for an earlier selection or
language never overwrites a later one.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from app.config import settings
from app.errors import GenerationError, HeritageError
from app.logging import get_logger
from app.models import (
    HeritageContent,
    Language,
    PlaceDetails,
    SelectionError,
    SelectionErrorKind,
    SelectionPhase,
    SelectionState,
)
from app.services.content_cache import ContentCache
from app.services.events import StatePublisher
from app.services.gateways import ContentGenerator, KnowledgeSource

logger = get_logger("services.selection")


def _without_content(place: PlaceDetails | None, language: Language) -> PlaceDetails | None:
    if place is None or place.content_language == language:
        return place
    return place.model_copy(update={"content": None, "content_language": None})


def _loading_place(state: SelectionState, generation: int, name: str) -> SelectionState:
    return state.model_copy(update={
        "generation": generation,
        "phase": SelectionPhase.LOADING,
        "pending_place": name,
        "error": None,
    })


def _loading_content(state: SelectionState, generation: int, language: Language) -> SelectionState:
    selected = state.selected
    if selected is not None:
        selected = selected.model_copy(update={"content": None, "content_language": None})
    return state.model_copy(update={
        "generation": generation,
        "language": language,
        "phase": SelectionPhase.LOADING,
        "pending_place": None,
        "selected": selected,
        "error": None,
    })


def _language_switched(state: SelectionState, generation: int, language: Language) -> SelectionState:
    return state.model_copy(update={
        "generation": generation,
        "language": language,
        "selected": _without_content(state.selected, language),
    })


def _ready(state: SelectionState, place: PlaceDetails, cache_hit: bool) -> SelectionState:
    return state.model_copy(update={
        "phase": SelectionPhase.READY,
        "pending_place": None,
        "selected": place,
        "error": None,
        "last_cache_hit": cache_hit,
    })


def _failed(state: SelectionState, kind: SelectionErrorKind, message: str) -> SelectionState:
    return state.model_copy(update={
        "phase": SelectionPhase.ERROR,
        "pending_place": None,
        "error": SelectionError(kind=kind, message=message),
    })


def _cleared(state: SelectionState, generation: int) -> SelectionState:
    return SelectionState(generation=generation, language=state.language)


def _error_kind(error: Exception) -> SelectionErrorKind:
    if isinstance(error, GenerationError):
        return SelectionErrorKind.GENERATION_ERROR
    return SelectionErrorKind.NETWORK_FAILURE


class SelectionOrchestrator:
    """Sequence knowledge-source and generator calls for the selected place."""

    def __init__(
        self,
        knowledge_source: KnowledgeSource,
        generator: ContentGenerator,
        cache: ContentCache,
        language: Language | str = settings.DEFAULT_LANGUAGE,
    ):
        self.knowledge_source = knowledge_source
        self.generator = generator
        self.cache = cache
        self._generation = 0
        self._state = SelectionState(language=Language(language))
        self._events: StatePublisher[SelectionState] = StatePublisher("selection")

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def language(self) -> Language:
        return self._state.language

    def subscribe(self, listener: Callable[[SelectionState], Awaitable[None]]) -> Callable[[], None]:
        return self._events.subscribe(listener)

    def _advance(self) -> int:
        self._generation += 1
        return self._generation

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _commit(self, state: SelectionState) -> None:
        self._state = state
        await self._events.publish(state)

    async def _fail(self, generation: int, error: Exception) -> None:
        if not self._is_current(generation):
            logger.debug("Discarding stale failure gen=%d current=%d: %s", generation, self._generation, error)
            return
        kind = _error_kind(error)
        message = error.message if isinstance(error, HeritageError) else str(error)
        logger.warning("Selection request gen=%d failed (%s): %s", generation, kind.value, message)
        await self._commit(_failed(self._state, kind, message))

    async def _report_for(
        self, place_id: str, summary: str, language: Language
    ) -> tuple[HeritageContent, bool]:
        cached = self.cache.get(place_id, language)
        if cached is not None:
            return cached, True
        content = await self.generator.generate_report(place_id, summary, language)
        # Validated reports are cached even if the request has gone stale.
        self.cache.put(place_id, language, content)
        return content, False

    async def search_places(self, query: str | None = None) -> list[str]:
        return await self.knowledge_source.search(query or settings.WIKIPEDIA_DEFAULT_QUERY)

    async def select_place(self, name: str) -> SelectionState:
        cleaned = " ".join((name or "").split())
        if not cleaned:
            raise ValueError("Place name is empty")

        generation = self._advance()
        logger.info("Selecting place %r gen=%d lang=%s", cleaned, generation, self.language.value)
        await self._commit(_loading_place(self._state, generation, cleaned))
        await self._load_place(cleaned, generation)
        return self._state

    async def _load_place(self, name: str, generation: int) -> None:
        language = self._state.language
        try:
            place_id = await self.knowledge_source.resolve(name)
            summary, images = await asyncio.gather(
                self.knowledge_source.summary(place_id),
                self.knowledge_source.images(place_id),
            )
            content, cache_hit = await self._report_for(place_id, summary, language)
        except HeritageError as e:
            await self._fail(generation, e)
            return
        except Exception as e:
            logger.exception("Unexpected error loading place %r gen=%d", name, generation)
            await self._fail(generation, e)
            return

        if not self._is_current(generation):
            logger.debug("Discarding stale place %r gen=%d current=%d", place_id, generation, self._generation)
            return

        place = PlaceDetails(
            id=place_id,
            name=place_id,
            summary=summary,
            images=tuple(images),
            content=content,
            content_language=language,
        )
        logger.info(
            "Selected place %r gen=%d lang=%s images=%d cache_hit=%s",
            place_id, generation, language.value, len(place.images), cache_hit,
        )
        await self._commit(_ready(self._state, place, cache_hit))

    async def change_language(self, language: Language | str) -> SelectionState:
        language = Language(language)
        generation = self._advance()
        state = self._state
        logger.info("Changing language to %s gen=%d", language.value, generation)

        if state.phase == SelectionPhase.LOADING and state.pending_place:
            # A selection is still in flight: reload it in the new language.
            pending = state.pending_place
            await self._commit(_language_switched(state, generation, language))
            await self._load_place(pending, generation)
            return self._state

        if state.selected is None:
            await self._commit(_language_switched(state, generation, language))
            return self._state

        place = state.selected
        await self._commit(_loading_content(state, generation, language))
        try:
            content, cache_hit = await self._report_for(place.id, place.summary, language)
        except HeritageError as e:
            await self._fail(generation, e)
            return self._state
        except Exception as e:
            logger.exception("Unexpected error regenerating %r gen=%d", place.id, generation)
            await self._fail(generation, e)
            return self._state

        if not self._is_current(generation):
            logger.debug("Discarding stale report %r/%s gen=%d", place.id, language.value, generation)
            return self._state

        updated = place.model_copy(update={"content": content, "content_language": language})
        await self._commit(_ready(self._state, updated, cache_hit))
        return self._state

    async def clear_selection(self) -> SelectionState:
        generation = self._advance()
        logger.info("Clearing selection gen=%d", generation)
        await self._commit(_cleared(self._state, generation))
        return self._state
