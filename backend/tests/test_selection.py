import asyncio

from conftest import FakeGenerator, FakeKnowledgeSource

from app.errors import GenerationError
from app.models import Language, SelectionErrorKind, SelectionPhase
from app.services.content_cache import ContentCache
from app.services.selection import SelectionOrchestrator


def _orchestrator(knowledge_source=None, generator=None, cache=None):
    return SelectionOrchestrator(
        knowledge_source=knowledge_source or FakeKnowledgeSource(),
        generator=generator or FakeGenerator(),
        cache=cache if cache is not None else ContentCache(),
        language=Language.EN,
    )


def test_select_place_loads_summary_images_and_report(knowledge_source, generator):
    orch = _orchestrator(knowledge_source, generator)
    state = asyncio.run(orch.select_place("Lepakshi"))

    assert state.phase == SelectionPhase.READY
    assert state.selected.id == "Lepakshi"
    assert state.selected.summary == "Lepakshi summary"
    assert len(state.selected.images) == 3
    assert state.selected.content.overview == "overview Lepakshi/en"
    assert state.selected.content_language == Language.EN
    assert state.last_cache_hit is False
    assert generator.report_calls == [("Lepakshi", Language.EN)]


def test_select_place_uses_resolved_place_id():
    ks = FakeKnowledgeSource(aliases={"lepakshi temple": "Lepakshi"})
    orch = _orchestrator(knowledge_source=ks)
    state = asyncio.run(orch.select_place("  lepakshi   temple "))

    assert state.selected.id == "Lepakshi"
    assert ks.count("resolve", "lepakshi temple") == 1
    assert ks.count("summary", "Lepakshi") == 1


def test_select_place_rejects_blank_name():
    orch = _orchestrator()
    try:
        asyncio.run(orch.select_place("   "))
    except ValueError:
        pass
    else:
        raise AssertionError("blank place name accepted")
    assert orch.state.generation == 0


def test_language_round_trip_reuses_cache(knowledge_source, generator):
    cache = ContentCache()
    orch = _orchestrator(knowledge_source, generator, cache)

    async def scenario():
        first = await orch.select_place("Lepakshi")
        telugu = await orch.change_language(Language.TE)
        back = await orch.change_language(Language.EN)
        return first, telugu, back

    first, telugu, back = asyncio.run(scenario())

    assert knowledge_source.count("summary", "Lepakshi") == 1
    assert knowledge_source.count("images", "Lepakshi") == 1
    assert generator.report_calls == [("Lepakshi", Language.EN), ("Lepakshi", Language.TE)]
    assert ("Lepakshi", Language.EN) in cache
    assert ("Lepakshi", Language.TE) in cache

    assert telugu.selected.content.overview == "overview Lepakshi/te"
    assert telugu.selected.images == first.selected.images
    assert back.selected.content is first.selected.content
    assert back.selected.content_language == Language.EN
    assert back.last_cache_hit is True


def test_change_language_without_selection_only_switches_language(knowledge_source, generator):
    orch = _orchestrator(knowledge_source, generator)
    state = asyncio.run(orch.change_language("hi"))

    assert state.language == Language.HI
    assert state.phase == SelectionPhase.IDLE
    assert state.selected is None
    assert knowledge_source.calls == []
    assert generator.report_calls == []


def test_earlier_selection_completing_last_is_discarded():
    ks = FakeKnowledgeSource()
    orch = _orchestrator(knowledge_source=ks)

    async def scenario():
        gate = ks.hold("Amaravati")
        slow = asyncio.create_task(orch.select_place("Amaravati"))
        await asyncio.sleep(0)
        await orch.select_place("Lepakshi")
        gate.set()
        await slow
        return orch.state

    state = asyncio.run(scenario())

    assert state.phase == SelectionPhase.READY
    assert state.selected.id == "Lepakshi"
    assert state.selected.content.overview == "overview Lepakshi/en"


def test_stale_report_is_discarded_but_cached():
    gen = FakeGenerator()
    cache = ContentCache()
    orch = _orchestrator(generator=gen, cache=cache)

    async def scenario():
        await orch.select_place("Lepakshi")
        gate = gen.hold_report("Lepakshi", Language.TE)
        slow = asyncio.create_task(orch.change_language(Language.TE))
        await asyncio.sleep(0)
        await orch.change_language(Language.HI)
        gate.set()
        await slow
        return orch.state

    state = asyncio.run(scenario())

    assert state.language == Language.HI
    assert state.selected.content_language == Language.HI
    assert state.selected.content.overview == "overview Lepakshi/hi"
    assert ("Lepakshi", Language.TE) in cache


def test_stale_failure_does_not_surface():
    ks = FakeKnowledgeSource()
    ks.failing.add("Amaravati")
    orch = _orchestrator(knowledge_source=ks)

    async def scenario():
        gate = ks.hold("Amaravati")
        slow = asyncio.create_task(orch.select_place("Amaravati"))
        await asyncio.sleep(0)
        await orch.select_place("Tirupati")
        gate.set()
        await slow
        return orch.state

    state = asyncio.run(scenario())

    assert state.error is None
    assert state.phase == SelectionPhase.READY
    assert state.selected.id == "Tirupati"


def test_network_failure_keeps_previous_selection():
    ks = FakeKnowledgeSource()
    ks.failing.add("Atlantis")
    orch = _orchestrator(knowledge_source=ks)

    async def scenario():
        await orch.select_place("Lepakshi")
        return await orch.select_place("Atlantis")

    state = asyncio.run(scenario())

    assert state.phase == SelectionPhase.ERROR
    assert state.error.kind == SelectionErrorKind.NETWORK_FAILURE
    assert state.selected.id == "Lepakshi"
    assert state.selected.content.overview == "overview Lepakshi/en"
    assert state.pending_place is None


def test_generation_error_is_distinguishable_and_not_cached():
    gen = FakeGenerator()
    gen.report_errors[("Srisailam", Language.EN)] = GenerationError("only one poet")
    cache = ContentCache()
    orch = _orchestrator(generator=gen, cache=cache)

    state = asyncio.run(orch.select_place("Srisailam"))

    assert state.phase == SelectionPhase.ERROR
    assert state.error.kind == SelectionErrorKind.GENERATION_ERROR
    assert state.selected is None
    assert ("Srisailam", Language.EN) not in cache
    assert len(cache) == 0


def test_failed_language_change_never_shows_stale_content():
    gen = FakeGenerator()
    gen.report_errors[("Lepakshi", Language.TE)] = GenerationError("malformed")
    orch = _orchestrator(generator=gen)

    async def scenario():
        await orch.select_place("Lepakshi")
        return await orch.change_language(Language.TE)

    state = asyncio.run(scenario())

    assert state.phase == SelectionPhase.ERROR
    assert state.language == Language.TE
    assert state.selected.id == "Lepakshi"
    assert state.selected.content is None
    assert len(state.selected.images) == 3


def test_language_change_during_pending_selection_reloads_pending_place():
    ks = FakeKnowledgeSource()
    orch = _orchestrator(knowledge_source=ks)

    async def scenario():
        await orch.select_place("Lepakshi")
        gate = ks.hold("Amaravati")
        selecting = asyncio.create_task(orch.select_place("Amaravati"))
        await asyncio.sleep(0)
        switching = asyncio.create_task(orch.change_language(Language.TE))
        await asyncio.sleep(0)
        gate.set()
        await asyncio.gather(selecting, switching)
        return orch.state

    state = asyncio.run(scenario())

    assert state.phase == SelectionPhase.READY
    assert state.selected.id == "Amaravati"
    assert state.selected.content_language == Language.TE
    assert state.selected.content.overview == "overview Amaravati/te"


def test_clear_selection_supersedes_in_flight_request():
    ks = FakeKnowledgeSource()
    orch = _orchestrator(knowledge_source=ks)

    async def scenario():
        gate = ks.hold("Lepakshi")
        selecting = asyncio.create_task(orch.select_place("Lepakshi"))
        await asyncio.sleep(0)
        await orch.clear_selection()
        gate.set()
        await selecting
        return orch.state

    state = asyncio.run(scenario())

    assert state.phase == SelectionPhase.IDLE
    assert state.selected is None
    assert state.pending_place is None


def test_content_is_dropped_while_new_language_loads():
    gen = FakeGenerator()
    orch = _orchestrator(generator=gen)
    seen = []

    async def listener(state):
        seen.append(state)

    async def scenario():
        await orch.select_place("Lepakshi")
        orch.subscribe(listener)
        await orch.change_language(Language.HI)

    asyncio.run(scenario())

    loading, ready = seen
    assert loading.phase == SelectionPhase.LOADING
    assert loading.language == Language.HI
    assert loading.selected.content is None
    assert ready.selected.content_language == Language.HI


def test_subscribers_observe_loading_then_ready():
    orch = _orchestrator()
    phases = []

    async def listener(state):
        phases.append((state.phase, state.pending_place))

    unsubscribe = orch.subscribe(listener)
    asyncio.run(orch.select_place("Lepakshi"))
    unsubscribe()
    asyncio.run(orch.clear_selection())

    assert phases == [
        (SelectionPhase.LOADING, "Lepakshi"),
        (SelectionPhase.READY, None),
    ]


def test_search_places_defaults_to_heritage_query(knowledge_source):
    orch = _orchestrator(knowledge_source=knowledge_source)
    places = asyncio.run(orch.search_places())

    assert places[0] == "Lepakshi"
    assert knowledge_source.calls == [("search", "Heritage sites in Andhra Pradesh")]
