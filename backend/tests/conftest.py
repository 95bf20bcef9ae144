import asyncio
from typing import Optional

import pytest

from app.errors import NetworkFailure
from app.models import ChatMessage, HeritageContent, Language, Poet, RestoredImage, WikiImage


def make_report(place: str, language: Language) -> HeritageContent:
    tag = f"{place}/{language.value}"
    return HeritageContent(
        overview=f"overview {tag}",
        architecture=f"architecture {tag}",
        monuments=f"monuments {tag}",
        traditions=f"traditions {tag}",
        cuisine=f"cuisine {tag}",
        art_crafts=f"crafts {tag}",
        literature=f"literature {tag}",
        agriculture=f"agriculture {tag}",
        lifestyle=f"lifestyle {tag}",
        poets=[
            Poet(name="Nannaya", period="11th century", language="Telugu",
                 contribution="Andhra Mahabharatam", verse="...", source="Wikipedia"),
            Poet(name="Vemana", period="17th century", language="Telugu",
                 contribution="Vemana Satakam", verse="...", source="Wikipedia"),
        ],
    )


class FakeKnowledgeSource:
    """In-memory knowledge source. hold(place) parks summary() until released."""

    def __init__(self, places: Optional[list[str]] = None, aliases: Optional[dict[str, str]] = None):
        self.places = places or ["Lepakshi", "Amaravati", "Tirupati", "Srisailam"]
        self.aliases = aliases or {}
        self.failing: set[str] = set()
        self.calls: list[tuple[str, str]] = []
        self._gates: dict[str, asyncio.Event] = {}

    def hold(self, place: str) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates[place] = gate
        return gate

    def count(self, operation: str, place: str) -> int:
        return self.calls.count((operation, place))

    async def search(self, query: str) -> list[str]:
        self.calls.append(("search", query))
        return list(self.places)

    async def resolve(self, name: str) -> str:
        self.calls.append(("resolve", name))
        return self.aliases.get(name, name)

    async def summary(self, place_name: str) -> str:
        self.calls.append(("summary", place_name))
        gate = self._gates.get(place_name)
        if gate is not None:
            await gate.wait()
        if place_name in self.failing:
            raise NetworkFailure(f"{place_name} unreachable")
        return f"{place_name} summary"

    async def images(self, place_name: str) -> list[WikiImage]:
        self.calls.append(("images", place_name))
        return [
            WikiImage(url=f"https://upload.example.org/{place_name}_{i}.jpg", caption=f"{place_name} {i}")
            for i in range(3)
        ]


class FakeGenerator:
    """In-memory content generator with per-call gates and injected failures."""

    def __init__(self):
        self.report_calls: list[tuple[str, Language]] = []
        self.report_errors: dict[tuple[str, Language], Exception] = {}
        self._report_gates: dict[tuple[str, Language], asyncio.Event] = {}

        self.restore_calls: list[tuple[bytes, str, str]] = []
        self.restore_result: Optional[RestoredImage] = RestoredImage(data=b"restored", mime_type="image/png")
        self.restore_error: Optional[Exception] = None
        self.restore_gate: Optional[asyncio.Event] = None

        self.converse_calls: list[tuple[str, list[ChatMessage], Language]] = []
        self.converse_error: Optional[Exception] = None
        self.converse_gate: Optional[asyncio.Event] = None

    def hold_report(self, place: str, language: Language) -> asyncio.Event:
        gate = asyncio.Event()
        self._report_gates[(place, language)] = gate
        return gate

    async def generate_report(self, place_name: str, summary: str, language: Language) -> HeritageContent:
        key = (place_name, language)
        self.report_calls.append(key)
        gate = self._report_gates.get(key)
        if gate is not None:
            await gate.wait()
        if key in self.report_errors:
            raise self.report_errors[key]
        return make_report(place_name, language)

    async def restore_image(self, image: bytes, mime_type: str, context: str) -> Optional[RestoredImage]:
        self.restore_calls.append((image, mime_type, context))
        if self.restore_gate is not None:
            await self.restore_gate.wait()
        if self.restore_error is not None:
            raise self.restore_error
        return self.restore_result

    async def converse(self, message: str, transcript: list[ChatMessage], language: Language) -> str:
        self.converse_calls.append((message, list(transcript), language))
        if self.converse_gate is not None:
            await self.converse_gate.wait()
        if self.converse_error is not None:
            raise self.converse_error
        return f"[{language.value}] re: {message}"


@pytest.fixture
def knowledge_source():
    return FakeKnowledgeSource()


@pytest.fixture
def generator():
    return FakeGenerator()
