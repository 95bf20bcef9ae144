"""Gateway contracts for the two external collaborators.

The orchestrator, job runner and chat manager depend only on these
protocols; KnowledgeSourceService and ContentGeneratorService are the
production implementations, tests substitute in-memory fakes.

Every method raises NetworkFailure when the service is unreachable or
answers with a non-success status.
"""

from typing import Optional, Protocol

from app.models import ChatMessage, HeritageContent, Language, RestoredImage, WikiImage


class KnowledgeSource(Protocol):
    """Resolves places to names, summaries and representative images."""

    async def search(self, query: str) -> list[str]:
        """Place names ordered by relevance. May be empty."""
        ...

    async def resolve(self, name: str) -> str:
        """Canonical place id for a user-supplied name."""
        ...

    async def summary(self, place_name: str) -> str:
        """Plain-text summary, empty string when unavailable."""
        ...

    async def images(self, place_name: str) -> list[WikiImage]:
        """Up to five non-vector images with direct URLs."""
        ...


class ContentGenerator(Protocol):
    """Generates heritage reports, restored images and chat replies."""

    async def generate_report(self, place_name: str, summary: str, language: Language) -> HeritageContent:
        """Validated report in language. Raises GenerationError on malformed output."""
        ...

    async def restore_image(self, image: bytes, mime_type: str, context: str) -> Optional[RestoredImage]:
        """Restored image, or None when the model produced no image part."""
        ...

    async def converse(self, message: str, transcript: list[ChatMessage], language: Language) -> str:
        """Reply to message in language, conditioned on the prior transcript."""
        ...
