"""Heritage assistant chat session."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from app.errors import EmptyMessage, HeritageError
from app.logging import get_logger
from app.models import ChatMessage, ChatRole, Language
from app.services.events import StatePublisher
from app.services.gateways import ContentGenerator

logger = get_logger("services.chat")

CHAT_FAILURE_REPLY = "Connection issues. Please try again."


class ChatSessionManager:
    """Own the append-only transcript and pair every user turn with a reply."""

    def __init__(self, generator: ContentGenerator):
        self.generator = generator
        self._transcript: list[ChatMessage] = []
        self._events: StatePublisher[list[ChatMessage]] = StatePublisher("chat")

    @property
    def transcript(self) -> list[ChatMessage]:
        return list(self._transcript)

    def subscribe(self, listener: Callable[[list[ChatMessage]], Awaitable[None]]) -> Callable[[], None]:
        return self._events.subscribe(listener)

    async def _append(self, message: ChatMessage) -> None:
        self._transcript.append(message)
        await self._events.publish(self.transcript)

    async def send_message(self, text: str, language: Language | str) -> ChatMessage:
        if not (text or "").strip():
            raise EmptyMessage("Chat message is empty")
        language = Language(language)

        history = self.transcript
        await self._append(ChatMessage(role=ChatRole.USER, text=text))

        try:
            reply_text = await self.generator.converse(text, history, language)
        except HeritageError as e:
            logger.warning(f"Chat reply failed ({e.code}): {e.message}")
            reply_text = CHAT_FAILURE_REPLY
        except Exception:
            logger.exception("Chat reply failed unexpectedly")
            reply_text = CHAT_FAILURE_REPLY

        reply = ChatMessage(role=ChatRole.ASSISTANT, text=reply_text)
        await self._append(reply)
        logger.info(
            "Chat turn lang=%s transcript_length=%d",
            language.value,
            len(self._transcript),
        )
        return reply
