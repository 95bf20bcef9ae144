"""Domain models for the heritage assistant chat."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from app.models.enums import ChatRole, Language


class ChatMessage(BaseModel):
    """One transcript entry. Language is supplied per call, not stored."""

    model_config = ConfigDict(frozen=True)

    role: ChatRole
    text: str


class ChatSendRequest(BaseModel):
    """Request payload for sending a chat message."""

    message: str = Field(max_length=12000)
    language: Optional[Language] = None


class ChatSendResponse(BaseModel):
    """Reply appended for a chat message, plus the transcript length after it."""

    reply: ChatMessage
    transcript_length: int


class ChatTranscriptView(BaseModel):
    """Ordered transcript snapshot."""

    messages: list[ChatMessage] = Field(default_factory=list)
