"""Heritage assistant chat routes."""

from fastapi import APIRouter, HTTPException

from app.dependencies import ChatSessionDep, SelectionOrchestratorDep
from app.errors import EmptyMessage
from app.models import ChatSendRequest, ChatSendResponse, ChatTranscriptView

router = APIRouter()


@router.post("/messages", response_model=ChatSendResponse)
async def send_chat_message(
    body: ChatSendRequest,
    chat: ChatSessionDep,
    selection: SelectionOrchestratorDep,
):
    language = body.language or selection.language
    try:
        reply = await chat.send_message(body.message, language)
    except EmptyMessage as exc:
        raise HTTPException(exc.http_status, exc.message) from exc
    return ChatSendResponse(reply=reply, transcript_length=len(chat.transcript))


@router.get("/transcript", response_model=ChatTranscriptView)
async def get_transcript(chat: ChatSessionDep):
    return ChatTranscriptView(messages=chat.transcript)
