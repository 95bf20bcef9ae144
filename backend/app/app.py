"""
Itihaasa - FastAPI Backend
"""

from contextlib import asynccontextmanager

import httpx
import socketio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.logging import setup_logging, get_logger
from app.models import ChatMessage, ReconstructionJob, ReconstructionJobView, SelectionState
from app.routers import chat, places, reconstruction
from app.services.chat import ChatSessionManager
from app.services.content_cache import ContentCache
from app.services.content_generator import ContentGeneratorService
from app.services.knowledge_source import KnowledgeSourceService
from app.services.reconstruction import ReconstructionJobRunner
from app.services.selection import SelectionOrchestrator

logger = get_logger('main')

# Socket.IO server for real-time state updates
sio = socketio.AsyncServer(
    async_mode='asgi',
    cors_allowed_origins='*'
)


async def _emit_selection_state(state: SelectionState) -> None:
    await sio.emit('selection_state', state.model_dump(mode='json'))


async def _emit_reconstruction_job(job: ReconstructionJob) -> None:
    await sio.emit('reconstruction_job', ReconstructionJobView.from_job(job).model_dump(mode='json'))


async def _emit_chat_transcript(messages: list[ChatMessage]) -> None:
    await sio.emit('chat_transcript', [m.model_dump(mode='json') for m in messages])


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.DEBUG)
    logger.info("Starting Itihaasa API")

    http_client = httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)

    # Initialize services
    knowledge_source = KnowledgeSourceService(client=http_client)
    generator = ContentGeneratorService(client=http_client)

    app.state.selection = SelectionOrchestrator(
        knowledge_source=knowledge_source,
        generator=generator,
        cache=ContentCache(),
    )
    app.state.reconstruction = ReconstructionJobRunner(generator=generator)
    app.state.chat = ChatSessionManager(generator=generator)
    app.state.generator = generator

    app.state.selection.subscribe(_emit_selection_state)
    app.state.reconstruction.subscribe(_emit_reconstruction_job)
    app.state.chat.subscribe(_emit_chat_transcript)
    logger.info("Services initialized")

    yield

    logger.info("Shutting down application")
    await http_client.aclose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Itihaasa API",
        description="Andhra Pradesh heritage explorer with AI reports, reconstruction and chat",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(places.router, prefix="/api/places", tags=["Places"])
    app.include_router(reconstruction.router, prefix="/api/reconstruction", tags=["Reconstruction"])
    app.include_router(chat.router, prefix="/api/chat", tags=["Chat"])

    @sio.event
    async def connect(sid, environ):
        logger.debug(f"Client {sid[:8]}... connected")
        if hasattr(app.state, 'selection'):
            await sio.emit('selection_state', app.state.selection.state.model_dump(mode='json'), to=sid)

    @sio.event
    async def disconnect(sid):
        logger.debug(f"Client {sid[:8]}... disconnected")

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "service": "itihaasa-heritage",
            "generator_available": app.state.generator.is_available if hasattr(app.state, 'generator') else False,
        }

    @app.get("/")
    async def root():
        return {
            "name": "Itihaasa API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/health"
        }

    return app


def create_asgi_app() -> socketio.ASGIApp:
    """FastAPI app wrapped with the Socket.IO server (uvicorn entry point)."""
    return socketio.ASGIApp(sio, other_asgi_app=create_app())
