"""
Dependency injection for FastAPI routes.

Provides typed service dependencies that enable IDE navigation (Ctrl+Click).
"""

from typing import Annotated
from fastapi import Request, Depends

from app.services.chat import ChatSessionManager
from app.services.reconstruction import ReconstructionJobRunner
from app.services.selection import SelectionOrchestrator


def get_selection_orchestrator(request: Request) -> SelectionOrchestrator:
    return request.app.state.selection


def get_reconstruction_runner(request: Request) -> ReconstructionJobRunner:
    return request.app.state.reconstruction


def get_chat_session(request: Request) -> ChatSessionManager:
    return request.app.state.chat


SelectionOrchestratorDep = Annotated[SelectionOrchestrator, Depends(get_selection_orchestrator)]
ReconstructionRunnerDep = Annotated[ReconstructionJobRunner, Depends(get_reconstruction_runner)]
ChatSessionDep = Annotated[ChatSessionManager, Depends(get_chat_session)]
