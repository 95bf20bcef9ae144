"""
Enum definitions for the Itihaasa API.
"""
from enum import Enum


class Language(str, Enum):
    """Content language. English is primary; Telugu and Hindi are regional."""
    EN = "en"
    TE = "te"
    HI = "hi"

    @property
    def display_name(self) -> str:
        return _LANGUAGE_NAMES[self]


_LANGUAGE_NAMES = {
    Language.EN: "English",
    Language.TE: "Telugu",
    Language.HI: "Hindi",
}


class ChatRole(str, Enum):
    """Author of a transcript entry."""
    USER = "user"
    ASSISTANT = "assistant"


class SelectionPhase(str, Enum):
    """Lifecycle phase of the place selection."""
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class SelectionErrorKind(str, Enum):
    """Which kind of failure ended the latest selection request."""
    NETWORK_FAILURE = "network_failure"
    GENERATION_ERROR = "generation_error"


class JobStatus(str, Enum):
    """Lifecycle status of a reconstruction job."""
    PENDING = "pending"
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_active(self) -> bool:
        return self in (JobStatus.PENDING, JobStatus.RUNNING)
