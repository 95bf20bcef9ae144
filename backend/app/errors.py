"""
Error taxonomy for the content orchestration layer.

Gateway failures (NetworkFailure, GenerationError) are caught by the
orchestrator, job runner and chat manager and turned into observable state.
Caller-input failures (JobAlreadyRunning, EmptyMessage) propagate to routers.
"""


class HeritageError(Exception):
    """Base class for errors raised by the core.

    Attributes:
        code: Machine-readable error code (e.g. "NETWORK_FAILURE").
        message: Human-readable message.
        http_status: Status code used when a router surfaces the error.
        extra: Additional context (status codes, model names, ...).
    """

    code = "HERITAGE_ERROR"
    http_status = 500

    def __init__(self, message: str, **extra):
        self.message = message
        self.extra = extra
        super().__init__(message)


class NetworkFailure(HeritageError):
    """Gateway unreachable or returned a non-success response."""

    code = "NETWORK_FAILURE"
    http_status = 502


class GenerationError(HeritageError):
    """Generator output was malformed or did not match the expected shape."""

    code = "GENERATION_ERROR"
    http_status = 502


class JobAlreadyRunning(HeritageError):
    """A reconstruction job is already occupying the job slot."""

    code = "JOB_ALREADY_RUNNING"
    http_status = 409


class EmptyMessage(HeritageError):
    """Chat message is empty after trimming."""

    code = "EMPTY_MESSAGE"
    http_status = 400
