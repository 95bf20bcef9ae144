"""Single-slot monument reconstruction job runner."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

from app.config import settings
from app.errors import HeritageError, JobAlreadyRunning
from app.logging import get_logger
from app.models import JobStatus, ReconstructionJob
from app.services.events import StatePublisher
from app.services.gateways import ContentGenerator

logger = get_logger("services.reconstruction")

NO_IMAGE_ERROR = "Generator returned no reconstructed image"


class ReconstructionJobRunner:
    """Run at most one image restoration at a time.

    State machine: pending -> running -> done | failed. A new job may only
    start once the current one is terminal; it then replaces the old record.
    """

    def __init__(self, generator: ContentGenerator):
        self.generator = generator
        self._current: ReconstructionJob | None = None
        self._task: asyncio.Task | None = None
        self._events: StatePublisher[ReconstructionJob] = StatePublisher("reconstruction")

    @property
    def current_job(self) -> ReconstructionJob | None:
        return self._current

    def subscribe(self, listener: Callable[[ReconstructionJob], Awaitable[None]]) -> Callable[[], None]:
        return self._events.subscribe(listener)

    async def _set(self, job: ReconstructionJob) -> None:
        self._current = job
        await self._events.publish(job)

    async def start_job(
        self,
        source_image: bytes,
        context: str | None = None,
        mime_type: str = "image/jpeg",
    ) -> ReconstructionJob:
        current = self._current
        if current is not None and current.status.is_active:
            raise JobAlreadyRunning(
                f"Reconstruction job {current.id[:8]} is still {current.status.value}",
                job_id=current.id,
            )

        job = ReconstructionJob(
            source_image=source_image,
            source_mime_type=mime_type,
            context=(context or "").strip() or settings.RECONSTRUCTION_DEFAULT_CONTEXT,
        )
        running = job.model_copy(update={"status": JobStatus.RUNNING})
        # Claim the slot before the first await so a concurrent start sees it.
        self._current = running
        await self._events.publish(job)
        await self._events.publish(running)
        logger.info(f"Started reconstruction job {job.id[:8]} for {job.context}")

        self._task = asyncio.create_task(self._run(running))
        return running

    async def _run(self, job: ReconstructionJob) -> None:
        try:
            result = await self.generator.restore_image(job.source_image, job.source_mime_type, job.context)
        except HeritageError as e:
            logger.warning(f"Reconstruction job {job.id[:8]} failed: {e.message}")
            await self._finish(job, JobStatus.FAILED, error=e.message)
            return
        except Exception as e:
            logger.exception("Reconstruction job %s failed unexpectedly", job.id[:8])
            await self._finish(job, JobStatus.FAILED, error=str(e))
            return

        if result is None:
            await self._finish(job, JobStatus.FAILED, error=NO_IMAGE_ERROR)
            return
        await self._finish(job, JobStatus.DONE, result=result)

    async def _finish(self, job: ReconstructionJob, status: JobStatus, **fields) -> None:
        finished = job.model_copy(update={
            "status": status,
            "completed_at": datetime.now(timezone.utc),
            **fields,
        })
        logger.info(f"Reconstruction job {job.id[:8]} finished: {status.value}")
        await self._set(finished)

    async def wait(self) -> ReconstructionJob | None:
        """Wait for the current job's background task, if any."""
        task = self._task
        if task is not None:
            await asyncio.shield(task)
        return self._current
