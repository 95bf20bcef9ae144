"""Reconstruction job domain models."""

import base64
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import JobStatus
from app.models.results.generator import RestoredImage


class ReconstructionJob(BaseModel):
    """The single ephemeral image-restoration job."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    source_image: bytes
    source_mime_type: str = "image/jpeg"
    context: str
    status: JobStatus = JobStatus.PENDING
    result: Optional[RestoredImage] = None
    error: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None


class ReconstructionStartRequest(BaseModel):
    """Payload for starting a job. image may be raw base64 or a data: URL."""

    image: str = Field(min_length=1)
    mime_type: Optional[str] = None
    context: Optional[str] = None


class ReconstructionJobView(BaseModel):
    """Job status as seen by the presentation layer."""

    id: str
    status: JobStatus
    context: str
    result_data_url: Optional[str] = None
    error: Optional[str] = None
    created_at: datetime
    completed_at: Optional[datetime] = None

    @classmethod
    def from_job(cls, job: ReconstructionJob) -> "ReconstructionJobView":
        result_data_url = None
        if job.result is not None:
            encoded = base64.b64encode(job.result.data).decode("ascii")
            result_data_url = f"data:{job.result.mime_type};base64,{encoded}"
        return cls(
            id=job.id,
            status=job.status,
            context=job.context,
            result_data_url=result_data_url,
            error=job.error,
            created_at=job.created_at,
            completed_at=job.completed_at,
        )
