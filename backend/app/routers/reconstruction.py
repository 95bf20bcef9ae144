"""Monument reconstruction routes."""

import base64
import binascii

from fastapi import APIRouter, HTTPException

from app.dependencies import ReconstructionRunnerDep, SelectionOrchestratorDep
from app.errors import JobAlreadyRunning
from app.models import ReconstructionJobView, ReconstructionStartRequest

router = APIRouter()


def _decode_image(raw: str, mime_type: str | None) -> tuple[bytes, str]:
    """Accept raw base64 or a data: URL. Returns (bytes, mime type)."""
    data = raw.strip()
    if data.startswith("data:"):
        header, _, data = data.partition(",")
        declared = header[5:].split(";")[0]
        mime_type = mime_type or declared or None
    try:
        decoded = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("Image is not valid base64") from exc
    if not decoded:
        raise ValueError("Image is empty")
    return decoded, mime_type or "image/jpeg"


@router.post("/jobs", response_model=ReconstructionJobView, status_code=202)
async def start_reconstruction(
    body: ReconstructionStartRequest,
    runner: ReconstructionRunnerDep,
    selection: SelectionOrchestratorDep,
):
    try:
        image, mime_type = _decode_image(body.image, body.mime_type)
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from exc

    context = body.context
    if not context and selection.state.selected is not None:
        context = selection.state.selected.name

    try:
        job = await runner.start_job(image, context=context, mime_type=mime_type)
    except JobAlreadyRunning as exc:
        raise HTTPException(exc.http_status, exc.message) from exc
    return ReconstructionJobView.from_job(job)


@router.get("/jobs/current", response_model=ReconstructionJobView)
async def get_current_job(runner: ReconstructionRunnerDep):
    job = runner.current_job
    if not job:
        raise HTTPException(404, "No reconstruction job")
    return ReconstructionJobView.from_job(job)
