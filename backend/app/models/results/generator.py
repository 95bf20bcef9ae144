"""
Result models for content generator operations.
"""

from pydantic import BaseModel, ConfigDict


class RestoredImage(BaseModel):
    """Opaque reconstructed-image payload returned by the generator."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    mime_type: str = "image/png"
