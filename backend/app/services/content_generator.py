"""
Gemini content generator.

Handles heritage report generation, monument image restoration and the
heritage assistant chat over the Gemini generateContent REST endpoint.
Validation of report payloads happens here so callers only ever see a
typed HeritageContent or a GenerationError.
"""

import base64
import binascii
import json
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from app.config import settings
from app.errors import GenerationError, NetworkFailure
from app.logging import get_logger
from app.models import ChatMessage, HeritageContent, Language, RestoredImage
from app.services.prompts import (
    build_chat_contents,
    build_chat_system_instruction,
    build_heritage_report_prompt,
    build_heritage_report_schema,
    build_reconstruction_prompt,
)

logger = get_logger('services.content_generator')


def _strip_code_fence(raw: str) -> str:
    text = (raw or "").strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def _candidate_parts(data: dict[str, Any]) -> list[dict[str, Any]]:
    candidates = data.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return []
    content = candidates[0].get("content") or {}
    parts = content.get("parts") or []
    return [part for part in parts if isinstance(part, dict)]


def _response_text(data: dict[str, Any]) -> str:
    return "".join(str(part["text"]) for part in _candidate_parts(data) if part.get("text"))


def parse_heritage_report(raw_response: str) -> HeritageContent:
    """Decode and validate a raw report payload.

    Raises GenerationError for invalid JSON or any shape violation
    (missing field, non-string value, fewer than two poets).
    """
    text = _strip_code_fence(raw_response)
    if not text:
        raise GenerationError("Generator returned an empty report")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise GenerationError(f"Generator returned invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise GenerationError("Generator report is not a JSON object")
    try:
        return HeritageContent.model_validate(data)
    except ValidationError as e:
        raise GenerationError(
            f"Generator report failed validation ({e.error_count()} errors)",
            errors=e.errors(include_url=False),
        ) from e


class ContentGeneratorService:
    """Content generator backed by Gemini."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str = settings.GEMINI_API_KEY,
        base_url: str = settings.GEMINI_API_BASE_URL,
    ):
        self.client = client
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        if not self.api_key:
            logger.warning("GEMINI_API_KEY not set - generation features will fail")

    @property
    def is_available(self) -> bool:
        return bool(self.api_key)

    async def _generate(self, operation_name: str, model: str, payload: dict[str, Any]) -> dict[str, Any]:
        if not self.is_available:
            raise NetworkFailure("Content generator is not configured")

        url = f"{self.base_url}/models/{model}:generateContent"
        try:
            response = await self.client.post(
                url,
                json=payload,
                headers={"x-goog-api-key": self.api_key},
            )
        except httpx.HTTPError as e:
            logger.error(f"Gemini {operation_name} failed: {e}")
            raise NetworkFailure(f"Gemini {operation_name} failed: {e}") from e

        if response.status_code != 200:
            logger.error(
                "Gemini %s returned status %d: %s",
                operation_name,
                response.status_code,
                response.text[:500],
            )
            raise NetworkFailure(
                f"Gemini {operation_name} returned status {response.status_code}",
                status_code=response.status_code,
                model=model,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GenerationError(f"Gemini {operation_name} returned a non-JSON body") from e
        if not isinstance(data, dict):
            raise GenerationError(f"Gemini {operation_name} returned an unexpected payload")

        usage = data.get("usageMetadata") or {}
        logger.info(
            "Gemini usage op=%s model=%s tokens=%s/%s/%s",
            operation_name,
            model,
            usage.get("promptTokenCount", "?"),
            usage.get("candidatesTokenCount", "?"),
            usage.get("totalTokenCount", "?"),
        )
        return data

    async def generate_report(self, place_name: str, summary: str, language: Language) -> HeritageContent:
        payload = {
            "contents": [
                {"role": "user", "parts": [{"text": build_heritage_report_prompt(place_name, summary, language)}]}
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": build_heritage_report_schema(),
            },
        }
        data = await self._generate("generate_report", settings.REPORT_MODEL_NAME, payload)
        try:
            report = parse_heritage_report(_response_text(data))
        except GenerationError as e:
            logger.warning(f"Rejected report for {place_name} ({language.value}): {e}")
            raise
        logger.info(f"Generated report for {place_name} ({language.value}) with {len(report.poets)} poets")
        return report

    async def restore_image(self, image: bytes, mime_type: str, context: str) -> Optional[RestoredImage]:
        payload = {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"inlineData": {"mimeType": mime_type, "data": base64.b64encode(image).decode("ascii")}},
                        {"text": build_reconstruction_prompt(context)},
                    ],
                }
            ],
        }
        data = await self._generate("restore_image", settings.IMAGE_MODEL_NAME, payload)

        restored: Optional[RestoredImage] = None
        for part in _candidate_parts(data):
            inline = part.get("inlineData") or part.get("inline_data")
            if not isinstance(inline, dict) or not inline.get("data"):
                continue
            try:
                decoded = base64.b64decode(inline["data"], validate=True)
            except (binascii.Error, ValueError) as e:
                raise GenerationError(f"Gemini returned undecodable image data: {e}") from e
            # The last image part wins when the model emits several.
            restored = RestoredImage(
                data=decoded,
                mime_type=str(inline.get("mimeType") or inline.get("mime_type") or "image/png"),
            )

        if restored is None:
            logger.warning(f"Gemini returned no image part for reconstruction of {context}")
        return restored

    async def converse(self, message: str, transcript: list[ChatMessage], language: Language) -> str:
        payload = {
            "systemInstruction": {"parts": [{"text": build_chat_system_instruction(language)}]},
            "contents": build_chat_contents(message, transcript),
        }
        data = await self._generate("converse", settings.CHAT_MODEL_NAME, payload)
        reply = _response_text(data).strip()
        if not reply:
            raise GenerationError("Gemini returned an empty chat reply")
        return reply
