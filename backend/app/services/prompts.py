"""Prompt builders and response schemas shared across services."""

from app.models import ChatMessage, ChatRole, Language, UNDOCUMENTED_PHRASE

_REPORT_FIELDS: tuple[str, ...] = (
    "overview",
    "architecture",
    "monuments",
    "traditions",
    "cuisine",
    "artCrafts",
    "literature",
    "agriculture",
    "lifestyle",
)
_POET_FIELDS: tuple[str, ...] = ("name", "period", "language", "contribution", "famousVerse", "source")


def build_heritage_report_schema() -> dict:
    return {
        "type": "OBJECT",
        "properties": {
            **{name: {"type": "STRING"} for name in _REPORT_FIELDS},
            "poets": {
                "type": "ARRAY",
                "items": {
                    "type": "OBJECT",
                    "properties": {name: {"type": "STRING"} for name in _POET_FIELDS},
                    "required": list(_POET_FIELDS),
                },
            },
        },
        "required": [*_REPORT_FIELDS, "poets"],
    }


def build_heritage_report_prompt(place_name: str, summary: str, language: Language) -> str:
    return (
        f"Transform this Wikipedia summary of {place_name} into a structured cultural heritage report "
        f"in {language.display_name}. All natural-language values must be written in {language.display_name}.\n"
        f"Summary: {summary or UNDOCUMENTED_PHRASE}\n\n"
        "Requirements:\n"
        "1. Overview & historical significance\n"
        "2. Architecture & sculptures (focus on Andhra styles like Dravidian, Chalukyan)\n"
        "3. Monuments & temples\n"
        "4. Local traditions & festivals\n"
        "5. Food & cuisine of the region\n"
        "6. Art, crafts & dance forms\n"
        "7. Language & literature\n"
        "8. Agriculture & local produce\n"
        "9. Clothing & lifestyle\n"
        "10. Famous Poets: List at least 2 famous poets associated with this place or Andhra Pradesh history, "
        "their period, language, contribution, and one famous verse/poem.\n\n"
        f'If information is unavailable, use the phrase "{UNDOCUMENTED_PHRASE}".'
    )


def build_reconstruction_prompt(context: str) -> str:
    return (
        f"Reconstruct this damaged monument or sculpture from {context}. "
        "Restore missing features, carvings, and original architectural grandeur in high detail. "
        "Maintain historical accuracy for Andhra Pradesh heritage."
    )


def build_chat_system_instruction(language: Language) -> str:
    return (
        "You are ITIHAASA AI, an expert on Andhra Pradesh's cultural heritage. "
        "Answer queries about history, architecture, poets, and traditions of Andhra Pradesh. "
        f"Always respond in the user's selected language: {language.display_name} ({language.value}). "
        "Earlier turns may be in other languages; answer this turn in the selected language regardless. "
        "Keep responses educational and respectful."
    )


def build_chat_contents(message: str, transcript: list[ChatMessage]) -> list[dict]:
    """Map prior transcript turns plus the new message to generator contents."""
    contents = [
        {
            "role": "model" if entry.role == ChatRole.ASSISTANT else "user",
            "parts": [{"text": entry.text}],
        }
        for entry in transcript
    ]
    contents.append({"role": "user", "parts": [{"text": message}]})
    return contents
