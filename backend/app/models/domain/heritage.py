"""Heritage report models produced by the content generator."""

from pydantic import BaseModel, ConfigDict, Field

UNDOCUMENTED_PHRASE = "Information not clearly documented"


class Poet(BaseModel):
    """A literary figure associated with a place."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    period: str
    language: str
    contribution: str
    verse: str = Field(alias="famousVerse")
    source: str


class HeritageContent(BaseModel):
    """Structured, language-specific heritage report for a place.

    Replaced wholesale on regeneration, never patched field by field.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    overview: str
    architecture: str
    monuments: str
    traditions: str
    cuisine: str
    art_crafts: str = Field(alias="artCrafts")
    literature: str
    agriculture: str
    lifestyle: str
    poets: tuple[Poet, ...] = Field(min_length=2)
