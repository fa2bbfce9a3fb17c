"""Utilities for importing the language catalog from a JSON data file.

File format:

    {
      "languages": [
        {"id": "python", "name": "Python", "description": "...",
         "url": "https://www.python.org/", "traits": {"web": 4, "dataScience": 5}}
      ],
      "questions": [
        {"id": 1, "text": "Do you want to build websites?", "trait": "web",
         "icon": "web"}
      ],
      "trait_labels": {"web": "Web Development"}
    }

``trait_labels`` is optional. Display strings are passed through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, StrictInt, ValidationError, field_validator

from swipe_quiz.core.models import Language, Question
from swipe_quiz.core.services.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)


class CatalogImportError(Exception):
    """Raised when a catalog definition cannot be parsed."""


def _strip_non_blank(value: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise ValueError("must not be blank")
    return stripped


class LanguageSchema(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    url: str = ""
    traits: dict[str, StrictInt] = Field(default_factory=dict)

    @field_validator("id", "name")
    @classmethod
    def _strip(cls, value: str) -> str:
        return _strip_non_blank(value)


class QuestionSchema(BaseModel):
    id: int
    text: str = Field(min_length=1)
    trait: str = Field(min_length=1)
    icon: str = ""

    @field_validator("text", "trait")
    @classmethod
    def _strip(cls, value: str) -> str:
        return _strip_non_blank(value)


class CatalogSchema(BaseModel):
    languages: list[LanguageSchema]
    questions: list[QuestionSchema]
    trait_labels: dict[str, str] = Field(default_factory=dict)


@dataclass(slots=True)
class ImportedCatalog:
    """Container for the imported catalog and where it came from."""

    source_path: Path | None
    repository: CatalogRepository


def load_catalog_from_file(file_path: Path) -> ImportedCatalog:
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogImportError(f"Could not read catalog file {file_path}: {exc}") from exc
    repository = parse_catalog_text(text)
    logger.info(
        "Loaded catalog from %s (%d languages, %d questions)",
        file_path,
        len(repository.get_languages()),
        repository.get_question_count(),
    )
    return ImportedCatalog(source_path=file_path, repository=repository)


def parse_catalog_text(text: str) -> CatalogRepository:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CatalogImportError(f"Catalog is not valid JSON: {exc.msg} (line {exc.lineno})") from exc
    return build_catalog(payload)


def build_catalog(payload: object) -> CatalogRepository:
    """Validate a decoded catalog document and build the repository."""
    try:
        schema = CatalogSchema.model_validate(payload)
    except ValidationError as exc:
        raise CatalogImportError(f"Catalog failed validation: {exc}") from exc

    languages = [
        Language(
            id=entry.id,
            name=entry.name,
            description=entry.description,
            url=entry.url,
            traits=entry.traits,
        )
        for entry in schema.languages
    ]
    questions = [
        Question(id=entry.id, text=entry.text, trait=entry.trait, icon_name=entry.icon)
        for entry in schema.questions
    ]
    try:
        return CatalogRepository(languages, questions, schema.trait_labels)
    except ValueError as exc:
        raise CatalogImportError(str(exc)) from exc
