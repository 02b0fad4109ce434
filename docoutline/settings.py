from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from docoutline.models.outline import DEFAULT_REFERENCE_PRIORITY

load_dotenv(override=False)


DEFAULT_UNTITLED_TITLE = "Untitled document"


class Settings(BaseModel):
    """Runtime configuration for outline generation."""

    untitled_title: str = Field(
        default_factory=lambda: os.getenv("OUTLINE_UNTITLED_TITLE", DEFAULT_UNTITLED_TITLE)
    )
    reference_priority: int = Field(
        default_factory=lambda: int(os.getenv("OUTLINE_REFERENCE_PRIORITY", str(DEFAULT_REFERENCE_PRIORITY)))
    )
    titles_db_path: Path = Field(
        default_factory=lambda: Path(os.getenv("OUTLINE_TITLES_DB", "artifacts/titles.db"))
    )
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    model_config = {
        "frozen": True,
        "validate_default": True,
    }

    @field_validator("untitled_title")
    @classmethod
    def _fallback_title(cls, value: str) -> str:
        return value.strip() or DEFAULT_UNTITLED_TITLE

    @field_validator("reference_priority")
    @classmethod
    def _require_negative(cls, value: int) -> int:
        if value >= 0:
            raise ValueError("OUTLINE_REFERENCE_PRIORITY must be negative so references never nest headings.")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()


__all__ = ["Settings", "get_settings", "DEFAULT_UNTITLED_TITLE"]
