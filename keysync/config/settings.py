"""Runtime settings for a sync run."""

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..extraction.scanner import DEFAULT_CODE_PATTERNS

RESERVED_FILENAMES = ["rankmi"]


class Settings(BaseModel):
    """All options of the command line tool."""

    model_config = {"extra": "forbid"}

    source: Path = Field(..., description="Root directory to scan")
    input_file: Optional[str] = Field(None, description="Skeleton file basename, without .json")
    default_language: Optional[str] = Field(None, description="Language seeded with real values")
    function_name: str = Field("__", description="Marker function wrapping translatable strings")
    output: Path = Field(Path("translations"), description="Output directory")
    languages: List[str] = Field(default_factory=lambda: ["en"])
    prefix: str = Field("!<", description="Placeholder marker")
    transformise: bool = False

    pattern: str = "**/*.json"
    exclude: List[str] = Field(default_factory=list, description="Names skipped besides the reserved ones")

    scan_code: bool = False
    code_patterns: List[str] = Field(default_factory=lambda: list(DEFAULT_CODE_PATTERNS))
    code_output_file: str = "messages.json"

    check: bool = False
    report_file: Optional[Path] = None

    debug: bool = False
    json_logs: bool = False

    @field_validator("languages", "exclude", "code_patterns", mode="before")
    @classmethod
    def split_words(cls, value):
        if isinstance(value, str):
            return value.split()
        return value

    @field_validator("languages")
    @classmethod
    def languages_not_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("at least one language is required")
        # keep order, drop repeats
        return list(dict.fromkeys(value))

    @field_validator("prefix", "function_name", "pattern", "code_output_file")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("code_output_file")
    @classmethod
    def ensure_json_suffix(cls, value: str) -> str:
        return value if value.endswith(".json") else f"{value}.json"

    @field_validator("input_file")
    @classmethod
    def strip_json_suffix(cls, value: Optional[str]) -> Optional[str]:
        if value and value.endswith(".json"):
            return value[:-len(".json")]
        return value or None

    @model_validator(mode="after")
    def input_file_needs_default_language(self) -> "Settings":
        if self.input_file and not self.default_language:
            raise ValueError("default_language is required when input_file is set")
        return self

    @property
    def input_path(self) -> Optional[Path]:
        if not self.input_file:
            return None
        return self.source / f"{self.input_file}.json"

    @property
    def excluded_names(self) -> List[str]:
        names = [*RESERVED_FILENAMES, *self.exclude]
        if self.input_file:
            names.append(self.input_file)
        return list(dict.fromkeys(names))

    def copy_values_for(self, language: str) -> bool:
        """The default language takes real values; others get placeholders."""
        return language == self.default_language
