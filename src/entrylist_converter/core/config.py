"""Configuration classes for extraction and export."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from entrylist_converter.core.exceptions import ConfigurationError

DEFAULT_MODEL = "gemini-2.5-flash"


class ExtractionConfig(BaseModel):
    """Configuration for the extraction process and the exported artifacts."""

    model_config = ConfigDict(extra="forbid")

    # LLM settings
    model: str = Field(
        default=DEFAULT_MODEL,
        description="Inference model used when no backend is injected",
    )
    temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="LLM temperature for extraction (lower = more deterministic)",
    )
    max_tokens: int | None = Field(
        default=None,
        ge=1,
        description="Maximum tokens for LLM response",
    )
    timeout_seconds: float | None = Field(
        default=None,
        gt=0.0,
        description="Upper bound for a single inference call, None for the service default",
    )

    # Prompt settings
    system_prompt: str | None = Field(
        default=None,
        description="Custom system prompt override",
    )
    include_field_descriptions: bool = Field(
        default=True,
        description="Include field descriptions in the prompt",
    )

    # Export settings
    csv_filename: str = Field(
        default="results.csv",
        min_length=1,
        description="File name of the delimited artifact",
    )
    txt_filename: str = Field(
        default="results.txt",
        min_length=1,
        description="File name of the plain text artifact",
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ExtractionConfig:
        """Build a config from a plain mapping.

        Raises:
            ConfigurationError: If the mapping holds unknown keys or invalid values.
        """
        try:
            return cls.model_validate(data or {})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid extraction config: {e}") from e

    @classmethod
    def from_yaml(cls, source: str | Path) -> ExtractionConfig:
        """Load config from a YAML file or string.

        Args:
            source: YAML string or path to YAML file.

        Returns:
            ExtractionConfig instance.

        Raises:
            ConfigurationError: If a named YAML file does not exist, or the
                content is not a valid config.
        """
        if isinstance(source, Path) or (
            isinstance(source, str)
            and "\n" not in source
            and source.strip().lower().endswith((".yaml", ".yml"))
        ):
            if not Path(source).is_file():
                raise ConfigurationError(f"Config file not found: {source}")

        if isinstance(source, Path) or (
            isinstance(source, str) and "\n" not in source and Path(source).is_file()
        ):
            content = Path(source).read_text(encoding="utf-8")
        else:
            content = source

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Config is not valid YAML: {e}") from e

        if data is not None and not isinstance(data, dict):
            raise ConfigurationError("Config YAML must be a mapping at the top level")
        return cls.from_dict(data)
