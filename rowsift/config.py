"""
config.py - Configuration model for rowsift
"""

import sys
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from rich.console import Console

from rowsift.extract.sorting import SORT_COLUMNS
from rowsift.extract.vocabulary import DEFAULT_VOCABULARIES, Vocabularies

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib

console = Console()


class DisplayConfig(BaseModel):
    sort_column: Optional[str] = Field(
        default=None,
        description="Column to sort records by within each section (unsorted when empty)"
    )
    sort_direction: Literal["asc", "desc"] = "asc"
    show_details: bool = Field(
        default=False,
        description="Include the raw details blob length in table output"
    )

    @field_validator("sort_column")
    @classmethod
    def _known_column(cls, value: Optional[str]) -> Optional[str]:
        if value in (None, ""):
            return None
        if value not in SORT_COLUMNS:
            raise ValueError(f"unknown sort column '{value}'")
        return value


class LoggingConfig(BaseModel):
    debug: bool = False
    log_file: Optional[Path] = None


class VocabularyConfig(BaseModel):
    """Extra entries appended to the built-in lookup tables."""

    video_formats: List[str] = Field(default_factory=list)
    containers: List[str] = Field(default_factory=list)
    video_codecs: List[str] = Field(default_factory=list)
    audio_codecs: List[str] = Field(default_factory=list)
    video_regions: List[str] = Field(default_factory=list)
    game_platforms: List[str] = Field(default_factory=list)
    game_regions: List[str] = Field(default_factory=list)
    music_media: List[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in type(self).model_fields)


class RowsiftConfig(BaseModel):
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    vocabulary: VocabularyConfig = Field(default_factory=VocabularyConfig)
    config_path: Optional[Path] = None


def default_config() -> RowsiftConfig:
    return RowsiftConfig()


def build_vocabularies(config: RowsiftConfig) -> Vocabularies:
    """Built-in tables, extended by whatever the config adds."""
    extra = config.vocabulary
    if extra.is_empty():
        return DEFAULT_VOCABULARIES
    return DEFAULT_VOCABULARIES.with_additions(**extra.model_dump())


def load_config(config_path: Path) -> RowsiftConfig:
    """Load configuration from TOML file"""

    if not config_path.exists():
        console.print(f"[red][ERROR][/red] Configuration file not found: {config_path}")
        sys.exit(1)

    try:
        with open(config_path, "rb") as f:
            config_data = tomllib.load(f)

        return RowsiftConfig(
            display=DisplayConfig(**config_data.get("display", {})),
            logging=LoggingConfig(**config_data.get("logging", {})),
            vocabulary=VocabularyConfig(**config_data.get("vocabulary", {})),
            config_path=config_path,
        )

    except (OSError, tomllib.TOMLDecodeError, ValidationError) as e:
        console.print(f"[red][ERROR][/red] Error loading configuration: {e}")
        sys.exit(1)
