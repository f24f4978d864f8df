"""
Configuration management for docextract.

ParserConfig is the immutable value every parse operation reads.
Settings loads defaults from environment variables via Pydantic Settings,
so deployments can tune limits without code changes.
"""

import codecs
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_DEPTH = 100
DEFAULT_ENCODING = "UTF-8"
DEFAULT_OCR_LANGUAGE = "eng"


def _validate_encoding_name(v: str) -> str:
    try:
        codecs.lookup(v)
    except LookupError as e:
        raise ValueError(f"Unknown text encoding: {v!r}") from e
    return v


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every variable is prefixed with ``DOCEXTRACT_`` (for example
    ``DOCEXTRACT_MAX_SIZE=10485760``).
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCEXTRACT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Parser Defaults
    # ==========================================================================
    strict_mode: bool = Field(
        default=False,
        description="Raise on invalid input instead of degrading gracefully",
    )

    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        description="Maximum nesting depth traversed in JSON and XML documents",
    )

    max_size: int | None = Field(
        default=None,
        ge=0,
        description="Maximum input size in bytes (unlimited when unset)",
    )

    encoding: str = Field(
        default=DEFAULT_ENCODING,
        description="Declared encoding of text input",
    )

    # ==========================================================================
    # OCR Configuration
    # ==========================================================================
    ocr_language: str = Field(
        default=DEFAULT_OCR_LANGUAGE,
        min_length=1,
        description="Tesseract language code(s), e.g. 'eng' or 'eng+deu'",
    )

    tesseract_cmd: str | None = Field(
        default=None,
        description="Path to the tesseract binary when it is not on PATH",
    )

    # ==========================================================================
    # Logging Configuration
    # ==========================================================================
    log_level: str = Field(
        default="WARNING",
        description="Log level used by the command-line interface",
    )

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Ensure the encoding is known to Python's codec registry."""
        return _validate_encoding_name(v)

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are only loaded once.
    """
    return Settings()


class ParserConfig(BaseModel):
    """
    Immutable configuration shared by every operation of a parser instance.

    Created once when the parser is constructed and only ever read afterwards.
    """

    model_config = ConfigDict(frozen=True)

    strict_mode: bool = Field(
        default=False,
        description="Raise on invalid input instead of degrading gracefully",
    )

    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        le=2**32 - 1,
        description="Maximum nesting depth traversed in JSON and XML documents",
    )

    max_size: int | None = Field(
        default=None,
        ge=0,
        description="Maximum input size in bytes (unlimited when None)",
    )

    encoding: str = Field(
        default=DEFAULT_ENCODING,
        description="Declared encoding of text input",
    )

    ocr_language: str = Field(
        default=DEFAULT_OCR_LANGUAGE,
        min_length=1,
        description="Tesseract language code(s) used for image input",
    )

    tesseract_cmd: str | None = Field(
        default=None,
        description="Path to the tesseract binary; uses the one on PATH when None",
    )

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Ensure the encoding is known to Python's codec registry."""
        return _validate_encoding_name(v)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ParserConfig":
        """Build a configuration from environment-backed settings."""
        settings = settings or get_settings()
        return cls(
            strict_mode=settings.strict_mode,
            max_depth=settings.max_depth,
            max_size=settings.max_size,
            encoding=settings.encoding,
            ocr_language=settings.ocr_language,
            tesseract_cmd=settings.tesseract_cmd,
        )
