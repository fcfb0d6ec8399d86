"""Pydantic settings models for résumé text extraction.

Two settings classes load from separate YAML config files with environment
variable override support. Source priority (highest to lowest):

    1. Constructor arguments (e.g., tests overriding the timeout)
    2. Environment variables (with prefix, e.g., EXTRACTION_MAX_PAGES)
    3. .env file
    4. YAML config file (e.g., config/extraction.yaml)
    5. Default values defined here

Config paths are resolved relative to PROJECT_ROOT so the application works
regardless of the current working directory.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

# Resolve project root: settings.py -> config/ -> resume_extract/ -> src/ -> repo root
PROJECT_ROOT = Path(__file__).resolve().parents[3]

_CONFIG_DIR = PROJECT_ROOT / "config"
_ENV_FILE = PROJECT_ROOT / ".env"


class ExtractionSettings(BaseSettings):
    """Extraction behaviour: timeouts, page caps, acceptance thresholds."""

    # Structured (PDF parser) stage
    structured_timeout_seconds: float = 10.0
    max_pages: int = 10
    min_page_chars: int = 0
    min_text_length: int = 100
    pdf_password: str = ""
    repair_documents: bool = False
    use_text_flow: bool = True

    # Byte-scan fallback stage
    byte_scan_min_text_length: int = 50
    byte_scan_min_chunk_chars: int = 3
    byte_scan_min_chunks: int = 2

    # Upload gate (applied by callers before the pipeline runs)
    max_upload_bytes: int = 10 * 1024 * 1024  # 10MB
    allowed_extensions: list[str] = [".pdf"]

    model_config = SettingsConfigDict(
        yaml_file=str(_CONFIG_DIR / "extraction.yaml"),
        env_file=str(_ENV_FILE),
        env_prefix="EXTRACTION_",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


class PipelineSettings(BaseSettings):
    """Pipeline operations: logging paths, rotation, batch output."""

    log_dir: str = "logs"
    log_max_bytes: int = 10_485_760  # 10MB
    log_backup_count: int = 5
    output_dir: str = "data/extracted"

    model_config = SettingsConfigDict(
        yaml_file=str(_CONFIG_DIR / "pipeline.yaml"),
        env_prefix="PIPELINE_",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )
