from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from hanzi_srs.domain.constants import DEFAULT_DUE_LIMIT, DEFAULT_LEVELS, DEFAULT_NEW_LIMIT


def config_dir() -> Path:
    return Path.home() / ".config/hanzi-srs"


def config_files() -> list[Path]:
    return [config_dir() / "config.toml", Path.home() / ".hanzi-srs.toml"]


class AppConfig(BaseSettings):
    """
    Configuration model for hanzi-srs.
    Supports loading from:
    1. Config file (~/.config/hanzi-srs/config.toml or ~/.hanzi-srs.toml)
    2. Environment variables (HANZI_SRS_*)
    3. Manual overrides (CLI / server), which take precedence
    """

    model_config = SettingsConfigDict(
        env_prefix="HANZI_SRS_",
        extra="ignore",
    )

    # Paths
    progress_path: Path = Field(default_factory=lambda: config_dir() / "progress.json")
    vocabulary_path: Path | None = None  # None -> packaged sample vocabulary

    # Session
    levels: list[int] = Field(default_factory=lambda: list(DEFAULT_LEVELS))
    due_limit: int = Field(default=DEFAULT_DUE_LIMIT, ge=0)
    new_limit: int = Field(default=DEFAULT_NEW_LIMIT, ge=0)
    seed: int | None = None

    # 0 = warnings only, 1 = info, 2+ = debug
    verbose: int = Field(default=1, ge=0)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing file wins
        toml_file = next((f for f in config_files() if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("progress_path", "vocabulary_path", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        if v is None:
            return None
        return Path(v).expanduser()

    @field_validator("levels")
    @classmethod
    def dedupe_levels(cls, v: list[int]) -> list[int]:
        return sorted(set(v))


def resolve_config(overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. TOML config file (if exists)
    3. Environment variables (HANZI_SRS_*)
    4. overrides (passed from Typer or the server); None values are ignored
    """
    return AppConfig(**{k: v for k, v in (overrides or {}).items() if v is not None})
