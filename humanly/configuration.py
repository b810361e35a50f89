"""The configuration module."""

import tomllib
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class AggregationStrategy(str, Enum):
    """Ways of turning sentence judgments into one document-level score."""

    BUCKETED = "bucketed"
    MEAN = "mean"


class AggregationPolicy(BaseModel):
    """Thresholds used to score and label a whole document."""

    # Sentence buckets by their AI score.
    ai_heavy_threshold: float = 70.0
    mixed_threshold: float = 40.0

    # Share of human sentences above which the AI score is suppressed.
    human_dominance_ratio: float = 0.8
    human_dominance_cap: int = 5
    # Share of AI-heavy sentences above which the AI score is escalated.
    ai_dominance_ratio: float = 0.6
    ai_dominance_cap: int = 95

    # Weights of buckets in the mixed case.
    ai_heavy_weight: float = 80.0
    mixed_weight: float = 50.0
    human_weight: float = 20.0

    likely_ai_threshold: int = 70
    possibly_ai_threshold: int = 35

    trusted_ai_probability: int = Field(2, ge=0, le=100)
    trusted_sentence_ai: float = Field(5.0, ge=0.0, le=100.0)

    fallback_ai: float = Field(70.0, ge=0.0, le=100.0)
    fallback_reason: str = "Neutral structured sentence"


class Configuration(BaseSettings):
    """Configuration of the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        populate_by_name=True,
    )

    project_name: str = "Humanly"

    api_host: str = Field(
        default="0.0.0.0",  # noqa: S104, it is required for Docker deployment.
        alias="HOST",
    )
    api_port: int = Field(default=3000, alias="PORT")
    cors_origins: list[str] = ["*"]
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    cerebras_api_key: str = Field(default="", alias="CEREBRAS_API_KEY")
    llm_model: str = Field(default="gpt-oss-120b", alias="LLM_MODEL")
    provider_timeout: timedelta = timedelta(seconds=30)
    max_concurrent_classifications: int = Field(4, ge=1)

    humanize_max_words: int = Field(200, ge=1)
    detect_max_words: int = Field(800, ge=1)
    min_sentence_length: int = Field(11, ge=0)

    humanize_temperature: float = Field(1.15, ge=0.0, le=1.5)
    humanize_top_p: float = Field(0.85, gt=0.0, le=1.0)

    aggregation_strategy: AggregationStrategy = AggregationStrategy.BUCKETED
    aggregation: AggregationPolicy = AggregationPolicy()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Let the environment and `.env` override the configuration file."""
        return env_settings, dotenv_settings, init_settings


def load_configuration(
    configuration_file: Path = Path("config.toml"),
    env_file: Path = Path(".env"),
) -> Configuration:
    """
    Load configuration from the configuration file, `.env`, and the environment.

    Environment variables take precedence over `.env`, which takes precedence
    over the configuration file. Missing files are not an error.

    Args:
        configuration_file (Path, optional): TOML file with settings.
            Defaults to "config.toml" in the working directory.
        env_file (Path, optional): Dotenv file with settings.
            Defaults to ".env" in the working directory.

    Returns:
        Configuration: The validated configuration.
    """
    settings: dict[str, Any] = {}
    if configuration_file.exists():
        with configuration_file.open("rb") as f:
            settings = tomllib.load(f)

    return Configuration(_env_file=env_file, **settings)


config = load_configuration()
