"""Configuration for the command line layer.

Defaults come from environment variables (``BOLLINGER_*``, optionally via
``.env``). A YAML parameter file can override them. The engine itself
reads no configuration.
"""

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from bollinger.models.params import AverageKind, IndicatorParameters, SourceField

logger = logging.getLogger(__name__)


class ParameterFileError(ValueError):
    """Raised when a YAML parameter file is missing or cannot be parsed."""


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BOLLINGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Indicator defaults (standard 20/2 bands)
    window: int = 20
    average_kind: AverageKind = AverageKind.SMA
    source_field: SourceField = SourceField.CLOSE
    deviation_multiplier: float = 2.0
    offset: int = 0

    # Output
    log_level: str = "INFO"
    tail: int = 10  # rows shown by the console report

    def to_parameters(self) -> IndicatorParameters:
        return IndicatorParameters(
            window=self.window,
            average_kind=self.average_kind,
            source_field=self.source_field,
            deviation_multiplier=self.deviation_multiplier,
            offset=self.offset,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class ParameterFile(BaseModel):
    """Keys accepted in a YAML parameter file. All optional."""

    model_config = ConfigDict(extra="forbid")

    window: int | None = None
    average_kind: AverageKind | None = None
    source_field: SourceField | None = None
    deviation_multiplier: float | None = None
    offset: int | None = None


def load_parameters(path: Path | None = None) -> IndicatorParameters:
    """Load indicator parameters from a YAML file.

    Keys missing from the file fall back to the environment settings. With
    no path, settings only.

    Raises:
        ParameterFileError: If ``path`` does not exist or is not valid YAML
    """
    defaults = get_settings().to_parameters()

    if path is None:
        logger.info("No parameter file given, using settings defaults")
        return defaults
    if not path.exists():
        raise ParameterFileError(f"{path}: parameter file not found")

    try:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ParameterFileError(f"{path}: invalid YAML ({e})") from e

    overrides = ParameterFile.model_validate(raw).model_dump(exclude_none=True)
    params = defaults.model_copy(update=overrides)
    logger.info(
        "Loaded parameters from %s: window=%d, mult=%s, offset=%d",
        path,
        params.window,
        params.deviation_multiplier,
        params.offset,
    )
    return params
