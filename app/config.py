from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from adapters.layout.greedy_columns import LayoutConfig
from domain.models import DEFAULT_CONTAINER_WIDTH

DEFAULT_CONFIG_PATH = Path("config/layout.yaml")
CONFIG_PATH_ENV = "CAL_LAYOUT_CONFIG_PATH"


class LayoutSettings(BaseModel):
    container_width: float = Field(default=DEFAULT_CONTAINER_WIDTH, gt=0, allow_inf_nan=False)
    input_dir: Path = Path("data/events")
    output_dir: Path = Path("data/layouts")
    log_level: str = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> str:
        level = str(value or "WARNING").strip().upper()
        if level not in logging.getLevelNamesMapping():
            msg = f"layout.log_level must be a logging level name, got {value!r}"
            raise ValueError(msg)
        return level

    def to_layout_config(self) -> LayoutConfig:
        return LayoutConfig(container_width=self.container_width)


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CAL_LAYOUT_", env_nested_delimiter="__")

    layout: LayoutSettings = LayoutSettings()

    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        defaults = (init_settings, env_settings, dotenv_settings, file_secret_settings)
        if cls._yaml_path is None:
            return defaults
        return (*defaults, YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))


def _resolve_config_path(config_path: Path | None) -> Path | None:
    if config_path is not None:
        return config_path
    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.exists() else None


def load_settings(config_path: Path | None = None) -> AppSettings:
    yaml_path = _resolve_config_path(config_path)
    if yaml_path is not None and not yaml_path.exists():
        msg = f"Config file not found: {yaml_path}"
        raise FileNotFoundError(msg)

    previous = AppSettings._yaml_path
    AppSettings._yaml_path = yaml_path
    try:
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous
