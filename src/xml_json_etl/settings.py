# src/xml_json_etl/settings.py
import os
from typing import Optional

import yaml
from pydantic import BaseModel, field_validator
from pydantic_settings import (
    BaseSettings,
    DotEnvSettingsSource,
    EnvSettingsSource,
    SettingsConfigDict,
)

from xml_json_etl.constants import DEFAULT_IGNORED_ATTRIBUTES, JSON_ENCODING, JSON_INDENT
from xml_json_etl.etl.transform.config import ConvertConfig
from xml_json_etl.etl.transform.plurals import ListDetection
from xml_json_etl.paths import Paths


class RuntimeConfig(BaseModel):
    dry_run: bool = False


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "json"  # "json" or "human"
    structured: bool = True


class ConverterSettings(BaseModel):
    ignore_attributes: list[str] = list(DEFAULT_IGNORED_ATTRIBUTES)
    list_detection: ListDetection = ListDetection.STEM
    # Write only the value under this root tag, e.g. "tsResponse"
    root_key: Optional[str] = None
    indent: Optional[int] = JSON_INDENT

    @field_validator("list_detection", mode="before")
    @classmethod
    def _lower(cls, v):
        return v.lower() if isinstance(v, str) else v


class BatchSettings(BaseModel):
    keep_going: bool = False
    input_dir: Optional[str] = None
    output_dir: Optional[str] = None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="XML2JSON_", env_nested_delimiter="__", extra="ignore"
    )
    converter: ConverterSettings = ConverterSettings()
    batch: BatchSettings = BatchSettings()
    runtime: RuntimeConfig = RuntimeConfig()
    logging: LoggingConfig = LoggingConfig()

    @staticmethod
    def _deep_update(d: dict, u: dict) -> dict:
        # Recursively update dict d with values from u
        for k, v in u.items():
            if isinstance(v, dict) and isinstance(d.get(k), dict):
                d[k] = Settings._deep_update(d[k], v)
            else:
                d[k] = v
        return d

    @staticmethod
    def load(path: str) -> "Settings":
        """Load `base.yaml` next to `path`, deep-merge `path` over it, then
        apply `XML2JSON_*` variables (from .env and the environment) on top."""
        base_path = os.path.join(os.path.dirname(path), "base.yaml")
        base: dict = {}
        if os.path.exists(base_path):
            with open(base_path, "r", encoding=JSON_ENCODING) as f:
                base = yaml.safe_load(f) or {}
        with open(path, "r", encoding=JSON_ENCODING) as f:
            override = yaml.safe_load(f)
        merged = Settings._deep_update(base, override or {})
        merged = Settings._deep_update(merged, Settings._env_overrides())
        return Settings(**merged)

    @staticmethod
    def _env_overrides() -> dict:
        # Keyword arguments outrank env vars in BaseSettings, so read them explicitly
        values: dict = {}
        for source in (DotEnvSettingsSource(Settings), EnvSettingsSource(Settings)):
            Settings._deep_update(values, source())
        return values

    @staticmethod
    def load_or_default(path: str) -> "Settings":
        if os.path.exists(path):
            return Settings.load(path)
        return Settings()

    def to_convert_config(self) -> ConvertConfig:
        return ConvertConfig.build(
            ignore_attributes=self.converter.ignore_attributes,
            list_detection=self.converter.list_detection,
        )


def config_path_for_env(env: Optional[str] = None) -> str:
    """Path of the YAML config for `env`, or $XML2JSON_CONFIG when no env is given."""
    if env:
        return str(Paths.configs() / f"{env}.yaml")
    return os.getenv("XML2JSON_CONFIG", str(Paths.configs() / "dev.yaml"))
