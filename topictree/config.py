"""
Configuration loading and validation.

Loads workspace configuration from a YAML file. Every field has a default,
so `TopicTreeConfig()` is a usable configuration on its own.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator


class StorageConfig(BaseModel):
    backend: Literal["sqlite", "memory"] = "sqlite"
    db_path: str = "./data/topictree.db"
    topics_key: str = Field(default="topics", min_length=1)
    contents_key: str = Field(default="contents", min_length=1)


class SeedConfig(BaseModel):
    enabled: bool = True


class LoggingConfig(BaseModel):
    level: Literal["critical", "error", "warning", "info", "debug"] = "warning"
    format: Literal["json", "text"] = "text"

    @field_validator("level", mode="before")
    @classmethod
    def _lowercase_level(cls, value):
        return value.lower() if isinstance(value, str) else value


class TopicTreeConfig(BaseModel):
    storage: StorageConfig = Field(default_factory=StorageConfig)
    seed: SeedConfig = Field(default_factory=SeedConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(path: str | Path) -> TopicTreeConfig:
    """Load and validate configuration from a YAML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    return TopicTreeConfig.model_validate(raw)
