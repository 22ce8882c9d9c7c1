"""Configuration management for segmentation and clipboard analysis."""

import json
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_PLUGINS = ("chinese", "english", "url", "code", "list")


class SegmentationOptions(BaseModel):
    """Per-call options for the segmenter."""

    selected_plugins: list[str] = Field(default_factory=lambda: list(DEFAULT_PLUGINS))
    cache_enabled: bool = True
    max_cache_entries: int = Field(default=1000, ge=1)
    offload_threshold: int = Field(default=1000, ge=0)
    offload_enabled: bool = True

    @field_validator("selected_plugins", mode="before")
    @classmethod
    def dedupe_plugins(cls, v):
        """Accept a comma separated string and drop repeated names."""
        if isinstance(v, str):
            v = [name.strip() for name in v.split(",")]
        seen = []
        for name in v:
            if name and name not in seen:
                seen.append(name)
        return seen

    def cache_signature(self) -> str:
        """Stable serialization used as the options half of a cache key."""
        return json.dumps(self.model_dump(), sort_keys=True, separators=(",", ":"))


class OffloadConfig(BaseModel):
    """Configuration for the background execution context."""

    executor: Literal["process", "thread"] = "process"
    max_workers: int = Field(default=1, ge=1)
    timeout_seconds: float = Field(default=10.0, gt=0)


class AnalyzerConfig(BaseModel):
    """Configuration for clipboard content analysis."""

    offload_threshold: int = Field(default=500, ge=0)
    max_history_items: int = Field(default=100, ge=1)


class RuleConfig(BaseModel):
    """Configuration for composable split and remove rules."""

    naming_remove_symbol: bool = True


class Config(BaseModel):
    """Main configuration for the segmenter and the clipboard analyzer."""

    segmentation: SegmentationOptions = Field(default_factory=SegmentationOptions)
    offload: OffloadConfig = Field(default_factory=OffloadConfig)
    analyzer: AnalyzerConfig = Field(default_factory=AnalyzerConfig)
    rules: RuleConfig = Field(default_factory=RuleConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        data = self.model_dump(mode="json")
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True)
