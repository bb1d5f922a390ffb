"""Configuration model for URL generation."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_CDN_URL_TEMPLATE = "https://cdn.sanity.io/images/{project_id}/{dataset}/"


class ImageConfig(BaseModel):
    # CDN
    cdn_url_template: str = DEFAULT_CDN_URL_TEMPLATE

    # Baseline transformation parameters
    quality: int = Field(default=75, ge=1, le=100)
    auto_format: str = "format"

    # Responsive breakpoints, as multiples of the requested width
    breakpoint_multipliers: list[float] = Field(
        default_factory=lambda: [0.5, 1.0, 1.5, 2.0]
    )
    clamp_breakpoints_to_source: bool = False

    # Rendering defaults
    default_mode: str = "contain"
    default_loading: str = "lazy"

    # Location defaults, used by the CLI when no flags are given
    base_url: Optional[str] = None
    project_id: Optional[str] = None
    dataset: Optional[str] = None

    @field_validator("project_id", "dataset", mode="before")
    @classmethod
    def resolve_env_value(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and v.startswith("env:"):
            env_var = v[4:]
            resolved = os.environ.get(env_var)
            if resolved is None:
                raise ValueError(f"Environment variable '{env_var}' not set")
            return resolved
        return v

    @field_validator("breakpoint_multipliers")
    @classmethod
    def check_multipliers(cls, v: list[float]) -> list[float]:
        if not v:
            raise ValueError("At least one breakpoint multiplier is required")
        if any(m <= 0 for m in v):
            raise ValueError("Breakpoint multipliers must be positive")
        return sorted(v)

    def cdn_base_url(self, project_id: str, dataset: str) -> str:
        return self.cdn_url_template.format(project_id=project_id, dataset=dataset)

    @classmethod
    def load(cls, path: str | Path) -> "ImageConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
