"""Image data structures shared by the builders and the renderer."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

QueryValue = Union[bool, int, float, str]


class AssetDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    asset_id: str
    width: int
    height: int
    format: str  # jpg, png, webp, gif, svg, ...

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @property
    def is_vector(self) -> bool:
        return self.format == "svg"


class CropRegion(BaseModel):
    """Fractions of the uncropped original to cut away from each edge."""

    model_config = ConfigDict(frozen=True)

    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0


class Hotspot(BaseModel):
    """Focal point, as fractions of the cropped image."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.5
    y: float = 0.5


class OutputSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    mode: str = "contain"  # contain, cover, crop


class PixelRect(BaseModel):
    model_config = ConfigDict(frozen=True)

    left: int
    top: int
    width: int
    height: int

    def as_param(self) -> str:
        return f"{self.left},{self.top},{self.width},{self.height}"


class ResolvedGeometry(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int
    height: int
    source_rect: Optional[PixelRect] = None


class Breakpoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int
    url: str

    @property
    def descriptor(self) -> str:
        return f"{self.url} {self.width}w"


class PreviewState(str, Enum):
    SHOWING = "showing"
    SWAPPED = "swapped"


class ImageProps(BaseModel):
    """Everything a caller can hand to the image component."""

    # Image definition
    id: str = ""
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    mode: Optional[str] = None  # falls back to ImageConfig.default_mode
    crop: Optional[CropRegion] = None
    hotspot: Optional[Hotspot] = None
    vanity_name: Optional[str] = None

    # LQIP data URI or placeholder source
    preview: Optional[str] = None

    # CDN location: base_url, or project_id + dataset
    base_url: Optional[str] = None
    project_id: Optional[str] = None
    dataset: Optional[str] = None

    # Extra CDN query parameters, appended in the order given
    query_params: dict[str, QueryValue] = Field(default_factory=dict)

    # Native attribute overrides; never affect src/srcset
    html_width: Optional[int] = None
    html_height: Optional[int] = None
    html_id: Optional[str] = None

    # Anything else (alt, loading, class, aria-*) goes straight to the element
    additional_attributes: dict[str, str] = Field(default_factory=dict)


class ImageAttributes(BaseModel):
    """Attributes computed for the rendering layer."""

    src: str
    srcset: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    attributes: dict[str, Any] = Field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Flatten into the attribute mapping handed to a renderer.

        Pass-through attributes come first, then the computed ones. Keys with
        a ``None`` value are left out.
        """
        merged: dict[str, Any] = dict(self.attributes)
        merged["src"] = self.src
        merged["srcset"] = self.srcset
        merged["width"] = self.width
        merged["height"] = self.height
        return {k: v for k, v in merged.items() if v is not None}
