"""Geometry resolution: crop window, fit mode and output size."""

from __future__ import annotations

import logging
import math
from typing import Optional

from sanity_image.errors import InvalidGeometry
from sanity_image.models.image import (
    AssetDescriptor,
    CropRegion,
    Hotspot,
    OutputSpec,
    PixelRect,
    ResolvedGeometry,
)

logger = logging.getLogger(__name__)

CONTAIN_MODES = frozenset({"contain"})
COVER_MODES = frozenset({"cover", "crop"})


def round_half_up(value: float) -> int:
    """Round like JavaScript's Math.round (halves go up, not to even)."""
    return int(math.floor(value + 0.5))


def _positive(value: float) -> int:
    return max(1, round_half_up(value))


def is_cover_mode(mode: str) -> bool:
    return mode in COVER_MODES


def validate_crop(crop: CropRegion) -> None:
    for name in ("top", "bottom", "left", "right"):
        value = getattr(crop, name)
        if not 0 <= value < 1:
            raise InvalidGeometry(f"Crop {name}={value} is outside [0, 1)")
    if crop.top + crop.bottom >= 1:
        raise InvalidGeometry(
            f"Crop top + bottom must be below 1, got {crop.top + crop.bottom}"
        )
    if crop.left + crop.right >= 1:
        raise InvalidGeometry(
            f"Crop left + right must be below 1, got {crop.left + crop.right}"
        )


def validate_hotspot(hotspot: Hotspot) -> None:
    if not (0 <= hotspot.x <= 1 and 0 <= hotspot.y <= 1):
        raise InvalidGeometry(f"Hotspot ({hotspot.x}, {hotspot.y}) is outside [0, 1]")


def cropped_rect(asset: AssetDescriptor, crop: Optional[CropRegion]) -> PixelRect:
    """Return the working rectangle in original-image pixels."""
    if crop is None:
        return PixelRect(left=0, top=0, width=asset.width, height=asset.height)

    left = round_half_up(crop.left * asset.width)
    top = round_half_up(crop.top * asset.height)
    right = round_half_up(crop.right * asset.width)
    bottom = round_half_up(crop.bottom * asset.height)

    width = asset.width - left - right
    height = asset.height - top - bottom
    if width < 1 or height < 1:
        raise InvalidGeometry(
            f"Crop leaves an empty {width}x{height} image from "
            f"{asset.width}x{asset.height}"
        )
    return PixelRect(left=left, top=top, width=width, height=height)


def _output_size(working: PixelRect, output: OutputSpec) -> tuple[int, int]:
    aspect = working.width / working.height
    width, height = output.width, output.height

    if width is None and height is None:
        return working.width, working.height
    if width is not None and height is None:
        return _positive(width), _positive(width / aspect)
    if width is None and height is not None:
        return _positive(height * aspect), _positive(height)

    if is_cover_mode(output.mode):
        return _positive(width), _positive(height)

    scale = min(width / working.width, height / working.height)
    return _positive(working.width * scale), _positive(working.height * scale)


def _focal_rect(
    working: PixelRect, aspect: float, hotspot: Optional[Hotspot]
) -> PixelRect:
    """Largest rectangle of the given aspect inside ``working``, centred on
    the hotspot as far as the working edges allow."""
    focus = hotspot if hotspot is not None else Hotspot()

    if working.width / working.height > aspect:
        # Working area is wider than the output: trim the sides.
        height = working.height
        width = min(working.width, _positive(height * aspect))
    else:
        width = working.width
        height = min(working.height, _positive(width / aspect))

    left = round_half_up(focus.x * working.width - width / 2)
    top = round_half_up(focus.y * working.height - height / 2)
    left = min(max(left, 0), working.width - width)
    top = min(max(top, 0), working.height - height)

    return PixelRect(
        left=working.left + left,
        top=working.top + top,
        width=width,
        height=height,
    )


def resolve_geometry(
    asset: AssetDescriptor,
    output: OutputSpec,
    crop: Optional[CropRegion] = None,
    hotspot: Optional[Hotspot] = None,
) -> ResolvedGeometry:
    """Combine intrinsic size, crop, hotspot and fit mode into an output size.

    Output dimensions are always integers of at least 1. A source rectangle
    is attached whenever the CDN has to cut pixels out of the original: the
    explicit crop window, or, for cover modes with both dimensions requested
    and a crop or hotspot supplied, the hotspot-centred window matching the
    output aspect ratio.
    """
    if output.mode not in CONTAIN_MODES | COVER_MODES:
        raise InvalidGeometry(f"Unknown fit mode {output.mode!r}")
    if crop is not None:
        validate_crop(crop)
    if hotspot is not None:
        validate_hotspot(hotspot)

    working = cropped_rect(asset, crop)
    if working.width <= 0 or working.height <= 0:
        raise InvalidGeometry("Cannot derive an aspect ratio from an empty image")

    width, height = _output_size(working, output)

    source_rect = None
    both_requested = output.width is not None and output.height is not None
    if is_cover_mode(output.mode) and both_requested and (crop is not None or hotspot is not None):
        source_rect = _focal_rect(working, width / height, hotspot)
    elif crop is not None:
        source_rect = working

    logger.debug(
        "Resolved %s (%dx%d, mode=%s) to %dx%d rect=%s",
        asset.asset_id, asset.width, asset.height, output.mode,
        width, height, source_rect.as_param() if source_rect else None,
    )
    return ResolvedGeometry(width=width, height=height, source_rect=source_rect)
