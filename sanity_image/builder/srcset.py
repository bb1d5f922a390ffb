"""Responsive breakpoint generation for ``srcset``."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence

from sanity_image.builder.geometry import resolve_geometry, round_half_up
from sanity_image.models.config import ImageConfig
from sanity_image.models.image import (
    AssetDescriptor,
    Breakpoint,
    CropRegion,
    Hotspot,
    OutputSpec,
    QueryValue,
)
from sanity_image.url_utils import build_asset_url, build_query_params, build_query_string

logger = logging.getLogger(__name__)

DEFAULT_MULTIPLIERS = (0.5, 1.0, 1.5, 2.0)


def breakpoint_widths(
    width: int, multipliers: Sequence[float] = DEFAULT_MULTIPLIERS
) -> list[int]:
    """Candidate widths at fixed fractions of ``width``, ascending and unique."""
    return sorted({max(1, round_half_up(width * m)) for m in multipliers})


def generate_breakpoints(
    asset: AssetDescriptor,
    output: OutputSpec,
    base_url: str,
    config: ImageConfig,
    crop: Optional[CropRegion] = None,
    hotspot: Optional[Hotspot] = None,
    query_params: Optional[Mapping[str, QueryValue]] = None,
    vanity_name: Optional[str] = None,
) -> list[Breakpoint]:
    """Build one URL per breakpoint width.

    Every breakpoint goes back through ``resolve_geometry`` with the requested
    height scaled to the breakpoint width, so crop windows and cover aspect
    ratios are recomputed rather than stretched from the primary image.
    """
    primary = resolve_geometry(asset, output, crop=crop, hotspot=hotspot)
    base_width = output.width or primary.width
    send_height = output.width is not None and output.height is not None

    limit = None
    if config.clamp_breakpoints_to_source:
        limit = primary.source_rect.width if primary.source_rect else asset.width

    breakpoints: list[Breakpoint] = []
    seen: set[int] = set()
    for candidate in breakpoint_widths(base_width, config.breakpoint_multipliers):
        if limit is not None and breakpoints and candidate > limit:
            break

        height = None
        if send_height:
            height = max(1, round_half_up(output.height * candidate / base_width))
        spec = OutputSpec(width=candidate, height=height, mode=output.mode)
        geometry = resolve_geometry(asset, spec, crop=crop, hotspot=hotspot)
        if geometry.width in seen:
            continue
        seen.add(geometry.width)

        params = build_query_params(
            geometry, output.mode, config, query_params, send_height=send_height
        )
        url = build_asset_url(base_url, asset, build_query_string(params), vanity_name)
        breakpoints.append(Breakpoint(width=geometry.width, url=url))

    breakpoints.sort(key=lambda b: b.width)
    logger.debug(
        "Generated %d breakpoints for %s: %s",
        len(breakpoints), asset.asset_id, [b.width for b in breakpoints],
    )
    return breakpoints


def format_srcset(breakpoints: Iterable[Breakpoint]) -> str:
    return ", ".join(b.descriptor for b in breakpoints)
