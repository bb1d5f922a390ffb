"""Shared URL utilities — canonical CDN query strings."""

from __future__ import annotations

from typing import Mapping, Optional
from urllib.parse import quote

from sanity_image.builder.geometry import is_cover_mode
from sanity_image.models.config import ImageConfig
from sanity_image.models.image import AssetDescriptor, QueryValue, ResolvedGeometry


def _format_value(value: QueryValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_query_params(
    geometry: ResolvedGeometry,
    mode: str,
    config: ImageConfig,
    query_params: Optional[Mapping[str, QueryValue]] = None,
    send_height: bool = False,
) -> dict[str, QueryValue]:
    """Return transformation parameters in their canonical order.

    Baseline keys first (auto, fit, q, rect), then w and h, then caller
    parameters. A caller key that matches a baseline key replaces the value
    but keeps the baseline position.
    """
    params: dict[str, QueryValue] = {
        "auto": config.auto_format,
        "fit": "crop" if is_cover_mode(mode) else "max",
        "q": config.quality,
    }
    if geometry.source_rect is not None:
        params["rect"] = geometry.source_rect.as_param()
    params["w"] = geometry.width
    if send_height and is_cover_mode(mode):
        params["h"] = geometry.height

    if query_params:
        params.update(query_params)
    return params


def build_query_string(params: Mapping[str, QueryValue]) -> str:
    """Serialize params in insertion order, URL-encoding keys and values."""
    return "&".join(
        f"{quote(str(key), safe='')}={quote(_format_value(value), safe=',')}"
        for key, value in params.items()
    )


def build_asset_url(
    base_url: str,
    asset: AssetDescriptor,
    query: str = "",
    vanity_name: Optional[str] = None,
) -> str:
    """Join base URL, asset path, optional vanity filename and query string."""
    url = f"{base_url}{asset.asset_id}-{asset.width}x{asset.height}.{asset.format}"
    if vanity_name:
        url += f"/{quote(vanity_name)}"
    if query:
        url += f"?{query}"
    return url
