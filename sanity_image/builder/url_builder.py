"""Turn image props into the src/srcset/width/height an element needs."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from sanity_image.builder.asset_id import parse_image_id
from sanity_image.builder.geometry import resolve_geometry
from sanity_image.builder.srcset import format_srcset, generate_breakpoints
from sanity_image.errors import MissingRequiredInput
from sanity_image.models.config import ImageConfig
from sanity_image.models.image import (
    AssetDescriptor,
    CropRegion,
    Hotspot,
    ImageAttributes,
    ImageProps,
    OutputSpec,
    QueryValue,
)
from sanity_image.url_utils import build_asset_url, build_query_params, build_query_string

logger = logging.getLogger(__name__)


def check_required_props(props: ImageProps) -> None:
    """Fail fast on inputs nothing else can recover from."""
    if not props.id:
        raise MissingRequiredInput("Missing required `id` prop for <SanityImage>.")
    if not props.base_url and (not props.project_id or not props.dataset):
        raise MissingRequiredInput(
            "Missing required `baseUrl` or `projectId` and `dataset` props for <SanityImage>."
        )


def resolve_base_url(props: ImageProps, config: ImageConfig) -> str:
    if props.base_url:
        return props.base_url
    return config.cdn_base_url(props.project_id, props.dataset)


def build_src(
    asset: AssetDescriptor,
    output: OutputSpec,
    base_url: str,
    config: ImageConfig,
    crop: Optional[CropRegion] = None,
    hotspot: Optional[Hotspot] = None,
    query_params: Optional[Mapping[str, QueryValue]] = None,
    vanity_name: Optional[str] = None,
) -> tuple[str, int, int]:
    """Return the primary URL and its resolved output size."""
    geometry = resolve_geometry(asset, output, crop=crop, hotspot=hotspot)
    params = build_query_params(
        geometry,
        output.mode,
        config,
        query_params,
        send_height=output.width is not None and output.height is not None,
    )
    url = build_asset_url(base_url, asset, build_query_string(params), vanity_name)
    return url, geometry.width, geometry.height


def build_svg_src(
    asset: AssetDescriptor, base_url: str, vanity_name: Optional[str] = None
) -> str:
    # The CDN ignores transformations for vector images.
    return build_asset_url(base_url, asset, vanity_name=vanity_name)


def _base_attributes(props: ImageProps, config: ImageConfig) -> dict[str, Any]:
    extra = props.additional_attributes
    attributes: dict[str, Any] = {
        "alt": extra.get("alt", ""),
        "loading": extra.get("loading", config.default_loading),
        "id": props.html_id,
    }
    attributes.update(extra)
    if props.html_id is not None:
        attributes["id"] = props.html_id
    return attributes


def build_image_attributes(
    props: ImageProps, config: Optional[ImageConfig] = None
) -> ImageAttributes:
    """Compute everything the rendering layer needs for one image."""
    check_required_props(props)
    config = config or ImageConfig()
    base_url = resolve_base_url(props, config)
    attributes = _base_attributes(props, config)

    asset = parse_image_id(props.id)
    if asset.is_vector:
        return ImageAttributes(
            src=build_svg_src(asset, base_url, props.vanity_name),
            width=props.html_width,
            height=props.html_height,
            attributes=attributes,
        )

    output = OutputSpec(
        width=props.width,
        height=props.height,
        mode=props.mode or config.default_mode,
    )
    shared: dict[str, Any] = dict(
        base_url=base_url,
        config=config,
        crop=props.crop,
        hotspot=props.hotspot,
        query_params=props.query_params,
        vanity_name=props.vanity_name,
    )

    src, width, height = build_src(asset, output, **shared)
    srcset = format_srcset(generate_breakpoints(asset, output, **shared))
    logger.debug("Built src for %s: %s", props.id, src)

    return ImageAttributes(
        src=src,
        srcset=srcset,
        width=props.html_width if props.html_width is not None else width,
        height=props.html_height if props.html_height is not None else height,
        attributes=attributes,
    )
