"""Asset identifier parsing: ``image-<assetId>-<W>x<H>-<format>``."""

from __future__ import annotations

import re

from sanity_image.errors import InvalidIdentifierFormat
from sanity_image.models.image import AssetDescriptor

IMAGE_ID_PATTERN = re.compile(
    r"^(?P<prefix>[A-Za-z]+)-(?P<asset_id>[A-Za-z0-9]+)-"
    r"(?P<width>\d+)x(?P<height>\d+)-(?P<format>[a-z0-9]+)$"
)

KNOWN_FORMATS = frozenset(
    {"jpg", "jpeg", "png", "webp", "gif", "svg", "tiff", "tif", "bmp", "avif", "heic", "heif", "psd"}
)


def is_svg_id(image_id: str) -> bool:
    return image_id.endswith("-svg")


def parse_image_id(image_id: str) -> AssetDescriptor:
    """Decode an asset id into its storage key, intrinsic size and format."""
    match = IMAGE_ID_PATTERN.match(image_id)
    if not match:
        raise InvalidIdentifierFormat(
            f"Malformed image id {image_id!r}; expected '<prefix>-<assetId>-<W>x<H>-<format>'"
        )

    width = int(match.group("width"))
    height = int(match.group("height"))
    if width <= 0 or height <= 0:
        raise InvalidIdentifierFormat(
            f"Image id {image_id!r} has non-positive dimensions {width}x{height}"
        )

    fmt = match.group("format")
    if fmt not in KNOWN_FORMATS:
        raise InvalidIdentifierFormat(f"Image id {image_id!r} has unknown format {fmt!r}")

    return AssetDescriptor(
        asset_id=match.group("asset_id"),
        width=width,
        height=height,
        format=fmt,
    )
