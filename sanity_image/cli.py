"""CLI entry point for inspecting generated image URLs."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from sanity_image.builder.asset_id import parse_image_id
from sanity_image.builder.srcset import generate_breakpoints
from sanity_image.builder.url_builder import build_image_attributes, resolve_base_url
from sanity_image.errors import SanityImageError
from sanity_image.models.config import ImageConfig
from sanity_image.models.image import CropRegion, Hotspot, ImageProps, OutputSpec

console = Console()

DEFAULT_CONFIG_PATH = "sanity-image.json"


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _parse_floats(value: Optional[str], count: int, option: str) -> Optional[list[float]]:
    if value is None:
        return None
    try:
        parts = [float(p) for p in value.split(",")]
    except ValueError:
        raise click.BadParameter(f"expected {count} comma-separated numbers", param_hint=option)
    if len(parts) != count:
        raise click.BadParameter(f"expected {count} comma-separated numbers", param_hint=option)
    return parts


def _parse_params(pairs: tuple[str, ...]) -> dict[str, str]:
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"'{pair}' is not key=value", param_hint="--param")
        params[key] = value
    return params


def _load_config(config: str) -> ImageConfig:
    if Path(config).exists():
        return ImageConfig.load(config)
    return ImageConfig()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Responsive image URL builder for the Sanity image CDN"""
    setup_logging(verbose)


@cli.command()
@click.argument("image_id")
@click.option("--width", "-w", type=click.IntRange(min=1), help="Requested width")
@click.option("--height", "-h", type=click.IntRange(min=1), help="Requested height")
@click.option("--mode", "-m", type=click.Choice(["contain", "cover", "crop"]), help="Fit mode")
@click.option("--crop", help="Crop fractions: top,bottom,left,right")
@click.option("--hotspot", help="Focal point fractions: x,y")
@click.option("--base-url", help="Base URL for image assets")
@click.option("--project-id", help="Sanity project id")
@click.option("--dataset", help="Sanity dataset")
@click.option("--vanity-name", help="SEO filename appended to the asset path")
@click.option("--param", "-p", "params", multiple=True, help="Extra query parameter key=value")
@click.option("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config file path")
def url(
    image_id: str,
    width: Optional[int],
    height: Optional[int],
    mode: Optional[str],
    crop: Optional[str],
    hotspot: Optional[str],
    base_url: Optional[str],
    project_id: Optional[str],
    dataset: Optional[str],
    vanity_name: Optional[str],
    params: tuple[str, ...],
    config: str,
) -> None:
    """Print the src, size and srcset breakpoints for an image id."""
    cfg = _load_config(config)

    crop_values = _parse_floats(crop, 4, "--crop")
    hotspot_values = _parse_floats(hotspot, 2, "--hotspot")

    props = ImageProps(
        id=image_id,
        width=width,
        height=height,
        mode=mode,
        crop=CropRegion(
            top=crop_values[0], bottom=crop_values[1],
            left=crop_values[2], right=crop_values[3],
        ) if crop_values else None,
        hotspot=Hotspot(x=hotspot_values[0], y=hotspot_values[1]) if hotspot_values else None,
        base_url=base_url or cfg.base_url,
        project_id=project_id or cfg.project_id,
        dataset=dataset or cfg.dataset,
        vanity_name=vanity_name,
        query_params=_parse_params(params),
    )

    try:
        attributes = build_image_attributes(props, cfg)
        asset = parse_image_id(image_id)
        breakpoints = []
        if not asset.is_vector:
            breakpoints = generate_breakpoints(
                asset,
                OutputSpec(width=width, height=height, mode=mode or cfg.default_mode),
                resolve_base_url(props, cfg),
                cfg,
                crop=props.crop,
                hotspot=props.hotspot,
                query_params=props.query_params,
                vanity_name=vanity_name,
            )
    except SanityImageError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    table = Table(title=f"Image {image_id}")
    table.add_column("Attribute", style="bold")
    table.add_column("Value", overflow="fold")
    table.add_row("src", attributes.src)
    table.add_row("width", str(attributes.width) if attributes.width else "-")
    table.add_row("height", str(attributes.height) if attributes.height else "-")
    for bp in breakpoints:
        table.add_row(f"{bp.width}w", bp.url)
    console.print(table)

    if asset.is_vector:
        console.print("[yellow]Vector image: transformations and srcset skipped[/yellow]")


@cli.command()
@click.option("--project-id", prompt="Project id", help="Sanity project id")
@click.option("--dataset", prompt="Dataset", default="production", help="Sanity dataset")
@click.option("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config file path")
def init(project_id: str, dataset: str, config: str) -> None:
    """Create a default configuration file."""
    config_path = Path(config)
    if config_path.exists():
        if not click.confirm(f"{config_path} already exists. Overwrite?"):
            return

    cfg = ImageConfig(project_id=project_id, dataset=dataset)
    cfg.save(config_path)
    console.print(f"[green]Created {config_path}[/green]")
    console.print("\nYou can now inspect image URLs with:")
    console.print("  [blue]sanity-image url image-<assetId>-<W>x<H>-<format> --width 800[/blue]")


if __name__ == "__main__":
    cli()
