"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import Any, Callable, Optional

import pytest

from sanity_image.models.config import ImageConfig
from sanity_image.models.image import AssetDescriptor, CropRegion, Hotspot, ImageProps


IMAGE_ID = "image-abc123-1000x1000-jpg"
BASE_URL = "/images/"
PREVIEW = "data:image/jpeg;base64,/9j/2wBDAAYEBQYFBAYGBQYHBwYIChAKCgkJChQODwwQFxQYGBcUFhYaHSUfGhsjHBYWICwgIyYnKSopGR8tMC0oMCUoKSj/2Q=="


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def image_config() -> ImageConfig:
    """Create a default image configuration."""
    return ImageConfig()


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """Create a temporary config file."""
    config_file = tmp_path / "sanity-image.json"
    ImageConfig(project_id="abc123", dataset="production", quality=60).save(config_file)
    return config_file


# ============================================================================
# Image Fixtures
# ============================================================================


@pytest.fixture
def square_asset() -> AssetDescriptor:
    """A 1000x1000 JPEG."""
    return AssetDescriptor(asset_id="abc123", width=1000, height=1000, format="jpg")


@pytest.fixture
def wide_asset() -> AssetDescriptor:
    """A 2000x1000 PNG."""
    return AssetDescriptor(asset_id="wide42", width=2000, height=1000, format="png")


@pytest.fixture
def snapshot_crop() -> CropRegion:
    return CropRegion(top=0, bottom=0.2, left=0.3, right=0)


@pytest.fixture
def corner_hotspot() -> Hotspot:
    return Hotspot(x=1, y=1)


@pytest.fixture
def image_id() -> str:
    return IMAGE_ID


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def preview() -> str:
    return PREVIEW


@pytest.fixture
def basic_props() -> ImageProps:
    """Props for a 500px wide image under /images/."""
    return ImageProps(id=IMAGE_ID, width=500, base_url=BASE_URL)


# ============================================================================
# Loader / Renderer Fakes
# ============================================================================


class FakeLoader:
    """Records load requests so tests can fire the callbacks by hand."""

    def __init__(self, complete_immediately: bool = False):
        self.requests: list[dict[str, Any]] = []
        self.complete_immediately = complete_immediately

    def load(
        self,
        src: str,
        srcset: Optional[str],
        on_load: Callable[[], None],
        on_error: Callable[[Optional[BaseException]], None],
    ) -> None:
        self.requests.append(
            {"src": src, "srcset": srcset, "on_load": on_load, "on_error": on_error}
        )
        if self.complete_immediately:
            on_load()

    def finish(self, index: int = -1) -> None:
        self.requests[index]["on_load"]()

    def fail(self, index: int = -1, error: Optional[BaseException] = None) -> None:
        self.requests[index]["on_error"](error)


class DictRenderer:
    """Renderer that returns the attribute mapping itself."""

    def render(self, attributes):
        return dict(attributes)


@pytest.fixture
def fake_loader() -> FakeLoader:
    return FakeLoader()


@pytest.fixture
def cached_loader() -> FakeLoader:
    """Loader that reports success before load() returns."""
    return FakeLoader(complete_immediately=True)


@pytest.fixture
def dict_renderer() -> DictRenderer:
    return DictRenderer()
