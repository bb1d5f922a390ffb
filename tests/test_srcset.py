"""Tests for responsive breakpoint generation."""

from sanity_image.builder.srcset import breakpoint_widths, format_srcset, generate_breakpoints
from sanity_image.models.config import ImageConfig
from sanity_image.models.image import Breakpoint, OutputSpec

BASE = "/images/abc123-1000x1000.jpg"


class TestBreakpointWidths:
    def test_default_multipliers(self):
        """Test the default 0.5/1/1.5/2 widths."""
        assert breakpoint_widths(500) == [250, 500, 750, 1000]

    def test_odd_width_rounds_half_up(self):
        """Test breakpoint widths round half up."""
        assert breakpoint_widths(333) == [167, 333, 500, 666]

    def test_tiny_width_deduplicates(self):
        """Test duplicate widths collapse."""
        assert breakpoint_widths(1) == [1, 2]

    def test_custom_multipliers(self):
        """Test configured multipliers are used."""
        assert breakpoint_widths(100, [3, 1]) == [100, 300]


class TestGenerateBreakpoints:
    """Tests for generate_breakpoints."""

    def test_contain_width(self, square_asset, image_config):
        """Test contain breakpoints carry only w."""
        breakpoints = generate_breakpoints(square_asset, OutputSpec(width=500), "/images/", image_config)
        assert [b.width for b in breakpoints] == [250, 500, 750, 1000]
        assert breakpoints[0].url == f"{BASE}?auto=format&fit=max&q=75&w=250"
        assert breakpoints[-1].url == f"{BASE}?auto=format&fit=max&q=75&w=1000"

    def test_srcset_string(self, square_asset, image_config):
        """Test the formatted srcset string."""
        breakpoints = generate_breakpoints(square_asset, OutputSpec(width=500), "/images/", image_config)
        assert format_srcset(breakpoints) == (
            f"{BASE}?auto=format&fit=max&q=75&w=250 250w, "
            f"{BASE}?auto=format&fit=max&q=75&w=500 500w, "
            f"{BASE}?auto=format&fit=max&q=75&w=750 750w, "
            f"{BASE}?auto=format&fit=max&q=75&w=1000 1000w"
        )

    def test_cover_recomputes_height_per_breakpoint(
        self, square_asset, image_config, snapshot_crop, corner_hotspot
    ):
        """Test each cover breakpoint keeps the aspect ratio with its own height and rect."""
        breakpoints = generate_breakpoints(
            square_asset,
            OutputSpec(width=500, height=1000, mode="cover"),
            "/images/",
            image_config,
            crop=snapshot_crop,
            hotspot=corner_hotspot,
        )
        assert [b.width for b in breakpoints] == [250, 500, 750, 1000]
        assert breakpoints[0].url == (
            f"{BASE}?auto=format&fit=crop&q=75&rect=600,0,400,800&w=250&h=500"
        )
        assert breakpoints[3].url.endswith("&w=1000&h=2000")

    def test_height_only_uses_resolved_width(self, wide_asset, image_config):
        """Test height-only output bases breakpoints on the derived width."""
        breakpoints = generate_breakpoints(wide_asset, OutputSpec(height=300), "/i/", image_config)
        assert [b.width for b in breakpoints] == [300, 600, 900, 1200]
        assert all("&h=" not in b.url for b in breakpoints)

    def test_no_size_uses_intrinsic_width(self, square_asset, image_config):
        """Test no size bases breakpoints on the source width."""
        breakpoints = generate_breakpoints(square_asset, OutputSpec(), "/images/", image_config)
        assert [b.width for b in breakpoints] == [500, 1000, 1500, 2000]

    def test_caller_params_on_every_url(self, square_asset, image_config):
        """Test caller params appear on every breakpoint URL."""
        breakpoints = generate_breakpoints(
            square_asset, OutputSpec(width=100), "/images/", image_config, query_params={"blur": 50}
        )
        assert all(b.url.endswith("&blur=50") for b in breakpoints)

    def test_ascending_and_deterministic(self, wide_asset, image_config):
        """Test breakpoints are ascending and stable."""
        spec = OutputSpec(width=37, height=91, mode="cover")
        first = generate_breakpoints(wide_asset, spec, "/i/", image_config)
        second = generate_breakpoints(wide_asset, spec, "/i/", image_config)
        assert first == second
        widths = [b.width for b in first]
        assert widths == sorted(set(widths))

    def test_may_exceed_intrinsic_width_by_default(self, square_asset, image_config):
        """Test breakpoints are not clamped by default."""
        breakpoints = generate_breakpoints(square_asset, OutputSpec(width=1000), "/i/", image_config)
        assert breakpoints[-1].width == 2000


class TestClampToSource:
    """Tests for the optional clamp against intrinsic width."""

    def test_drops_wider_breakpoints(self, square_asset):
        """Test clamping drops widths above the source width."""
        config = ImageConfig(clamp_breakpoints_to_source=True)
        breakpoints = generate_breakpoints(square_asset, OutputSpec(width=1000), "/i/", config)
        assert [b.width for b in breakpoints] == [500, 1000]

    def test_uses_crop_width(self, square_asset, snapshot_crop):
        """Test clamping uses the cropped width."""
        config = ImageConfig(clamp_breakpoints_to_source=True)
        breakpoints = generate_breakpoints(
            square_asset, OutputSpec(width=500), "/i/", config, crop=snapshot_crop
        )
        assert [b.width for b in breakpoints] == [250, 500]

    def test_keeps_smallest_breakpoint(self, square_asset):
        """Test clamping always keeps one breakpoint."""
        config = ImageConfig(clamp_breakpoints_to_source=True)
        breakpoints = generate_breakpoints(square_asset, OutputSpec(width=4000), "/i/", config)
        assert [b.width for b in breakpoints] == [2000]


class TestFormatSrcset:
    def test_descriptor(self):
        """Test the width descriptor format."""
        assert Breakpoint(width=10, url="/a.jpg").descriptor == "/a.jpg 10w"

    def test_join(self):
        """Test entries are joined with a comma and space."""
        assert format_srcset(
            [Breakpoint(width=1, url="a"), Breakpoint(width=2, url="b")]
        ) == "a 1w, b 2w"
