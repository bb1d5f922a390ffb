"""The image component: props in, rendered node(s) out."""

from __future__ import annotations

from typing import Any, Callable, Optional

from sanity_image.builder.asset_id import is_svg_id
from sanity_image.builder.url_builder import build_image_attributes
from sanity_image.models.config import ImageConfig
from sanity_image.models.image import ImageProps, PreviewState
from sanity_image.render.preview import PreviewTransition
from sanity_image.render.renderer import HtmlImgRenderer, ImageLoader, Renderer


class SanityImage:
    """A mounted image.

    Call ``render`` with fresh props on every re-render and ``unmount`` when
    the image leaves the page. The instance owns the preview transition, so
    it must live as long as the element it renders.
    """

    def __init__(
        self,
        config: Optional[ImageConfig] = None,
        renderer: Optional[Renderer] = None,
        loader: Optional[ImageLoader] = None,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.config = config or ImageConfig()
        self.renderer = renderer or HtmlImgRenderer()
        self.loader = loader
        self.on_change = on_change
        self._transition: Optional[PreviewTransition] = None
        self._unmounted = False

    @property
    def preview_state(self) -> Optional[PreviewState]:
        """Current preview state, or None when no preview is in play."""
        return self._transition.state if self._transition is not None else None

    def render(self, props: ImageProps) -> list[Any]:
        if self._unmounted:
            raise RuntimeError("Cannot render an unmounted image")

        attributes = build_image_attributes(props, self.config).as_dict()

        if not props.preview or is_svg_id(props.id):
            self._drop_transition()
            return [self.renderer.render(attributes)]

        if self.loader is None:
            raise ValueError("An image loader is required to render a preview")
        if self._transition is None:
            self._transition = PreviewTransition(self.loader, on_swap=self.on_change)
        self._transition.update(attributes, props.preview)
        return self._transition.render(self.renderer)

    def unmount(self) -> None:
        self._drop_transition()
        self._unmounted = True

    def _drop_transition(self) -> None:
        if self._transition is not None:
            self._transition.unmount()
            self._transition = None
