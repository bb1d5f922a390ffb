"""Blur-up preview handling: show the LQIP until the full image has loaded."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from sanity_image.models.image import PreviewState
from sanity_image.render.renderer import ImageLoader, Renderer

logger = logging.getLogger(__name__)

# Keeps the full image in the layout (so the browser fetches it) without it
# being visible until the swap.
HIDDEN_STYLE = (
    "position: absolute; width: 10px; height: 10px; opacity: 0; "
    "z-index: -10; pointer-events: none; user-select: none"
)

# Attributes shared by the preview so it occupies the same box.
PREVIEW_ATTRIBUTES = ("alt", "id", "class", "className", "style", "width", "height")


class PreviewTransition:
    """Two-state machine: SHOWING the preview, then SWAPPED to the final image.

    Each distinct target (``src`` + ``srcset``) is a new generation. Load
    callbacks remember the generation they were issued for and are ignored
    once a newer target has replaced it or the transition was unmounted, so
    a late load can never swap in the wrong image.

    A failed load keeps the preview on screen; there is no retry. If the
    loader raises while starting a load, the target is forgotten so the next
    update with the same attributes starts it again. ``on_swap``
    lets the host schedule a re-render when the swap happens.
    """

    def __init__(
        self,
        loader: ImageLoader,
        on_swap: Optional[Callable[[], None]] = None,
    ):
        self.loader = loader
        self.on_swap = on_swap
        self._state = PreviewState.SHOWING
        self._generation = 0
        self._target: Optional[tuple[str, Optional[str]]] = None
        self._attributes: dict[str, Any] = {}
        self._preview = ""
        self._mounted = True

    @property
    def state(self) -> PreviewState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def mounted(self) -> bool:
        return self._mounted

    def update(self, attributes: Mapping[str, Any], preview: str) -> None:
        """Take the latest computed attributes; restart if the target changed."""
        if not self._mounted:
            raise RuntimeError("Cannot update an unmounted preview transition")

        self._attributes = dict(attributes)
        self._preview = preview

        target = (self._attributes["src"], self._attributes.get("srcset"))
        if target == self._target:
            return

        self._target = target
        self._generation += 1
        self._state = PreviewState.SHOWING
        generation = self._generation
        logger.debug("Preview generation %d loading %s", generation, target[0])

        try:
            self.loader.load(
                target[0],
                target[1],
                on_load=lambda: self._handle_load(generation),
                on_error=lambda error=None: self._handle_error(generation, error),
            )
        except Exception:
            # Forget the target so the next update with the same props retries.
            self._target = None
            raise

    def unmount(self) -> None:
        self._mounted = False
        logger.debug("Preview transition unmounted at generation %d", self._generation)

    def _is_current(self, generation: int) -> bool:
        return self._mounted and generation == self._generation

    def _handle_load(self, generation: int) -> None:
        if not self._is_current(generation):
            logger.debug(
                "Ignoring stale load for generation %d (current %d, mounted=%s)",
                generation, self._generation, self._mounted,
            )
            return
        if self._state is PreviewState.SWAPPED:
            return
        self._state = PreviewState.SWAPPED
        logger.debug("Swapped preview for final image (generation %d)", generation)
        if self.on_swap is not None:
            self.on_swap()

    def _handle_error(self, generation: int, error: Optional[BaseException]) -> None:
        if not self._is_current(generation):
            return
        logger.warning(
            "Full image failed to load, keeping preview: %s (%s)",
            self._target[0] if self._target else "", error,
        )

    def nodes(self) -> list[dict[str, Any]]:
        """Attribute mappings for the elements to display, in render order."""
        if self._state is PreviewState.SWAPPED:
            return [dict(self._attributes)]

        preview = {
            name: self._attributes[name]
            for name in PREVIEW_ATTRIBUTES
            if name in self._attributes
        }
        preview["src"] = self._preview
        preview["data-lqip"] = "true"

        hidden = {k: v for k, v in self._attributes.items() if k != "id"}
        style = self._attributes.get("style")
        hidden["style"] = f"{style}; {HIDDEN_STYLE}" if style else HIDDEN_STYLE
        hidden["data-loading"] = "true"
        return [preview, hidden]

    def render(self, renderer: Renderer) -> list[Any]:
        return [renderer.render(node) for node in self.nodes()]
