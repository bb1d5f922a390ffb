"""Rendering and image-loading capabilities supplied by the host."""

from __future__ import annotations

import html
from typing import Any, Callable, Mapping, Optional, Protocol

LoadCallback = Callable[[], None]
ErrorCallback = Callable[[Optional[BaseException]], None]

# Attribute names whose Python spelling differs from the HTML one.
_HTML_NAMES = {"class_name": "class", "className": "class"}


class Renderer(Protocol):
    """Turns an attribute mapping into whatever node type the host uses."""

    def render(self, attributes: Mapping[str, Any]) -> Any: ...


class ImageLoader(Protocol):
    """The host's native image-loading primitive.

    ``load`` starts fetching ``src``/``srcset`` in the background and later
    calls exactly one of ``on_load``/``on_error``. It may call ``on_load``
    before returning when the image is already cached.
    """

    def load(
        self,
        src: str,
        srcset: Optional[str],
        on_load: LoadCallback,
        on_error: ErrorCallback,
    ) -> None: ...


def _format_attribute(name: str, value: Any) -> str:
    name = _HTML_NAMES.get(name, name)
    if value is True:
        return html.escape(name)
    return f'{html.escape(name)}="{html.escape(str(value))}"'


class HtmlImgRenderer:
    """Default renderer: serialises attributes into an ``<img>`` tag."""

    def __init__(self, tag: str = "img"):
        self.tag = tag

    def render(self, attributes: Mapping[str, Any]) -> str:
        parts = [
            _format_attribute(name, value)
            for name, value in attributes.items()
            if value is not None and value is not False
        ]
        if not parts:
            return f"<{self.tag} />"
        return f"<{self.tag} {' '.join(parts)} />"
