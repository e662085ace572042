"""In-memory model of a page's ``<head>`` (and the top of ``<body>``).

Elements are addressed by a stable identity key, e.g. ``meta[name=description]``
or ``#ga4-script``, so a document can never hold two elements with the same
identity.
"""

from __future__ import annotations

import html
import re
from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from collections.abc import Iterator

# Tags whose text is emitted verbatim (script bodies, noscript fallbacks).
_RAW_TEXT_TAGS = frozenset({"script", "noscript"})
_VOID_TAGS = frozenset({"meta", "link"})
# End tags match case-insensitively in HTML.
_SCRIPT_END = re.compile(r"</(script)", re.IGNORECASE)


class Placement(StrEnum):
    HEAD = "head"
    BODY = "body"


class HeadElement(BaseModel):
    """One tag the page should carry."""

    model_config = ConfigDict(frozen=True)

    key: str
    tag: str
    attrs: dict[str, str] = Field(default_factory=dict)
    text: str = ""
    owner: str = ""
    placement: Placement = Placement.HEAD
    # Insert as the first child of its container instead of appending.
    prepend: bool = False

    def render(self) -> str:
        attrs = "".join(
            f' {name}="{html.escape(value, quote=True)}"' for name, value in self.attrs.items()
        )
        if self.tag in _VOID_TAGS:
            return f"<{self.tag}{attrs}>"
        if self.tag in _RAW_TEXT_TAGS:
            body = _SCRIPT_END.sub(r"<\\/\1", self.text) if self.tag == "script" else self.text
        else:
            body = html.escape(self.text, quote=False)
        return f"<{self.tag}{attrs}>{body}</{self.tag}>"


class HeadDocument:
    """Ordered, key-addressed collection of head and body-start elements."""

    def __init__(self, elements: list[HeadElement] | None = None) -> None:
        self._elements: dict[str, HeadElement] = {}
        for element in elements or []:
            self.insert(element)

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, key: object) -> bool:
        return key in self._elements

    def __iter__(self) -> Iterator[HeadElement]:
        return iter(list(self._elements.values()))

    def get(self, key: str) -> HeadElement | None:
        return self._elements.get(key)

    def snapshot(self) -> dict[str, HeadElement]:
        """A copy of the current state, safe to hand to a pure diff."""
        return dict(self._elements)

    def find(self, *, owner: str | None = None, tag: str | None = None) -> list[HeadElement]:
        return [
            e
            for e in self._elements.values()
            if (owner is None or e.owner == owner) and (tag is None or e.tag == tag)
        ]

    def insert(self, element: HeadElement) -> None:
        if element.key in self._elements:
            raise KeyError(f"Element {element.key!r} already present")
        if element.prepend:
            self._elements = {element.key: element, **self._elements}
        else:
            self._elements[element.key] = element

    def replace(self, element: HeadElement) -> None:
        """Overwrite an existing element in place, keeping its position."""
        if element.key not in self._elements:
            raise KeyError(f"Element {element.key!r} not present")
        self._elements[element.key] = element

    def remove(self, key: str) -> None:
        self._elements.pop(key, None)

    @property
    def title(self) -> str:
        element = self._elements.get("title")
        return element.text if element else ""

    def render_head(self) -> str:
        return "\n".join(
            e.render() for e in self._elements.values() if e.placement == Placement.HEAD
        )

    def render_body_start(self) -> str:
        return "\n".join(
            e.render() for e in self._elements.values() if e.placement == Placement.BODY
        )
