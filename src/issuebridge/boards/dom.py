"""Minimal element tree for rendered cards, with CSS-style lookups."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from html import escape

VOID_TAGS = frozenset({"img", "br", "hr", "input"})

_SIMPLE_SELECTOR = re.compile(
    r"^(?P<tag>[a-zA-Z][a-zA-Z0-9]*)?(?P<classes>(?:\.[\w-]+)*)(?:\[(?P<attr>[\w-]+)\])?$"
)


@dataclass
class Element:
    """An HTML element: tag, classes, attributes, text, children."""

    tag: str
    classes: list[str] = field(default_factory=list)
    attrs: dict[str, str] = field(default_factory=dict)
    text: str = ""
    children: list[Element] = field(default_factory=list)

    def get_attribute(self, name: str) -> str | None:
        if name == "class":
            return " ".join(self.classes) or None
        return self.attrs.get(name)

    @property
    def text_content(self) -> str:
        return self.text + "".join(child.text_content for child in self.children)

    def iter_descendants(self) -> Iterator[Element]:
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def select(self, selector: str) -> list[Element]:
        """All descendants matching a descendant-combinator selector.

        Supports `tag`, `.class`, `[attr]` and combinations such as
        `.card-assignee a.user-avatar-link img`.
        """
        steps = [_parse(part) for part in selector.split()]
        if not steps:
            raise ValueError("Empty selector")

        matches: list[Element] = [self]
        for step in steps:
            found: list[Element] = []
            for root in matches:
                for el in root.iter_descendants():
                    if _matches(el, step) and not any(el is f for f in found):
                        found.append(el)
            matches = found
        return matches

    def select_one(self, selector: str) -> Element | None:
        found = self.select(selector)
        return found[0] if found else None

    def to_html(self) -> str:
        attrs = ""
        if self.classes:
            attrs += f' class="{escape(" ".join(self.classes))}"'
        for name, value in self.attrs.items():
            attrs += f' {name}="{escape(value)}"'
        if self.tag in VOID_TAGS:
            return f"<{self.tag}{attrs}>"
        inner = escape(self.text, quote=False) + "".join(c.to_html() for c in self.children)
        return f"<{self.tag}{attrs}>{inner}</{self.tag}>"


def _parse(part: str) -> tuple[str | None, list[str], str | None]:
    match = _SIMPLE_SELECTOR.match(part)
    if match is None:
        raise ValueError(f"Unsupported selector: {part!r}")
    classes = [c for c in match.group("classes").split(".") if c]
    return match.group("tag"), classes, match.group("attr")


def _matches(el: Element, step: tuple[str | None, list[str], str | None]) -> bool:
    tag, classes, attr = step
    if tag is not None and el.tag != tag:
        return False
    if any(c not in el.classes for c in classes):
        return False
    return attr is None or attr in el.attrs
