"""Minimal SVG tag tokenizer.

Not a general XML parser: it recognises start/end/empty tags with their
attributes (any order, single or double quotes) and skips comments, CDATA,
processing instructions and doctypes. Every tag keeps its character span in
the source text so callers can splice the original markup.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

_TOKEN_RE = re.compile(
    r"(?P<skip><!--.*?-->|<!\[CDATA\[.*?\]\]>|<\?.*?\?>|<![^>]*>)"
    r"|<(?P<close>/)?(?P<name>[A-Za-z_][\w:.-]*)"
    r"(?P<attrs>(?:\"[^\"]*\"|'[^']*'|[^'\">])*?)"
    r"(?P<empty>/)?\s*>",
    re.DOTALL,
)
_ATTR_RE = re.compile(r"""([^\s=/>"']+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")

# Containers whose children are never painted directly
NON_RENDERED = frozenset({
    "defs", "clipPath", "mask", "symbol", "pattern", "marker",
    "linearGradient", "radialGradient", "filter", "metadata", "title", "desc",
})


@dataclass
class Tag:
    name: str
    # "start", "end" or "empty"
    kind: str
    start: int
    end: int
    attrs: dict[str, str] = field(default_factory=dict)
    # Nesting depth of the element; the root <svg> is 0
    depth: int = 0
    # Inside a non-rendered container such as <defs> or <clipPath>
    hidden: bool = False

    @property
    def is_element(self) -> bool:
        """True for tags that open an element (start or empty)."""
        return self.kind != "end"


def local_name(name: str) -> str:
    return name.split(":", 1)[1] if ":" in name else name


def extract_attrs(tag_text: str) -> dict[str, str]:
    """Extract key=value attributes from a tag string, in any order."""
    attrs: dict[str, str] = {}
    for m in _ATTR_RE.finditer(tag_text):
        attrs[m.group(1)] = m.group(2) if m.group(2) is not None else m.group(3)
    return attrs


def iter_tags(svg_text: str) -> Iterator[Tag]:
    """Yield every tag of the document in order, tracking depth and visibility."""
    stack: list[str] = []
    for m in _TOKEN_RE.finditer(svg_text):
        if m.group("skip"):
            continue
        name = local_name(m.group("name"))

        if m.group("close"):
            # Tolerate unbalanced markup: unwind to the matching start tag
            if name in stack:
                while stack and stack.pop() != name:
                    pass
            yield Tag(
                name=name,
                kind="end",
                start=m.start(),
                end=m.end(),
                depth=len(stack),
                hidden=any(n in NON_RENDERED for n in stack),
            )
            continue

        tag = Tag(
            name=name,
            kind="empty" if m.group("empty") else "start",
            start=m.start(),
            end=m.end(),
            attrs=extract_attrs(m.group("attrs")),
            depth=len(stack),
            hidden=any(n in NON_RENDERED for n in stack),
        )
        if tag.kind == "start":
            stack.append(name)
        yield tag

