"""
Regex primitives for working with raw, possibly malformed HTML.

No tree is ever built. Elements are located by a single scan over the tags of
interest: each opening tag is pushed on a per-name stack and popped by the
next closing tag of the same name. An element that is never closed extends to
the end of the markup, which mirrors how browsers recover from the common
cases (unclosed ``<div>``, ``<li>``, ``<p>``). Work is linear in the size of
the markup however deeply it nests.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

# Attribute values may legally contain ">" when quoted.
_ATTRS = r"""((?:"[^"]*"|'[^']*'|[^'">])*)"""

_ANY_TAG = re.compile(r"<(/?)([a-zA-Z][a-zA-Z0-9:-]*)" + _ATTRS + ">")
_ATTRIBUTE = re.compile(r"""([^\s"'<>/=]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?""")

# An unterminated script/style/comment swallows the rest of the document.
_REMOVED_BLOCKS = re.compile(
    r"<(script|style|noscript)\b[^>]*>.*?(?:</\1\s*>|\Z)"
    r"|<!--.*?(?:-->|\Z)"
    r"|<!\[CDATA\[.*?(?:\]\]>|\Z)",
    re.IGNORECASE | re.DOTALL,
)

_TAG = re.compile(r"</?[a-zA-Z!?][^>]*>")
_BLOCK_TAG = re.compile(
    r"</?(?:div|p|h[1-6]|li|ul|ol|dl|dt|dd|article|section|main|aside|header|footer|nav|"
    r"blockquote|pre|table|thead|tbody|tfoot|tr|td|th|figure|figcaption|form|address)\b[^>]*>"
    r"|<br\s*/?>",
    re.IGNORECASE,
)
_WHITESPACE = re.compile(r"\s+")

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

Predicate = Callable[[str, Dict[str, str]], bool]


@dataclass(slots=True, frozen=True)
class Element:
    """An element located in markup by the tag scanner."""

    tag: str
    attrs: Dict[str, str] = field(hash=False)
    start: int
    end: int
    inner_start: int
    inner_end: int
    closed: bool
    source: str = field(repr=False, compare=False, hash=False)

    @property
    def inner(self) -> str:
        return self.source[self.inner_start : self.inner_end]


def parse_attributes(raw: str) -> Dict[str, str]:
    """Parse the attribute section of an opening tag. First occurrence wins."""
    attrs: Dict[str, str] = {}
    for match in _ATTRIBUTE.finditer(raw or ""):
        name = match.group(1).lower()
        if name in attrs:
            continue
        value = next((g for g in match.group(2, 3, 4) if g is not None), "")
        attrs[name] = value
    return attrs


def _tag_scanner(tags: Optional[Iterable[str]]) -> Optional[re.Pattern[str]]:
    if tags is None:
        return _ANY_TAG
    names = sorted({t.lower() for t in tags}, key=len, reverse=True)
    if not names:
        return None
    return re.compile(r"<(/?)(" + "|".join(re.escape(n) for n in names) + r")\b" + _ATTRS + ">", re.IGNORECASE)


def _scan_elements(markup: str, tags: Optional[Iterable[str]], predicate: Optional[Predicate]) -> List[Element]:
    scanner = _tag_scanner(tags)
    if scanner is None:
        return []

    found: List[Element] = []
    # Unselected openers are kept as None so closing tags still balance.
    stacks: Dict[str, List[Optional[Tuple[Dict[str, str], int, int]]]] = {}

    def finish(tag: str, entry, inner_end: int, end: int, closed: bool) -> None:
        if entry is not None:
            attrs, start, inner_start = entry
            found.append(Element(tag, attrs, start, end, inner_start, inner_end, closed, markup))

    for match in scanner.finditer(markup):
        closing, tag, raw_attrs = match.group(1), match.group(2).lower(), match.group(3)
        stack = stacks.setdefault(tag, [])

        if closing:
            if stack:
                finish(tag, stack.pop(), match.start(), match.end(), True)
            continue

        void = tag in VOID_ELEMENTS
        if void and tags is None:
            continue
        if tag == "p" and stack:
            # A paragraph cannot contain another one; the next <p> ends it.
            finish(tag, stack.pop(), match.start(), match.start(), True)

        attrs = parse_attributes(raw_attrs)
        entry = (attrs, match.start(), match.end()) if predicate is None or predicate(tag, attrs) else None
        if void or raw_attrs.rstrip().endswith("/"):
            finish(tag, entry, match.end(), match.end(), True)
        else:
            stack.append(entry)

    for tag, stack in stacks.items():
        for entry in stack:
            finish(tag, entry, len(markup), len(markup), False)

    found.sort(key=lambda e: e.start)
    return found


def iter_elements(
    markup: str,
    tags: Optional[Iterable[str]] = None,
    predicate: Optional[Predicate] = None,
    limit: Optional[int] = None,
) -> Iterator[Element]:
    """
    Yield elements in document order.

    Args:
        markup: HTML to scan
        tags: Tag names to match (any non-void tag when None)
        predicate: Optional filter on (tag, attrs)
        limit: Stop after this many elements

    Nested matches are yielded as well, outermost first. ``Element.closed`` is
    False for elements that run to the end of the markup.
    """
    elements = _scan_elements(markup, tags, predicate)
    yield from elements if limit is None else elements[:limit]


def remove_elements(
    markup: str,
    tags: Optional[Iterable[str]] = None,
    predicate: Optional[Predicate] = None,
) -> str:
    """Drop matching elements, including everything nested inside them."""
    spans: List[Tuple[int, int]] = []
    for element in iter_elements(markup, tags, predicate):
        if spans and element.start < spans[-1][1]:
            continue
        spans.append((element.start, element.end))

    if not spans:
        return markup

    parts: List[str] = []
    cursor = 0
    for start, end in spans:
        parts.append(markup[cursor:start])
        cursor = end
    parts.append(markup[cursor:])
    return "".join(parts)


def clean_markup(markup: str) -> str:
    """Remove script, style, noscript, comment and CDATA blocks."""
    return _REMOVED_BLOCKS.sub(" ", markup)


def strip_tags(fragment: str, replacement: str = "") -> str:
    return _TAG.sub(replacement, fragment)


def mark_block_boundaries(fragment: str, separator: str = "\n") -> str:
    """Replace block-level tags and line breaks with ``separator``."""
    return _BLOCK_TAG.sub(separator, fragment)


def decode_entities(text: str) -> str:
    """
    Decode HTML character references.

    Covers the named references of HTML5 and every numeric form; unknown
    names are left as written. Non-breaking spaces become plain spaces.
    """
    return html.unescape(text).replace("\xa0", " ")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def normalize_lines(text: str) -> str:
    """Collapse whitespace within each line and drop blank lines."""
    lines = (collapse_whitespace(line) for line in text.splitlines())
    return "\n".join(line for line in lines if line)


def flatten(fragment: str) -> str:
    """Single-line readable text of a fragment."""
    text = mark_block_boundaries(fragment, " ")
    text = strip_tags(text)
    return collapse_whitespace(decode_entities(text))


def text_length(fragment: str) -> int:
    """Length of the tag-stripped, whitespace-collapsed text of a fragment."""
    return len(collapse_whitespace(strip_tags(mark_block_boundaries(fragment, " "))))


def count_tags(markup: str, tag: str) -> int:
    """Number of opening ``tag`` tags in markup."""
    return len(re.findall(r"<" + re.escape(tag) + r"\b", markup, re.IGNORECASE))


def class_and_id(attrs: Dict[str, str]) -> str:
    """Lower-cased class and id values joined for token checks."""
    return f"{attrs.get('class', '')} {attrs.get('id', '')}".lower()
