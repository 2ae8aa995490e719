"""Outline-markup engine for Org documents.

Transpiles an Org body into an HTML fragment. Headlines become nested
outline containers with stable ids derived from their order in the
document::

    <div id="outline-container-headline-1" class="outline-2">
    <h2 id="headline-1">
    Title
    </h2>
    <div id="outline-text-headline-1" class="outline-text-2">
    ...
    </div>
    </div>

Supported blocks: headlines, plain and ordered lists with nesting by
indentation, paragraphs, ``#+BEGIN_SRC``/``EXAMPLE``/``QUOTE`` blocks and
horizontal rules. ``#+KEYWORD:`` lines and comments produce no output.
Inline markup covers ``*bold*``, ``/italic/``, ``=code=``, ``~verbatim~``
and ``[[url][description]]`` links.

The render context is ignored: front matter reaches an Org page only
through the layout that wraps it.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from html import escape
from typing import Any

from quire.engines.base import RenderEngine

HEADLINE_RE = re.compile(r"^(\*+)\s+(.*?)\s*$")
HEADLINE_TAGS_RE = re.compile(r"\s+:[\w@#%:]+:$")
KEYWORD_RE = re.compile(r"^\s*#\+\w+:")
BLOCK_BEGIN_RE = re.compile(r"^\s*#\+begin_(\w+)\s*(.*?)\s*$", re.IGNORECASE)
COMMENT_RE = re.compile(r"^\s*#(\s|$)")
LIST_ITEM_RE = re.compile(r"^(\s*)([-+]|\d+[.)])\s+(.*?)\s*$")
RULE_RE = re.compile(r"^\s*-{5,}\s*$")

INLINE_RE = re.compile(
    r"\[\[(?P<url>[^\]]+)\](?:\[(?P<desc>[^\]]+)\])?\]"
    r"|(?<![\w*])\*(?P<bold>\S(?:.*?\S)?)\*(?![\w*])"
    r"|(?<![\w/:<])/(?P<italic>\S(?:.*?\S)?)/(?![\w/])"
    r"|(?<![\w=])=(?P<code>\S(?:.*?\S)?)=(?![\w=])"
    r"|(?<![\w~])~(?P<verbatim>\S(?:.*?\S)?)~(?![\w~])"
)

IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp")


@dataclass
class Headline:
    """A headline and the lines that belong to it."""

    level: int
    title: str
    number: int
    lines: list[str] = field(default_factory=list)
    children: list["Headline"] = field(default_factory=list)


@dataclass
class ListEntry:
    indent: int
    ordered: bool
    text: str


class OrgEngine(RenderEngine):
    """Render Org outline documents to nested HTML."""

    name = "org"
    output_extension = ".html"

    def render(self, body: str, context: Mapping[str, Any]) -> str:
        preamble, headlines = parse_outline(body)
        parts = [render_blocks(preamble)]
        parts.extend(render_headline(headline) for headline in headlines)
        return "".join(parts)


# =============================================================================
# Outline structure
# =============================================================================


def parse_outline(body: str) -> tuple[list[str], list[Headline]]:
    """Split a document into its preamble lines and top-level headlines.

    Headlines are numbered from 1 in document order and nested under the
    closest preceding headline of a lower level.
    """
    preamble: list[str] = []
    roots: list[Headline] = []
    stack: list[Headline] = []
    count = 0
    closing: re.Pattern[str] | None = None

    for line in body.splitlines():
        # Lines inside #+BEGIN_x ... #+END_x are never headlines
        begin = BLOCK_BEGIN_RE.match(line)
        if closing is not None:
            if closing.match(line):
                closing = None
        elif begin is not None:
            closing = _block_end_re(begin.group(1))

        match = HEADLINE_RE.match(line) if closing is None else None
        if match is None:
            (stack[-1].lines if stack else preamble).append(line)
            continue

        count += 1
        title = HEADLINE_TAGS_RE.sub("", match.group(2))
        headline = Headline(level=len(match.group(1)), title=title, number=count)

        while stack and stack[-1].level >= headline.level:
            stack.pop()
        (stack[-1].children if stack else roots).append(headline)
        stack.append(headline)

    return preamble, roots


def render_headline(headline: Headline) -> str:
    depth = headline.level + 1
    tag = f"h{min(depth, 6)}"
    ident = f"headline-{headline.number}"

    parts = [
        f'<div id="outline-container-{ident}" class="outline-{depth}">\n',
        f'<{tag} id="{ident}">\n{render_inline(headline.title)}\n</{tag}>\n',
        f'<div id="outline-text-{ident}" class="outline-text-{depth}">\n',
        render_blocks(headline.lines),
    ]
    parts.extend(render_headline(child) for child in headline.children)
    parts.append("</div>\n</div>\n")
    return "".join(parts)


# =============================================================================
# Blocks
# =============================================================================


def render_blocks(lines: list[str]) -> str:
    """Render the non-headline content of a section."""
    out: list[str] = []
    paragraph: list[str] = []

    def flush() -> None:
        if paragraph:
            text = "\n".join(render_inline(line.strip()) for line in paragraph)
            out.append(f"<p>\n{text}\n</p>\n")
            paragraph.clear()

    i = 0
    while i < len(lines):
        line = lines[i]

        if not line.strip():
            flush()
            i += 1
            continue

        begin = BLOCK_BEGIN_RE.match(line)
        if begin:
            flush()
            kind = begin.group(1).lower()
            end = _find_block_end(lines, i + 1, kind)
            out.append(_render_greater_block(kind, begin.group(2), lines[i + 1:end]))
            i = end + 1
            continue

        if KEYWORD_RE.match(line) or COMMENT_RE.match(line):
            flush()
            i += 1
            continue

        if RULE_RE.match(line):
            flush()
            out.append("<hr>\n")
            i += 1
            continue

        if LIST_ITEM_RE.match(line):
            flush()
            entries, i = _collect_list(lines, i)
            pos = 0
            while pos < len(entries):
                html, pos = _render_list(entries, pos)
                out.append(html)
            continue

        paragraph.append(line)
        i += 1

    flush()
    return "".join(out)


def _block_end_re(kind: str) -> re.Pattern[str]:
    return re.compile(rf"^\s*#\+end_{re.escape(kind)}\s*$", re.IGNORECASE)


def _find_block_end(lines: list[str], start: int, kind: str) -> int:
    # An unterminated block runs to the end of the section
    closing = _block_end_re(kind)
    for index in range(start, len(lines)):
        if closing.match(lines[index]):
            return index
    return len(lines)


def _render_greater_block(kind: str, params: str, lines: list[str]) -> str:
    if kind == "quote":
        return f"<blockquote>\n{render_blocks(lines)}</blockquote>\n"

    code = escape("\n".join(lines), quote=False)
    if kind == "src":
        language = params.split()[0] if params else "text"
        return f'<div class="src src-{escape(language)}">\n<pre>\n{code}\n</pre>\n</div>\n'
    return f'<pre class="{escape(kind)}">\n{code}\n</pre>\n'


def _collect_list(lines: list[str], start: int) -> tuple[list[ListEntry], int]:
    """Gather consecutive list items and their continuation lines."""
    entries: list[ListEntry] = []
    i = start
    while i < len(lines):
        line = lines[i]
        match = LIST_ITEM_RE.match(line)
        if match:
            indent, bullet, text = match.groups()
            entries.append(ListEntry(len(indent), bullet[0].isdigit(), text))
        elif line.strip() and _indent_of(line) > entries[-1].indent:
            entries[-1].text += " " + line.strip()
        else:
            break
        i += 1
    return entries, i


def _render_list(entries: list[ListEntry], pos: int) -> tuple[str, int]:
    indent = entries[pos].indent
    tag = "ol" if entries[pos].ordered else "ul"
    out = [f"<{tag}>\n"]

    while pos < len(entries) and entries[pos].indent >= indent:
        item = f"<li>{render_inline(entries[pos].text)}"
        pos += 1
        if pos < len(entries) and entries[pos].indent > indent:
            nested, pos = _render_list(entries, pos)
            item += "\n" + nested
        out.append(item + "</li>\n")

    out.append(f"</{tag}>\n")
    return "".join(out), pos


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip())


# =============================================================================
# Inline markup
# =============================================================================


def render_inline(text: str) -> str:
    """Escape text and convert Org inline markup to HTML."""
    out: list[str] = []
    pos = 0
    for match in INLINE_RE.finditer(text):
        out.append(escape(text[pos:match.start()], quote=False))
        out.append(_inline_markup(match))
        pos = match.end()
    out.append(escape(text[pos:], quote=False))
    return "".join(out)


def _inline_markup(match: re.Match[str]) -> str:
    url = match.group("url")
    if url is not None:
        href = escape(url)
        description = match.group("desc")
        if description:
            return f'<a href="{href}">{render_inline(description)}</a>'
        if url.lower().endswith(IMAGE_SUFFIXES):
            return f'<img src="{href}" alt="{href}" title="{href}" />'
        return f'<a href="{href}">{escape(url, quote=False)}</a>'

    if match.group("bold") is not None:
        return f"<strong>{render_inline(match.group('bold'))}</strong>"
    if match.group("italic") is not None:
        return f"<em>{render_inline(match.group('italic'))}</em>"
    if match.group("code") is not None:
        return f"<code>{escape(match.group('code'), quote=False)}</code>"
    return f"<code>{escape(match.group('verbatim'), quote=False)}</code>"
