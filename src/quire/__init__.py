"""Quire - a front matter and layout rendering pipeline for static sites.

A source file is split into YAML front matter and a body, classified by
where it lives (static file, page, post or layout), rendered through the
engine registered for its extension (Jinja2 for ``.html``, Org for
``.org``) and composed into the layout its front matter names.

    from quire import parse

    page = parse("site/src/about.html")
    html = page.render({"page": page.metadata, "layouts": layouts})
"""

__version__ = "0.1.0"

from quire.errors import (  # noqa: E402
    FrontMatterNotClosedError,
    InvalidMetadataError,
    LayoutCycleError,
    LayoutNotFoundError,
    RenderFailedError,
    TemplateError,
    UnsupportedFormatError,
)
from quire.templates import Template, TemplateType, classify, parse  # noqa: E402

__all__ = [
    "FrontMatterNotClosedError",
    "InvalidMetadataError",
    "LayoutCycleError",
    "LayoutNotFoundError",
    "RenderFailedError",
    "Template",
    "TemplateError",
    "TemplateType",
    "UnsupportedFormatError",
    "classify",
    "parse",
]
