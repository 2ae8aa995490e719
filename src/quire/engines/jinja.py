"""Templating-dialect engine backed by Jinja2.

Bodies are rendered exactly as written outside of tags: no autoescaping,
no block trimming, and the trailing newline is kept. Layout content is
injected as already rendered HTML, so escaping it would corrupt the page.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import (
    ChainableUndefined,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError as JinjaTemplateError,
)

from quire.engines.base import RenderEngine
from quire.engines.filters import format_date, slugify
from quire.errors import RenderFailedError

logger = logging.getLogger(__name__)


class JinjaEngine(RenderEngine):
    """Render bodies as Jinja2 templates against the render context.

    Supports ``{{ page.title }}`` interpolation with dotted access into
    nested mappings and the full Jinja2 tag set (``{% for %}``, ``{% if %}``,
    ``{% include %}`` when an includes directory is configured).

    Undefined variables, nested paths such as ``{{ page.author.name }}``
    included, render as empty strings unless ``strict`` is set, in which
    case they fail the render.
    """

    name = "jinja"
    output_extension = None

    def __init__(
        self,
        strict: bool = False,
        includes_dir: Path | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            strict: Fail on undefined variables instead of rendering ""
            includes_dir: Directory searched by ``{% include %}``
        """
        self.strict = strict
        self.includes_dir = includes_dir

        loader = FileSystemLoader(str(includes_dir)) if includes_dir else None
        self._env = Environment(
            loader=loader,
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined if strict else ChainableUndefined,
        )

        self._env.filters["format_date"] = format_date
        self._env.filters["slugify"] = slugify

    def render(self, body: str, context: Mapping[str, Any]) -> str:
        try:
            template = self._env.from_string(body)
            return template.render(dict(context))
        except JinjaTemplateError as e:
            logger.debug("Jinja render failed: %s", e)
            raise RenderFailedError(_describe(e)) from e
        except (TypeError, ValueError, AttributeError) as e:
            logger.debug("Jinja render failed: %s", e)
            raise RenderFailedError(str(e)) from e

    def check(self, body: str) -> None:
        try:
            self._env.parse(body)
        except JinjaTemplateError as e:
            raise RenderFailedError(_describe(e)) from e

    def get_metadata(self) -> dict[str, Any]:
        metadata = super().get_metadata()
        metadata["strict"] = self.strict
        metadata["includes_dir"] = str(self.includes_dir) if self.includes_dir else None
        return metadata


def _describe(error: JinjaTemplateError) -> str:
    lineno = getattr(error, "lineno", None)
    if lineno:
        return f"{error.message} (line {lineno})"
    return str(error.message or error)
