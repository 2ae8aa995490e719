"""Template entity: parsing, render dispatch and layout composition.

Usage:
    base = parse("site/layouts/base.html")
    post = parse("site/src/first-post.org")

    html = post.render({"page": post.metadata, "layouts": {"base": base}})

Rendering a template that declares ``layout: base`` renders its own body
first, then renders the ``base`` layout with three bindings:

- ``layout``: the layout's own metadata
- ``page``: the metadata of the template being wrapped
- ``content``: the wrapped template's rendered output

Layouts may declare layouts of their own; each level gets a fresh context.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from quire.engines.registry import DEFAULT_REGISTRY, EngineRegistry
from quire.errors import (
    LayoutCycleError,
    LayoutNotFoundError,
    RenderFailedError,
    TemplateError,
    UnsupportedFormatError,
)
from quire.templates.classifier import (
    DEFAULT_LAYOUTS_DIR,
    DEFAULT_POSTS_DIR,
    TemplateType,
    classify,
)
from quire.templates.frontmatter import split_front_matter

logger = logging.getLogger(__name__)

DEFAULT_MAX_LAYOUT_DEPTH = 16


@dataclass(frozen=True)
class Template:
    """A parsed source file.

    Attributes:
        source_path: Path the template was parsed from
        type: Role of the file (STATIC, PAGE, POST, LAYOUT)
        metadata: Front matter mapping, empty for STATIC files
        body: Raw bytes after the front matter (whole file when STATIC)
        registry: Engines used to render the body
    """

    source_path: Path
    type: TemplateType
    metadata: dict[str, Any] = field(default_factory=dict)
    body: bytes = b""
    registry: EngineRegistry = field(default=DEFAULT_REGISTRY, repr=False, compare=False)

    @property
    def name(self) -> str:
        """Layout identifier: the file name without its extension."""
        return self.source_path.stem

    @property
    def layout(self) -> str | None:
        """Name of the layout this template declares, if any."""
        value = self.metadata.get("layout")
        return str(value) if value else None

    def ext(self) -> str:
        """Extension of the rendered output.

        Transpiling engines (Org) report their output extension; STATIC
        files and in-place engines keep the source extension.
        """
        suffix = self.source_path.suffix
        if self.type is TemplateType.STATIC:
            return suffix
        return self.registry.output_extension(suffix)

    def render(
        self,
        context: Mapping[str, Any] | None = None,
        *,
        max_layout_depth: int = DEFAULT_MAX_LAYOUT_DEPTH,
    ) -> bytes:
        """Render the template against a context.

        STATIC templates return their body unchanged. Otherwise the body is
        rendered by the engine registered for the source extension and, if
        a layout is declared, wrapped in that layout.

        Args:
            context: Namespaces available to the body (``page``,
                ``layouts``, ``site``, ...). None is an empty context.
            max_layout_depth: Longest layout chain allowed

        Returns:
            Rendered output bytes (UTF-8)

        Raises:
            UnsupportedFormatError: If no engine handles the extension
            RenderFailedError: If the engine fails to evaluate the body
            LayoutNotFoundError: If the declared layout is not in
                ``context["layouts"]``
            LayoutCycleError: If layouts wrap each other in a loop or the
                chain exceeds ``max_layout_depth``
        """
        return self._render(context or {}, (), max_layout_depth)

    def _render(
        self,
        context: Mapping[str, Any],
        chain: tuple[str, ...],
        max_layout_depth: int,
    ) -> bytes:
        if self.type is TemplateType.STATIC:
            return self.body

        if "page" not in context:
            context = {**context, "page": self.metadata}

        output = self._render_body(context)

        layout_name = self.layout
        if layout_name is None:
            return output.encode("utf-8")

        # Inside a chain ``page`` keeps pointing at the template being wrapped
        page = context["page"] if chain else self.metadata

        chain = chain + (layout_name,)
        if layout_name in chain[:-1] or len(chain) > max_layout_depth:
            raise LayoutCycleError(list(chain), self.source_path)

        layout = self._resolve_layout(layout_name, context)
        logger.debug("Composing %s into layout %s", self.source_path, layout_name)

        layout_context = {
            **context,
            "layout": layout.metadata,
            "page": page,
            "content": output,
        }
        return layout._render(layout_context, chain, max_layout_depth)

    def _render_body(self, context: Mapping[str, Any]) -> str:
        try:
            engine = self.registry.resolve(self.source_path.suffix)
        except UnsupportedFormatError as e:
            raise UnsupportedFormatError(e.extension, self.source_path) from None

        try:
            text = self.body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise RenderFailedError(f"body is not valid UTF-8: {e}", self.source_path) from e

        try:
            return engine.render(text, context)
        except RenderFailedError as e:
            raise RenderFailedError(e.detail, self.source_path) from e
        except Exception as e:
            # ZeroDivisionError, RecursionError and the like from evaluation
            raise RenderFailedError(f"{type(e).__name__}: {e}", self.source_path) from e

    def _resolve_layout(self, name: str, context: Mapping[str, Any]) -> "Template":
        layouts = context.get("layouts")
        layout = layouts.get(name) if isinstance(layouts, Mapping) else None
        if not isinstance(layout, Template):
            raise LayoutNotFoundError(name, self.source_path)
        return layout


def parse(
    path: str | Path,
    root: str | Path | None = None,
    registry: EngineRegistry | None = None,
    *,
    layouts_dir: str = DEFAULT_LAYOUTS_DIR,
    posts_dir: str = DEFAULT_POSTS_DIR,
) -> Template:
    """Parse a source file into a Template.

    Args:
        path: File to read
        root: Site root; when given the role is classified from the path
            relative to it
        registry: Engines for rendering (defaults to DEFAULT_REGISTRY)
        layouts_dir: Reserved directory name for layouts
        posts_dir: Reserved directory name for posts

    Returns:
        Parsed Template

    Raises:
        FileNotFoundError: If *path* does not exist
        FrontMatterNotClosedError: If the front matter is never closed
        InvalidMetadataError: If the front matter is not a YAML mapping
    """
    path = Path(path)
    raw = path.read_bytes()

    try:
        metadata, body = split_front_matter(raw)
    except TemplateError as e:
        e.path = path
        raise

    # An empty block carries no metadata; the file passes through whole
    if not metadata:
        metadata, body = {}, raw

    role_path = path.relative_to(root) if root is not None else path
    template_type = classify(
        role_path,
        bool(metadata),
        layouts_dir=layouts_dir,
        posts_dir=posts_dir,
    )
    logger.debug("Parsed %s as %s", path, template_type.value)

    return Template(
        source_path=path,
        type=template_type,
        metadata=metadata,
        body=body,
        registry=registry or DEFAULT_REGISTRY,
    )
