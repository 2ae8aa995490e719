"""Site builder: loads layouts, renders sources, writes the target tree.

The builder is the thin layer between the filesystem and the template
pipeline. It walks the source directory in sorted order, renders each file
with the site's layouts available, and mirrors the result into the target
directory using each template's output extension.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from quire.config import SiteConfig
from quire.engines.registry import EngineRegistry, create_registry
from quire.errors import TemplateError
from quire.templates import Template, TemplateType, parse

logger = logging.getLogger(__name__)


@dataclass
class BuildError:
    """A source file that failed to build."""

    path: Path
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"path": str(self.path), "message": self.message}


@dataclass
class BuildResult:
    """Outcome of a site build.

    Attributes:
        written: Output files written, in build order
        errors: Files that failed, with their error message
    """

    written: list[Path] = field(default_factory=list)
    errors: list[BuildError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "written": [str(path) for path in self.written],
            "errors": [error.to_dict() for error in self.errors],
            "success": self.success,
        }


class Site:
    """A site rooted at ``config.root``.

    Usage:
        site = Site(load_config(root=Path("blog")))
        result = site.build()
    """

    def __init__(
        self,
        config: SiteConfig,
        registry: EngineRegistry | None = None,
    ) -> None:
        """Initialize the site.

        Args:
            config: Site configuration
            registry: Render engines (built from ``config.render`` if None)
        """
        self.config = config

        if registry is None:
            includes = config.includes_path
            registry = create_registry(
                strict_variables=config.render.strict_variables,
                includes_dir=includes if includes.is_dir() else None,
                extra_extensions=config.render.engines,
            ).freeze()
        self.registry = registry

        self._layouts: dict[str, Template] | None = None

    # =========================================================================
    # Loading
    # =========================================================================

    def parse(self, path: Path) -> Template:
        """Parse a file, classifying it relative to the site root."""
        return parse(
            path,
            root=self.config.root,
            registry=self.registry,
            layouts_dir=self.config.layouts_dir,
            posts_dir=self.config.src_dir,
        )

    def load_layouts(self) -> dict[str, Template]:
        """Parse every layout, keyed by file name without extension.

        Returns:
            Mapping of layout name to Template

        Raises:
            ValueError: If two layouts share a name
            TemplateError: If a layout fails to parse
        """
        layouts: dict[str, Template] = {}
        layouts_path = self.config.layouts_path

        if not layouts_path.is_dir():
            logger.debug("No layouts directory at %s", layouts_path)
            return layouts

        for path in _walk(layouts_path):
            template = self.parse(path)
            if template.name in layouts:
                raise ValueError(
                    f"Duplicate layout name '{template.name}': "
                    f"{layouts[template.name].source_path} and {path}"
                )
            layouts[template.name] = template

        logger.debug("Loaded %d layout(s): %s", len(layouts), sorted(layouts))
        return layouts

    @property
    def layouts(self) -> dict[str, Template]:
        """Layouts of the site, loaded on first access."""
        if self._layouts is None:
            self._layouts = self.load_layouts()
        return self._layouts

    def iter_sources(self) -> Iterator[Path]:
        """Yield source files in sorted order, skipping hidden entries."""
        src_path = self.config.src_path
        if not src_path.is_dir():
            logger.warning("Source directory not found: %s", src_path)
            return
        yield from _walk(src_path)

    # =========================================================================
    # Rendering
    # =========================================================================

    def context_for(self, template: Template) -> dict[str, Any]:
        """Build the render context for a template."""
        return {
            "site": self.config.site,
            "page": template.metadata,
            "layouts": self.layouts,
        }

    def render_template(self, template: Template) -> bytes:
        return template.render(
            self.context_for(template),
            max_layout_depth=self.config.render.max_layout_depth,
        )

    def render_file(self, path: Path) -> bytes:
        """Render a single file without writing it."""
        return self.render_template(self.parse(path))

    def output_path_for(self, template: Template) -> Path:
        """Map a source file to its location in the target tree."""
        relative = template.source_path.relative_to(self.config.src_path)
        return (self.config.target_path / relative).with_suffix(template.ext())

    def build_file(self, path: Path) -> Path:
        """Render a source file and write it to the target tree.

        Returns:
            Path of the written file
        """
        template = self.parse(path)
        content = self.render_template(template)

        output_path = self.output_path_for(template)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(content)

        kind = "copied" if template.type is TemplateType.STATIC else "rendered"
        logger.debug("%s %s -> %s", kind.capitalize(), path, output_path)
        return output_path

    def build(self) -> BuildResult:
        """Build every source file.

        A file that fails is recorded in the result and the build carries
        on with the next one.

        Raises:
            TemplateError: If the layouts cannot be loaded
        """
        result = BuildResult()
        logger.info("Building %s -> %s", self.config.src_path, self.config.target_path)

        # Layouts are reloaded on every build
        self._layouts = self.load_layouts()

        for path in self.iter_sources():
            try:
                result.written.append(self.build_file(path))
            except (TemplateError, OSError) as e:
                logger.error("%s: %s", path, e)
                result.errors.append(BuildError(path=path, message=str(e)))

        logger.info(
            "Built %d file(s), %d error(s)",
            len(result.written),
            len(result.errors),
            extra={"data": {"written": len(result.written), "errors": len(result.errors)}},
        )
        return result


def _walk(directory: Path) -> Iterator[Path]:
    for path in sorted(directory.rglob("*")):
        relative = path.relative_to(directory)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if path.is_file():
            yield path
