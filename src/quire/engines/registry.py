"""Render engine registry keyed by source file extension.

The registry maps extensions such as ``.html`` or ``.org`` to the engine
that renders them. Adding a dialect means registering one more engine;
nothing in Template or layout composition changes.

The process-wide ``DEFAULT_REGISTRY`` is built once at import and frozen,
so concurrent lookups need no locking. Callers that want more engines or
different engine settings build their own registry with
``create_registry``.
"""

from pathlib import Path
from typing import Any

from quire.engines.base import RenderEngine
from quire.engines.jinja import JinjaEngine
from quire.engines.org import OrgEngine
from quire.errors import UnsupportedFormatError

# Built-in engines selectable by name from configuration
BUILTIN_ENGINES: dict[str, type[RenderEngine]] = {
    "jinja": JinjaEngine,
    "org": OrgEngine,
}


def normalize_extension(extension: str) -> str:
    """Return ``extension`` lower-cased with a leading dot."""
    extension = extension.strip().lower()
    if extension and not extension.startswith("."):
        extension = "." + extension
    return extension


class EngineRegistry:
    """Registry of render engines by source extension.

    Usage:
        registry = EngineRegistry()
        registry.register(".html", JinjaEngine())
        engine = registry.resolve(".html")
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._engines: dict[str, RenderEngine] = {}
        self._frozen = False

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, extension: str, engine: RenderEngine) -> None:
        """Register an engine for a source extension.

        Args:
            extension: Source extension (e.g., ".html" or "html")
            engine: Engine instance

        Raises:
            RuntimeError: If the registry has been frozen
        """
        if self._frozen:
            raise RuntimeError("Cannot register engines on a frozen registry")
        self._engines[normalize_extension(extension)] = engine

    def freeze(self) -> "EngineRegistry":
        """Make the registry read-only and return it."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # =========================================================================
    # Retrieval
    # =========================================================================

    def resolve(self, extension: str) -> RenderEngine:
        """Get the engine for a source extension.

        Args:
            extension: Source extension

        Returns:
            Registered engine

        Raises:
            UnsupportedFormatError: If no engine is registered
        """
        key = normalize_extension(extension)
        try:
            return self._engines[key]
        except KeyError:
            raise UnsupportedFormatError(key) from None

    def supports(self, extension: str) -> bool:
        return normalize_extension(extension) in self._engines

    def output_extension(self, extension: str) -> str:
        """Get the output extension for files with a source extension.

        Unregistered extensions and in-place engines keep ``extension``.
        """
        engine = self._engines.get(normalize_extension(extension))
        if engine is None or engine.output_extension is None:
            return extension
        return engine.output_extension

    # =========================================================================
    # Introspection
    # =========================================================================

    def list_extensions(self) -> list[str]:
        """Get registered extensions in sorted order."""
        return sorted(self._engines)

    def get_metadata(self) -> dict[str, Any]:
        """Get registry metadata for logging and debugging."""
        return {
            "engines": {ext: engine.get_metadata() for ext, engine in self._engines.items()},
            "frozen": self._frozen,
        }


def setup_default_engines(
    registry: EngineRegistry,
    strict_variables: bool = False,
    includes_dir: Path | None = None,
    extra_extensions: dict[str, str] | None = None,
) -> EngineRegistry:
    """Register the built-in engines.

    ``.html`` renders with Jinja2 and ``.org`` with the Org engine.
    ``extra_extensions`` maps further extensions to a built-in engine name,
    e.g. ``{".xml": "jinja"}`` for feeds.

    Args:
        registry: Registry to populate
        strict_variables: Fail on undefined template variables
        includes_dir: Directory for Jinja2 ``{% include %}``
        extra_extensions: Extension to built-in engine name

    Returns:
        The populated registry

    Raises:
        ValueError: If an extra extension names an unknown engine
    """
    engines: dict[str, RenderEngine] = {
        "jinja": JinjaEngine(strict=strict_variables, includes_dir=includes_dir),
        "org": OrgEngine(),
    }

    registry.register(".html", engines["jinja"])
    registry.register(".org", engines["org"])

    for extension, engine_name in (extra_extensions or {}).items():
        if engine_name not in engines:
            raise ValueError(
                f"Unknown engine '{engine_name}' for {extension}. "
                f"Available: {sorted(BUILTIN_ENGINES)}"
            )
        registry.register(extension, engines[engine_name])

    return registry


def create_registry(
    strict_variables: bool = False,
    includes_dir: Path | None = None,
    extra_extensions: dict[str, str] | None = None,
) -> EngineRegistry:
    """Build a new, unfrozen registry holding the built-in engines."""
    return setup_default_engines(
        EngineRegistry(),
        strict_variables=strict_variables,
        includes_dir=includes_dir,
        extra_extensions=extra_extensions,
    )


DEFAULT_REGISTRY = create_registry().freeze()
