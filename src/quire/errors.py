"""Exceptions raised while parsing and rendering templates.

Every failure in the pipeline is terminal for the call that raised it.
Callers catch ``TemplateError`` to handle any of them uniformly.
"""

from pathlib import Path


class TemplateError(Exception):
    """Base class for template parsing and rendering failures."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)


class FrontMatterNotClosedError(TemplateError):
    """Raised when an opening ``---`` has no matching closing line."""

    def __init__(self, path: Path | None = None) -> None:
        super().__init__("front matter not closed", path)


class InvalidMetadataError(TemplateError):
    """Raised when the front matter block is not a valid YAML mapping."""

    def __init__(self, detail: str, path: Path | None = None) -> None:
        self.detail = detail
        super().__init__(f"invalid yaml: {detail}", path)


class UnsupportedFormatError(TemplateError):
    """Raised when no render engine is registered for an extension."""

    def __init__(self, extension: str, path: Path | None = None) -> None:
        self.extension = extension
        super().__init__(f"unsupported format: {extension or '(none)'}", path)


class RenderFailedError(TemplateError):
    """Raised when an engine fails to evaluate a body."""

    def __init__(self, detail: str, path: Path | None = None) -> None:
        self.detail = detail
        super().__init__(f"render failed: {detail}", path)


class LayoutNotFoundError(TemplateError):
    """Raised when a declared layout is missing from the render context."""

    def __init__(self, name: str, path: Path | None = None) -> None:
        self.name = name
        super().__init__(f"layout not found: {name}", path)


class LayoutCycleError(TemplateError):
    """Raised when layout composition revisits a layout or runs too deep."""

    def __init__(self, chain: list[str], path: Path | None = None) -> None:
        self.chain = chain
        super().__init__(f"layout cycle: {' -> '.join(chain)}", path)
