"""Abstract base class for render engines.

Each engine turns a template body into output text. Engines are stateless
with respect to a single render: everything a render needs arrives through
the body and the context, so one engine instance can serve any number of
templates concurrently.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class RenderEngine(ABC):
    """Interface every markup or templating dialect implements.

    Adding a dialect means implementing this class and registering an
    instance for its source extension; Template and layout composition
    need no changes.

    Attributes:
        name: Engine identifier (e.g., "jinja", "org")
        output_extension: Extension of the produced output, or None when the
            engine renders in place and the source extension is kept
    """

    name: str = ""
    output_extension: str | None = None

    @abstractmethod
    def render(self, body: str, context: Mapping[str, Any]) -> str:
        """Render a template body.

        Args:
            body: Template body text (front matter already removed)
            context: Render context namespaces

        Returns:
            Rendered output text

        Raises:
            RenderFailedError: If the body cannot be evaluated
        """

    def check(self, body: str) -> None:
        """Check a body for syntax errors without rendering it.

        Dialects without a syntax check accept every body.

        Raises:
            RenderFailedError: If the body is malformed
        """

    def get_metadata(self) -> dict[str, Any]:
        """Get engine metadata for logging and debugging."""
        return {
            "name": self.name,
            "output_extension": self.output_extension,
        }
