"""Render engines for the markup and templating dialects.

Engines:
- Jinja: templating dialect for ``.html`` bodies
- Org: outline-markup dialect for ``.org`` bodies, transpiled to HTML
"""

from quire.engines.base import RenderEngine
from quire.engines.jinja import JinjaEngine
from quire.engines.org import OrgEngine
from quire.engines.registry import (
    BUILTIN_ENGINES,
    DEFAULT_REGISTRY,
    EngineRegistry,
    create_registry,
    setup_default_engines,
)

__all__ = [
    "BUILTIN_ENGINES",
    "DEFAULT_REGISTRY",
    "EngineRegistry",
    "JinjaEngine",
    "OrgEngine",
    "RenderEngine",
    "create_registry",
    "setup_default_engines",
]
