"""Quire site configuration.

Configuration is YAML-based with minimal CLI overrides (--root, --target).
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. <root>/config.yml
3. <root>/config.yaml
4. <root>/quire.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from quire.engines.registry import BUILTIN_ENGINES, normalize_extension

CONFIG_FILENAMES = ("config.yml", "config.yaml", "quire.yaml")

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class RenderConfig:
    """Render settings.

    Attributes:
        strict_variables: Fail on undefined template variables instead of
            rendering an empty string
        max_layout_depth: Longest layout chain before a render fails
        engines: Extra source extensions mapped to a built-in engine name
    """

    strict_variables: bool = False
    max_layout_depth: int = 16
    engines: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate render configuration."""
        if self.max_layout_depth < 1:
            raise ValueError(
                f"max_layout_depth must be at least 1 (got {self.max_layout_depth})"
            )

        normalized: dict[str, str] = {}
        for extension, engine_name in self.engines.items():
            if engine_name not in BUILTIN_ENGINES:
                raise ValueError(
                    f"Invalid engine for {extension}: {engine_name}. "
                    f"Valid: {sorted(BUILTIN_ENGINES)}"
                )
            normalized[normalize_extension(extension)] = engine_name
        self.engines = normalized


@dataclass
class SiteConfig:
    """Top-level site configuration.

    Directory settings are relative to ``root``.

    Attributes:
        root: Site root directory
        src_dir: Directory holding source pages and posts
        layouts_dir: Directory holding layout templates
        includes_dir: Directory searched by ``{% include %}``
        target_dir: Directory the build writes to
        site: Free-form values exposed to templates as ``site``
        render: Render settings
    """

    root: Path = field(default_factory=Path.cwd)
    src_dir: str = "src"
    layouts_dir: str = "layouts"
    includes_dir: str = "includes"
    target_dir: str = "target"
    site: dict[str, Any] = field(default_factory=dict)
    render: RenderConfig = field(default_factory=RenderConfig)

    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path

    @property
    def src_path(self) -> Path:
        return self.root / self.src_dir

    @property
    def layouts_path(self) -> Path:
        return self.root / self.layouts_dir

    @property
    def includes_path(self) -> Path:
        return self.root / self.includes_dir

    @property
    def target_path(self) -> Path:
        return self.root / self.target_dir


# =============================================================================
# Environment Variable Substitution
# =============================================================================

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax, e.g. ``url: ${SITE_URL}``.

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ValueError: If a referenced variable is not set
    """
    if isinstance(value, str):

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return _ENV_VAR_RE.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find the site configuration file in a directory.

    Args:
        start_path: Directory to search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    for filename in CONFIG_FILENAMES:
        candidate = start_path / filename
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def load_config_from_dict(data: dict[str, Any], root: Path | None = None) -> SiteConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary
        root: Site root (defaults to cwd)

    Returns:
        SiteConfig instance
    """
    data = substitute_env_vars(data)

    config = SiteConfig(root=(root or Path.cwd()).resolve())

    for key in ("src_dir", "layouts_dir", "includes_dir", "target_dir"):
        if key in data:
            setattr(config, key, str(data[key]))

    if "site" in data:
        site_data = data["site"] or {}
        if not isinstance(site_data, dict):
            raise ValueError("'site' must be a mapping")
        config.site = site_data

    if "render" in data:
        render_data = data["render"] or {}
        config.render = RenderConfig(
            strict_variables=render_data.get("strict_variables", False),
            max_layout_depth=render_data.get("max_layout_depth", 16),
            engines=render_data.get("engines") or {},
        )

    return config


def load_config(
    config_path: Path | None = None,
    root: Path | None = None,
    auto_discover: bool = True,
) -> SiteConfig:
    """Load site configuration from file.

    When ``root`` is not given, the directory holding the config file is
    the site root, or the cwd when no file is found.

    Args:
        config_path: Explicit path to config file
        root: Site root directory
        auto_discover: Whether to search ``root`` for a config file

    Returns:
        SiteConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file(root)
    else:
        found_path = None

    if found_path is not None:
        with open(found_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file must hold a mapping: {found_path}")
        config = load_config_from_dict(data, root=root or found_path.resolve().parent)
        config._config_path = found_path
    else:
        config = SiteConfig(root=(root or Path.cwd()).resolve())

    return config


def create_default_config(name: str = "my site") -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return f'''# Quire site configuration

# Directories, relative to this file
src_dir: "src"
layouts_dir: "layouts"
includes_dir: "includes"
target_dir: "target"

# Values available to every template as {{{{ site.* }}}}
site:
  name: "{name}"
  # url: "${{SITE_URL}}"

render:
  strict_variables: false  # true: undefined variables fail the build
  max_layout_depth: 16
  # engines:
  #   .xml: jinja
'''
