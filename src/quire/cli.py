"""Quire CLI interface.

Commands:
- build: Render the site into the target directory
- render: Render a single file to stdout
- validate: Check a file's front matter and template syntax
- init: Create a site skeleton with a default configuration

Global options:
- --config: Path to configuration file
- --root: Site root directory
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log output
- --version: Show version and exit
"""

import json
import sys
from pathlib import Path
from typing import Annotated

import typer

from quire import __version__
from quire.config import SiteConfig, create_default_config, load_config
from quire.errors import TemplateError
from quire.site import Site
from quire.templates import TemplateType
from quire.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="quire",
    help="Static site builder: front matter, layouts, Jinja and Org pages",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: SiteConfig | None = None
_root: Path | None = None
_logger = get_logger("quire.cli")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"quire {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    root: Annotated[
        Path | None,
        typer.Option(
            "--root",
            "-r",
            help="Site root directory (default: config file directory or cwd)",
            file_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output with timestamps"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress info messages (warnings and errors only)"),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option("--ci", help="Enable CI mode with JSON output"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Quire - render front-matter templates through layouts into a static site."""
    global _config, _root

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    _root = root
    _config = None
    if config is not None:
        _config = _load(config_path=config, root=root)


def _load(config_path: Path | None = None, root: Path | None = None) -> SiteConfig:
    try:
        site_config = load_config(config_path=config_path, root=root)
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)

    if site_config.config_path:
        _logger.debug(f"Loaded config from: {site_config.config_path}")
    return site_config


def _get_config() -> SiteConfig:
    """Return the config given with --config, or discover one under --root."""
    global _config
    if _config is None:
        _config = _load(root=_root)
    return _config


# =============================================================================
# build command
# =============================================================================


@app.command()
def build(
    target: Annotated[
        Path | None,
        typer.Option(
            "--target",
            "-t",
            help="Output directory (overrides config)",
            file_okay=False,
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print the build result as JSON"),
    ] = False,
) -> None:
    """Build the site.

    Exit codes:
        0: Every file built
        1: One or more files failed
    """
    config = _get_config()
    if target is not None:
        config.target_dir = str(target.resolve())

    site = Site(config)

    try:
        result = site.build()
    except (TemplateError, ValueError) as e:
        _logger.error(f"Failed to load layouts: {e}")
        raise typer.Exit(1)

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    elif result.success:
        typer.echo(f"✅ Built {len(result.written)} file(s) into {config.target_path}")
    else:
        typer.echo(f"❌ {len(result.errors)} file(s) failed")
        for error in result.errors:
            typer.echo(f"   • {error.path}: {error.message}")

    raise typer.Exit(0 if result.success else 1)


# =============================================================================
# render command
# =============================================================================


@app.command()
def render(
    file: Annotated[
        Path,
        typer.Argument(help="Source file to render", exists=True, dir_okay=False),
    ],
) -> None:
    """Render a single file to stdout using the site's layouts."""
    site = Site(_get_config())

    try:
        content = site.render_file(file.resolve())
    except (TemplateError, ValueError) as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    # Raw bytes: static files may not be text
    sys.stdout.flush()
    sys.stdout.buffer.write(content)
    sys.stdout.buffer.flush()


# =============================================================================
# validate command
# =============================================================================


@app.command()
def validate(
    file: Annotated[
        Path,
        typer.Argument(help="Source file to validate", exists=True, dir_okay=False),
    ],
) -> None:
    """Validate a source file.

    Checks the front matter and, for files with a registered engine, the
    body's template syntax.
    """
    site = Site(_get_config())
    _logger.info(f"Validating: {file}")

    try:
        template = site.parse(file.resolve())
        if template.type is not TemplateType.STATIC:
            engine = site.registry.resolve(file.suffix)
            engine.check(template.body.decode("utf-8"))
    except TemplateError as e:
        typer.echo(f"❌ {file}: {e}")
        raise typer.Exit(1)
    except UnicodeDecodeError as e:
        typer.echo(f"❌ {file}: body is not valid UTF-8: {e}")
        raise typer.Exit(1)

    typer.echo(f"✅ {file} is valid ({template.type.value})")
    raise typer.Exit(0)


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    name: Annotated[
        str,
        typer.Option("--name", "-n", help="Site name written to the config"),
    ] = "my site",
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite existing config"),
    ] = False,
) -> None:
    """Create a site skeleton.

    Writes config.yml plus src/, layouts/ and includes/ with a starter
    layout and index page.
    """
    root = (_root or Path.cwd()).resolve()
    root.mkdir(parents=True, exist_ok=True)

    config_file = root / "config.yml"
    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_file.write_text(create_default_config(name), encoding="utf-8")
    _logger.info(f"Created config: {config_file}")

    for directory in ("src", "layouts", "includes"):
        (root / directory).mkdir(exist_ok=True)

    starter_files = {
        root / "layouts" / "base.html": (
            "---\ntitle: base\n---\n"
            "<!DOCTYPE html>\n<html>\n<head><title>{{ page.title }} | {{ site.name }}</title></head>\n"
            "<body>\n{{ content }}\n</body>\n</html>\n"
        ),
        root / "src" / "index.html": (
            "---\ntitle: home\nlayout: base\n---\n<h1>{{ page.title }}</h1>\n"
        ),
    }
    for path, content in starter_files.items():
        if not path.exists():
            path.write_text(content, encoding="utf-8")
            _logger.info(f"Created {path.relative_to(root)}")

    typer.echo("\n✅ Site initialized")
    typer.echo(f"   Config: {config_file}")
    raise typer.Exit(0)


if __name__ == "__main__":
    app()
