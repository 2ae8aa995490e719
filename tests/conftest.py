"""Shared pytest fixtures for quire tests.

Fixtures are organized by category:
- Path fixtures: Locations of bundled sample sites
- File fixtures: Helpers that write source files under tmp_path
- Source fixtures: Front matter documents used across test modules
"""

import logging
import shutil
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from tests.fixtures import BLOG_SITE_PATH

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def blog_site(tmp_path: Path) -> Path:
    """Copy the sample blog site into tmp_path so builds never touch fixtures."""
    site_root = tmp_path / "blog"
    shutil.copytree(BLOG_SITE_PATH, site_root)
    return site_root


# =============================================================================
# File Fixtures
# =============================================================================


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str | bytes], Path]:
    """Return a helper that writes a file relative to tmp_path.

    Parent directories are created, so ``write_file("layouts/base.html", ...)``
    produces a file the classifier sees under ``layouts``.
    """

    def _write(relative: str, contents: str | bytes) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(contents, bytes):
            path.write_bytes(contents)
        else:
            path.write_bytes(contents.encode("utf-8"))
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_quire_logging() -> Iterator[None]:
    """Detach handlers the CLI attaches to the quire logger."""
    yield
    logger = logging.getLogger("quire")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


# =============================================================================
# Source Fixtures
# =============================================================================


@pytest.fixture
def post_source() -> str:
    """Front matter with string and list values followed by a plain body."""
    return """---
title: my new post
subtitle: a blog post
tags: ["software", "web"]
---
<p>Hello World!</p>
"""


@pytest.fixture
def liquid_source() -> str:
    """Templating body interpolating metadata and looping over tags."""
    return """---
title: my new post
subtitle: a blog post
tags: ["software", "web"]
---
<h1>{{ page.title }}</h1>
<h2>{{ page.subtitle }}</h2>
<ul>{% for tag in page.tags %}
<li>{{tag}}</li>{% endfor %}
</ul>
"""


@pytest.fixture
def org_source() -> str:
    """Org body with a headline, a sub-headline and a two item list."""
    return """---
title: my new post
subtitle: a blog post
tags: ["software", "web"]
---
#+OPTIONS: toc:nil num:nil
* My title
** my Subtitle
- list 1
- list 2
"""


@pytest.fixture
def org_expected() -> str:
    return """<div id="outline-container-headline-1" class="outline-2">
<h2 id="headline-1">
My title
</h2>
<div id="outline-text-headline-1" class="outline-text-2">
<div id="outline-container-headline-2" class="outline-3">
<h3 id="headline-2">
my Subtitle
</h3>
<div id="outline-text-headline-2" class="outline-text-3">
<ul>
<li>list 1</li>
<li>list 2</li>
</ul>
</div>
</div>
</div>
</div>
"""
