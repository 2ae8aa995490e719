"""Test fixtures for quire.

Sample Sites:
- sample_sites/blog: Layout chain (post -> base), an include, an Org post,
  a Jinja page, an extra ``.xml`` extension and a static asset
"""

from pathlib import Path

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent

# Path to sample sites
SAMPLE_SITES_DIR = FIXTURES_DIR / "sample_sites"

BLOG_SITE_PATH = SAMPLE_SITES_DIR / "blog"
