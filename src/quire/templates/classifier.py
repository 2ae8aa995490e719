"""Template role classification.

The role of a file is structural: it depends on where the file lives and on
whether it carries front matter, never on what the front matter says.
"""

from enum import Enum
from pathlib import PurePath

DEFAULT_LAYOUTS_DIR = "layouts"
DEFAULT_POSTS_DIR = "src"


class TemplateType(Enum):
    """Role of a parsed source file."""

    STATIC = "static"
    PAGE = "page"
    POST = "post"
    LAYOUT = "layout"


def classify(
    path: str | PurePath,
    has_metadata: bool,
    *,
    layouts_dir: str = DEFAULT_LAYOUTS_DIR,
    posts_dir: str = DEFAULT_POSTS_DIR,
) -> TemplateType:
    """Assign a role to a file.

    Files without front matter are always STATIC. Otherwise a path segment
    named ``layouts_dir`` makes the file a LAYOUT; failing that, a segment
    named ``posts_dir`` makes it a POST; everything else is a PAGE.
    Segment comparison is exact and case-sensitive.

    Args:
        path: File path, absolute or relative
        has_metadata: Whether the file carried a front matter block
        layouts_dir: Reserved directory name for layouts
        posts_dir: Reserved directory name for the posts source tree

    Returns:
        The file's TemplateType
    """
    if not has_metadata:
        return TemplateType.STATIC

    # The file name itself is not a directory segment
    segments = PurePath(path).parts[:-1]

    if layouts_dir in segments:
        return TemplateType.LAYOUT
    if posts_dir in segments:
        return TemplateType.POST
    return TemplateType.PAGE
