"""Template parsing and rendering.

Parsing splits a file's YAML front matter from its body and classifies the
file; rendering dispatches the body to a render engine and composes the
result into layouts.
"""

from quire.templates.classifier import TemplateType, classify
from quire.templates.frontmatter import split_front_matter
from quire.templates.template import Template, parse

__all__ = ["Template", "TemplateType", "classify", "parse", "split_front_matter"]
