"""
stylemark - Markdown to HTML for component styleguides

Fenced code blocks render as a live run view plus a highlighted source view.
"""

__version__ = "1.0.0"

from .parser import (
    parse,
    parse_sync,
    markdown_parse,
    codeBlock_parse,
    codeBlock_template,
    fenceHandler_make,
)
from .frontmatter import frontMatter_parse, FrontMatterParseError
from .log import LOG, state_connectToLogger, state_disconnectFromLogger

__all__ = [
    "parse",
    "parse_sync",
    "markdown_parse",
    "codeBlock_parse",
    "codeBlock_template",
    "fenceHandler_make",
    "frontMatter_parse",
    "FrontMatterParseError",
    "LOG",
    "state_connectToLogger",
    "state_disconnectFromLogger",
    "__version__",
]
