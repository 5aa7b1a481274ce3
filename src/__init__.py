"""
stylemark - Markdown to HTML for component styleguides

Renders Markdown with front matter to HTML. Every fenced code block becomes
a live run view plus a syntax-highlighted source view.
"""

__version__ = "1.0.0"

from .lib import (
    parse,
    parse_sync,
    markdown_parse,
    codeBlock_parse,
    codeBlock_template,
    frontMatter_parse,
    FrontMatterParseError,
    LOG,
    state_connectToLogger,
    state_disconnectFromLogger,
)
from .models import ParsedDocument, FenceBlock, FenceOptions, RenderResult

__all__ = [
    "parse",
    "parse_sync",
    "markdown_parse",
    "codeBlock_parse",
    "codeBlock_template",
    "frontMatter_parse",
    "FrontMatterParseError",
    "LOG",
    "state_connectToLogger",
    "state_disconnectFromLogger",
    "ParsedDocument",
    "FenceBlock",
    "FenceOptions",
    "RenderResult",
    "__version__",
]
