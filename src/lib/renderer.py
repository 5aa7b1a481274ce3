"""
Markdown rendering with an explicit fenced-block handler

A new MarkdownIt instance is built for every render call, so rule tables
and highlight options are never shared between documents. Fenced code is
routed to a caller-supplied handler:

    handler(FenceBlock) -> html fragment

The handler's fragment is spliced into the document HTML in place of the
fence.
"""

from typing import Any, Callable, Optional, Sequence

from markdown_it import MarkdownIt
from markdown_it.common.utils import unescapeAll
from markdown_it.token import Token

from ..config import AppSettings, appsettings
from ..models.document import FenceBlock
from .log import LOG
from .plugins import anchors_plugin


BlockHandler = Callable[[FenceBlock], str]


def markdownIt_create(
    settings: Optional[AppSettings] = None,
    highlighter: Optional[Callable[[str, str], str]] = None,
) -> MarkdownIt:
    """
    Build a configured MarkdownIt instance

    Args:
        settings: Renderer settings (xhtml, raw html, lang prefix, anchors)
        highlighter: Optional (code, language) -> HTML for ordinary fences

    Returns:
        MarkdownIt instance owned by the caller
    """
    settings = settings or appsettings

    highlight = None
    if highlighter is not None:
        # markdown-it also passes the fence attrs string
        def highlight(code: str, lang: str, attrs: str) -> str:
            return highlighter(code, lang)

    md = MarkdownIt(
        "commonmark",
        {
            "html": settings.html_enabled,
            "xhtmlOut": settings.xhtml_out,
            "langPrefix": settings.lang_prefix,
            "highlight": highlight,
        },
    ).enable(["table", "strikethrough"])

    if settings.heading_anchors:
        md.use(anchors_plugin)

    return md


def fenceRule_make(
    handler: BlockHandler,
    default_rule: Optional[Callable[..., str]] = None,
    fence_name: Optional[str] = None,
) -> Callable[..., str]:
    """
    Adapt a block handler to a markdown-it fence rule

    Args:
        handler: FenceBlock -> HTML fragment
        default_rule: Rule used for fences the handler does not claim
        fence_name: When set, only fences whose first parameter equals it
                    go to the handler; all others use default_rule

    Returns:
        Rule callable with markdown-it's (tokens, idx, options, env) signature
    """

    def fence(tokens: Sequence[Token], idx: int, options: Any, env: Any) -> str:
        token = tokens[idx]
        params = unescapeAll(token.info) if token.info else ''

        if fence_name and default_rule is not None:
            words = params.split()
            if not words or words[0] != fence_name:
                return default_rule(tokens, idx, options, env)

        LOG(f"Fence at line {token.map[0] + 1 if token.map else '?'}: '{params}'", level=2)
        return handler(FenceBlock(raw_content=token.content, param_string=params))

    return fence


def markdown_renderWithBlockHandler(
    body: str,
    handler: BlockHandler,
    settings: Optional[AppSettings] = None,
    highlighter: Optional[Callable[[str, str], str]] = None,
) -> str:
    """
    Render Markdown, routing fenced code blocks through handler

    Args:
        body: Markdown text (front matter already removed)
        handler: FenceBlock -> HTML fragment
        settings: Renderer settings
        highlighter: Highlighter for fences not claimed by handler

    Returns:
        Rendered HTML

    Raises:
        Any exception raised by markdown-it, the handler or the highlighter,
        unchanged
    """
    settings = settings or appsettings
    md = markdownIt_create(settings, highlighter)
    md.renderer.rules["fence"] = fenceRule_make(
        handler,
        default_rule=md.renderer.rules.get("fence"),
        fence_name=settings.fence_name,
    )
    return md.render(body)
