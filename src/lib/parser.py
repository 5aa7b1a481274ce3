"""
Markdown document parser

Converts a Markdown document with front matter into HTML in which every
fenced code block shows both a live run view and a highlighted source view.

The parse is a functional pipeline over a per-call RenderState:
1. document_split: separate front matter from the body
2. renderer_configure: bind highlighter and fence handler to this call
3. body_render: render the body on a fresh markdown-it instance
4. result_resolve: wrap html and attributes in a RenderResult

Example:
    >>> result = asyncio.run(parse("---\\ntitle: Button\\n---\\n```html\\n<button/>\\n```\\n"))
    >>> result.attributes
    {'title': 'Button'}
    >>> '<div class="run"><button/>' in result.html
    True
"""

from functools import partial
from typing import Any, Callable, Mapping, Optional

from ..config import AppSettings, appsettings
from ..models.document import FenceBlock, ParsedDocument, RenderResult
from ..models.state import RenderState, pipeline
from .assembler import codeBlock_assemble
from .escaper import Highlighter, code_highlight, pygments_highlight, source_encode
from .fence import fenceParams_parse, langClass_make, renderOptions_parse
from .frontmatter import frontMatter_parse
from .log import LOG, state_connectToLogger, state_disconnectFromLogger
from .renderer import BlockHandler, markdown_renderWithBlockHandler


def codeBlock_template(
    run_markup: str,
    source_markup: str,
    lang_class: str,
    options: Optional[Mapping[str, Any]],
    settings: Optional[AppSettings] = None,
) -> str:
    """
    Wrap run code and encoded source in the example fragment

    Args:
        run_markup: Code to be run in the styleguide
        source_markup: Encoded source shown as the example listing
        lang_class: CSS class for the code block ("" for none)
        options: Parsed render options

    Returns:
        Code block fragment with run and (unless compiled) source views
    """
    return codeBlock_assemble(run_markup, source_markup, lang_class, options, settings)


def codeBlock_parse(
    code: str,
    lang: str,
    lang_prefix: str,
    highlighter: Optional[Highlighter],
    options_blob: Optional[str],
    settings: Optional[AppSettings] = None,
) -> str:
    """
    Turn one fenced block into its run/source fragment

    Args:
        code: Raw code from the fence
        lang: Language tag ("" for none)
        lang_prefix: CSS class prefix for the language
        highlighter: Optional (code, language) -> HTML; None escapes instead
        options_blob: Raw render-options token, or None
        settings: Settings for option parsing and wrapper classes

    Returns:
        HTML fragment
    """
    settings = settings or appsettings

    highlighted = code_highlight(code, lang, highlighter)
    encoded = source_encode(highlighted)
    lang_class = langClass_make(lang, lang_prefix)
    options = renderOptions_parse(options_blob, settings.options_delimiter)

    LOG(f"Code block lang='{lang}' options={options}", level=3)
    return codeBlock_template(code, encoded, lang_class, options, settings)


def fenceHandler_make(
    highlighter: Optional[Highlighter],
    lang_prefix: str,
    settings: Optional[AppSettings] = None,
) -> BlockHandler:
    """
    Build the per-call fence handler

    Args:
        highlighter: Highlighter bound to this call
        lang_prefix: CSS class prefix for the language
        settings: Settings bound to this call

    Returns:
        FenceBlock -> HTML fragment
    """
    settings = settings or appsettings

    def handler(block: FenceBlock) -> str:
        fence_options = fenceParams_parse(block.param_string, settings)
        return codeBlock_parse(
            block.raw_content,
            fence_options.language_tag,
            lang_prefix,
            highlighter,
            fence_options.render_mode_flag,
            settings,
        )

    return handler


def document_split(inputstate: RenderState) -> RenderState:
    """
    Split front matter from the Markdown body.

    Returns:
        RenderState with document populated

    Raises:
        FrontMatterParseError: Malformed metadata block (not caught here)
    """
    state = inputstate.copy()

    LOG("Extracting front matter...", level=1)
    state.document = frontMatter_parse(state.source)
    LOG(f"Front matter keys: {sorted(state.document.attributes)}", level=2)
    return state


def renderer_configure(inputstate: RenderState) -> RenderState:
    """
    Bind the highlighter and fence handler to this call.

    Returns:
        RenderState with highlighter and blockHandler populated
    """
    state = inputstate.copy()

    state.highlighter = partial(pygments_highlight, settings=state.settings)
    state.blockHandler = fenceHandler_make(
        state.highlighter, state.settings.lang_prefix, state.settings
    )
    return state


def body_render(inputstate: RenderState) -> RenderState:
    """
    Render the Markdown body with fence interception.

    Returns:
        RenderState with html populated
    """
    state = inputstate.copy()

    if state.document is None or state.blockHandler is None:
        raise RuntimeError("body_render requires document_split and renderer_configure")

    LOG("Rendering Markdown body...", level=1)
    state.html = markdown_renderWithBlockHandler(
        state.document.body,
        state.blockHandler,
        settings=state.settings,
        highlighter=state.highlighter,
    )
    LOG(f"Rendered {len(state.html)} characters of HTML", level=2)
    return state


def result_resolve(inputstate: RenderState) -> RenderState:
    """
    Wrap the rendered HTML and attributes into a RenderResult.

    Returns:
        RenderState with result populated
    """
    state = inputstate.copy()

    attributes = dict(state.document.attributes) if state.document else {}
    state.result = RenderResult(html=state.html, attributes=attributes, imports={})
    LOG(f"Parse complete: {state.summary()}", level=3)
    return state


def state_run(state: RenderState, *stages: Callable[[RenderState], RenderState]) -> RenderResult:
    """Connect state to the logger, run the stages and return the result"""
    token = state_connectToLogger(state)
    try:
        final = pipeline(state, *stages)
    finally:
        state_disconnectFromLogger(token)
    return final.result  # type: ignore  # set by result_resolve


def parse_sync(markdown: str, settings: Optional[AppSettings] = None) -> RenderResult:
    """
    Parse a Markdown document synchronously

    Args:
        markdown: Document text, optionally starting with front matter
        settings: Optional settings override

    Returns:
        RenderResult with html, attributes and (empty) imports

    Raises:
        FrontMatterParseError: Malformed front matter
        Exception: Any rendering or highlighting error, unchanged
    """
    state = RenderState.state_createFromSource(markdown, settings)
    return state_run(state, document_split, renderer_configure, body_render, result_resolve)


async def parse(markdown: str, settings: Optional[AppSettings] = None) -> RenderResult:
    """
    Parse a Markdown document

    Awaitable form of parse_sync() for composing with other async work.
    All steps run synchronously; errors surface when the call is awaited.
    """
    return parse_sync(markdown, settings)


async def markdown_parse(document: ParsedDocument, settings: Optional[AppSettings] = None) -> RenderResult:
    """
    Render an already split document

    Args:
        document: Front matter attributes and Markdown body
        settings: Optional settings override

    Returns:
        RenderResult with html and the document's attributes
    """
    state = RenderState.state_createFromSource(document.body, settings)
    state.document = document
    return state_run(state, renderer_configure, body_render, result_resolve)
