"""
Highlighting and literal-safe encoding of fenced code

Two derived strings are produced from a block's raw code:

1. Highlighted form: Pygments token spans (or plain HTML escaping when no
   highlighter is supplied), safe inside a <code> element.
2. Encoded form: the highlighted form made safe for a JSX-style template,
   where braces and newlines are significant. Every brace and newline is
   wrapped as a string-literal expression and class= becomes className=:

       {    ->  {"{"}
       }    ->  {"}"}
       \\n   ->  {"\\n"}

The encoding is a single tokenizing pass: the text is split into brace-open,
brace-close, newline and literal runs, and each run is emitted directly.
Encoding is not idempotent; encoding already-encoded text wraps it again.

Example:
    >>> source_encode('<span class="p">{a}</span>')
    '<span className="p">{"{"}a{"}"}</span>'
"""

import re
from typing import Callable, Optional

from markdown_it.common.utils import escapeHtml
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, TextLexer
from pygments.util import ClassNotFound

from ..config import AppSettings, appsettings
from .log import LOG


Highlighter = Callable[[str, str], str]

# Wrapped literal tokens, keyed by the character they stand for
BRACE_OPEN_TOKEN = '{"{"}'
BRACE_CLOSE_TOKEN = '{"}"}'
NEWLINE_TOKEN = '{"\\n"}'

_TOKENS = {
    '{': BRACE_OPEN_TOKEN,
    '}': BRACE_CLOSE_TOKEN,
    '\n': NEWLINE_TOKEN,
}

_SPECIAL_SPLIT = re.compile(r'([{}\n])')
_TOKEN_FIND = re.compile(r'\{"(\{|\}|\\n)"\}')


def lexer_get(language: str, settings: Optional[AppSettings] = None) -> Lexer:
    """
    Look up a Pygments lexer, falling back to a generic grammar

    Unrecognized (or empty) language names never raise; they resolve to
    the configured fallback lexer, and to TextLexer if that is unknown too.
    Lexers keep leading and trailing newlines so the encoded listing
    mirrors the fence content exactly.

    Args:
        language: Fence language tag (e.g., "jsx", "html")
        settings: Settings providing fallback_lexer

    Returns:
        Lexer instance
    """
    settings = settings or appsettings
    options = {'stripnl': False, 'ensurenl': False}

    try:
        return get_lexer_by_name(language, **options)
    except ClassNotFound:
        LOG(f"No lexer for '{language}', using '{settings.fallback_lexer}'", level=2)

    try:
        return get_lexer_by_name(settings.fallback_lexer, **options)
    except ClassNotFound:
        return TextLexer(**options)


def pygments_highlight(code: str, language: str, settings: Optional[AppSettings] = None) -> str:
    """
    Highlight code with Pygments, emitting token spans only

    Args:
        code: Raw code from the fence
        language: Language tag used to select the lexer
        settings: Settings controlling style and class/inline output

    Returns:
        HTML token spans (no <pre>/<div> wrapper)
    """
    settings = settings or appsettings
    lexer = lexer_get(language, settings)
    formatter = HtmlFormatter(
        nowrap=True,
        noclasses=settings.pygments_noclasses,
        style=settings.pygments_style,
    )
    return highlight(code, lexer, formatter)


def code_highlight(code: str, language: str, highlighter: Optional[Highlighter] = None) -> str:
    """
    Produce the highlighted form of a block

    Args:
        code: Raw code from the fence
        language: Language tag passed through to the highlighter
        highlighter: Optional (code, language) -> HTML callable

    Returns:
        Highlighter output, or the HTML-escaped code when none is supplied
    """
    if highlighter:
        return highlighter(code, language)
    return escapeHtml(code)


def source_encode(highlighted: str) -> str:
    """
    Encode highlighted HTML for embedding in a JSX-style template

    Args:
        highlighted: Output of code_highlight()

    Returns:
        Encoded string with braces and newlines wrapped as literal tokens
        and class= rewritten to className=
    """
    parts = []
    for run in _SPECIAL_SPLIT.split(highlighted):
        if not run:
            continue
        token = _TOKENS.get(run)
        if token is not None:
            parts.append(token)
        else:
            parts.append(run.replace('class=', 'className='))
    return ''.join(parts)


def source_decode(encoded: str) -> str:
    """
    Reverse the brace and newline token substitution of source_encode()

    className= is left as is; only the wrapped literal tokens are unwrapped.

    Args:
        encoded: Output of source_encode()

    Returns:
        Text with {"{"}, {"}"} and {"\\n"} restored to their characters
    """
    def token_unwrap(match: re.Match[str]) -> str:
        inner = match.group(1)
        return '\n' if inner == '\\n' else inner

    return _TOKEN_FIND.sub(token_unwrap, encoded)
