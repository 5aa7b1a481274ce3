"""
Fence parameter parsing

Turns the text after an opening fence marker into FenceOptions.

Grammar (whitespace separated, language last):

    [options...] [renderOptions] language

Token roles depend only on the token count:

    0 tokens   no language, no render options
    1 token    language
    2 tokens   language (last); the first token is ignored
    3+ tokens  language (last), render options (second-to-last)

A two-token fence never carries render options, so "compiled jsx" is an
ordinary jsx block.

Example:
    >>> fenceParams_parse("render compiled;x=1 jsx")
    FenceOptions(language_tag='jsx', render_mode_flag='compiled;x=1',
                 render_options={'compiled': True, 'x': '1'})
"""

from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import unquote_plus

from markdown_it.common.utils import escapeHtml

from ..config import AppSettings, appsettings
from ..models.document import FenceOptions


def paramTokens_split(param_string: Optional[str]) -> List[str]:
    """Split a fence parameter string on runs of whitespace"""
    if not param_string:
        return []
    return param_string.split()


def tokenRoles_assign(tokens: List[str]) -> Tuple[str, Optional[str]]:
    """
    Map fence tokens to (language_tag, render_mode_flag)

    Args:
        tokens: Whitespace-split fence parameters

    Returns:
        Tuple of language tag ("" when there are no tokens) and the raw
        render-options blob (None unless there are more than two tokens)

    Example:
        >>> tokenRoles_assign(["jsx"])
        ('jsx', None)
        >>> tokenRoles_assign(["live", "jsx"])
        ('jsx', None)
        >>> tokenRoles_assign(["x", "compiled", "jsx"])
        ('jsx', 'compiled')
    """
    if not tokens:
        return "", None
    language = tokens[-1]
    flag = tokens[-2] if len(tokens) > 2 else None
    return language, flag


def renderOptions_parse(blob: Optional[str], delimiter: str = ";") -> Dict[str, Any]:
    """
    Parse a render-options blob as a delimited query string

    A bare key maps to True, key=value maps to the (decoded) string value.
    Empty segments are skipped and the last occurrence of a key wins.

    Args:
        blob: Raw render-options token (e.g., "compiled;theme=dark")
        delimiter: Separator between pairs

    Returns:
        Mapping of option name to value (empty for None/empty blob)

    Example:
        >>> renderOptions_parse("compiled;x=1")
        {'compiled': True, 'x': '1'}
    """
    options: Dict[str, Any] = {}
    if not blob:
        return options

    for segment in blob.split(delimiter):
        if not segment:
            continue
        key, sep, value = segment.partition("=")
        key = unquote_plus(key)
        if not key:
            continue
        options[key] = unquote_plus(value) if sep else True

    return options


def fenceParams_parse(param_string: Optional[str], settings: Optional[AppSettings] = None) -> FenceOptions:
    """
    Parse a fence parameter string into FenceOptions

    Args:
        param_string: Text after the opening fence marker
        settings: Settings providing the options delimiter

    Returns:
        FenceOptions with language tag, raw flag and parsed render options
    """
    settings = settings or appsettings
    language, flag = tokenRoles_assign(paramTokens_split(param_string))
    return FenceOptions(
        language_tag=language,
        render_mode_flag=flag,
        render_options=renderOptions_parse(flag, settings.options_delimiter),
    )


def langClass_make(language_tag: str, lang_prefix: str) -> str:
    """CSS class for a language ("" when there is no language tag)"""
    if not language_tag:
        return ""
    return f"{lang_prefix}{escapeHtml(language_tag)}"
