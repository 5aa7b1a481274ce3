"""
markdown-it plugins

anchors_plugin gives every heading a deterministic id derived from its
text, so styleguide pages can link to sections:

    ## Getting Started!   ->   <h2 id="getting-started">Getting Started!</h2>
"""

from typing import Any, Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token
from slugify import slugify


def slug_make(text: str) -> str:
    """Deterministic URL slug for heading text"""
    return slugify(text)


def anchors_plugin(md: MarkdownIt) -> None:
    """
    Replace heading open/close rules to emit slug ids

    Args:
        md: MarkdownIt instance to modify (only this instance is affected)
    """

    def heading_open(tokens: Sequence[Token], idx: int, options: Any, env: Any) -> str:
        text = ''
        if idx + 1 < len(tokens) and tokens[idx + 1].type == 'inline':
            text = tokens[idx + 1].content
        return f'<{tokens[idx].tag} id="{slug_make(text)}">'

    def heading_close(tokens: Sequence[Token], idx: int, options: Any, env: Any) -> str:
        return f'</{tokens[idx].tag}>\n'

    md.renderer.rules['heading_open'] = heading_open
    md.renderer.rules['heading_close'] = heading_close
