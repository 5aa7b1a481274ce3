"""
Front matter extraction

Splits a YAML metadata block off the top of a document:

    ---
    title: Button
    tags: [forms]
    ---
    # Button

The block opens with "---" or "= yaml =" on the first line and closes
with the same marker (or "...") on a line of its own. Input without such
a block is returned whole as the body with empty attributes.
"""

import re

import yaml

from ..models.document import ParsedDocument


class FrontMatterParseError(ValueError):
    """Raised when the front-matter block is not valid YAML or not a mapping"""
    pass


_FRONT_MATTER = re.compile(
    r'\ufeff?(= yaml =|---)\r?$(?P<yaml>[\s\S]*?)^(?:\1|\.\.\.)[ \t]*\r?$\n?',
    re.MULTILINE,
)


def frontMatter_parse(source: str) -> ParsedDocument:
    """
    Split front matter from the Markdown body

    Args:
        source: Raw document text

    Returns:
        ParsedDocument with parsed attributes, remaining body and the raw
        metadata text

    Raises:
        FrontMatterParseError: If the metadata block is malformed YAML or
                               does not hold a mapping

    Example:
        >>> doc = frontMatter_parse("---\\ntitle: Hi\\n---\\nBody")
        >>> doc.attributes, doc.body
        ({'title': 'Hi'}, 'Body')
    """
    match = _FRONT_MATTER.match(source)
    if not match:
        return ParsedDocument(attributes={}, body=source)

    raw_yaml = match.group('yaml').strip()

    try:
        attributes = yaml.safe_load(raw_yaml)
    except yaml.YAMLError as e:
        raise FrontMatterParseError(f"Failed to parse front matter: {e}") from e

    if attributes is None:
        attributes = {}
    if not isinstance(attributes, dict):
        raise FrontMatterParseError(
            f"Front matter must be a mapping, got {type(attributes).__name__}"
        )

    return ParsedDocument(
        attributes=attributes,
        body=source[match.end():],
        frontmatter=raw_yaml,
    )
