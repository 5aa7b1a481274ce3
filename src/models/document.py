"""
Document and code block data models

Type-safe structures passed between the front-matter split, the fence
options parser, the code block assembler and the document pipeline.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ParsedDocument:
    """
    Result of splitting raw input on its front-matter delimiters

    Attributes:
        attributes: Metadata mapping parsed from the front-matter block
                    (empty when the input has no front matter)
        body: Markdown body following the front-matter block
        frontmatter: Raw text of the metadata block ("" when absent)

    Example:
        For input "---\\ntitle: Button\\n---\\n# Button":
        ParsedDocument(
            attributes={"title": "Button"},
            body="# Button",
            frontmatter="title: Button"
        )
    """
    attributes: Dict[str, Any]
    body: str
    frontmatter: str = ""


@dataclass(frozen=True)
class FenceBlock:
    """
    Content and metadata line of one fenced code region

    Attributes:
        raw_content: Code between the fence markers (verbatim)
        param_string: Text following the opening fence marker
                      (e.g., "compiled live jsx")
    """
    raw_content: str
    param_string: str


@dataclass(frozen=True)
class FenceOptions:
    """
    Structured form of a fence parameter string

    Attributes:
        language_tag: Language used for highlighting and the CSS class ("" if none)
        render_mode_flag: Raw render-options blob (second-to-last token when
                          the fence has more than two tokens), else None
        render_options: Parsed render_mode_flag (e.g., {"compiled": True})

    Example:
        For param string "render compiled;x=1 jsx":
        FenceOptions(
            language_tag="jsx",
            render_mode_flag="compiled;x=1",
            render_options={"compiled": True, "x": "1"}
        )
    """
    language_tag: str = ""
    render_mode_flag: Optional[str] = None
    render_options: Dict[str, Any] = field(default_factory=dict)

    @property
    def compiled(self) -> bool:
        """True when the source view must be suppressed"""
        return bool(self.render_options.get("compiled"))


@dataclass(frozen=True)
class CodeBlockHTML:
    """
    The two alternate views of one fenced block, ready for assembly

    Attributes:
        run_markup: Verbatim code, interpreted as live markup downstream
        source_markup: Encoded highlighted listing, or None when the block
                       is compiled (run-only)
        css_class: Language class for the <pre>/<code> elements ("" for none)
        compiled: Whether the wrapper carries the compiled marker class
    """
    run_markup: str
    source_markup: Optional[str]
    css_class: str = ""
    compiled: bool = False


@dataclass(frozen=True)
class RenderResult:
    """
    Final output of a document parse

    Attributes:
        html: Rendered document HTML
        attributes: Front-matter attributes passed through unchanged
        imports: Reserved dependency map, always empty
    """
    html: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    imports: Dict[str, Any] = field(default_factory=dict)
