"""
Code block assembly

Wraps the run view and source view of one fenced block in a single
fragment for styling later:

    <div class="example">
      <div class="run">RUN</div><div class="source">
        <pre class="language-jsx"><code class="language-jsx">
          SOURCE
        </code></pre>
      </div>
    </div>

Compiled blocks drop the source view and add the compiled marker class to
the wrapper. Class attributes are only written when they have a value.
"""

from typing import Any, Mapping, Optional

from ..config import AppSettings, appsettings
from ..models.document import CodeBlockHTML


def classAttr_make(css_class: str) -> str:
    """' class="..."' for a non-empty class, else ''"""
    return f' class="{css_class}"' if css_class else ''


def codeBlock_build(
    run_markup: str,
    source_markup: str,
    css_class: str,
    options: Optional[Mapping[str, Any]],
) -> CodeBlockHTML:
    """
    Combine both views and the render options into a CodeBlockHTML

    Args:
        run_markup: Verbatim code for the run view (not escaped)
        source_markup: Encoded highlighted listing
        css_class: Language class for <pre>/<code> ("" for none)
        options: Parsed render options (None treated as empty)

    Returns:
        CodeBlockHTML; source_markup is None when options["compiled"] is truthy
    """
    compiled = bool((options or {}).get('compiled'))
    return CodeBlockHTML(
        run_markup=run_markup,
        source_markup=None if compiled else source_markup,
        css_class=css_class,
        compiled=compiled,
    )


def codeBlock_render(block: CodeBlockHTML, settings: Optional[AppSettings] = None) -> str:
    """
    Render a CodeBlockHTML to its wrapper fragment

    Args:
        block: Assembled views
        settings: Settings providing the wrapper class names

    Returns:
        HTML fragment
    """
    settings = settings or appsettings

    view_source = ''
    if block.source_markup is not None:
        lang_attr = classAttr_make(block.css_class)
        view_source = f"""<div{classAttr_make(settings.source_class)}>
    <pre{lang_attr}><code{lang_attr}>
      {block.source_markup}
    </code></pre>
  </div>"""

    return f"""
<div{classAttr_make(settings.wrapperClass_make(block.compiled))}>
  <div{classAttr_make(settings.run_class)}>{block.run_markup}</div>{view_source}
</div>"""


def codeBlock_assemble(
    run_markup: str,
    source_markup: str,
    css_class: str,
    options: Optional[Mapping[str, Any]],
    settings: Optional[AppSettings] = None,
) -> str:
    """Build and render a code block fragment in one step"""
    return codeBlock_render(
        codeBlock_build(run_markup, source_markup, css_class, options),
        settings,
    )
