"""
End-to-end parse tests

Tests the full pipeline: raw document → front matter split → markdown-it render
with fence interception → RenderResult

Validates that complete styleguide documents produce the expected dual-view
code blocks and that parse calls stay isolated from one another.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest
from loguru import logger

import stylemark.lib.parser as parser_module
from stylemark import RenderResult
from stylemark.config import AppSettings
from stylemark.lib.escaper import source_decode
from stylemark.lib.frontmatter import FrontMatterParseError
from stylemark.lib.parser import codeBlock_parse, markdown_parse, parse, parse_sync
from stylemark.models import ParsedDocument


BUTTON_DOC = """---
title: Button
category: forms
---
# Button

Buttons trigger actions.

```html
<button class="btn">Go</button>
```
"""


class TestDocumentParse:
    """Test complete document parsing"""

    def test_front_matter_and_code_block(self):
        """Attributes are returned and the fence renders both views"""
        result = asyncio.run(parse(BUTTON_DOC))

        assert isinstance(result, RenderResult)
        assert result.attributes == {"title": "Button", "category": "forms"}
        assert result.imports == {}

        html = result.html
        assert '<h1 id="button">Button</h1>' in html
        assert "<p>Buttons trigger actions.</p>" in html
        assert '<div class="example">' in html
        assert '<div class="run"><button class="btn">Go</button>\n</div>' in html
        assert '<div class="source">' in html
        assert '<pre class="language-html"><code class="language-html">' in html
        assert 'className="' in html
        assert '{"\\n"}' in html

    def test_no_front_matter(self):
        """Plain documents have empty attributes"""
        result = parse_sync("Just text.\n")
        assert result.attributes == {}
        assert result.html == "<p>Just text.</p>\n"

    def test_crlf_document(self):
        """Front matter with Windows line endings is not rendered as body"""
        result = parse_sync("---\r\ntitle: Button\r\n---\r\n# Button\r\n")
        assert result.attributes == {"title": "Button"}
        assert result.html == '<h1 id="button">Button</h1>\n'

    def test_compiled_block(self):
        """compiled option renders run view only"""
        result = parse_sync("```render compiled jsx\n<Button primary/>\n```\n")

        assert '<div class="example exampleViewCode">' in result.html
        assert '<div class="run"><Button primary/>\n</div>' in result.html
        assert 'class="source"' not in result.html

    def test_two_token_fence_not_compiled(self):
        """A two-token fence keeps the source view"""
        result = parse_sync("```compiled jsx\n<Button/>\n```\n")

        assert "exampleViewCode" not in result.html
        assert '<div class="source">' in result.html
        assert '<pre class="language-jsx"><code class="language-jsx">' in result.html

    def test_fence_without_language(self):
        """No language: no class attributes, braces encoded"""
        result = parse_sync("```\nplain {x}\n```\n")

        assert "<pre><code>" in result.html
        assert 'class=""' not in result.html
        assert 'plain {"{"}x{"}"}{"\\n"}' in result.html

    def test_unknown_language(self):
        """Unrecognized languages still render, as plain text"""
        result = parse_sync("```not-a-language\n<b>{x}</b>\n```\n")

        assert '<div class="run"><b>{x}</b>\n</div>' in result.html
        assert '&lt;b&gt;{"{"}x{"}"}&lt;/b&gt;' in result.html
        assert '<pre class="language-not-a-language">' in result.html

    def test_multiple_blocks(self):
        """Each fence gets its own wrapper"""
        result = parse_sync("```html\n<a/>\n```\n\ntext\n\n```render compiled html\n<b/>\n```\n")

        assert result.html.count('class="example') == 2
        assert result.html.count('class="source"') == 1

    def test_markdown_parse(self):
        """An already split document renders with its attributes"""
        document = ParsedDocument(attributes={"a": 1}, body="text")
        result = asyncio.run(markdown_parse(document))

        assert result.html == "<p>text</p>\n"
        assert result.attributes == {"a": 1}


class TestCodeBlockParse:
    """Test the per-block transformation directly"""

    def test_highlighter_output_verbatim(self):
        """Without braces or newlines the highlighter output is untouched"""
        html = codeBlock_parse("<i>hi</i>", "html", "language-", lambda c, l: "<i>hi</i>", None)
        assert '<code class="language-html">\n      <i>hi</i>\n    </code>' in html

    def test_brace_round_trip(self):
        """Encoded {example} unwraps back to the original text"""
        html = codeBlock_parse("{example}", "", "language-", None, None)
        encoded = '{"{"}example{"}"}'
        assert encoded in html
        assert source_decode(encoded) == "{example}"

    def test_escape_without_highlighter(self):
        """No highlighter: source is HTML-escaped, run is verbatim"""
        html = codeBlock_parse('<a href="#">x</a>', "html", "lang-", None, None)
        assert '<div class="run"><a href="#">x</a></div>' in html
        assert "&lt;a href=&quot;#&quot;&gt;x&lt;/a&gt;" in html
        assert '<pre class="lang-html">' in html

    def test_options_blob(self):
        """compiled in the options blob suppresses the source view"""
        html = codeBlock_parse("<B/>", "jsx", "language-", None, "compiled;x=1")
        assert "exampleViewCode" in html
        assert "<pre" not in html


class TestRendererSettings:
    """Test settings that shape the markdown-it instance"""

    def test_xhtml_out(self):
        """Void elements close XHTML-style by default"""
        assert "<br />" in parse_sync("a  \nb\n").html
        assert "<br>" in parse_sync("a  \nb\n", AppSettings(xhtml_out=False)).html

    def test_raw_html_escaped_by_default(self):
        """Raw HTML in the body is escaped unless enabled"""
        assert "&lt;div&gt;" in parse_sync("<div>raw</div>\n").html
        assert "<div>raw</div>" in parse_sync("<div>raw</div>\n", AppSettings(html_enabled=True)).html

    def test_tables(self):
        """GFM tables are enabled"""
        assert "<table>" in parse_sync("| a |\n|---|\n| 1 |\n").html

    def test_lang_prefix(self):
        """Language class prefix comes from settings"""
        result = parse_sync("```jsx\nx\n```\n", AppSettings(lang_prefix="lang-"))
        assert '<pre class="lang-jsx"><code class="lang-jsx">' in result.html

    def test_fence_name_gating(self):
        """With fence_name set only named fences get the dual view"""
        settings = AppSettings(fence_name="render")

        plain = parse_sync("```html\n<b>x</b>\n```\n", settings)
        assert 'class="example' not in plain.html
        assert '<pre><code class="language-html">' in plain.html

        named = parse_sync("```render html\n<b>x</b>\n```\n", settings)
        assert '<div class="example">' in named.html
        assert '<div class="run"><b>x</b>\n</div>' in named.html

        compiled = parse_sync("```render compiled html\n<b>x</b>\n```\n", settings)
        assert '<div class="example exampleViewCode">' in compiled.html


class TestErrors:
    """Test error propagation"""

    def test_front_matter_error(self):
        """Malformed front matter rejects the parse"""
        with pytest.raises(FrontMatterParseError):
            asyncio.run(parse("---\ntitle: [oops\n---\nBody\n"))

    def test_highlighter_error_unchanged(self, monkeypatch):
        """A failing highlighter surfaces as the original exception"""

        class GrammarError(Exception):
            pass

        def boom(code, language, settings=None):
            raise GrammarError(language)

        monkeypatch.setattr(parser_module, "pygments_highlight", boom)

        with pytest.raises(GrammarError, match="jsx"):
            asyncio.run(parse("# Title\n\n```jsx\n<B/>\n```\n"))


class TestIsolation:
    """Test that parse calls share no renderer configuration"""

    def test_concurrent_async_parses(self):
        """Two awaited parses with different settings keep their own prefixes"""
        doc = "```jsx\n<B/>\n```\n"

        async def both():
            return await asyncio.gather(
                parse(doc, AppSettings(lang_prefix="one-")),
                parse(doc, AppSettings(lang_prefix="two-")),
            )

        first, second = asyncio.run(both())
        assert "one-jsx" in first.html and "two-" not in first.html
        assert "two-jsx" in second.html and "one-" not in second.html

    def test_threaded_parses(self):
        """Parses on worker threads do not leak settings into each other"""
        doc = "# Heading\n\n```jsx\n<B/>\n```\n"
        prefixes = [f"p{i}-" for i in range(16)]

        def run(prefix):
            return prefix, parse_sync(doc, AppSettings(lang_prefix=prefix)).html

        with ThreadPoolExecutor(max_workers=4) as pool:
            for prefix, html in pool.map(run, prefixes):
                assert f'class="{prefix}jsx"' in html
                others = [p for p in prefixes if p != prefix]
                assert not any(f'class="{p}jsx"' in html for p in others)

    def test_attributes_copied(self):
        """Result attributes are a copy of the document's"""
        document = ParsedDocument(attributes={"a": 1}, body="x")
        result = asyncio.run(markdown_parse(document))
        result.attributes["b"] = 2
        assert document.attributes == {"a": 1}


class TestLogging:
    """Test verbosity-gated logging"""

    def test_verbose_parse_logs(self):
        """verbosity 2 emits stage messages"""
        messages = []
        handler_id = logger.add(messages.append, format="{message}", level="DEBUG")
        try:
            parse_sync("```jsx\nx\n```\n", AppSettings(verbosity=2))
        finally:
            logger.remove(handler_id)

        text = "".join(messages)
        assert "Rendering Markdown body" in text
        assert "Fence at line 1" in text

    def test_quiet_by_default(self):
        """Default verbosity emits nothing"""
        messages = []
        handler_id = logger.add(messages.append, format="{message}", level="DEBUG")
        try:
            parse_sync("```jsx\nx\n```\n")
        finally:
            logger.remove(handler_id)

        assert messages == []
