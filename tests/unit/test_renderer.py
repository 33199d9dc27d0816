"""
Unit Tests for Markdown Renderer
================================

Tests for the rendering pipeline: parser configuration, transformer order,
raw HTML handling and error wrapping.
"""

import pytest
from markdown_it import MarkdownIt

from vmd.core.markdown.renderer import (
    BaseMarkdownRenderer,
    MarkdownItRenderer,
    MarkdownRenderError,
    build_markdown_it,
    render_markdown,
)
from vmd.models.schemas import FrontMatterFormat, FrontMatterRenderMode, RenderOptions

from tests.data.sample_markdown_documents import FULL_DOCUMENT, HTML_BLOCK_DOCUMENT
from tests.utils.assertions import assert_contains_all, assert_valid_render_result


class TestMarkdownRenderError:
    """Test render error type."""

    def test_error_creation(self):
        """Test creating a render error."""
        error = MarkdownRenderError("Test error message")
        assert str(error) == "Test error message"
        assert isinstance(error, Exception)


class TestBaseMarkdownRenderer:
    """Test base renderer abstract class."""

    def test_base_renderer_is_abstract(self):
        """Test that BaseMarkdownRenderer cannot be instantiated."""
        with pytest.raises(TypeError):
            BaseMarkdownRenderer()


class TestBuildMarkdownIt:
    """Test parser construction."""

    def test_returns_configured_parser(self, render_options):
        """Test the parser allows raw HTML and highlights code."""
        md = build_markdown_it(render_options)

        assert isinstance(md, MarkdownIt)
        assert md.options["html"] is True
        assert md.options["highlight"] is not None

    def test_core_rule_order(self, render_options):
        """Test the tree transformers run in a fixed order."""
        rules = build_markdown_it(render_options).core.ruler.get_all_rules()
        expected = [
            "text_join",
            "emoji_to_shortcodes",
            "anchor",
            "shortcodes_to_images",
            "fix_checklist_styles",
            "fix_code_class",
            "render_front_matter",
        ]

        positions = [rules.index(name) for name in expected]
        assert positions == sorted(positions)

    def test_front_matter_block_rule_runs_first(self, render_options):
        """Test front matter is recognized before other block rules."""
        rules = build_markdown_it(render_options).block.ruler.get_all_rules()
        assert rules[0] == "front_matter"


class TestMarkdownItRenderer:
    """Test the markdown-it based renderer."""

    @pytest.fixture
    def renderer(self):
        """Create renderer instance."""
        return MarkdownItRenderer()

    @pytest.mark.asyncio
    async def test_full_document(self, renderer, render_options):
        """Test a document using every feature."""
        result = await renderer.render(FULL_DOCUMENT, render_options)

        assert_valid_render_result(result)
        assert_contains_all(
            result.html,
            [
                '<table class="frontmatter">',
                '<h1 id="project-tada">Project <img src="emoji://tada"',
                "<em>text</em>",
                '<a href="https://example.com">https://example.com</a>',
                '<img src="img/logo.png" alt="logo"',
                '<input type="checkbox" checked disabled> done',
                '<input type="checkbox" disabled> todo',
                '<pre><code class="hljs language-python">',
                "<th>a</th>",
                "<td>1</td>",
            ],
        )
        assert result.front_matter.data == {"title": "Readme", "version": 1.2}
        assert result.emoji == ["tada"]
        assert [heading.slug for heading in result.headings] == ["project-tada"]

    @pytest.mark.asyncio
    async def test_raw_html_passes_through(self, renderer, render_options):
        """Test raw HTML is not escaped or sanitized."""
        result = await renderer.render(HTML_BLOCK_DOCUMENT, render_options)

        assert '<div class="note">raw <b>html</b></div>' in result.html
        assert "<p>Text after.</p>" in result.html

    @pytest.mark.asyncio
    async def test_strikethrough(self, renderer, render_options):
        """Test GitHub strikethrough syntax."""
        result = await renderer.render("~~gone~~", render_options)

        assert "<s>gone</s>" in result.html

    @pytest.mark.asyncio
    async def test_empty_document(self, renderer, render_options):
        """Test an empty document renders to nothing."""
        result = await renderer.render("", render_options)

        assert result.html == ""
        assert result.front_matter is None
        assert result.headings == []
        assert result.emoji == []

    @pytest.mark.asyncio
    async def test_unexpected_errors_are_wrapped(self, renderer, render_options, monkeypatch):
        """Test failures inside the pipeline raise MarkdownRenderError."""

        def broken_parser(options):
            raise RuntimeError("parser exploded")

        monkeypatch.setattr("vmd.core.markdown.renderer.build_markdown_it", broken_parser)

        with pytest.raises(MarkdownRenderError, match="parser exploded"):
            await renderer.render("# Title", render_options)


class TestRenderMarkdown:
    """Test the module level render function."""

    @pytest.mark.asyncio
    async def test_default_options_come_from_settings(self, settings, monkeypatch):
        """Test render options default to application settings."""
        monkeypatch.setattr(settings, "frontmatter_renderer", "code")

        result = await render_markdown("+++\na = 1\n+++\n")

        assert '<pre><code class="hljs language-toml">' in result.html

    @pytest.mark.asyncio
    async def test_explicit_options(self):
        """Test explicit options are used as given."""
        options = RenderOptions(
            frontmatter_renderer=FrontMatterRenderMode.NONE,
            frontmatter_formats=[FrontMatterFormat.TOML],
        )
        result = await render_markdown("+++\na = 1\n+++\nbody\n", options)

        assert result.html == "<p>body</p>\n"
        assert result.front_matter.data == {"a": 1}
