"""
Integration Tests for the Command Line Interface
================================================
"""

import io

import pytest

from vmd import cli

from tests.data.sample_markdown_documents import FULL_DOCUMENT, YAML_FRONT_MATTER_DOCUMENT
from tests.utils.assertions import assert_valid_page


class TestRenderCommand:
    """Test `vmd render`."""

    @pytest.fixture
    def readme(self, tmp_path):
        """Markdown file using every feature."""
        path = tmp_path / "README.md"
        path.write_text(FULL_DOCUMENT, encoding="utf-8")
        return path

    def test_render_page_to_stdout(self, settings, readme, capsys):
        """Test a full page is written to stdout."""
        assert cli.main(["render", str(readme)]) == 0

        out = capsys.readouterr().out
        assert_valid_page(out, title="README.md - vmd")
        assert '<h1 id="project-tada">' in out
        assert f'<base href="{readme.parent.resolve().as_uri()}/">' in out

    def test_render_fragment(self, settings, readme, capsys):
        """Test --fragment writes only the rendered HTML."""
        assert cli.main(["render", str(readme), "--fragment"]) == 0

        out = capsys.readouterr().out
        assert "<!DOCTYPE html>" not in out
        assert out.startswith('<table class="frontmatter">')

    def test_render_to_file(self, settings, readme, tmp_path):
        """Test -o writes the page to a file."""
        output = tmp_path / "out.html"

        assert cli.main(["render", str(readme), "-o", str(output), "--title", "Docs"]) == 0

        assert_valid_page(output.read_text(encoding="utf-8"), title="Docs - vmd")

    def test_front_matter_options(self, settings, tmp_path, capsys):
        """Test front matter flags override settings."""
        path = tmp_path / "meta.md"
        path.write_text(YAML_FRONT_MATTER_DOCUMENT, encoding="utf-8")

        assert cli.main(["render", str(path), "--fragment", "--frontmatter-renderer", "code"]) == 0
        assert '<pre><code class="hljs language-yaml">' in capsys.readouterr().out

        assert cli.main(["render", str(path), "--fragment", "--frontmatter-formats", "toml"]) == 0
        assert '<table class="frontmatter">' not in capsys.readouterr().out

    def test_render_stdin(self, settings, monkeypatch, capsys):
        """Test - reads the document from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO("# From stdin\n"))

        assert cli.main(["render", "-", "--fragment"]) == 0
        assert capsys.readouterr().out == '<h1 id="from-stdin">From stdin</h1>\n'

    def test_render_html_fragment(self, settings, tmp_path, capsys):
        """Test HTML documents are written unchanged."""
        path = tmp_path / "page.html"
        path.write_text("<p># raw</p>", encoding="utf-8")

        assert cli.main(["render", str(path), "--fragment"]) == 0
        assert capsys.readouterr().out == "<p># raw</p>"

    def test_missing_file(self, settings, tmp_path, capsys):
        """Test a missing document exits with status 1."""
        assert cli.main(["render", str(tmp_path / "missing.md")]) == 1
        assert "Document not found" in capsys.readouterr().err

    def test_invalid_frontmatter_formats(self, settings, readme, capsys):
        """Test unknown front matter formats exit with status 1."""
        assert cli.main(["render", str(readme), "--frontmatter-formats", "xml"]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "vmd: invalid render options" in captured.err

    def test_undecodable_file(self, settings, tmp_path, capsys):
        """Test files that are not UTF-8 exit with status 1."""
        path = tmp_path / "binary.md"
        path.write_bytes(b"\xff\xfe bad")

        assert cli.main(["render", str(path)]) == 1
        assert "not valid UTF-8" in capsys.readouterr().err


class TestServeCommand:
    """Test `vmd serve`."""

    def test_serve_passes_host_and_port(self, monkeypatch):
        """Test host and port are handed to the development server."""
        calls = []
        monkeypatch.setattr(
            "vmd.api.main.run_development_server",
            lambda host=None, port=None: calls.append((host, port)),
        )

        assert cli.main(["serve", "--host", "0.0.0.0", "--port", "9001"]) == 0
        assert calls == [("0.0.0.0", 9001)]


class TestParser:
    """Test argument parsing."""

    def test_command_is_required(self):
        """Test running without a command is an error."""
        with pytest.raises(SystemExit):
            cli.main([])

    def test_invalid_frontmatter_renderer(self):
        """Test unknown front matter modes are rejected by the parser."""
        with pytest.raises(SystemExit):
            cli.main(["render", "x.md", "--frontmatter-renderer", "list"])
