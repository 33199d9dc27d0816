"""
Code Blocks
===========

Mark code blocks with the "hljs" class and highlight them with Pygments.
"""

from typing import Any

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from vmd.config.logging import get_logger

logger = get_logger(__name__)

CODE_CLASS = "hljs"
TOKEN_CLASS_PREFIX = "hljs-"


def highlight_code(code: str, lang: str, attrs: Any = None) -> str:
    """
    Highlight code for a fenced block.

    Args:
        code: Code block contents
        lang: Language name from the fence info string
        attrs: Remaining fence attributes (unused)

    Returns:
        Highlighted HTML, or an empty string to fall back to escaped code
    """
    if not lang:
        return ""

    try:
        lexer = get_lexer_by_name(lang, stripnl=False)
    except ClassNotFound:
        logger.debug("No lexer for code block language", language=lang)
        return ""

    formatter = HtmlFormatter(nowrap=True, classprefix=TOKEN_CLASS_PREFIX)
    return highlight(code, lexer, formatter)


def highlight_stylesheet(theme: str) -> str:
    """
    Get CSS for a Pygments style scoped to highlighted code.

    Args:
        theme: Pygments style name

    Returns:
        CSS rules, or an empty string for unknown themes
    """
    try:
        formatter = HtmlFormatter(style=theme, classprefix=TOKEN_CLASS_PREFIX)
    except ClassNotFound:
        logger.warning("Unknown highlight theme", theme=theme)
        return ""
    return formatter.get_style_defs(f".{CODE_CLASS}")


def code_class_plugin(md: MarkdownIt) -> None:
    """Register the code class core rule."""

    def fix_code_class(state: StateCore) -> None:
        for token in state.tokens:
            if token.type == "code_block":
                # Indented code renders through the fence renderer so that it
                # gets the same <pre><code class="hljs"> shape.
                token.type = "fence"
                token.info = ""
            if token.type == "fence":
                token.attrSet("class", CODE_CLASS)

    md.core.ruler.push("fix_code_class", fix_code_class)
