"""
Heading Slugs
=============

GitHub style heading ids, applied through the mdit-py-plugins anchors plugin.
"""

from typing import List

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.anchors import anchors_plugin

from vmd.models.schemas import Heading


def github_slug(text: str) -> str:
    """
    Convert heading text into a GitHub compatible slug.

    Letters and digits of any script are kept, along with hyphens and
    underscores. Everything else is dropped and spaces become hyphens.
    """
    kept = "".join(char for char in text.strip().lower() if char.isalnum() or char in " -_")
    return kept.replace(" ", "-")


def slug_plugin(md: MarkdownIt) -> None:
    """Add unique ids to h1-h6 headings."""
    md.use(anchors_plugin, min_level=1, max_level=6, slug_func=github_slug)


def collect_headings(tokens: List[Token]) -> List[Heading]:
    """Collect headings with their ids from a parsed token stream."""
    headings: List[Heading] = []
    for index, token in enumerate(tokens):
        if token.type != "heading_open":
            continue
        slug = token.attrGet("id")
        if slug is None:
            continue
        inline = tokens[index + 1]
        headings.append(
            Heading(level=int(token.tag[1]), text=inline.content, slug=str(slug))
        )
    return headings
