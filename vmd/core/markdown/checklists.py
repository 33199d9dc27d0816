"""
Checklist Styling
=================

Turn "[ ]" and "[x]" list items into styled task list items with a
disabled checkbox.
"""

import re
from typing import List, Optional

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

CHECKLIST_MARKER = re.compile(r"^\[([ xX])\]\s+")

TASK_LIST_ITEM_CLASS = "task-list-item"


def _first_inline(tokens: List[Token], item_index: int) -> Optional[Token]:
    """Find the inline token opening a list item's first paragraph."""
    for token in tokens[item_index + 1:]:
        if token.type == "inline":
            return token
        if token.type not in ("paragraph_open",):
            return None
    return None


def _checkbox_token(checked: bool) -> Token:
    markup = '<input type="checkbox" checked disabled> ' if checked else '<input type="checkbox" disabled> '
    return Token("html_inline", "", 0, content=markup)


def checklist_plugin(md: MarkdownIt) -> None:
    """Register the checklist core rule."""

    def fix_checklist_styles(state: StateCore) -> None:
        tokens = state.tokens
        for index, token in enumerate(tokens):
            if token.type != "list_item_open":
                continue

            inline = _first_inline(tokens, index)
            if inline is None or not inline.children:
                continue

            first = inline.children[0]
            if first.type != "text":
                continue

            match = CHECKLIST_MARKER.match(first.content)
            if match is None:
                continue

            checked = match.group(1) in "xX"
            token.meta["checked"] = checked
            first.content = first.content[match.end():]
            inline.content = CHECKLIST_MARKER.sub("", inline.content, count=1)
            inline.children.insert(0, _checkbox_token(checked))

            # Only style items that carry no class of their own
            if token.attrGet("class") is None:
                token.attrSet("class", TASK_LIST_ITEM_CLASS)

    md.core.ruler.push("fix_checklist_styles", fix_checklist_styles)
