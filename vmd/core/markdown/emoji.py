"""
Emoji Substitution
==================

Convert unicode emoji to gemoji shortcodes and splice :shortcode: text into
emoji image tokens.
"""

from typing import Any, List, Optional, Union
from pathlib import Path
import re

import emoji as emoji_data
from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from vmd.config.logging import get_logger

logger = get_logger(__name__)

SHORTCODE_PATTERN = re.compile(r":([^:\s]+):")

DEFAULT_URL_TEMPLATE = "emoji://{name}"


class EmojiName(str):
    """Marker type for emoji segments returned by split_shortcodes."""


class EmojiCatalog:
    """Lookup of available gemoji names."""

    def __init__(self, image_dir: Optional[Path] = None) -> None:
        self.image_dir = image_dir

    def exists(self, name: str) -> bool:
        """Whether an emoji with this gemoji name is available."""
        if self.image_dir is not None:
            try:
                return (self.image_dir / f"{name}.png").is_file()
            except (OSError, ValueError):
                return False

        shortcode = f":{name}:"
        return emoji_data.emojize(shortcode, language="alias") != shortcode

    def url(self, name: str, template: str = DEFAULT_URL_TEMPLATE) -> str:
        """Image URL for the emoji."""
        return template.format(name=name)


def unicode_to_shortcodes(text: str) -> str:
    """Replace unicode emoji with their :gemoji: alias."""
    return emoji_data.demojize(text, language="alias")


def split_shortcodes(value: str, catalog: EmojiCatalog) -> List[Union[str, EmojiName]]:
    """
    Split text into plain text segments and known emoji names.

    Unknown :names: stay in the text. Scanning resumes at their closing
    colon so that a trailing known shortcode is still found.

    Args:
        value: Text to scan
        catalog: Emoji catalog used to check names

    Returns:
        Ordered list of str text segments and EmojiName entries
    """
    segments: List[Union[str, EmojiName]] = []
    last_index = 0
    position = 0

    while True:
        match = SHORTCODE_PATTERN.search(value, position)
        if match is None:
            break

        name = match.group(1)
        if not catalog.exists(name):
            position = match.end() - 1
            continue

        if match.start() != last_index:
            segments.append(value[last_index:match.start()])
        segments.append(EmojiName(name))
        last_index = match.end()
        position = match.end()

    if last_index != len(value):
        segments.append(value[last_index:])

    return segments


def _image_token(name: str, url: str) -> Token:
    shortcode = f":{name}:"
    alt_text = Token("text", "", 0, content=shortcode)
    return Token(
        "image",
        "img",
        0,
        attrs={
            "src": url,
            "alt": "",
            "title": shortcode,
            "align": "absmiddle",
            "class": "emoji",
        },
        children=[alt_text],
        content=shortcode,
    )


def emoji_plugin(
    md: MarkdownIt,
    image_dir: Optional[Path] = None,
    url_template: str = DEFAULT_URL_TEMPLATE,
) -> None:
    """
    Register the emoji core rules.

    Unicode emoji in text are first rewritten to :shortcodes:, then every
    known shortcode is spliced out of its text token into an image token.
    Names of substituted emoji are recorded in env["emoji"].
    """
    catalog = EmojiCatalog(image_dir)

    def emoji_to_shortcodes(state: StateCore) -> None:
        for block_token in state.tokens:
            if block_token.type != "inline" or not block_token.children:
                continue
            for child in block_token.children:
                if child.type == "text":
                    child.content = unicode_to_shortcodes(child.content)

    def shortcodes_to_images(state: StateCore) -> None:
        found: List[str] = state.env.setdefault("emoji", [])

        for block_token in state.tokens:
            if block_token.type != "inline" or not block_token.children:
                continue

            children = block_token.children
            # Splicing shifts indices, so walk a snapshot and look up the
            # current position of each text token.
            for node in [child for child in children if child.type == "text"]:
                segments = split_shortcodes(node.content, catalog)
                if not any(isinstance(segment, EmojiName) for segment in segments):
                    continue

                replacement: List[Token] = []
                for segment in segments:
                    if isinstance(segment, EmojiName):
                        replacement.append(_image_token(segment, catalog.url(segment, url_template)))
                        found.append(str(segment))
                    else:
                        replacement.append(Token("text", "", 0, content=segment))

                index = next(i for i, child in enumerate(children) if child is node)
                children[index:index + 1] = replacement

        if found:
            logger.debug("Emoji substituted", count=len(found))

    # Shortcodes must exist before heading slugs are computed
    md.core.ruler.after("text_join", "emoji_to_shortcodes", emoji_to_shortcodes)
    md.core.ruler.push("shortcodes_to_images", shortcodes_to_images)


def emoji_names(env: Any) -> List[str]:
    """Emoji names recorded during rendering."""
    if isinstance(env, dict):
        return list(env.get("emoji", []))
    return []
