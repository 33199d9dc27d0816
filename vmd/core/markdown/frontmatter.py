"""
Front Matter
============

Recognize YAML (---), TOML (+++) and JSON ({ }) front matter at the top of a
document and render it as nothing, a code block, or a table.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence
from datetime import date, datetime, time
import json
import math
import tomllib

import yaml  # type: ignore[import-untyped]
from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from vmd.config.logging import get_logger
from vmd.models.schemas import FrontMatter, FrontMatterFormat, FrontMatterRenderMode

logger = get_logger(__name__)

FRONT_MATTER_TOKEN = "front_matter"
TABLE_CLASS = "frontmatter"
CELL_STYLE = "text-align:center"

# Opening and closing fence lines per format
FENCES: Dict[FrontMatterFormat, tuple[str, str]] = {
    FrontMatterFormat.YAML: ("---", "---"),
    FrontMatterFormat.TOML: ("+++", "+++"),
    FrontMatterFormat.JSON: ("{", "}"),
}


class FrontMatterParseError(Exception):
    """Exception raised when front matter cannot be parsed."""

    pass


def _parse_yaml(value: str) -> Any:
    return yaml.safe_load(value)


def _parse_toml(value: str) -> Any:
    return tomllib.loads(value)


def _parse_json(value: str) -> Any:
    return json.loads(f"{{{value}}}")


PARSERS: Dict[FrontMatterFormat, Callable[[str], Any]] = {
    FrontMatterFormat.YAML: _parse_yaml,
    FrontMatterFormat.TOML: _parse_toml,
    FrontMatterFormat.JSON: _parse_json,
}


def parse_front_matter(fmt: FrontMatterFormat, value: str) -> Any:
    """
    Parse front matter text.

    Args:
        fmt: Front matter format
        value: Text between the fences

    Returns:
        Parsed data

    Raises:
        FrontMatterParseError: If the text is not valid for the format
    """
    try:
        return PARSERS[fmt](value)
    except yaml.YAMLError as e:
        raise FrontMatterParseError(str(e)) from e
    except tomllib.TOMLDecodeError as e:
        raise FrontMatterParseError(str(e)) from e
    except json.JSONDecodeError as e:
        raise FrontMatterParseError(str(e)) from e


def format_scalar(value: Any) -> str:
    """Format a scalar value the way JavaScript's String() would."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def _text_inline(text: str) -> Token:
    return Token("inline", "", 0, content=text, children=[Token("text", "", 0, content=text)])


def _block(token_type: str, tag: str, nesting: int, **kwargs: Any) -> Token:
    return Token(token_type, tag, nesting, block=True, **kwargs)  # type: ignore[arg-type]


def _cell(tag: str, value: Any) -> List[Token]:
    return [
        _block(f"{tag}_open", tag, 1, attrs={"style": CELL_STYLE}),
        *_cell_content(value),
        _block(f"{tag}_close", tag, -1),
    ]


def _cell_content(value: Any) -> List[Token]:
    if isinstance(value, (dict, list)):
        return object_to_table_tokens(value)
    return [_text_inline(format_scalar(value))]


def _row(cells: List[List[Token]]) -> List[Token]:
    tokens = [_block("tr_open", "tr", 1)]
    for cell in cells:
        tokens.extend(cell)
    tokens.append(_block("tr_close", "tr", -1))
    return tokens


def object_to_table_tokens(value: Any) -> List[Token]:
    """
    Convert parsed front matter into table tokens.

    Objects become a header row of keys over a row of values, arrays become
    a single row of values, and scalars become plain text. Nested objects
    and arrays are rendered as nested tables.

    Args:
        value: Parsed front matter data

    Returns:
        Token list ready to splice into the document
    """
    if not isinstance(value, (dict, list)):
        return [
            _block("paragraph_open", "p", 1),
            _text_inline(format_scalar(value)),
            _block("paragraph_close", "p", -1),
        ]

    tokens = [_block("table_open", "table", 1, attrs={"class": TABLE_CLASS})]

    if isinstance(value, dict):
        head = [_cell("th", format_scalar(key)) for key in value.keys()]
        body = [_cell("td", item) for item in value.values()]
        tokens.append(_block("thead_open", "thead", 1))
        tokens.extend(_row(head))
        tokens.append(_block("thead_close", "thead", -1))
    else:
        body = [_cell("td", item) for item in value]

    tokens.append(_block("tbody_open", "tbody", 1))
    tokens.extend(_row(body))
    tokens.append(_block("tbody_close", "tbody", -1))
    tokens.append(_block("table_close", "table", -1))
    return tokens


def _code_block(fmt: FrontMatterFormat, raw: str, title: Optional[str] = None) -> Token:
    attrs: Dict[str, Any] = {"class": "hljs"}
    if title is not None:
        attrs["title"] = title
    return Token(
        "fence", "code", 0, attrs=attrs, info=fmt.value, content=raw, markup="```", block=True
    )


def render_front_matter_tokens(
    front_matter: FrontMatter, mode: FrontMatterRenderMode
) -> List[Token]:
    """
    Build the tokens that replace a front matter block.

    Args:
        front_matter: Parsed front matter
        mode: Render mode

    Returns:
        Replacement tokens, possibly empty
    """
    if mode == FrontMatterRenderMode.NONE:
        return []
    if mode == FrontMatterRenderMode.CODE:
        return [_code_block(front_matter.format, front_matter.raw)]
    if front_matter.error is not None:
        return [_code_block(front_matter.format, front_matter.raw, title=front_matter.error)]
    if front_matter.data is None:
        return []
    return object_to_table_tokens(front_matter.data)


def _line(state: StateBlock, line: int) -> str:
    return state.src[state.bMarks[line]:state.eMarks[line]]


def front_matter_plugin(
    md: MarkdownIt,
    formats: Sequence[FrontMatterFormat] = tuple(FrontMatterFormat),
    mode: FrontMatterRenderMode = FrontMatterRenderMode.TABLE,
) -> None:
    """
    Register the front matter block rule and its rendering core rule.

    The block rule only matches at the first line of the document. The core
    rule replaces the resulting token according to the render mode and
    records the parsed front matter in env["front_matter"].
    """
    enabled = [fmt for fmt in FENCES if fmt in formats]

    def front_matter_block(state: StateBlock, startLine: int, endLine: int, silent: bool) -> bool:
        if startLine != 0 or state.parentType != "root":
            return False

        opening = _line(state, startLine).rstrip()
        fmt = next((f for f in enabled if FENCES[f][0] == opening), None)
        if fmt is None:
            return False

        closing = FENCES[fmt][1]
        nextLine = startLine + 1
        while nextLine < endLine:
            if _line(state, nextLine).rstrip() == closing:
                break
            nextLine += 1
        else:
            return False

        if silent:
            return True

        token = state.push(FRONT_MATTER_TOKEN, "", 0)
        token.hidden = True
        token.block = True
        token.info = fmt.value
        token.markup = opening
        token.content = state.getLines(startLine + 1, nextLine, 0, True)
        token.map = [startLine, nextLine + 1]

        state.line = nextLine + 1
        return True

    def render_front_matter(state: StateCore) -> None:
        tokens = state.tokens
        if not tokens or tokens[0].type != FRONT_MATTER_TOKEN:
            return

        node = tokens[0]
        fmt = FrontMatterFormat(node.info)
        front_matter = FrontMatter(format=fmt, raw=node.content)
        try:
            front_matter.data = parse_front_matter(fmt, node.content)
        except FrontMatterParseError as e:
            front_matter.error = str(e)
            logger.warning("Front matter parsing failed", format=fmt.value, error=str(e))

        state.env["front_matter"] = front_matter
        tokens[0:1] = render_front_matter_tokens(front_matter, mode)

    md.block.ruler.before("table", FRONT_MATTER_TOKEN, front_matter_block)
    md.core.ruler.push("render_front_matter", render_front_matter)
    # Reached only if the core rule is disabled
    md.add_render_rule(FRONT_MATTER_TOKEN, lambda self, tokens, idx, options, env: "")
