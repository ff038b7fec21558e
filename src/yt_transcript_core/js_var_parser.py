"""Extract a JSON object literal assigned to a script variable in page markup.

Two strategies are tried in order. The scanner bounds the object with a
string-aware brace matcher and handles any nesting depth. The regex
matcher is a last resort for pages where the variable marker sits in odd
surrounding syntax; it only understands one level of nested braces.
"""

import json
import re
from collections.abc import Callable

from yt_transcript_core.errors import CouldNotRetrieveTranscript
from yt_transcript_core.models import StructuredValue

Strategy = Callable[[str, str], StructuredValue]

# Object literal with at most one level of nested braces.
_SHALLOW_OBJECT = r"(\{[^{}]*(?:\{[^{}]*\}[^{}]*)*\})"
_SINGLE_QUOTED = re.compile(r"'([^'\\]*(?:\\.[^'\\]*)*)'")


def scan_object_literal(text: str, var_name: str) -> StructuredValue:
    """Bound the object after the variable marker by brace matching."""
    marker = f"var {var_name}"
    pos = text.find(marker)
    if pos == -1:
        marker = var_name
        pos = text.find(marker)
        if pos == -1:
            raise ValueError(f"variable {var_name!r} not found")

    begin = text.find("{", pos + len(marker))
    if begin == -1:
        raise ValueError(f"no object literal follows {var_name!r}")

    depth = 0
    in_string = False
    quote = ""
    escaped = False
    for i in range(begin, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                in_string = False
            continue
        if ch == '"' or ch == "'":
            in_string = True
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return json.loads(text[begin : i + 1])

    raise ValueError(f"unbalanced braces after {var_name!r}")


def match_object_literal(text: str, var_name: str) -> StructuredValue:
    """Regex fallback; normalizes single-quoted strings before decoding."""
    name = re.escape(var_name)
    patterns = [
        rf"var\s+{name}\s*=\s*{_SHALLOW_OBJECT};",
        rf"{name}\s*=\s*{_SHALLOW_OBJECT};",
        rf'"{name}"\s*:\s*{_SHALLOW_OBJECT}',
    ]
    for pattern in patterns:
        match = re.search(pattern, text, re.S)
        if not match:
            continue
        literal = _SINGLE_QUOTED.sub(r'"\1"', match.group(1))
        try:
            return json.loads(literal)
        except json.JSONDecodeError:
            continue
    raise ValueError(f"no pattern matched {var_name!r}")


STRATEGIES: tuple[Strategy, ...] = (scan_object_literal, match_object_literal)


def extract_variable(raw_text: str, variable_name: str, context: str) -> StructuredValue:
    """Return the parsed object literal assigned to ``variable_name``.

    ``context`` identifies the page (usually the video id) and is carried
    by the ``YOUTUBE_DATA_UNPARSABLE`` error raised when every strategy
    fails.
    """
    for strategy in STRATEGIES:
        try:
            return strategy(raw_text, variable_name)
        # json gives up on very deep nesting with RecursionError
        except (ValueError, RecursionError):
            continue
    raise CouldNotRetrieveTranscript.youtube_data_unparsable(context)


class JsVarParser:
    """Binds a variable name for repeated extraction."""

    def __init__(self, var_name: str):
        self.var_name = var_name

    def parse(self, html: str, video_id: str) -> StructuredValue:
        return extract_variable(html, self.var_name, video_id)
