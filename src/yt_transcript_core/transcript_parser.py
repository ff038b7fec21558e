"""Decode YouTube timed-text XML into transcript snippets."""

import html
import math
import re
import xml.etree.ElementTree as ET
from html.parser import HTMLParser

from yt_transcript_core.errors import TranscriptParseError
from yt_transcript_core.models import DEFAULT_LINK_FORMAT, RenderConfig, TranscriptSnippet

# Inline tags kept verbatim when formatting is preserved.
FORMATTING_TAGS = frozenset({
    "strong", "em", "b", "i", "mark", "small",
    "del", "ins", "sub", "sup", "span", "a",
})

_VOID_TAGS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
})

# Anything outside this set is not markup: "&lt;test&gt;" decodes to the
# literal text "<test>".
_HTML_TAGS = FORMATTING_TAGS | _VOID_TAGS | frozenset({
    "abbr", "address", "article", "aside", "audio", "bdi", "bdo", "big",
    "blockquote", "body", "button", "caption", "center", "cite", "code",
    "dd", "details", "dfn", "div", "dl", "dt", "figcaption", "figure",
    "font", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6", "head",
    "header", "html", "iframe", "kbd", "label", "li", "main", "nav", "ol",
    "p", "pre", "q", "rp", "rt", "ruby", "s", "samp", "section", "strike",
    "summary", "table", "tbody", "td", "tfoot", "th", "thead", "time",
    "tr", "tt", "u", "ul", "var", "video",
})

_SEGMENT_OPEN = re.compile(r"<text\b[^>]*(?<!/)>")
_SEGMENT_CLOSE = re.compile(r"</text>")
_WHITESPACE = re.compile(r"\s+")


class _Element:
    __slots__ = ("tag", "attrs", "start_text", "children")

    def __init__(self, tag: str, attrs: dict, start_text: str):
        self.tag = tag
        self.attrs = attrs
        self.start_text = start_text
        self.children: list = []

    def text_content(self) -> str:
        return "".join(
            c if isinstance(c, str) else c.text_content() for c in self.children
        )


class _FragmentBuilder(HTMLParser):
    """Lenient HTML fragment parser producing a small element tree."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.root = _Element("", {}, "")
        self._stack = [self.root]

    def _append(self, node) -> None:
        children = self._stack[-1].children
        if isinstance(node, str) and children and isinstance(children[-1], str):
            children[-1] += node
        else:
            children.append(node)

    def handle_starttag(self, tag, attrs):
        if tag not in _HTML_TAGS:
            self._append(self.get_starttag_text())
            return
        element = _Element(tag, dict(attrs), self.get_starttag_text())
        self._append(element)
        if tag not in _VOID_TAGS:
            self._stack.append(element)

    def handle_startendtag(self, tag, attrs):
        if tag not in _HTML_TAGS:
            self._append(self.get_starttag_text())
            return
        self._append(_Element(tag, dict(attrs), self.get_starttag_text()))

    def handle_endtag(self, tag):
        if tag not in _HTML_TAGS:
            self._append(f"</{tag}>")
            return
        # Close the nearest matching open element; stray end tags are ignored.
        for i in range(len(self._stack) - 1, 0, -1):
            if self._stack[i].tag == tag:
                del self._stack[i:]
                return

    def handle_data(self, data):
        self._append(data)


def _parse_fragment(markup: str) -> _Element:
    builder = _FragmentBuilder()
    builder.feed(markup)
    builder.close()
    return builder.root


def _inner_markup(element: ET.Element) -> str:
    parts = [html.escape(element.text or "", quote=False)]
    parts.extend(ET.tostring(child, encoding="unicode") for child in element)
    return "".join(parts)


def _parse_time(value: str | None) -> float | None:
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return seconds


class TranscriptParser:
    """Parses timed-text XML into a list of TranscriptSnippet.

    In plain mode every tag is stripped. With ``preserve_formatting`` the
    inline tags in FORMATTING_TAGS are kept as written and all others are
    unwrapped. Anchors are always linearized through the config's link
    format first, so link targets survive in both modes.
    """

    def __init__(self, config: RenderConfig | None = None):
        self.config = config or RenderConfig()

    @classmethod
    def with_config(
        cls, preserve_formatting: bool = False, link_format: str = DEFAULT_LINK_FORMAT
    ) -> "TranscriptParser":
        return cls(
            RenderConfig(preserve_formatting=preserve_formatting, link_format=link_format)
        )

    def parse(self, xml_text: str) -> list[TranscriptSnippet]:
        transcript = self._load(xml_text)

        snippets = []
        for element in transcript.iter("text"):
            start = _parse_time(element.get("start"))
            duration = _parse_time(element.get("dur"))
            if start is None or duration is None:
                continue

            try:
                text = self._render(html.unescape(_inner_markup(element)))
            except RecursionError as e:
                raise TranscriptParseError("Markup nested too deeply") from e
            text = _WHITESPACE.sub(" ", text).strip()
            if text:
                snippets.append(TranscriptSnippet(text=text, start=start, duration=duration))
        return snippets

    def _load(self, xml_text: str) -> ET.Element:
        if "<transcript" not in xml_text or "</transcript>" not in xml_text:
            raise TranscriptParseError("Invalid transcript XML structure")
        opened = len(_SEGMENT_OPEN.findall(xml_text))
        closed = len(_SEGMENT_CLOSE.findall(xml_text))
        if opened != closed:
            raise TranscriptParseError(
                f"Malformed XML: mismatched text tags ({opened} opening, {closed} closing)"
            )

        try:
            root = ET.fromstring(xml_text.strip())
        except ET.ParseError as e:
            raise TranscriptParseError(str(e)) from e

        transcript = root if root.tag == "transcript" else root.find(".//transcript")
        if transcript is None:
            raise TranscriptParseError("No transcript element found in XML")
        return transcript

    def _render(self, markup: str) -> str:
        root = _parse_fragment(markup)
        if self.config.preserve_formatting:
            return self._render_formatted(root)
        return self._render_plain(root)

    def _render_link(self, anchor: _Element) -> str:
        href = anchor.attrs.get("href")
        text = anchor.text_content()
        if href and text:
            return self.config.render_link(text, href)
        return text

    def _render_plain(self, node: _Element) -> str:
        out = []
        for child in node.children:
            if isinstance(child, str):
                out.append(child)
            elif child.tag == "a":
                out.append(self._render_link(child))
            else:
                out.append(self._render_plain(child))
        return "".join(out)

    def _render_formatted(self, node: _Element) -> str:
        out = []
        for child in node.children:
            if isinstance(child, str):
                out.append(child)
            elif child.tag == "a":
                out.append(self._render_link(child))
            elif child.tag in FORMATTING_TAGS:
                out.append(child.start_text)
                if not child.start_text.endswith("/>"):
                    out.append(self._render_formatted(child))
                    out.append(f"</{child.tag}>")
            else:
                out.append(self._render_formatted(child))
        return "".join(out)
