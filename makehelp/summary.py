"""Topic-sentence extraction from target documentation.

The documentation lines are joined and cleaned up in stages: markdown
headers, markdown emphasis, code and links, and HTML tags are removed.
Whitespace is then collapsed and the first sentence is taken.

A sentence ends at ``.``, ``!`` or ``?`` followed by whitespace or the end
of the text. An ellipsis (``...``) and a period followed by a non-space
character, as in ``127.0.0.1`` or ``1.2.3``, do not end a sentence.
Text without such a terminator is returned whole.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

# ASCII whitespace only, matching the semantics of the patterns' ``\s``.
_WS = r"[\t\n\f\r ]"

_SENTENCE_RE = re.compile(rf"^((?:[^.!?]|\.\.\.|\.[^\t\n\f\r ])+[.?!])({_WS}|$)")
_HEADER_RE = re.compile(rf"^#+{_WS}+", re.MULTILINE)
_BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")
_ITALIC_RE = re.compile(r"\*([^*]+)\*")
_BOLD_UNDER_RE = re.compile(r"__([^_]+)__")
_ITALIC_UNDER_RE = re.compile(r"_([^_]+)_")
_CODE_RE = re.compile(r"`([^`]+)`")
_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]+\)")
_HTML_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(rf"{_WS}+")

# Order matters: ** before *, __ before _.
_FORMATTING_RES = (
    _BOLD_RE,
    _ITALIC_RE,
    _BOLD_UNDER_RE,
    _ITALIC_UNDER_RE,
    _CODE_RE,
    _LINK_RE,
)


class Extractor:
    """Extracts a one-sentence summary from documentation lines.

    All patterns are compiled once at import time, so a single instance
    can be shared and reused for every target.
    """

    def extract(self, documentation: Iterable[str]) -> str:
        """Return the first sentence of the cleaned-up documentation."""
        lines = list(documentation)
        if not lines:
            return ""

        text = " ".join(lines)
        text = self._strip_markdown_headers(text)
        text = self._strip_markdown_formatting(text)
        text = self._strip_html_tags(text)
        text = self._normalize_whitespace(text)
        return self._extract_first_sentence(text)

    @staticmethod
    def _strip_markdown_headers(text: str) -> str:
        return _HEADER_RE.sub("", text)

    @staticmethod
    def _strip_markdown_formatting(text: str) -> str:
        for pattern in _FORMATTING_RES:
            text = pattern.sub(r"\1", text)
        return text

    @staticmethod
    def _strip_html_tags(text: str) -> str:
        return _HTML_TAG_RE.sub("", text)

    @staticmethod
    def _normalize_whitespace(text: str) -> str:
        text = text.replace("\n", " ")
        return _WHITESPACE_RE.sub(" ", text).strip()

    @staticmethod
    def _extract_first_sentence(text: str) -> str:
        match = _SENTENCE_RE.match(text)
        if match:
            return match.group(1).strip()
        return text