"""Line scanner that extracts documentation directives from Makefiles.

Documentation lines (``## ...``) accumulate until a target line is seen,
at which point they are emitted in order and associated with that target.
Any other line (blank, assignment, comment) discards the pending lines.
``!file`` directives bypass the queue and are emitted at once. Recipe lines
are not target lines, but they do clear any pending documentation.
"""

from __future__ import annotations

import os

from .directives import (
    Directive,
    DirectiveType,
    ParsedFile,
    extract_target_name,
    is_documentation_line,
    is_target_line,
)

_PREFIXED_TYPES = (
    ("!category ", DirectiveType.CATEGORY),
    ("!var ", DirectiveType.VAR),
    ("!alias ", DirectiveType.ALIAS),
)


class Scanner:
    """Scans Makefile content into a :class:`ParsedFile`."""

    def __init__(self) -> None:
        self._current_file = ""
        self._current_category = ""
        self._pending_docs: list[Directive] = []

    def scan_file(self, path: str | os.PathLike[str]) -> ParsedFile:
        """Read and scan a Makefile from disk."""
        path_str = os.fspath(path)
        try:
            with open(path_str, encoding="utf-8", errors="replace", newline="") as handle:
                content = handle.read()
        except OSError as exc:
            raise OSError(exc.errno, f"failed to read {path_str}: {exc.strerror}") from exc
        return self.scan_content(content, path_str)

    def scan_content(self, content: str, path: str) -> ParsedFile:
        """Scan in-memory Makefile content; ``path`` is recorded on the results."""
        self._current_file = path
        self._current_category = ""
        self._pending_docs = []

        result = ParsedFile(path=path)

        for line_number, line in enumerate(content.split("\n"), start=1):
            if is_documentation_line(line):
                directive = self._parse_directive(line, line_number)
                if directive.type is DirectiveType.FILE:
                    result.directives.append(directive)
                else:
                    self._pending_docs.append(directive)
                continue

            if is_target_line(line):
                name = extract_target_name(line)
                if name:
                    result.target_map[name] = line_number
                    result.directives.extend(self._pending_docs)
                    self._pending_docs = []
                    continue

            self._pending_docs = []

        return result

    def _parse_directive(self, line: str, line_number: int) -> Directive:
        content = "" if line == "##" else line.removeprefix("## ")

        def make(kind: DirectiveType, value: str) -> Directive:
            return Directive(kind, value, self._current_file, line_number)

        if content.startswith("!file"):
            return make(DirectiveType.FILE, content.removeprefix("!file").strip())

        for prefix, kind in _PREFIXED_TYPES:
            if content.startswith(prefix):
                value = content.removeprefix(prefix).strip()
                if kind is DirectiveType.CATEGORY:
                    self._current_category = value
                return make(kind, value)

        if content.startswith("!notalias"):
            return make(DirectiveType.NOT_ALIAS, "")

        return make(DirectiveType.DOC, content)