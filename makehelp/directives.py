"""Directive types and line classification for Makefile documentation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DirectiveType(Enum):
    """Kind of a documentation directive found in a ``##`` comment."""

    FILE = "file"
    CATEGORY = "category"
    VAR = "var"
    ALIAS = "alias"
    NOT_ALIAS = "notalias"
    DOC = "doc"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Directive:
    """A parsed documentation directive.

    ``value`` holds the text after the directive keyword: the category name
    for ``!category``, ``"NAME - description"`` for ``!var``,
    ``"alias1, alias2"`` for ``!alias`` and the text itself for plain docs.
    """

    type: DirectiveType
    value: str = ""
    source_file: str = ""
    line_number: int = 0


@dataclass
class ParsedFile:
    """The result of scanning one Makefile."""

    path: str
    directives: list[Directive] = field(default_factory=list)
    target_map: dict[str, int] = field(default_factory=dict)


def is_documentation_line(line: str) -> bool:
    """Return True for lines starting with ``"## "`` or exactly ``"##"``."""
    return line.startswith("## ") or line == "##"


def is_target_line(line: str) -> bool:
    """Return True if the line looks like an unindented, uncommented rule."""
    if line.startswith(("\t", " ")):
        return False
    if line.startswith("#"):
        return False
    return ":" in line


def extract_target_name(line: str) -> str:
    """Return the first target named on a rule line, or ``""`` if there is none.

    Variable assignments such as ``:=`` and ``::=`` are not targets.
    The grouped-target operator ``&:`` is accepted.
    """
    if line.startswith((" ", "\t")):
        return ""

    colon = line.find(":")
    if colon == -1:
        return ""

    if line[colon + 1 : colon + 2] in ("=", ":"):
        return ""

    before_colon = line[:colon]
    if before_colon.endswith("&"):
        before_colon = before_colon[:-1]

    fields = before_colon.split()
    return fields[0] if fields else ""