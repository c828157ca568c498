"""Core data structures for help documentation.

The hierarchy is::

    HelpModel
    ├── file_docs: list[FileDoc]       # !file documentation
    └── categories: list[Category]
        └── targets: list[Target]
            ├── aliases: list[str]     # !alias directives
            └── variables: list[Variable]  # !var directives

Categories, targets and file docs carry a ``discovery_order`` recording
when each was first seen while parsing, so that the discovery order can be
kept instead of sorting alphabetically.
"""

from __future__ import annotations

from dataclasses import dataclass, field

UNCATEGORIZED_CATEGORY_NAME = ""
"""Category name for targets without an explicit ``!category``."""


@dataclass
class Variable:
    """A documented environment variable associated with a target."""

    name: str = ""
    description: str = ""


@dataclass
class Target:
    """A documented Makefile target."""

    name: str = ""
    aliases: list[str] = field(default_factory=list)
    documentation: list[str] = field(default_factory=list)
    summary: str = ""
    variables: list[Variable] = field(default_factory=list)
    discovery_order: int = 0
    source_file: str = ""
    line_number: int = 0
    is_phony: bool = False


@dataclass
class Category:
    """A group of related targets; the empty name is the uncategorized group."""

    name: str = UNCATEGORIZED_CATEGORY_NAME
    targets: list[Target] = field(default_factory=list)
    discovery_order: int = 0


@dataclass
class FileDoc:
    """File-level documentation for one Makefile.

    Several ``!file`` blocks in the same file are concatenated with a blank
    line between them.
    """

    source_file: str = ""
    documentation: list[str] = field(default_factory=list)
    discovery_order: int = 0
    is_entry_point: bool = False


@dataclass
class HelpModel:
    """The complete help documentation gathered from all Makefiles."""

    file_docs: list[FileDoc] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
    has_categories: bool = False
    default_category: str = ""