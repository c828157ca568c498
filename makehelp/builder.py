"""Construction of a :class:`HelpModel` from scanned Makefiles."""

from __future__ import annotations

import heapq
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from .directives import Directive, DirectiveType, ParsedFile
from .model import Category, FileDoc, HelpModel, Target, Variable
from .summary import Extractor
from .validator import apply_default_category, validate_categorization

_RESET_CATEGORY = "_"


@dataclass
class BuilderConfig:
    """Settings that control which targets end up in the help model.

    ``phony_targets`` holds the names declared ``.PHONY``, ``dependencies``
    maps each target to its prerequisites and ``recipe_targets`` holds the
    names of targets that have a recipe. The last three are used to detect
    implicit aliases.
    """

    default_category: str = ""
    include_targets: Sequence[str] = field(default_factory=list)
    include_all_phony: bool = False
    phony_targets: set[str] = field(default_factory=set)
    dependencies: Mapping[str, Sequence[str]] = field(default_factory=dict)
    recipe_targets: set[str] = field(default_factory=set)


def parse_var_directive(value: str) -> Variable:
    """Parse a ``!var`` value of the form ``NAME - description`` or ``NAME``."""
    name, sep, description = value.partition(" - ")
    if sep:
        return Variable(name=name.strip(), description=description.strip())
    return Variable(name=value.strip(), description="")


def parse_alias_directive(value: str) -> list[str]:
    """Parse a ``!alias`` value of the form ``a, b, c``; empty entries are dropped."""
    return [alias for alias in (part.strip() for part in value.split(",")) if alias]


@dataclass
class _Pending:
    docs: list[str] = field(default_factory=list)
    variables: list[Variable] = field(default_factory=list)
    aliases: list[str] = field(default_factory=list)
    not_alias: bool = False

    def clear_content(self) -> None:
        self.docs = []
        self.variables = []
        self.aliases = []


@dataclass
class _BuildState:
    model: HelpModel
    categories: dict[str, Category] = field(default_factory=dict)
    targets: dict[str, Target] = field(default_factory=dict)
    target_category: dict[str, str] = field(default_factory=dict)
    file_docs: dict[str, FileDoc] = field(default_factory=dict)
    category_order: int = 0
    target_order: int = 0
    file_order: int = 0

    def ensure_category(self, name: str) -> Category:
        category = self.categories.get(name)
        if category is None:
            category = Category(name=name, discovery_order=self.category_order)
            self.category_order += 1
            self.categories[name] = category
        return category


class Builder:
    """Builds a :class:`HelpModel` from parsed files.

    Directives are associated with the target that follows them in the
    file; ``!category`` switches the category for all later targets of the
    same file, and ``!category _`` switches back to uncategorized. When a
    target appears in several files, the first definition wins.
    """

    def __init__(self, config: BuilderConfig | None = None) -> None:
        self.config = config if config is not None else BuilderConfig()
        self._extractor = Extractor()
        self._not_alias: set[str] = set()

    def not_alias_targets(self) -> frozenset[str]:
        """Return the targets marked with a ``!notalias`` directive."""
        return frozenset(self._not_alias)

    def build(self, parsed_files: Iterable[ParsedFile]) -> HelpModel:
        """Build the help model.

        Raises :class:`~makehelp.validator.MixedCategorizationError` when
        categorized and uncategorized targets are mixed and no default
        category is configured.
        """
        state = _BuildState(model=HelpModel())
        for parsed in parsed_files:
            self._process_file(parsed, state)

        state.model.file_docs = sorted(state.file_docs.values(), key=lambda f: f.discovery_order)

        implicit_aliases = self._detect_implicit_aliases(state.targets)

        for name, target in state.targets.items():
            if name in implicit_aliases:
                continue
            if not self._should_include(target):
                continue
            target.aliases.extend(
                alias for alias, aliased in implicit_aliases.items() if aliased == name
            )
            target.is_phony = name in self.config.phony_targets
            target.summary = self._extractor.extract(target.documentation)
            state.ensure_category(state.target_category[name]).targets.append(target)

        state.model.categories = list(state.categories.values())

        validate_categorization(state.model, self.config.default_category)
        if state.model.has_categories and self.config.default_category:
            apply_default_category(state.model, self.config.default_category)

        return state.model

    def _should_include(self, target: Target) -> bool:
        if target.documentation:
            return True
        if target.name in self.config.include_targets:
            return True
        return self.config.include_all_phony and target.name in self.config.phony_targets

    def _detect_implicit_aliases(self, targets: Mapping[str, Target]) -> dict[str, str]:
        """Map each implicit alias to the target it stands for.

        An implicit alias is an undocumented ``.PHONY`` target, not marked
        ``!notalias``, with no recipe and exactly one prerequisite that is
        itself ``.PHONY``.
        """
        phony = self.config.phony_targets
        aliases: dict[str, str] = {}
        for name, target in targets.items():
            if target.documentation or name in self._not_alias or name not in phony:
                continue
            deps = self.config.dependencies.get(name, ())
            if len(deps) != 1 or deps[0] not in phony:
                continue
            if name in self.config.recipe_targets:
                continue
            aliases[name] = deps[0]
        return aliases

    def _process_file(self, parsed: ParsedFile, state: _BuildState) -> None:
        """Merge directives and targets of one file in line order.

        Directives accumulate until the next target, which receives them.
        On equal line numbers the target is handled first.
        """
        target_lines = sorted(parsed.target_map.items(), key=lambda item: item[1])
        events = heapq.merge(
            ((line, name) for name, line in target_lines),
            ((d.line_number, d) for d in parsed.directives),
            key=lambda event: event[0],
        )

        current_category = ""
        pending = _Pending()

        for line, item in events:
            if isinstance(item, Directive):
                current_category = self._apply_directive(
                    item, parsed.path, state, pending, current_category
                )
                continue

            name = item
            if name in state.targets:
                pending.clear_content()
                continue

            state.targets[name] = Target(
                name=name,
                aliases=pending.aliases,
                documentation=pending.docs,
                variables=pending.variables,
                discovery_order=state.target_order,
                source_file=parsed.path,
                line_number=line,
            )
            state.target_order += 1
            state.target_category[name] = current_category
            if pending.not_alias:
                self._not_alias.add(name)
            pending.clear_content()
            pending.not_alias = False

    def _apply_directive(
        self,
        directive: Directive,
        path: str,
        state: _BuildState,
        pending: _Pending,
        current_category: str,
    ) -> str:
        kind = directive.type
        if kind is DirectiveType.FILE:
            if directive.value:
                file_doc = state.file_docs.get(path)
                if file_doc is None:
                    file_doc = FileDoc(
                        source_file=path,
                        discovery_order=state.file_order,
                        is_entry_point=state.file_order == 0,
                    )
                    state.file_order += 1
                    state.file_docs[path] = file_doc
                if file_doc.documentation:
                    file_doc.documentation.append("")
                file_doc.documentation.append(directive.value)
        elif kind is DirectiveType.CATEGORY:
            state.model.has_categories = True
            if directive.value == _RESET_CATEGORY:
                return ""
            state.ensure_category(directive.value)
            return directive.value
        elif kind is DirectiveType.DOC:
            pending.docs.append(directive.value)
        elif kind is DirectiveType.VAR:
            pending.variables.append(parse_var_directive(directive.value))
        elif kind is DirectiveType.ALIAS:
            pending.aliases.extend(parse_alias_directive(directive.value))
        elif kind is DirectiveType.NOT_ALIAS:
            pending.not_alias = True
        return current_category