"""Ordering of files, categories and targets in a :class:`HelpModel`.

Three strategies are supported:

* alphabetical (the default), case-insensitive;
* discovery order, keeping the order in which items were first seen;
* an explicit category order, with categories not listed appended
  alphabetically. An explicit order takes precedence over keeping the
  discovery order of categories.

When files are sorted alphabetically the entry-point file stays first.
"""

from __future__ import annotations

from collections.abc import Iterable

from .model import Category, FileDoc, HelpModel, Target


class UnknownCategoryError(ValueError):
    """Raised when an explicit category order names a category that does not exist."""

    def __init__(self, category_name: str, available: Iterable[str]) -> None:
        self.category_name = category_name
        self.available = list(available)
        super().__init__(
            f"unknown category {category_name!r}; "
            f"available categories: {', '.join(repr(n) for n in self.available)}"
        )


def _sort_categories_alphabetically(categories: list[Category]) -> None:
    categories.sort(key=lambda c: c.name.lower())


def _sort_categories_by_discovery_order(categories: list[Category]) -> None:
    categories.sort(key=lambda c: c.discovery_order)


def _sort_targets_alphabetically(targets: list[Target]) -> None:
    targets.sort(key=lambda t: t.name.lower())


def _sort_targets_by_discovery_order(targets: list[Target]) -> None:
    targets.sort(key=lambda t: t.discovery_order)


def _sort_files_alphabetically(files: list[FileDoc]) -> None:
    files.sort(key=lambda f: (not f.is_entry_point, f.source_file.lower()))


def _sort_files_by_discovery_order(files: list[FileDoc]) -> None:
    files.sort(key=lambda f: f.discovery_order)


def _apply_explicit_category_order(help_model: HelpModel, order: Iterable[str]) -> None:
    order = list(order)
    by_name = {category.name: category for category in help_model.categories}

    for name in order:
        if name not in by_name:
            raise UnknownCategoryError(name, sorted(by_name))

    ordered: list[Category] = []
    used: set[str] = set()
    for name in order:
        if name not in used:
            ordered.append(by_name[name])
            used.add(name)

    remaining = [c for c in help_model.categories if c.name not in used]
    _sort_categories_alphabetically(remaining)
    help_model.categories = ordered + remaining


class OrderingService:
    """Applies the configured ordering to a help model in place."""

    def __init__(
        self,
        keep_order_categories: bool = False,
        keep_order_targets: bool = False,
        keep_order_files: bool = False,
        category_order: Iterable[str] | None = None,
    ) -> None:
        self.keep_order_categories = keep_order_categories
        self.keep_order_targets = keep_order_targets
        self.keep_order_files = keep_order_files
        self.category_order = tuple(category_order or ())

    def apply_ordering(self, help_model: HelpModel) -> None:
        """Order files, categories and the targets of every category.

        Raises :class:`UnknownCategoryError` if the explicit category order
        names a category that is not in the model.
        """
        self._order_files(help_model)
        self._order_categories(help_model)
        for category in help_model.categories:
            self._order_targets(category)

    def _order_categories(self, help_model: HelpModel) -> None:
        if self.category_order:
            _apply_explicit_category_order(help_model, self.category_order)
        elif self.keep_order_categories:
            _sort_categories_by_discovery_order(help_model.categories)
        else:
            _sort_categories_alphabetically(help_model.categories)

    def _order_targets(self, category: Category) -> None:
        if self.keep_order_targets:
            _sort_targets_by_discovery_order(category.targets)
        else:
            _sort_targets_alphabetically(category.targets)

    def _order_files(self, help_model: HelpModel) -> None:
        if not help_model.file_docs:
            return
        if self.keep_order_files:
            _sort_files_by_discovery_order(help_model.file_docs)
        else:
            _sort_files_alphabetically(help_model.file_docs)

    def __repr__(self) -> str:
        return (
            f"OrderingService(keep_order_categories={self.keep_order_categories}, "
            f"keep_order_targets={self.keep_order_targets}, "
            f"keep_order_files={self.keep_order_files}, "
            f"category_order={list(self.category_order)})"
        )