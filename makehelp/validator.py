"""Categorization rules and lookup helpers for a :class:`HelpModel`."""

from __future__ import annotations

from .model import UNCATEGORIZED_CATEGORY_NAME, Category, HelpModel, Target

# Targets generated by the help tool itself; they are regenerated anyway,
# so they never count towards mixed categorization.
_GENERATED_HELP_TARGETS = frozenset({"help", "update-help"})


class MixedCategorizationError(ValueError):
    """Raised when categorized and uncategorized targets are mixed."""

    def __init__(self, message: str, uncategorized_targets: list[str] | None = None) -> None:
        super().__init__(message)
        self.uncategorized_targets = list(uncategorized_targets or [])


def validate_categorization(model: HelpModel, default_category: str = "") -> None:
    """Check that targets are not split between categorized and uncategorized.

    Mixing is allowed when a default category is given, since the
    uncategorized targets will be moved into it.
    """
    if not model.has_categories:
        return

    categorized_count = 0
    uncategorized: list[str] = []
    for category in model.categories:
        names = [t.name for t in category.targets if t.name not in _GENERATED_HELP_TARGETS]
        if category.name == UNCATEGORIZED_CATEGORY_NAME:
            uncategorized.extend(names)
        else:
            categorized_count += len(names)

    if categorized_count and uncategorized and not default_category:
        raise MixedCategorizationError(
            "found both categorized and uncategorized targets\n"
            f"Uncategorized targets: {', '.join(uncategorized)}",
            uncategorized,
        )


def apply_default_category(model: HelpModel, default_category: str) -> None:
    """Move all uncategorized targets into ``default_category``, in place."""
    if not default_category:
        return

    empty_index = -1
    default_cat: Category | None = None
    for index, category in enumerate(model.categories):
        if category.name == UNCATEGORIZED_CATEGORY_NAME:
            empty_index = index
        if category.name == default_category:
            default_cat = category

    if empty_index < 0:
        return
    empty = model.categories[empty_index]
    if not empty.targets:
        return

    if default_cat is None:
        model.categories.append(
            Category(
                name=default_category,
                targets=empty.targets,
                discovery_order=empty.discovery_order,
            )
        )
    else:
        default_cat.targets.extend(empty.targets)

    del model.categories[empty_index]


def count_targets_by_category(model: HelpModel) -> dict[str, int]:
    """Return the number of targets in each category, keyed by name."""
    return {category.name: len(category.targets) for category in model.categories}


def get_category_names(model: HelpModel) -> list[str]:
    """Return the names of all named (non-empty) categories."""
    return [c.name for c in model.categories if c.name != UNCATEGORIZED_CATEGORY_NAME]


def has_category(model: HelpModel, name: str) -> bool:
    """Return True if a category with ``name`` exists."""
    return any(category.name == name for category in model.categories)


def get_target(model: HelpModel, name: str) -> Target | None:
    """Find a target by name across all categories, or return None."""
    for category in model.categories:
        for target in category.targets:
            if target.name == name:
                return target
    return None


def get_target_count(model: HelpModel) -> int:
    """Return the total number of targets in the model."""
    return sum(len(category.targets) for category in model.categories)