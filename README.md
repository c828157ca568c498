# makehelp

`makehelp` reads Makefiles annotated with `##` documentation comments and
builds a structured help model: documented targets grouped into categories,
with their one-sentence summaries, aliases and environment variables.

## Documentation syntax

```make
## !file Main project Makefile
## !category Build
## Build the project. Compiles every source file.
## !var DEBUG - Enable debug mode
## !alias b, compile
build:
	go build ./...

## !notalias
test: test.unit
```

* `## text` (or a bare `##`) documents the target that follows directly.
  A blank line, an assignment, a comment or a recipe line between the
  comment and the target discards it.
* `## !file <text>` adds file-level documentation. A `!file` line without
  text adds nothing. Several `!file` lines in one file are joined with a
  blank line between them.
* `## !category <name>` puts the following targets of the same file in a
  category; `## !category _` returns to uncategorized.
* `## !var NAME - description` (or just `NAME`) documents an environment
  variable.
* `## !alias a, b` lists alternative names; empty entries are dropped.
* `## !notalias` stops an undocumented target from being treated as an
  implicit alias (see below).

Target lines are unindented lines containing `:`. The first name before the
colon is taken (`all build:` gives `all`), the grouped-target operator `&:`
is accepted, and assignments such as `:=` and `::=` are not targets.

## Usage

```python
from makehelp.scanner import Scanner
from makehelp.builder import Builder, BuilderConfig
from makehelp.ordering import OrderingService

scanner = Scanner()
parsed = [scanner.scan_file("Makefile")]

builder = Builder(BuilderConfig(default_category="Other"))
help_model = builder.build(parsed)

OrderingService(keep_order_categories=False, keep_order_targets=False,
                keep_order_files=False, category_order=[]).apply_ordering(help_model)

for category in help_model.categories:
    print(category.name or "(uncategorized)")
    for target in category.targets:
        print(f"  {target.name}: {target.summary}")
```

`Scanner.scan_content(content, path)` scans text already in memory.
When several files are passed to `Builder.build`, the first definition of a
target wins.

### Which targets are included

A target appears in the model if it is documented, if its name is listed in
`BuilderConfig.include_targets`, or if `include_all_phony` is set and the
name is in `phony_targets`.

An undocumented target in `phony_targets`, not marked `!notalias`, that is
not in `recipe_targets` and whose only entry in `dependencies` is itself in
`phony_targets`, is folded into that prerequisite as an alias.
`Builder.not_alias_targets()` returns the names marked `!notalias`.

### Summaries and ordering

Summaries are the first sentence of a target's documentation, with Markdown
headers, emphasis, code, links and HTML tags removed
(`makehelp.summary.Extractor`). Ellipses and periods inside words such as
`127.0.0.1` do not end a sentence.

`OrderingService` sorts categories and targets case-insensitively by name,
or keeps their discovery order (`keep_order_categories`,
`keep_order_targets`). `category_order` puts the named categories first and
the rest alphabetically after them. Files are sorted by path with the entry
point first, or kept in discovery order with `keep_order_files`.

`makehelp.validator` also offers `count_targets_by_category`,
`get_category_names`, `has_category`, `get_target` and `get_target_count`.

## Errors

* `makehelp.validator.MixedCategorizationError` is raised by
  `Builder.build` (and `validate_categorization`) when some targets have a
  category and others do not, and no default category is given. Targets
  named `help` and `update-help` are not counted.
* `makehelp.ordering.UnknownCategoryError` is raised by `apply_ordering`
  when `category_order` names a category that does not exist.
* `Scanner.scan_file` raises `OSError` when the file cannot be read.

## What it does not do

`makehelp` is a library only. It has no command-line tool and does not
render help text. It does not follow `include` lines, and it does not read
`.PHONY` declarations, prerequisites or recipes from a Makefile: the
caller fills `phony_targets`, `dependencies` and `recipe_targets` in
`BuilderConfig`.

## Development

```
pip install -e .[test]
pytest
```