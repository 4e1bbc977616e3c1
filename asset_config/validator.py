"""
Seed Validator (``asset_config.validator``).

Responsibility
--------------
Checks an assembled ``SeedCatalogSet`` for structural integrity before it
becomes the runtime snapshot.

Architecture position
---------------------
**Config layer** -- load-time validation.  Called by
``asset_config.get_seed_state()`` after assembly.

Invariants enforced
-------------------
* Identifier uniqueness -- categories, globals, manufacturers, pool
  entries and config entries within one list.
* Tree integrity -- every ``parent_id`` resolves, ``children`` mirrors
  ``parent_id``, and no category is its own ancestor.
* Reference integrity -- every config entry names a body in the matching
  pool of the same category.

Failure modes
-------------
* Errors (``SeedValidationResult.errors``) -> the seed MUST NOT be used.
* Warnings (``SeedValidationResult.warnings``) -> the seed is usable but
  should be reviewed (unused pools, disabled required globals, unknown
  category references on manufacturers).
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from asset_config.schema import SeedCatalogSet


@dataclass
class SeedValidationResult:
    """
    Result of seed validation.

    ``is_valid`` is ``True`` only when ``errors`` is empty.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)


def validate_seed(seed: SeedCatalogSet) -> SeedValidationResult:
    """
    Validate a seed catalog set.

    Returns:
        ``SeedValidationResult`` with errors and warnings.  A seed with
        errors MUST NOT be turned into a runtime snapshot.
    """
    result = SeedValidationResult()

    _validate_uniqueness(seed, result)
    _validate_parent_links(seed, result)
    _validate_children_mirror(seed, result)
    _validate_acyclic(seed, result)
    _validate_config_references(seed, result)
    _validate_pool_keys(seed, result)
    _validate_globals(seed, result)
    _validate_manufacturers(seed, result)

    return result


def _duplicates(ids: Iterable[str]) -> list[str]:
    return sorted(i for i, n in Counter(ids).items() if n > 1)


def _validate_uniqueness(seed: SeedCatalogSet, result: SeedValidationResult) -> None:
    """Check that ids are unique within their collection."""
    for dup in _duplicates(c.id for c in seed.categories):
        result.add_error(f"Duplicate category id: {dup}")
    for dup in _duplicates(a.id for a in seed.global_attributes):
        result.add_error(f"Duplicate global attribute id: {dup}")
    for dup in _duplicates(m.id for m in seed.manufacturers):
        result.add_error(f"Duplicate manufacturer id: {dup}")

    for label, pools in (("system", seed.system_attributes), ("custom", seed.custom_attributes)):
        for category_id, pool in pools.items():
            for dup in _duplicates(a.id for a in pool):
                result.add_error(
                    f"Duplicate {label} attribute id '{dup}' in category '{category_id}'"
                )

    for category in seed.categories:
        for label, configs in (
            ("system", category.system_attributes),
            ("custom", category.custom_attributes),
        ):
            for dup in _duplicates(c.attribute_id for c in configs):
                result.add_error(
                    f"Category '{category.id}' lists {label} attribute '{dup}' more than once"
                )


def _validate_parent_links(seed: SeedCatalogSet, result: SeedValidationResult) -> None:
    ids = {c.id for c in seed.categories}
    for category in seed.categories:
        if category.parent_id and category.parent_id not in ids:
            result.add_error(
                f"Category '{category.id}' has unknown parent '{category.parent_id}'"
            )


def _validate_children_mirror(seed: SeedCatalogSet, result: SeedValidationResult) -> None:
    """``children`` must list exactly the categories whose parent_id points here."""
    by_id = {c.id: c for c in seed.categories}
    for category in seed.categories:
        for child_id in category.children:
            child = by_id.get(child_id)
            if child is None:
                result.add_error(
                    f"Category '{category.id}' lists unknown child '{child_id}'"
                )
            elif child.parent_id != category.id:
                result.add_error(
                    f"Category '{category.id}' lists child '{child_id}' "
                    f"whose parent is '{child.parent_id}'"
                )
        for other in seed.categories:
            if other.parent_id == category.id and other.id not in category.children:
                result.add_error(
                    f"Category '{other.id}' names parent '{category.id}' "
                    "but is missing from its children"
                )


def _validate_acyclic(seed: SeedCatalogSet, result: SeedValidationResult) -> None:
    parents = {c.id: c.parent_id for c in seed.categories}
    reported: set[str] = set()
    for start in parents:
        seen = [start]
        current = parents[start]
        while current and current in parents:
            if current in seen:
                cycle = seen[seen.index(current):]
                key = min(cycle)
                if key not in reported:
                    reported.add(key)
                    result.add_error(
                        "Category cycle: " + " -> ".join(cycle + [current])
                    )
                break
            seen.append(current)
            current = parents[current]


def _validate_config_references(seed: SeedCatalogSet, result: SeedValidationResult) -> None:
    """Every config entry must name a body in its own category's pool."""
    for category in seed.categories:
        for label, configs, pools in (
            ("system", category.system_attributes, seed.system_attributes),
            ("custom", category.custom_attributes, seed.custom_attributes),
        ):
            pool_ids = {a.id for a in pools.get(category.id, ())}
            for config in configs:
                if config.attribute_id not in pool_ids:
                    result.add_error(
                        f"Category '{category.id}' references {label} attribute "
                        f"'{config.attribute_id}' with no body in its pool"
                    )


def _validate_pool_keys(seed: SeedCatalogSet, result: SeedValidationResult) -> None:
    ids = {c.id for c in seed.categories}
    for label, pools in (("system", seed.system_attributes), ("custom", seed.custom_attributes)):
        for category_id in pools:
            if category_id not in ids:
                result.add_warning(
                    f"{label.capitalize()} attribute pool for unknown category '{category_id}'"
                )


def _validate_globals(seed: SeedCatalogSet, result: SeedValidationResult) -> None:
    for attribute in seed.global_attributes:
        if attribute.is_required and not attribute.is_enabled:
            result.add_warning(
                f"Global attribute '{attribute.id}' is required but disabled"
            )


def _validate_manufacturers(seed: SeedCatalogSet, result: SeedValidationResult) -> None:
    ids = {c.id for c in seed.categories}
    for manufacturer in seed.manufacturers:
        for dup in _duplicates(m.id for m in manufacturer.models):
            result.add_error(
                f"Manufacturer '{manufacturer.id}' lists model '{dup}' more than once"
            )
        for category_id in manufacturer.used_by_categories:
            if category_id not in ids:
                result.add_warning(
                    f"Manufacturer '{manufacturer.id}' is used by unknown category "
                    f"'{category_id}'"
                )
