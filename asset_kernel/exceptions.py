"""
Typed exception hierarchy for the asset kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

The attribute store never raises for a mutation that cannot be applied.
Instead every mutation returns a ``MutationResult`` whose ``error`` holds
one of the exceptions below.  Callers that want exceptions call
``result.raise_for_status()``; callers that want values branch on
``result.status``.  Either way the failure is identified by TYPE and by a
machine-readable CODE, never by parsing a message.

Example:
    result = store.toggle_global_attribute("global-category")
    if result.status is MutationStatus.LOCKED:
        show_hint(result.error.code)          # REQUIRED_ATTRIBUTE_LOCKED

    try:
        store.delete_attribute("sys-flue", "boiler").raise_for_status()
    except SystemAttributeLockedError as e:
        log.warning("locked", extra={"attribute_id": e.attribute_id})

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    AssetKernelError (base)
    |
    +-- NotFoundError
    |   +-- CategoryNotFoundError
    |   +-- AttributeNotFoundError
    |   +-- GlobalAttributeNotFoundError
    |   +-- ManufacturerNotFoundError
    |   +-- ModelNotFoundError
    |
    +-- LockedError
    |   +-- SystemAttributeLockedError
    |   +-- RequiredAttributeLockedError
    |
    +-- TreeError
    |   +-- OrphanedAncestorError
    |   +-- CategoryCycleError
    |   +-- CategoryDepthExceededError
    |
    +-- SeedCatalogError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category    | Code                        | When
------------|-----------------------------|------------------------------------
NotFound    | CATEGORY_NOT_FOUND          | Category id does not resolve
            | ATTRIBUTE_NOT_FOUND         | No such attribute/config in category
            | GLOBAL_ATTRIBUTE_NOT_FOUND  | Global attribute id does not resolve
            | MANUFACTURER_NOT_FOUND      | Manufacturer id does not resolve
            | MODEL_NOT_FOUND             | Model id not on that manufacturer
------------|-----------------------------|------------------------------------
Locked      | SYSTEM_ATTRIBUTE_LOCKED     | Edit/delete of a predefined attribute
            | REQUIRED_ATTRIBUTE_LOCKED   | Toggle of a required global attribute
------------|-----------------------------|------------------------------------
Tree        | ORPHANED_ANCESTOR           | parent_id does not resolve mid-walk
            | CATEGORY_CYCLE              | Walk revisits a category
            | CATEGORY_DEPTH_EXCEEDED     | Walk exceeds the depth bound
------------|-----------------------------|------------------------------------
Seed        | SEED_CATALOG_INVALID        | Seed set fails structural validation

Tree errors are never raised by the engines: a broken chain terminates the
walk and is logged.  They exist so the seed validator and log records can
name the condition precisely.
"""


class AssetKernelError(Exception):
    """
    Base exception for all asset kernel errors.

    All subclasses carry a ``code`` class attribute for machine-readable
    identification.
    """

    code: str = "ASSET_KERNEL_ERROR"


# ---------------------------------------------------------------------------
# Not found
# ---------------------------------------------------------------------------


class NotFoundError(AssetKernelError):
    """Base exception for unresolvable identifiers."""

    code: str = "NOT_FOUND"


class CategoryNotFoundError(NotFoundError):
    """Category with given ID was not found."""

    code: str = "CATEGORY_NOT_FOUND"

    def __init__(self, category_id: str):
        self.category_id = category_id
        super().__init__(f"Category not found: {category_id}")


class AttributeNotFoundError(NotFoundError):
    """Attribute (or its config entry) was not found in a category."""

    code: str = "ATTRIBUTE_NOT_FOUND"

    def __init__(self, attribute_id: str, category_id: str):
        self.attribute_id = attribute_id
        self.category_id = category_id
        super().__init__(
            f"Attribute {attribute_id} not found in category {category_id}"
        )


class GlobalAttributeNotFoundError(NotFoundError):
    """Global attribute with given ID was not found."""

    code: str = "GLOBAL_ATTRIBUTE_NOT_FOUND"

    def __init__(self, attribute_id: str):
        self.attribute_id = attribute_id
        super().__init__(f"Global attribute not found: {attribute_id}")


class ManufacturerNotFoundError(NotFoundError):
    """Manufacturer with given ID was not found."""

    code: str = "MANUFACTURER_NOT_FOUND"

    def __init__(self, manufacturer_id: str):
        self.manufacturer_id = manufacturer_id
        super().__init__(f"Manufacturer not found: {manufacturer_id}")


class ModelNotFoundError(NotFoundError):
    """Model was not found on the given manufacturer."""

    code: str = "MODEL_NOT_FOUND"

    def __init__(self, model_id: str, manufacturer_id: str):
        self.model_id = model_id
        self.manufacturer_id = manufacturer_id
        super().__init__(
            f"Model {model_id} not found on manufacturer {manufacturer_id}"
        )


# ---------------------------------------------------------------------------
# Locked
# ---------------------------------------------------------------------------


class LockedError(AssetKernelError):
    """Base exception for changes the target does not permit."""

    code: str = "LOCKED"


class SystemAttributeLockedError(LockedError):
    """Predefined attributes can only be toggled or marked preferred."""

    code: str = "SYSTEM_ATTRIBUTE_LOCKED"

    def __init__(self, attribute_id: str, category_id: str):
        self.attribute_id = attribute_id
        self.category_id = category_id
        super().__init__(
            f"System attribute {attribute_id} in category {category_id} "
            "cannot be edited or deleted"
        )


class RequiredAttributeLockedError(LockedError):
    """Required global attributes stay enabled."""

    code: str = "REQUIRED_ATTRIBUTE_LOCKED"

    def __init__(self, attribute_id: str):
        self.attribute_id = attribute_id
        super().__init__(f"Required global attribute cannot be toggled: {attribute_id}")


# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------


class TreeError(AssetKernelError):
    """Base exception for category tree shape problems."""

    code: str = "TREE_ERROR"


class OrphanedAncestorError(TreeError):
    """A category's parent_id does not resolve."""

    code: str = "ORPHANED_ANCESTOR"

    def __init__(self, category_id: str, parent_id: str):
        self.category_id = category_id
        self.parent_id = parent_id
        super().__init__(
            f"Category {category_id} references missing parent {parent_id}"
        )


class CategoryCycleError(TreeError):
    """An ancestor walk revisited a category."""

    code: str = "CATEGORY_CYCLE"

    def __init__(self, category_id: str, chain: tuple[str, ...]):
        self.category_id = category_id
        self.chain = chain
        super().__init__(
            f"Ancestor walk from {category_id} does not terminate: "
            + " -> ".join(chain)
        )


class CategoryDepthExceededError(TreeError):
    """An ancestor walk reached the depth bound before a root."""

    code: str = "CATEGORY_DEPTH_EXCEEDED"

    def __init__(self, category_id: str, max_depth: int):
        self.category_id = category_id
        self.max_depth = max_depth
        super().__init__(
            f"Ancestor walk from {category_id} exceeded {max_depth} levels"
        )


# ---------------------------------------------------------------------------
# Seed
# ---------------------------------------------------------------------------


class SeedCatalogError(AssetKernelError):
    """The seed catalog failed structural validation."""

    code: str = "SEED_CATALOG_INVALID"

    def __init__(self, set_id: str, errors: list[str]):
        self.set_id = set_id
        self.errors = errors
        super().__init__(
            f"Seed catalog '{set_id}' is invalid:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )
