"""
asset_config -- single public entrypoint for the seed catalog.

Responsibility:
    Provides the ONLY way to obtain an initial catalog snapshot:
    ``get_seed_state()``.  No other component reads seed files.  YAML
    loading, assembly and validation are internal to this package.

Architecture position:
    Configuration -- YAML-driven seed pipeline.  Sits above the kernel
    domain and beside the store; engines MUST NEVER import from
    ``asset_config``.

Invariants enforced:
    - Load-time validation: the seed must pass ``validate_seed`` before a
      snapshot is produced.
    - Deterministic assembly: the same fragments always give the same
      checksum.

Failure modes:
    - ``FileNotFoundError`` -- no seed set found for the request.
    - ``SeedCatalogError`` -- structural validation failed.
    - ``AssemblyError`` -- fragments missing or lacking identity.
    - ``yaml.YAMLError`` -- invalid YAML syntax.

Audit relevance:
    Every successful ``get_seed_state()`` emits an ``ASSET_CONFIG_TRACE``
    record with the set id, version and checksum, tying a running store
    back to the exact seed it started from.
"""

from __future__ import annotations

import logging
from pathlib import Path

from asset_config.assembler import AssemblyError, assemble_from_directory
from asset_config.schema import SeedCatalogSet
from asset_config.validator import SeedValidationResult, validate_seed
from asset_kernel.domain.state import CatalogState
from asset_kernel.exceptions import SeedCatalogError

_logger = logging.getLogger("asset_kernel.config")

# Default seed sets directory
_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"

DEFAULT_SET_ID = "default"


def load_seed_set(
    config_dir: Path | None = None,
    set_id: str | None = None,
) -> SeedCatalogSet:
    """Assemble and validate a seed set without building a snapshot.

    Args:
        config_dir: Either a directory of seed sets or a single fragment
            directory containing ``root.yaml``.  Defaults to
            ``asset_config/sets/``.
        set_id: Seed set to pick when ``config_dir`` holds several.
            Defaults to the only set present, else ``DEFAULT_SET_ID``.

    Raises:
        FileNotFoundError: If no matching seed set is found.
        SeedCatalogError: If validation reports errors.
    """
    seed = _find_seed_set(config_dir or _DEFAULT_CONFIG_DIR, set_id)

    validation = validate_seed(seed)
    for warning in validation.warnings:
        _logger.warning(
            "seed_validation_warning",
            extra={"set_id": seed.set_id, "detail": warning},
        )
    if not validation.is_valid:
        raise SeedCatalogError(seed.set_id, validation.errors)

    return seed


def get_seed_state(
    config_dir: Path | None = None,
    set_id: str | None = None,
) -> CatalogState:
    """The ONLY public seed entrypoint.

    Returns:
        A validated ``CatalogState`` ready to hand to ``AttributeStore``.

    Raises:
        FileNotFoundError: If no matching seed set is found.
        SeedCatalogError: If validation reports errors.
    """
    seed = load_seed_set(config_dir, set_id)
    state = seed.to_state()

    _logger.info(
        "ASSET_CONFIG_TRACE",
        extra={
            "trace_type": "ASSET_CONFIG_TRACE",
            "seed_set_id": seed.set_id,
            "seed_set_version": seed.version,
            "checksum": seed.checksum,
            "category_count": len(state.categories),
            "global_attribute_count": len(state.global_attributes),
            "manufacturer_count": len(state.manufacturers),
            "max_tree_depth": state.settings.max_tree_depth,
        },
    )
    return state


def _find_seed_set(sets_dir: Path, set_id: str | None) -> SeedCatalogSet:
    """Find the seed set to load under ``sets_dir``.

    Raises:
        FileNotFoundError: If ``sets_dir`` does not exist or no seed set
            matches.
    """
    if not sets_dir.is_dir():
        raise FileNotFoundError(f"Seed sets directory not found: {sets_dir}")

    if (sets_dir / "root.yaml").exists():
        seed = assemble_from_directory(sets_dir)
        if set_id is not None and seed.set_id != set_id:
            raise FileNotFoundError(
                f"Seed set in {sets_dir} is '{seed.set_id}', not '{set_id}'"
            )
        return seed

    candidates = [
        assemble_from_directory(subdir)
        for subdir in sorted(sets_dir.iterdir())
        if subdir.is_dir() and (subdir / "root.yaml").exists()
    ]
    if not candidates:
        raise FileNotFoundError(f"No seed sets found in {sets_dir}")

    wanted = set_id
    if wanted is None:
        if len(candidates) == 1:
            return candidates[0]
        wanted = DEFAULT_SET_ID

    for seed in candidates:
        if seed.set_id == wanted:
            return seed
    raise FileNotFoundError(
        f"No seed set '{wanted}' in {sets_dir}; "
        f"available: {', '.join(s.set_id for s in candidates)}"
    )


__all__ = [
    "AssemblyError",
    "DEFAULT_SET_ID",
    "SeedCatalogSet",
    "SeedValidationResult",
    "get_seed_state",
    "load_seed_set",
    "validate_seed",
]
