#!/usr/bin/env python3
"""
Show the asset form for a category, or the whole category tree.

Usage:
    python3 scripts/show_form.py --category boiler
    python3 scripts/show_form.py --category combi-boiler --with-category-field
    python3 scripts/show_form.py --category boiler --json
    python3 scripts/show_form.py --tree

Examples:
    # Form buckets for a seed category, against a different seed set
    python3 scripts/show_form.py --category pump --config-dir path/to/sets --set-id site-a
"""

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

W = 72


def banner(title: str) -> None:
    print()
    print("=" * W)
    print(f"  {title}")
    print("=" * W)


def print_tree(nodes, indent: int = 0) -> None:
    for node in nodes:
        print(f"  {'  ' * indent}{node.name} ({node.id})")
        print_tree(node.children, indent + 1)


def print_form(organized) -> None:
    for bucket in organized.BUCKETS:
        entries = getattr(organized, bucket)
        banner(f"{bucket.upper()} ({len(entries)})")
        for attribute in entries:
            flags = "*" if attribute.is_required else " "
            units = f" [{attribute.units}]" if attribute.units else ""
            print(
                f"  {flags} {attribute.label:<32} {attribute.type.value:<9}"
                f"{attribute.source.value}{units}"
            )


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Show the organized asset form for a category.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--category", type=str, help="Category id to organize")
    group.add_argument("--tree", action="store_true", help="Print the category tree")
    parser.add_argument(
        "--with-category-field", action="store_true",
        help="Include the category search field in asset info",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Output the organized buckets as JSON",
    )
    parser.add_argument(
        "--config-dir", type=Path, default=None,
        help="Seed sets directory or a single seed set directory",
    )
    parser.add_argument("--set-id", type=str, default=None, help="Seed set id")
    parser.add_argument("--verbose", action="store_true", help="Emit JSON logs to stderr")

    args = parser.parse_args()

    from asset_config import get_seed_state
    from asset_engines import build_category_tree
    from asset_kernel.exceptions import SeedCatalogError
    from asset_kernel.logging_config import configure_logging
    from asset_kernel.services import AttributeStore

    if args.verbose:
        configure_logging(level=logging.DEBUG)
    else:
        logging.disable(logging.CRITICAL)

    try:
        state = get_seed_state(args.config_dir, args.set_id)
    except (FileNotFoundError, SeedCatalogError) as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 1

    if args.tree:
        banner("CATEGORY TREE")
        print_tree(build_category_tree(state))
        return 0

    store = AttributeStore(state)
    if store.get_category(args.category) is None:
        print(f"  ERROR: Unknown category: {args.category}", file=sys.stderr)
        return 1

    organized = store.organize_attributes_for_form(
        args.category, include_category_field=args.with_category_field
    )
    if args.json:
        print(json.dumps(organized.as_dict(), indent=2))
        return 0

    path = " > ".join(c.name for c in store.get_category_path(args.category))
    banner(f"FORM: {path}")
    print_form(organized)
    return 0


if __name__ == "__main__":
    sys.exit(main())
