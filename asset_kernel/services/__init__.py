"""
Imperative shell of the asset kernel.

The store is the only component that replaces the catalog snapshot;
everything it reads goes through the pure engines.
"""

from asset_kernel.services.attribute_store import AttributeStore

__all__ = ["AttributeStore"]
