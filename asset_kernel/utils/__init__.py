"""Utility modules for the asset kernel."""

from asset_kernel.utils.ids import (
    IdGenerator,
    SequentialIdGenerator,
    UuidIdGenerator,
    is_user_created_global,
)

__all__ = [
    "IdGenerator",
    "SequentialIdGenerator",
    "UuidIdGenerator",
    "is_user_created_global",
]
