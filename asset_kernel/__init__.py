"""
Asset Kernel - attribute configuration core

An in-memory configuration store for hierarchical asset attributes with:
- A category tree with per-category system and custom attributes
- Global attributes shared by every asset
- Explicit mutation outcomes instead of silent no-ops
- Structured, traceable logging
"""

__version__ = "0.1.0"
