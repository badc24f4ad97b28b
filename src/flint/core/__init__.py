"""
Core Module - The Flint Value

Provides:
- Flint, the rounded interval value, and its status tag
- Canonical JSON serialization (persisted bounds + status)
"""

from .flint import (
    Flint,
    FlintStatus,
    as_flint,
    absorb,
)
from .canonical_json import canonical_dumps, canonical_loads

__all__ = [
    'Flint',
    'FlintStatus',
    'as_flint',
    'absorb',
    'canonical_dumps',
    'canonical_loads',
]
