"""
Canonical JSON Serialization

The persisted form of a flint is its two bounds and its status tag. Bounds
are written with float.hex so they survive a round trip bit for bit, which
decimal repr of a float does not promise across implementations.
"""

import json
from typing import Any, List, Union

from .flint import Flint


def _encode(obj: Any) -> Any:
    if isinstance(obj, Flint):
        return obj.to_canonical()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def canonical_dumps(obj: Any, indent: int = None) -> str:
    """
    Canonical JSON serialization with sorted keys.

    Flints anywhere inside obj are written in their canonical dict form.

    Args:
        obj: Flint, or a JSON-compatible structure holding flints
        indent: Indentation level (None for compact)

    Returns:
        Canonical JSON string
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(',', ':') if indent is None else None,
        indent=indent,
        default=_encode,
    )


def _decode(d: dict) -> Any:
    if set(d) == {"lo", "hi", "status"}:
        return Flint.from_canonical(d)
    return d


def canonical_loads(text: str) -> Union[Flint, List[Any], dict]:
    """Parse canonical JSON, turning every flint dict back into a Flint."""
    return json.loads(text, object_hook=_decode)
