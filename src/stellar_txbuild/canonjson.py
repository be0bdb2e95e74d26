"""
Canonical JSON text for XDR-JSON trees.

Keys are sorted and no extra whitespace is emitted so identical trees always
produce identical text. Integers of any size are written as exact JSON number
tokens; parsing keeps them exact and turns fractional numbers into ``Decimal``
so a 64-bit value can never be silently rounded through a float.
"""

import json
from decimal import Decimal
from typing import Any, Union


def dumps_canonical(obj: Any) -> str:
    """
    Encode object as canonical JSON string.

    Args:
        obj: Object to encode (dict, list, str, int, bool, None)

    Returns:
        Canonical JSON string with sorted keys and no extra whitespace

    Raises:
        TypeError: If the tree contains a float or another non-JSON value
    """
    return json.dumps(_canonicalize(obj), separators=(',', ':'), ensure_ascii=False, sort_keys=True)


def loads_lossless(text: Union[str, bytes]) -> Any:
    """Parse JSON text keeping integers exact and fractions as Decimal."""
    return json.loads(text, parse_float=Decimal)


def _canonicalize(v: Any) -> Any:
    if isinstance(v, dict):
        return {str(k): _canonicalize(val) for k, val in v.items()}
    elif isinstance(v, (list, tuple)):
        return [_canonicalize(item) for item in v]
    elif isinstance(v, float):
        raise TypeError(f"Refusing to serialize float {v!r}; use int or Decimal string")
    elif isinstance(v, Decimal):
        if v != v.to_integral_value():
            raise TypeError(f"Refusing to serialize fractional number {v}")
        return int(v)
    else:
        return v


__all__ = ["dumps_canonical", "loads_lossless"]
