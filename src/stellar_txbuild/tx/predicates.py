"""
Claim predicate trees.

A claim predicate gates who may claim a claimable balance and when. Trees are
represented by the frozen variants below and compiled directly, node by node,
into the ``ClaimPredicate`` union of the XDR-JSON representation.

Accepted dict input forms (``parse_predicate``)::

    "unconditional" / {"unconditional": True}
    {"and": [p, q]}  {"or": [p, q]}  {"not": p}
    {"before_relative_time": 3600}  {"before_absolute_time": 1700000000}

plus the build form's wrappers: ``{"conditional": p}``, ``{"time": leaf}``
and the ``{"relative": n}`` / ``{"absolute": n}`` leaves.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple, Union

from ..runtime.errors import InvalidPredicate


@dataclass(frozen=True)
class Unconditional:
    pass


@dataclass(frozen=True)
class And:
    children: Tuple["Predicate", ...]


@dataclass(frozen=True)
class Or:
    children: Tuple["Predicate", ...]


@dataclass(frozen=True)
class Not:
    child: "Predicate"


@dataclass(frozen=True)
class BeforeRelativeTime:
    """Claimable until ``seconds`` after the balance is created."""

    seconds: int


@dataclass(frozen=True)
class BeforeAbsoluteTime:
    """Claimable until the given unix timestamp."""

    timestamp: int


Predicate = Union[Unconditional, And, Or, Not, BeforeRelativeTime, BeforeAbsoluteTime]

_PREDICATE_TYPES = (Unconditional, And, Or, Not, BeforeRelativeTime, BeforeAbsoluteTime)

_ALIASES = {
    "beforeRelativeTime": "before_relative_time",
    "beforeAbsoluteTime": "before_absolute_time",
    "relative": "before_relative_time",
    "absolute": "before_absolute_time",
}


def _time_value(value: Any, tag: str) -> int:
    if isinstance(value, bool):
        raise InvalidPredicate(f"'{tag}' must be an integer", field="predicate")
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        value = int(value.strip())
    if not isinstance(value, int):
        raise InvalidPredicate(f"'{tag}' must be an integer, got {value!r}", field="predicate")
    return value


def _children(value: Any, tag: str) -> Tuple[Predicate, ...]:
    if not isinstance(value, (list, tuple)) or not value:
        raise InvalidPredicate(f"'{tag}' predicate needs at least one child", field="predicate")
    return tuple(parse_predicate(child) for child in value)


def parse_predicate(value: Any) -> Predicate:
    """
    Parse a predicate from its dict / string input form.

    Args:
        value: Predicate variant, the string ``"unconditional"`` or a single-key dict

    Returns:
        Predicate variant tree

    Raises:
        InvalidPredicate: If a node has no recognized tag, more than one tag,
            an empty ``and`` / ``or``, or a non-integer time
    """
    if isinstance(value, _PREDICATE_TYPES):
        return value
    if value == "unconditional":
        return Unconditional()
    if not isinstance(value, Mapping) or len(value) != 1:
        raise InvalidPredicate(f"Predicate node must have exactly one tag, got {value!r}",
                               field="predicate")

    (tag, inner), = value.items()
    tag = _ALIASES.get(tag, tag)
    if tag == "unconditional":
        return Unconditional()
    if tag in ("conditional", "time"):
        return parse_predicate(inner)
    if tag == "and":
        return And(_children(inner, tag))
    if tag == "or":
        return Or(_children(inner, tag))
    if tag == "not":
        if inner is None:
            raise InvalidPredicate("'not' predicate needs a child", field="predicate")
        return Not(parse_predicate(inner))
    if tag == "before_relative_time":
        return BeforeRelativeTime(_time_value(inner, tag))
    if tag == "before_absolute_time":
        return BeforeAbsoluteTime(_time_value(inner, tag))
    raise InvalidPredicate(f"Unknown predicate tag {tag!r}", field="predicate")


def compile_predicate(value: Any) -> Union[str, Dict[str, Any]]:
    """
    Compile a predicate into its ``ClaimPredicate`` wire node.

    Accepts anything ``parse_predicate`` accepts.
    """
    predicate = parse_predicate(value)
    if isinstance(predicate, Unconditional):
        return "unconditional"
    if isinstance(predicate, And):
        return {"and": [compile_predicate(c) for c in predicate.children]}
    if isinstance(predicate, Or):
        return {"or": [compile_predicate(c) for c in predicate.children]}
    if isinstance(predicate, Not):
        return {"not": compile_predicate(predicate.child)}
    if isinstance(predicate, BeforeRelativeTime):
        return {"before_relative_time": predicate.seconds}
    return {"before_absolute_time": predicate.timestamp}


def decompile_predicate(node: Union[str, Mapping[str, Any]]) -> Predicate:
    """Inverse of ``compile_predicate`` for decoded ``ClaimPredicate`` nodes."""
    if node == "unconditional":
        return Unconditional()
    if isinstance(node, Mapping) and node.get("not", ...) is None:
        raise InvalidPredicate("'not' predicate without a child cannot be represented",
                               field="predicate")
    return parse_predicate(node)


def predicate_to_dict(predicate: Predicate) -> Union[str, Dict[str, Any]]:
    """Render a predicate in its plain dict form (same as the wire node)."""
    return compile_predicate(predicate)


__all__ = [
    "Predicate",
    "Unconditional",
    "And",
    "Or",
    "Not",
    "BeforeRelativeTime",
    "BeforeAbsoluteTime",
    "parse_predicate",
    "compile_predicate",
    "decompile_predicate",
    "predicate_to_dict",
]
