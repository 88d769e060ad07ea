"""Pure helpers shared by every Data Access Layer implementation."""

from __future__ import annotations

import copy
from typing import Any, Dict


class Increment:
    """Field transform: add `amount` to the stored number (missing counts as 0)."""

    def __init__(self, amount: float):
        self.amount = amount

    def apply(self, current: Any) -> float:
        base = current if isinstance(current, (int, float)) and not isinstance(current, bool) else 0
        return base + self.amount

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Increment) and other.amount == self.amount

    def __repr__(self) -> str:
        return f"Increment({self.amount!r})"


def validate_path(path: str) -> list[str]:
    """Split a document path into segments, rejecting empty or relative ones."""
    segments = path.split("/")
    for segment in segments:
        if segment in ("", ".", ".."):
            raise ValueError(f"Invalid document path: {path!r}")
    return segments


def collection_of(path: str) -> str:
    """Return the collection part of a document path ("users/u1" -> "users")."""
    segments = validate_path(path)
    if len(segments) < 2:
        raise ValueError(f"Document path has no collection: {path!r}")
    return "/".join(segments[:-1])


def deep_merge(base: Dict[str, Any] | None, updates: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge `updates` into a copy of `base`.

    Nested mappings are merged key by key, every other value (lists included)
    replaces what was stored. `Increment` values are resolved against the
    stored value.
    """
    merged = copy.deepcopy(base) if base else {}
    for key, value in updates.items():
        if isinstance(value, Increment):
            merged[key] = value.apply(merged.get(key))
        elif isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = resolve(value)
    return merged


def resolve(value: Any) -> Any:
    """Return a plain copy of `value` with any `Increment` replaced by its amount."""
    if isinstance(value, Increment):
        return value.apply(None)
    if isinstance(value, dict):
        return {k: resolve(v) for k, v in value.items()}
    if isinstance(value, list):
        return [resolve(v) for v in value]
    return value


def apply_updates(document: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply dotted-path field updates to a copy of `document`.

    `{"stats.totalPoints": Increment(10)}` adds 10 to `document["stats"]["totalPoints"]`;
    a plain value replaces the field, creating intermediate maps as needed.
    """
    updated = copy.deepcopy(document)
    for dotted, value in updates.items():
        keys = dotted.split(".")
        target = updated
        for key in keys[:-1]:
            if not isinstance(target.get(key), dict):
                target[key] = {}
            target = target[key]
        leaf = keys[-1]
        if isinstance(value, Increment):
            target[leaf] = value.apply(target.get(leaf))
        else:
            target[leaf] = resolve(value)
    return updated
