"""
Serialization helpers for variable snapshots (collections, variables, values).

Provides JSON/YAML round-trip via an intermediate dict representation,
and an in-memory VariableSource built from a snapshot so exports can run
without the host.

Snapshot layout:

    collections: [{id, name, default_mode_id, modes: [{mode_id, name}], variable_ids}]
    variables:   [{id, name, values_by_mode: {mode_id: value}, resolved_type, description}]

Values: scalars as-is, colors as {r, g, b, a},
aliases as {type: VARIABLE_ALIAS, id}.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

from tokenexport.model import (
    Alias,
    Color,
    Mode,
    TokenExportError,
    Value,
    Variable,
    VariableCollection,
)
from tokenexport.source import VariableSource
from tokenexport.values import ALIAS_TYPE, to_plain


class SnapshotError(TokenExportError):
    """Raised when snapshot data is malformed."""
    pass


def value_to_dict(v: Value) -> Any:
    return to_plain(v)


def value_from_dict(d: Any) -> Value:
    if isinstance(d, dict):
        if d.get("type") == ALIAS_TYPE:
            return Alias(id=d["id"])
        if {"r", "g", "b"} <= set(d):
            return Color(r=d["r"], g=d["g"], b=d["b"], a=d.get("a", 1.0))
        raise SnapshotError(f"Unsupported value mapping: {d}")
    if isinstance(d, (bool, int, float, str)):
        return d
    raise SnapshotError(f"Unsupported value type: {type(d).__name__}")


def mode_to_dict(m: Mode) -> Dict[str, Any]:
    return {"mode_id": m.mode_id, "name": m.name}


def mode_from_dict(d: Dict[str, Any]) -> Mode:
    return Mode(mode_id=d["mode_id"], name=d.get("name", ""))


def variable_to_dict(v: Variable) -> Dict[str, Any]:
    return {
        "id": v.id,
        "name": v.name,
        "values_by_mode": {mode_id: value_to_dict(value) for mode_id, value in v.values_by_mode.items()},
        "resolved_type": v.resolved_type,
        "description": v.description,
    }


def variable_from_dict(d: Dict[str, Any]) -> Variable:
    return Variable(
        id=d["id"],
        name=d["name"],
        values_by_mode={mode_id: value_from_dict(value) for mode_id, value in d.get("values_by_mode", {}).items()},
        resolved_type=d.get("resolved_type"),
        description=d.get("description"),
    )


def collection_to_dict(c: VariableCollection) -> Dict[str, Any]:
    return {
        "id": c.id,
        "name": c.name,
        "default_mode_id": c.default_mode_id,
        "modes": [mode_to_dict(m) for m in c.modes],
        "variable_ids": list(c.variable_ids),
    }


def collection_from_dict(d: Dict[str, Any]) -> VariableCollection:
    modes = [mode_from_dict(m) for m in d.get("modes", [])]
    default_mode_id = d.get("default_mode_id") or (modes[0].mode_id if modes else "")
    if modes and default_mode_id not in {m.mode_id for m in modes}:
        raise SnapshotError(
            f"Collection {d.get('name')!r}: default mode {default_mode_id!r} is not one of its modes"
        )
    return VariableCollection(
        id=d["id"],
        name=d.get("name", ""),
        default_mode_id=default_mode_id,
        modes=modes,
        variable_ids=list(d.get("variable_ids", [])),
    )


Snapshot = Tuple[List[VariableCollection], List[Variable]]


def snapshot_to_dict(collections: Iterable[VariableCollection], variables: Iterable[Variable]) -> Dict[str, Any]:
    return {
        "collections": [collection_to_dict(c) for c in collections],
        "variables": [variable_to_dict(v) for v in variables],
    }


def snapshot_from_dict(d: Dict[str, Any]) -> Snapshot:
    if not isinstance(d, dict):
        raise SnapshotError("Snapshot must be a mapping")
    try:
        collections = [collection_from_dict(c) for c in d.get("collections", [])]
        variables = [variable_from_dict(v) for v in d.get("variables", [])]
    except (KeyError, TypeError, AttributeError) as e:
        raise SnapshotError(f"Malformed snapshot: {e}") from e
    return collections, variables


def snapshot_to_json(collections: Iterable[VariableCollection], variables: Iterable[Variable]) -> str:
    return json.dumps(snapshot_to_dict(collections, variables), sort_keys=True)


def snapshot_from_json(s: str) -> Snapshot:
    return snapshot_from_dict(json.loads(s))


def snapshot_to_yaml(collections: Iterable[VariableCollection], variables: Iterable[Variable]) -> str:
    return yaml.safe_dump(snapshot_to_dict(collections, variables), sort_keys=False)


def snapshot_from_yaml(s: str) -> Snapshot:
    return snapshot_from_dict(yaml.safe_load(s))


class InMemoryVariableSource(VariableSource):
    """
    VariableSource backed by snapshot objects.

    Example:
        source = InMemoryVariableSource.from_yaml(text)
        result = await process_variables(source, collection, mode, "cssVar", "rawValue")
    """

    def __init__(self, collections: Iterable[VariableCollection], variables: Iterable[Variable]):
        self.collections: Dict[str, VariableCollection] = {c.id: c for c in collections}
        self.variables: Dict[str, Variable] = {v.id: v for v in variables}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "InMemoryVariableSource":
        return cls(*snapshot_from_dict(d))

    @classmethod
    def from_json(cls, s: str) -> "InMemoryVariableSource":
        return cls(*snapshot_from_json(s))

    @classmethod
    def from_yaml(cls, s: str) -> "InMemoryVariableSource":
        return cls(*snapshot_from_yaml(s))

    async def list_collections(self) -> List[VariableCollection]:
        return list(self.collections.values())

    async def get_collection_by_id(self, collection_id: str) -> Optional[VariableCollection]:
        return self.collections.get(collection_id)

    async def get_variable_by_id(self, variable_id: str) -> Optional[Variable]:
        return self.variables.get(variable_id)


__all__ = [
    "SnapshotError",
    "InMemoryVariableSource",
    "value_to_dict",
    "value_from_dict",
    "mode_to_dict",
    "mode_from_dict",
    "variable_to_dict",
    "variable_from_dict",
    "collection_to_dict",
    "collection_from_dict",
    "snapshot_to_dict",
    "snapshot_from_dict",
    "snapshot_to_json",
    "snapshot_from_json",
    "snapshot_to_yaml",
    "snapshot_from_yaml",
]
