"""
Minimizer: collapse a token set to one entry per distinct value.

Works in two passes over read-only structures:

    1. Build the token tree (grouped by the structure mode's path) and
       an index from canonical value to candidate CSS names.
    2. Walk the tree depth-first. The first leaf reaching a value emits
       it under the shortest candidate name; later leaves with an equal
       value emit nothing.

Equal-length candidates keep discovery order (the variable list order).
That tie-break is a policy, not a requirement of the format.

IMPORTANT: This module does NOT fetch anything. It works on the
variables it is handed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from tokenexport.model import (
    MinimizedSetOptions,
    SkippedToken,
    TokenExportError,
    Value,
    Variable,
)
from tokenexport.names import PATH_SEPARATOR, to_css_variable_name
from tokenexport.notices import SELECT_MINIMIZED_MODES
from tokenexport.values import canonical_key, to_plain


logger = logging.getLogger(__name__)


class MinimizerConfigError(TokenExportError):
    """Raised when the structure or value mode is not selected."""
    pass


@dataclass(frozen=True)
class TokenLeaf:
    """A tree leaf: the value-mode value and the variable's source path."""
    value: Value
    original: str


@dataclass
class MinimizedSet:
    """Result of a minimization run."""
    tokens: Dict[str, Any] = field(default_factory=dict)
    skipped: List[SkippedToken] = field(default_factory=list)


def _structure_path(variable: Variable, structure_mode_id: str) -> List[str]:
    structure_value = variable.values_by_mode.get(structure_mode_id)
    path = structure_value if isinstance(structure_value, str) else variable.name
    return path.split(PATH_SEPARATOR)


def build_token_tree(
    variables: List[Variable], structure_mode_id: str, value_mode_id: str
) -> Dict[str, Any]:
    """
    Nest variables by their structure-mode path.

    Every segment but the last becomes an object level; the last holds a
    TokenLeaf. A later leaf at the same path replaces the earlier one and
    logs a warning.
    A path running through an existing leaf is dropped. Variables without
    a value-mode value are left out.
    """
    tree: Dict[str, Any] = {}
    for variable in variables:
        if value_mode_id not in variable.values_by_mode:
            continue
        parts = _structure_path(variable, structure_mode_id)
        current = tree
        for part in parts[:-1]:
            node = current.setdefault(part, {})
            if isinstance(node, TokenLeaf):
                logger.warning("Skipping %s: %s is already a token", variable.name, part)
                break
            current = node
        else:
            leaf = current.get(parts[-1])
            if isinstance(leaf, TokenLeaf):
                logger.warning(
                    "%s replaces %s at %s", variable.name, leaf.original, PATH_SEPARATOR.join(parts)
                )
            elif isinstance(leaf, dict):
                logger.warning("%s replaces the group at %s", variable.name, PATH_SEPARATOR.join(parts))
            current[parts[-1]] = TokenLeaf(
                value=variable.values_by_mode[value_mode_id],
                original=variable.name,
            )
    return tree


def build_value_index(
    variables: List[Variable], value_mode_id: str
) -> Mapping[str, Tuple[str, ...]]:
    """Map each canonical value to the CSS names sharing it, in discovery order."""
    index: Dict[str, List[str]] = {}
    for variable in variables:
        if value_mode_id not in variable.values_by_mode:
            continue
        key = canonical_key(variable.values_by_mode[value_mode_id])
        index.setdefault(key, []).append(to_css_variable_name(variable.name))
    return {key: tuple(names) for key, names in index.items()}


def shortest_name(names: Tuple[str, ...]) -> str:
    """First name of minimal length."""
    return min(names, key=len)


def collapse_tree(
    tree: Dict[str, Any],
    index: Mapping[str, Tuple[str, ...]],
    visited: Optional[Set[str]] = None,
    result: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Depth-first walk emitting one entry per distinct value.

    Args:
        tree: Token tree from build_token_tree
        index: Canonical value -> candidate names, from build_value_index
        visited: Canonical values already emitted (updated in place)
        result: Output mapping (updated in place)

    Returns:
        The result mapping
    """
    if visited is None:
        visited = set()
    if result is None:
        result = {}

    for node in tree.values():
        if isinstance(node, TokenLeaf):
            key = canonical_key(node.value)
            if key in visited:
                continue
            names = index.get(key)
            if names:
                result[shortest_name(names)] = to_plain(node.value)
                visited.add(key)
        else:
            collapse_tree(node, index, visited, result)

    return result


class Minimizer:
    """
    Produces the minimized set for one structure/value mode pair.

    Example:
        minimizer = Minimizer(options)
        minimized = minimizer.minimize(variables)
        minimized.tokens  # {"--color-accent-main": {"r": 1, ...}}
    """

    def __init__(self, options: Optional[MinimizedSetOptions]):
        if options is None:
            raise MinimizerConfigError("Minimized set options are required")
        if not options.structure_mode.is_set or not options.value_mode.is_set:
            raise MinimizerConfigError(SELECT_MINIMIZED_MODES)
        self.structure_mode_id = options.structure_mode.mode_id
        self.value_mode_id = options.value_mode.mode_id

    def minimize(self, variables: List[Variable]) -> MinimizedSet:
        minimized = MinimizedSet()
        for variable in variables:
            if self.value_mode_id not in variable.values_by_mode:
                reason = f"no value for mode {self.value_mode_id}"
                logger.warning("Skipping %s: %s", variable.name, reason)
                minimized.skipped.append(SkippedToken(name=variable.name, reason=reason))

        tree = build_token_tree(variables, self.structure_mode_id, self.value_mode_id)
        index = build_value_index(variables, self.value_mode_id)
        minimized.tokens = collapse_tree(tree, index)
        logger.debug(
            "Minimized %d variables to %d tokens", len(variables), len(minimized.tokens)
        )
        return minimized


def minimize_tokens(
    variables: List[Variable], structure_mode_id: str, value_mode_id: str
) -> Dict[str, Any]:
    """Functional shortcut: minimized name -> value mapping."""
    tree = build_token_tree(variables, structure_mode_id, value_mode_id)
    index = build_value_index(variables, value_mode_id)
    return collapse_tree(tree, index)


__all__ = [
    "MinimizerConfigError",
    "TokenLeaf",
    "MinimizedSet",
    "Minimizer",
    "build_token_tree",
    "build_value_index",
    "collapse_tree",
    "minimize_tokens",
    "shortest_name",
]
