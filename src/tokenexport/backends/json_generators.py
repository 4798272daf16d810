"""
JSON-shaped generators: camelCase, dotNotation and W3C.

    camelCase    {"colorBrandPrimary": {...}}
    dotNotation  {"color": {"brand": {"primary": "rgb(255, 0, 0)"}}}
    w3c          {"color": {"brand": {"primary": {"value": ..., "original": "color/brand/primary"}}}}

Each generator returns (tokens, count), where count is the number of
flat pairs placed, before any nesting.
"""

import logging
from typing import Any, Dict, Iterable, Sequence, Tuple

from tokenexport.resolver import ResolvedToken


logger = logging.getLogger(__name__)


def generate_camel_case_tokens(tokens: Iterable[ResolvedToken]) -> Tuple[Dict[str, Any], int]:
    result: Dict[str, Any] = {}
    for token in tokens:
        result[token.name] = token.value
    return result, len(result)


def set_nested_property(tree: Dict[str, Any], path: Sequence[str], value: Any) -> bool:
    """
    Assign `value` at `path`, creating intermediate objects on demand.

    Existing intermediate objects are reused, never replaced. The leaf
    replaces whatever was stored there before.

    Returns:
        False if an intermediate segment already holds a leaf value,
        in which case nothing is written.
    """
    current = tree
    for key in path[:-1]:
        node = current.setdefault(key, {})
        if not isinstance(node, dict):
            return False
        current = node
    current[path[-1]] = value
    return True


def _nest(tokens: Iterable[ResolvedToken], leaf) -> Tuple[Dict[str, Any], int]:
    result: Dict[str, Any] = {}
    count = 0
    for token in tokens:
        if not token.path:
            logger.warning("Skipping token with empty path: %r", token.source_name)
            continue
        if set_nested_property(result, token.path, leaf(token)):
            count += 1
        else:
            logger.warning(
                "Skipping %s: a parent segment is already a token value", token.source_name
            )
    return result, count


def generate_dot_notation_tokens(tokens: Iterable[ResolvedToken]) -> Tuple[Dict[str, Any], int]:
    """Nest tokens by path segment; values are already sanitized text."""
    return _nest(tokens, lambda token: token.value)


def w3c_reference(dotted_path: str) -> str:
    return "{" + dotted_path + "}"


def generate_w3c_tokens(tokens: Iterable[ResolvedToken]) -> Tuple[Dict[str, Any], int]:
    """Nest tokens by path segment, each leaf holding value and source path."""

    def leaf(token: ResolvedToken) -> Dict[str, Any]:
        value = w3c_reference(token.value) if token.is_alias else token.value
        return {"value": value, "original": token.source_name}

    return _nest(tokens, leaf)


def flatten_nested(tree: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """
    Flatten a dotNotation tree back into dotted path -> value pairs.

    Example:
        {"a": {"b": "1"}} -> {"a.b": "1"}
    """
    flat: Dict[str, Any] = {}
    for key, node in tree.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(node, dict):
            flat.update(flatten_nested(node, path))
        else:
            flat[path] = node
    return flat


__all__ = [
    "generate_camel_case_tokens",
    "generate_dot_notation_tokens",
    "generate_w3c_tokens",
    "set_nested_property",
    "flatten_nested",
    "w3c_reference",
]
