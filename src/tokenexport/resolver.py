"""
Value Resolver: a variable's value for one mode, shaped for one format.

Under rawValue aliases are followed to the literal they end in.
Under aliasName aliases are replaced by the transformed name of
the final alias target.

Resolution failures (missing mode entry, alias cycle, dangling alias)
are raised as ResolutionError subclasses. They are per-entry problems:
the exporter records them and carries on with the rest of the batch.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Tuple

from tokenexport.model import (
    Alias,
    ExportFormat,
    TokenExportError,
    Value,
    ValueFormat,
    Variable,
)
from tokenexport.names import split_path, transform_name
from tokenexport.values import sanitize_value, to_css_text, to_plain


class ResolutionError(TokenExportError):
    """A single variable could not be resolved for the requested mode."""
    pass


class MissingModeValue(ResolutionError):
    pass


class AliasCycle(ResolutionError):
    pass


class UnresolvedAlias(ResolutionError):
    pass


@dataclass(frozen=True)
class ResolvedToken:
    """
    One resolved (name, value) pair, ready for a generator.

    Properties:
        name: Flat identifier for the export format
        path: Source path segments (used for nesting)
        value: Format-ready value, or the target name when is_alias
        is_alias: True when value is the name of an alias target
        source_name: The variable's original path
    """

    name: str
    path: Tuple[str, ...]
    value: Any
    is_alias: bool
    source_name: str


def serialize_literal(value: Value, export_format: ExportFormat) -> Any:
    """Serialize a literal for the target format."""
    if export_format == ExportFormat.CSS_VAR:
        return to_css_text(value)
    if export_format == ExportFormat.DOT_NOTATION:
        text = value if isinstance(value, str) else to_css_text(value)
        return sanitize_value(text)
    return to_plain(value)


class ValueResolver:
    """
    Resolves variables against a lookup of every known variable.

    Args:
        lookup: Mapping from variable id to Variable. Must contain alias
            targets for aliases to resolve; missing targets raise
            UnresolvedAlias.
    """

    def __init__(self, lookup: Mapping[str, Variable]):
        self.lookup = lookup

    def follow_alias(self, variable: Variable, mode_id: str) -> Tuple[Variable, Value]:
        """
        Follow an alias chain from `variable` for `mode_id`.

        A target with no value for the current mode belongs to another
        collection; the chain continues in that target's first mode.

        Returns:
            (final variable, the literal it holds)

        Raises:
            MissingModeValue: `variable` itself has no value for the mode
            AliasCycle: The chain revisits a variable
            UnresolvedAlias: A target id is not in the lookup
        """
        if mode_id not in variable.values_by_mode:
            raise MissingModeValue(f"{variable.name} has no value for mode {mode_id}")

        current = variable
        value = variable.values_by_mode[mode_id]
        path: List[str] = [variable.id]

        while isinstance(value, Alias):
            if value.id in path:
                chain = " -> ".join(self._names(path + [value.id]))
                raise AliasCycle(f"Alias cycle: {chain}")
            target = self.lookup.get(value.id)
            if target is None or not target.values_by_mode:
                raise UnresolvedAlias(f"{current.name} references unknown variable {value.id}")
            path.append(target.id)
            if mode_id not in target.values_by_mode:
                mode_id = next(iter(target.values_by_mode))
            current = target
            value = target.values_by_mode[mode_id]

        return current, value

    def resolve(
        self,
        variable: Variable,
        mode_id: str,
        value_format: ValueFormat,
        export_format: ExportFormat,
    ) -> ResolvedToken:
        name = transform_name(variable.name, export_format)
        path = split_path(variable.name)
        stored = variable.values_by_mode.get(mode_id)
        target, value = self.follow_alias(variable, mode_id)

        if value_format == ValueFormat.ALIAS_NAME and isinstance(stored, Alias):
            return ResolvedToken(
                name=name,
                path=path,
                value=transform_name(target.name, export_format),
                is_alias=True,
                source_name=variable.name,
            )

        return ResolvedToken(
            name=name,
            path=path,
            value=serialize_literal(value, export_format),
            is_alias=False,
            source_name=variable.name,
        )

    def _names(self, ids: List[str]) -> List[str]:
        names = []
        for variable_id in ids:
            variable = self.lookup.get(variable_id)
            names.append(variable.name if variable else variable_id)
        return names


__all__ = [
    "ResolutionError",
    "MissingModeValue",
    "AliasCycle",
    "UnresolvedAlias",
    "ResolvedToken",
    "ValueResolver",
    "serialize_literal",
]
