"""
Core Token Model Objects

Defines the data structures the export engine reads and produces.

These are pure data classes representing:
    - Modes (value columns)
    - Collections (groups of variables sharing modes)
    - Variables (named values, one per mode)
    - Aliases and colors (non-scalar values)
    - Token documents (export output)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about the host plugin runtime
        - Are read-only snapshots fetched per export request
        - Are fully serializable
        - Represent data, not behavior
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union


class TokenExportError(Exception):
    """Base class for every error raised by the export engine."""
    pass


class UnknownExportFormat(TokenExportError):
    """Raised when an export format string is not one of the known formats."""
    pass


@dataclass(frozen=True)
class Color:
    """
    An RGBA color in the host's native channel representation.

    Channels are floats in the range 0..1.

    Example:
        Color(r=1.0, g=0.0, b=0.0) is opaque red.
    """

    r: float
    g: float
    b: float
    a: float = 1.0


@dataclass(frozen=True)
class Alias:
    """
    A value that references another Variable instead of holding a literal.

    Properties:
        id: Identifier of the referenced Variable

    IMPORTANT:
        This object does NOT validate that the target exists.
        Resolution belongs in the resolver layer.
    """

    id: str


Value = Union[int, float, str, bool, Color, Alias]


@dataclass(frozen=True)
class Mode:
    """
    One named column of values within a collection (e.g. Light, Dark).

    A Mode with an empty mode_id is "unset": the UI placeholder
    before the user picked anything.
    """

    mode_id: str
    name: str

    @property
    def is_set(self) -> bool:
        return bool(self.mode_id)


@dataclass
class Variable:
    """
    A named design value with one stored literal or alias per mode.

    Properties:
        id:
            Host identifier (stable, e.g. "VariableID:1:4")

        name:
            Hierarchical path, segments separated by "/"
            Example: "color/brand/primary"

        values_by_mode:
            Mapping from mode id to Value

        resolved_type:
            Host type tag (COLOR, FLOAT, STRING, BOOLEAN), optional

        description:
            Human-readable description, optional
    """

    id: str
    name: str
    values_by_mode: Dict[str, Value] = field(default_factory=dict)
    resolved_type: Optional[str] = None
    description: Optional[str] = None


@dataclass
class VariableCollection:
    """
    A named grouping of Variables sharing a set of Modes.

    INVARIANTS:
        - default_mode_id must be one of modes[].mode_id
        - every id in variable_ids resolves through the source
          or is treated as absent
    """

    id: str
    name: str
    default_mode_id: str
    modes: List[Mode] = field(default_factory=list)
    variable_ids: List[str] = field(default_factory=list)

    def get_mode(self, mode_id: str) -> Optional[Mode]:
        """
        Retrieve a mode by id.

        Args:
            mode_id: Mode identifier

        Returns:
            Mode object or None if not found
        """
        for mode in self.modes:
            if mode.mode_id == mode_id:
                return mode
        return None

    def get_mode_by_name(self, name: str) -> Optional[Mode]:
        """Retrieve a mode by its display name."""
        for mode in self.modes:
            if mode.name == name:
                return mode
        return None

    @property
    def default_mode(self) -> Optional[Mode]:
        return self.get_mode(self.default_mode_id)


class ExportFormat(Enum):
    """Target formats, each selecting one generator."""
    CSS_VAR = "cssVar"
    CAMEL_CASE = "camelCase"
    DOT_NOTATION = "dotNotation"
    W3C = "w3c"
    MINIMIZED_SET = "minimizedSet"

    @classmethod
    def parse(cls, value: Union[str, "ExportFormat"]) -> "ExportFormat":
        """
        Convert a format string (as sent by the UI) to an ExportFormat.

        Raises:
            UnknownExportFormat: If the string names no known format
        """
        if isinstance(value, cls):
            return value
        for fmt in cls:
            if fmt.value == value:
                return fmt
        raise UnknownExportFormat(f"Invalid export format: {value}")

    @property
    def is_nested(self) -> bool:
        return self in (ExportFormat.DOT_NOTATION, ExportFormat.W3C)


class ValueFormat(Enum):
    """Whether resolved values are literals or symbolic references."""
    RAW_VALUE = "rawValue"
    ALIAS_NAME = "aliasName"

    @classmethod
    def parse(cls, value: Union[str, "ValueFormat"]) -> "ValueFormat":
        if isinstance(value, cls):
            return value
        labels = {
            "Raw value": cls.RAW_VALUE,
            "Alias name": cls.ALIAS_NAME,
        }
        if value in labels:
            return labels[value]
        return cls(value)


@dataclass(frozen=True)
class MinimizedSetOptions:
    """
    The two independently selected modes used by the minimizer.

    Properties:
        structure_mode: Supplies the grouping path of each token
        value_mode: Supplies the emitted value and the duplicate key
    """

    structure_mode: Mode
    value_mode: Mode


@dataclass(frozen=True)
class SkippedToken:
    """A variable left out of a document, with the reason."""

    name: str
    reason: str


@dataclass(frozen=True)
class TokenDocument:
    """
    The export result: generated names mapped to resolved values.

    Carries no back-reference to source Variables. Once built it is an
    immutable snapshot; `tokens` is a read-only view.

    Properties:
        export_format: Format the document was generated for
        tokens: Ordered mapping (flat or nested, depending on format)
        count: Number of flat (name, value) pairs emitted
        skipped: Entries dropped during resolution
    """

    export_format: ExportFormat
    tokens: Mapping[str, Any]
    count: int
    skipped: Tuple[SkippedToken, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "tokens", _freeze(self.tokens))

    def to_dict(self) -> Dict[str, Any]:
        """Deep plain-dict copy of the tokens, for rendering."""
        return _thaw(self.tokens)


def _freeze(node: Any) -> Any:
    if isinstance(node, Mapping):
        return MappingProxyType({key: _freeze(child) for key, child in node.items()})
    return node


def _thaw(node: Any) -> Any:
    if isinstance(node, Mapping):
        return {key: _thaw(child) for key, child in node.items()}
    return node
