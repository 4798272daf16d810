"""
Example token collections for demos and tests.

Builds a small two-collection setup:
    - "Primitives" (one mode): raw palette colors and spacing steps
    - "Theme" (Light/Dark): semantic tokens aliasing the primitives
"""
from typing import List, Tuple

from tokenexport.model import Alias, Color, Mode, Variable, VariableCollection


RED = Color(r=1.0, g=0.0, b=0.0)
WHITE = Color(r=1.0, g=1.0, b=1.0)
NEAR_BLACK = Color(r=0.1, g=0.1, b=0.1)


def build_primitives() -> Tuple[VariableCollection, List[Variable]]:
    mode = Mode(mode_id="1:0", name="Value")
    variables = [
        Variable(id="VariableID:1:1", name="palette/red/500", values_by_mode={mode.mode_id: RED}, resolved_type="COLOR"),
        Variable(id="VariableID:1:2", name="palette/white", values_by_mode={mode.mode_id: WHITE}, resolved_type="COLOR"),
        Variable(id="VariableID:1:3", name="palette/gray/900", values_by_mode={mode.mode_id: NEAR_BLACK}, resolved_type="COLOR"),
        Variable(id="VariableID:1:4", name="spacing/small", values_by_mode={mode.mode_id: 4}, resolved_type="FLOAT"),
        Variable(id="VariableID:1:5", name="spacing/medium", values_by_mode={mode.mode_id: 8}, resolved_type="FLOAT"),
        Variable(id="VariableID:1:6", name="font/family/body", values_by_mode={mode.mode_id: "Inter"}, resolved_type="STRING"),
    ]
    collection = VariableCollection(
        id="VariableCollectionId:1:0",
        name="Primitives",
        default_mode_id=mode.mode_id,
        modes=[mode],
        variable_ids=[v.id for v in variables],
    )
    return collection, variables


def build_theme() -> Tuple[VariableCollection, List[Variable]]:
    light = Mode(mode_id="2:0", name="Light")
    dark = Mode(mode_id="2:1", name="Dark")

    def themed(variable_id, name, light_value, dark_value, resolved_type="COLOR"):
        return Variable(
            id=variable_id,
            name=name,
            values_by_mode={light.mode_id: light_value, dark.mode_id: dark_value},
            resolved_type=resolved_type,
        )

    variables = [
        themed("VariableID:2:1", "color/brand/primary", Alias("VariableID:1:1"), Alias("VariableID:1:1")),
        themed("VariableID:2:2", "color/background", Alias("VariableID:1:2"), Alias("VariableID:1:3")),
        themed("VariableID:2:3", "color/text", Alias("VariableID:1:3"), Alias("VariableID:1:2")),
        themed("VariableID:2:4", "color/accent/main", RED, RED),
        themed("VariableID:2:5", "layout/gap", Alias("VariableID:1:4"), Alias("VariableID:1:5"), "FLOAT"),
    ]
    collection = VariableCollection(
        id="VariableCollectionId:2:0",
        name="Theme",
        default_mode_id=light.mode_id,
        modes=[light, dark],
        variable_ids=[v.id for v in variables],
    )
    return collection, variables


def build_example_snapshot() -> Tuple[List[VariableCollection], List[Variable]]:
    """Both collections and all their variables."""
    primitives, primitive_vars = build_primitives()
    theme, theme_vars = build_theme()
    return [primitives, theme], primitive_vars + theme_vars
