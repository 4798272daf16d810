"""
Design Token Export Engine

Converts design-tool variables (collections, modes, aliases) into
design-token documents: CSS custom properties, camelCase maps,
dot-notation and W3C-style trees, and minimized sets.

ARCHITECTURAL GUARANTEE:
------------------------
The engine never reaches into the host directly.
The host variable store is injected as a VariableSource.
Every export request starts from a fresh fetch and shares no state.
"""

__version__ = "0.1.0"
