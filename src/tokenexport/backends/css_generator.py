"""
CSS custom-property generator.

Converts resolved tokens into a single rule of custom-property
declarations:

    :root {
      --spacing-small: 4;
      --color-text: var(--color-brand-primary);
    }
"""

from typing import Dict, Iterable, Mapping

from tokenexport.resolver import ResolvedToken


def css_reference(name: str) -> str:
    """Wrap a custom-property name in var()."""
    return f"var({name})"


def generate_css_tokens(tokens: Iterable[ResolvedToken]) -> Dict[str, str]:
    """
    Build the ordered name -> declaration value mapping.

    Declarations keep input order. A later token with the same name
    replaces the value but keeps the first position.
    """
    result: Dict[str, str] = {}
    for token in tokens:
        value = css_reference(token.value) if token.is_alias else token.value
        result[token.name] = value
    return result


def render_css(tokens: Mapping[str, str], selector: str = ":root", indent: str = "  ") -> str:
    """
    Render name -> value pairs as a CSS rule.

    Args:
        tokens: Mapping produced by generate_css_tokens
        selector: Rule selector wrapping the declarations
        indent: Indentation of each declaration

    Returns:
        CSS text, without a trailing newline
    """
    lines = [f"{selector} {{"]
    for name, value in tokens.items():
        lines.append(f"{indent}{name}: {value};")
    lines.append("}")
    return "\n".join(lines)


__all__ = ["css_reference", "generate_css_tokens", "render_css"]
