"""
Token export pipeline.

    VariableSource -> VariableSourceAdapter -> ValueResolver -> generator -> TokenDocument -> text

export_tokens() is the synchronous core: variables in, TokenDocument out.
process_variables() is the full request: re-fetch the collection, fetch
its variables and alias targets, export, render, notify.

Failures never propagate out of a request. Input problems become a
notice and no document; per-variable problems are logged and recorded
in TokenDocument.skipped.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from tokenexport.backends import (
    generate_camel_case_tokens,
    generate_css_tokens,
    generate_dot_notation_tokens,
    generate_w3c_tokens,
    render_css,
)
from tokenexport.minimizer import Minimizer, MinimizerConfigError
from tokenexport.model import (
    ExportFormat,
    MinimizedSetOptions,
    Mode,
    SkippedToken,
    TokenDocument,
    UnknownExportFormat,
    ValueFormat,
    Variable,
    VariableCollection,
)
from tokenexport.notices import (
    COLLECTION_FETCH_FAILED,
    SELECT_COLLECTION_AND_MODE,
    TOKENS_COPIED,
    Notifier,
    log_notice,
)
from tokenexport.resolver import ResolutionError, ResolvedToken, ValueResolver
from tokenexport.settings import DEFAULT_SETTINGS, ExportSettings
from tokenexport.source import VariableSource, VariableSourceAdapter


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportResult:
    """A document plus its clipboard-ready text."""
    document: TokenDocument
    text: str


def resolve_tokens(
    variables: List[Variable],
    mode_id: str,
    value_format: ValueFormat,
    export_format: ExportFormat,
    lookup: Optional[Mapping[str, Variable]] = None,
) -> Tuple[List[ResolvedToken], List[SkippedToken]]:
    """
    Resolve every variable for one mode, skipping the ones that fail.

    Returns:
        (resolved tokens in input order, skipped entries)
    """
    if lookup is None:
        lookup = {v.id: v for v in variables}
    resolver = ValueResolver(lookup)

    resolved: List[ResolvedToken] = []
    skipped: List[SkippedToken] = []
    for variable in variables:
        try:
            resolved.append(resolver.resolve(variable, mode_id, value_format, export_format))
        except ResolutionError as e:
            logger.warning("Skipping %s: %s", variable.name, e)
            skipped.append(SkippedToken(name=variable.name, reason=str(e)))
    return resolved, skipped


def generate_document(
    tokens: List[ResolvedToken],
    export_format: ExportFormat,
    skipped: List[SkippedToken],
) -> TokenDocument:
    """Route resolved tokens to the generator for export_format."""
    if export_format == ExportFormat.CSS_VAR:
        result: Dict[str, Any] = generate_css_tokens(tokens)
        count = len(result)
    elif export_format == ExportFormat.CAMEL_CASE:
        result, count = generate_camel_case_tokens(tokens)
    elif export_format == ExportFormat.DOT_NOTATION:
        result, count = generate_dot_notation_tokens(tokens)
    elif export_format == ExportFormat.W3C:
        result, count = generate_w3c_tokens(tokens)
    else:
        raise UnknownExportFormat(f"No generator for {export_format.value}")
    return TokenDocument(
        export_format=export_format, tokens=result, count=count, skipped=tuple(skipped)
    )


def export_tokens(
    variables: List[Variable],
    collection: Optional[VariableCollection],
    mode: Optional[Mode],
    export_format: Union[ExportFormat, str],
    value_format: Union[ValueFormat, str],
    minimized_set_options: Optional[MinimizedSetOptions] = None,
    *,
    lookup: Optional[Mapping[str, Variable]] = None,
    notifier: Optional[Notifier] = None,
) -> Optional[TokenDocument]:
    """
    Export variables of one collection and mode as a TokenDocument.

    Args:
        variables: Variables to export (already fetched, absent ones removed)
        collection: Selected collection
        mode: Selected mode
        export_format: ExportFormat or its string value
        value_format: ValueFormat, its string value or its UI label
        minimized_set_options: Required for the minimized-set format only
        lookup: id -> Variable for alias targets outside `variables`
        notifier: Receives user-facing notices

    Returns:
        TokenDocument, or None if the request was invalid (a notice
        explains why)
    """
    notify = notifier or log_notice

    if collection is None or mode is None or not mode.is_set:
        notify(SELECT_COLLECTION_AND_MODE)
        return None

    try:
        export_format = ExportFormat.parse(export_format)
        value_format = ValueFormat.parse(value_format)
    except (UnknownExportFormat, ValueError) as e:
        logger.error("%s", e)
        notify(str(e))
        return None

    if export_format == ExportFormat.MINIMIZED_SET:
        try:
            minimizer = Minimizer(minimized_set_options)
        except MinimizerConfigError as e:
            notify(str(e))
            return None
        minimized = minimizer.minimize(variables)
        return TokenDocument(
            export_format=export_format,
            tokens=minimized.tokens,
            count=len(minimized.tokens),
            skipped=tuple(minimized.skipped),
        )

    resolved, skipped = resolve_tokens(
        variables, mode.mode_id, value_format, export_format, lookup=lookup
    )
    document = generate_document(resolved, export_format, skipped)
    logger.debug(
        "Exported %d tokens from %s (%s) as %s, %d skipped",
        document.count, collection.name, mode.name, export_format.value, len(skipped),
    )
    return document


def render_document(document: TokenDocument, settings: ExportSettings = DEFAULT_SETTINGS) -> str:
    """
    Render a document as clipboard text.

    cssVar renders as a CSS rule; every other format as JSON.
    """
    if document.export_format == ExportFormat.CSS_VAR:
        return render_css(document.tokens, selector=settings.css_selector, indent=settings.css_indent)
    return json.dumps(document.to_dict(), indent=settings.json_indent)


async def list_collections(source: VariableSource) -> List[VariableCollection]:
    """Collections available for export; empty if the source fails."""
    return await VariableSourceAdapter(source).list_collections()


async def process_variables(
    source: VariableSource,
    collection: Optional[VariableCollection],
    mode: Optional[Mode],
    export_format: Union[ExportFormat, str],
    value_format: Union[ValueFormat, str],
    minimized_set_options: Optional[MinimizedSetOptions] = None,
    *,
    notifier: Optional[Notifier] = None,
    settings: ExportSettings = DEFAULT_SETTINGS,
) -> Optional[ExportResult]:
    """
    Run one export request end to end.

    The collection is fetched again from the source so the export sees
    the current variable list. All lookups finish before any token is
    resolved.

    Returns:
        ExportResult, or None if the request was aborted (a notice
        explains why)
    """
    notify = notifier or log_notice

    if collection is None or mode is None or not mode.is_set:
        notify(SELECT_COLLECTION_AND_MODE)
        return None

    adapter = VariableSourceAdapter(source)
    current = await adapter.get_collection(collection.id)
    if current is None:
        notify(COLLECTION_FETCH_FAILED)
        return None

    variables = await adapter.fetch_variables(current)
    lookup = await adapter.fetch_alias_targets(variables)

    document = export_tokens(
        variables,
        current,
        mode,
        export_format,
        value_format,
        minimized_set_options,
        lookup=lookup,
        notifier=notify,
    )
    if document is None:
        return None

    notify(TOKENS_COPIED.format(document.count))
    return ExportResult(document=document, text=render_document(document, settings))


__all__ = [
    "ExportResult",
    "export_tokens",
    "generate_document",
    "list_collections",
    "process_variables",
    "render_document",
    "resolve_tokens",
]
