"""Module-not-found errors: map to the original location and show the import trace."""

from __future__ import annotations

import re

from bundlediag.classifier.context import CompilationContext
from bundlediag.formatting.emphasis import Emphasizer, Style
from bundlediag.graph.trace import format_import_trace, get_module_trace
from bundlediag.models.diagnostic import NOT_APPLICABLE, ClassificationResult, SimpleDiagnostic
from bundlediag.models.errors import RawBuildError

MODULE_NOT_FOUND = "ModuleNotFoundError"
TITLE = "Module not found"

_IN_PATH_RE = re.compile(r" in '.*?'")
_CANT_RESOLVE_RE = re.compile(r"Can't resolve '(.*)'")


class MissingLocationError(ValueError):
    """Raised when a module-not-found error carries no location at all."""

    def __init__(self, error_name: str) -> None:
        self.error_name = error_name
        super().__init__(
            f"{error_name} has neither a location nor a dependency with a location"
        )


def rewrite_message(message: str, emph: Emphasizer) -> str:
    """Drop the `` in '<dir>'`` clause and emphasise the unresolved request."""
    message = _IN_PATH_RE.sub("", message, count=1)
    return _CANT_RESOLVE_RE.sub(
        lambda m: f"Can't resolve '{emph.emphasize(m.group(1), Style.IDENTIFIER)}'",
        message,
        count=1,
    )


async def get_not_found_error(
    raw: RawBuildError, context: CompilationContext, module_path: str
) -> ClassificationResult:
    """Enrich a module-not-found error.

    Returns ``NOT_APPLICABLE`` for other kinds and ``raw`` itself when the
    location cannot be mapped back to original source.
    """
    if raw.name != MODULE_NOT_FOUND:
        return NOT_APPLICABLE

    loc = raw.first_location()
    if loc is None:
        raise MissingLocationError(raw.name)

    original_source = raw.module.original_source() if raw.module is not None else None

    resolved = await context.resolver.resolve(
        loc.start.line,
        loc.start.column,
        original_source,
        context.root_directory,
        module_path,
    )
    if resolved is None:
        return raw

    emph = context.emph
    message = rewrite_message(raw.error.message, emph)
    frame = resolved.code_frame
    import_trace = format_import_trace(
        get_module_trace(raw.module, context.graph.get_issuer),
        context.shortener,
        context.internal_loader_re,
    )

    body = (
        emph.emphasize(TITLE, Style.ERROR, Style.BOLD)
        + f": {message}"
        + "\n"
        + frame
        + ("\n" if frame != "" else "")
        + import_trace
        + f"\n{context.settings.docs_url}"
    )
    line = "" if resolved.line is None else str(resolved.line)
    column = "" if resolved.column is None else str(resolved.column)
    label = (
        f"{emph.emphasize(module_path, Style.PATH)}"
        f":{emph.emphasize(line, Style.POSITION)}"
        f":{emph.emphasize(column, Style.POSITION)}"
    )
    return SimpleDiagnostic(label=label, title=TITLE, message=body)
