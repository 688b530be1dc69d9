"""Invalid image imports: point at the importing line of the page."""

from __future__ import annotations

from bundlediag.classifier.context import CompilationContext
from bundlediag.formatting.emphasis import Style
from bundlediag.graph.trace import get_module_trace
from bundlediag.models.diagnostic import NOT_APPLICABLE, ClassificationResult, SimpleDiagnostic
from bundlediag.models.errors import RawBuildError

INVALID_IMAGE_FORMAT = "InvalidImageFormatError"
TITLE = "Error"


def find_import_line(source: str, imported_file: str) -> int:
    """Zero-based index of the first line mentioning ``imported_file``.

    With no match the index of the last line segment is returned, i.e. the
    number of newlines in ``source``.
    """
    lines = source.split("\n")
    for index, line in enumerate(lines):
        if imported_file in line:
            return index
    return len(lines) - 1


def page_path(raw_request: str, private_prefix: str, public_prefix: str) -> str:
    if raw_request.startswith(private_prefix):
        return public_prefix + raw_request[len(private_prefix) :]
    return raw_request


def get_image_error(
    raw: RawBuildError, context: CompilationContext, module_path: str | None = None
) -> ClassificationResult:
    """Enrich an invalid-image error using the nearest importer."""
    if raw.name != INVALID_IMAGE_FORMAT:
        return NOT_APPLICABLE

    trace = get_module_trace(raw.module, context.graph.get_issuer)
    if not trace:
        return NOT_APPLICABLE
    origin, module = trace[0].origin, trace[0].module

    imported_file = module.raw_request or raw.file_name
    if not imported_file:
        return NOT_APPLICABLE

    settings = context.settings
    page = page_path(
        origin.raw_request or "", settings.private_pages_prefix, settings.public_pages_prefix
    )
    source = origin.original_source() or ""
    line_number = find_import_line(source, imported_file)

    emph = context.emph
    label = f"{emph.emphasize(page, Style.PATH)}:{emph.emphasize(str(line_number), Style.POSITION)}"
    message = emph.emphasize(TITLE, Style.ERROR, Style.BOLD) + (
        f': Image import "{imported_file}" is not a valid image file. '
        "The image may be corrupted or an unsupported format."
    )
    return SimpleDiagnostic(label=label, title=TITLE, message=message)
