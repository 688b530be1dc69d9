"""Dispatch raw build errors to their classifier and enrich whole error lists."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence

from bundlediag.classifier.context import CompilationContext
from bundlediag.classifier.image import INVALID_IMAGE_FORMAT, get_image_error
from bundlediag.classifier.not_found import (
    MODULE_NOT_FOUND,
    MissingLocationError,
    get_not_found_error,
)
from bundlediag.models.diagnostic import NOT_APPLICABLE, ClassificationResult, SimpleDiagnostic
from bundlediag.models.errors import RawBuildError
from bundlediag.models.module import module_path_for

logger = logging.getLogger("bundlediag.classifier")

Classifier = Callable[[RawBuildError, CompilationContext, str], Awaitable[ClassificationResult]]


async def _image(
    raw: RawBuildError, context: CompilationContext, module_path: str
) -> ClassificationResult:
    return get_image_error(raw, context, module_path)


_CLASSIFIERS: dict[str, Classifier] = {
    MODULE_NOT_FOUND: get_not_found_error,
    INVALID_IMAGE_FORMAT: _image,
}


def known_kinds() -> list[str]:
    """Discriminants that have a classifier."""
    return sorted(_CLASSIFIERS)


async def classify(
    raw: RawBuildError, context: CompilationContext, module_path: str
) -> ClassificationResult:
    """Classify one raw error.

    Returns a ``SimpleDiagnostic``, ``raw`` unchanged when enrichment was
    declined, or ``NOT_APPLICABLE`` for kinds this package does not handle.
    """
    classifier = _CLASSIFIERS.get(raw.name)
    if classifier is None:
        return NOT_APPLICABLE
    return await classifier(raw, context, module_path)


class ErrorProcessor:
    """Enriches every error of a build, leaving unhandled ones as they are."""

    def __init__(self, context: CompilationContext) -> None:
        self._context = context

    def module_path(self, raw: RawBuildError) -> str:
        if raw.module is None:
            return raw.file_name or ""
        return module_path_for(raw.module, self._context.root_directory)

    async def process_one(self, raw: RawBuildError) -> SimpleDiagnostic | RawBuildError:
        try:
            result = await classify(raw, self._context, self.module_path(raw))
        except MissingLocationError as exc:
            logger.warning("Cannot enrich build error: %s", exc)
            return raw
        if result is NOT_APPLICABLE:
            return raw
        return result

    async def process(
        self, errors: Sequence[RawBuildError]
    ) -> list[SimpleDiagnostic | RawBuildError]:
        """Return a new list with each recognised error replaced by its diagnostic."""
        return [await self.process_one(raw) for raw in errors]
