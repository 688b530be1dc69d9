"""Build error classification and diagnostic rendering."""

from bundlediag.classifier.context import CompilationContext
from bundlediag.classifier.dispatch import ErrorProcessor, classify, known_kinds
from bundlediag.classifier.image import get_image_error
from bundlediag.classifier.not_found import MissingLocationError, get_not_found_error

__all__ = [
    "CompilationContext",
    "ErrorProcessor",
    "MissingLocationError",
    "classify",
    "get_image_error",
    "get_not_found_error",
    "known_kinds",
]
