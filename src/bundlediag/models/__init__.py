"""Pydantic and dataclass domain models for bundlediag."""

from bundlediag.models.diagnostic import NOT_APPLICABLE, ClassificationResult, SimpleDiagnostic
from bundlediag.models.errors import (
    DependencyRef,
    RawBuildError,
    SourcePosition,
    SourceRange,
    UnderlyingError,
)
from bundlediag.models.module import BuildModule, Module, RequestShortener, module_path_for

__all__ = [
    "NOT_APPLICABLE",
    "BuildModule",
    "ClassificationResult",
    "DependencyRef",
    "Module",
    "RawBuildError",
    "RequestShortener",
    "SimpleDiagnostic",
    "SourcePosition",
    "SourceRange",
    "UnderlyingError",
    "module_path_for",
]
