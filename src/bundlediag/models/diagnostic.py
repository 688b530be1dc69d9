"""Structured diagnostics and the classification outcome type."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel

from bundlediag.models.errors import RawBuildError


class SimpleDiagnostic(BaseModel):
    """A label/message pair for the consuming reporter.

    ``label`` is the rendered ``file:line:column`` and ``message`` the full
    body, title line included.
    """

    label: str
    title: str
    message: str

    def __str__(self) -> str:
        return f"{self.label}\n{self.message}"


class _NotApplicable(Enum):
    NOT_APPLICABLE = "not-applicable"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_APPLICABLE"


NOT_APPLICABLE: Literal[_NotApplicable.NOT_APPLICABLE] = _NotApplicable.NOT_APPLICABLE

ClassificationResult = SimpleDiagnostic | RawBuildError | _NotApplicable
