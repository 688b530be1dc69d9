"""Raw build error models as handed over by the bundler."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SourcePosition(BaseModel):
    """A line/column pair in whatever coordinate space produced it."""

    line: int
    column: int


class SourceRange(BaseModel):
    """Location of a dependency or error in generated source."""

    start: SourcePosition
    end: SourcePosition | None = None


class DependencyRef(BaseModel):
    """A dependency attached to a build error, with an optional location."""

    request: str | None = None
    loc: SourceRange | None = None


class UnderlyingError(BaseModel):
    """The error the bundler wrapped (name and text only)."""

    name: str = "Error"
    message: str = ""


class RawBuildError(BaseModel):
    """An opaque build error, discriminated by ``name``.

    ``module`` is kept by reference: classifiers compare and traverse it by
    identity and never copy it.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    error: UnderlyingError = Field(default_factory=UnderlyingError)
    loc: SourceRange | None = None
    dependencies: list[DependencyRef] = []
    module: Any = None
    file_name: str | None = None

    def first_location(self) -> SourceRange | None:
        """Return the error's own location, else the first dependency location."""
        if self.loc is not None:
            return self.loc
        for dependency in self.dependencies:
            if dependency.loc is not None:
                return dependency.loc
        return None
