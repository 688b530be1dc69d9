"""Pydantic schema of a recorded build snapshot."""

from __future__ import annotations

from pydantic import BaseModel, Field

from bundlediag.models.errors import DependencyRef, SourceRange


class SnapshotModule(BaseModel):
    """A module of the recorded build; ``issuer`` names another module ``id``."""

    id: str
    identifier: str | None = None
    raw_request: str | None = Field(None, alias="rawRequest")
    resource: str | None = None
    issuer: str | None = None
    source: str | None = None

    model_config = {"populate_by_name": True}


class SnapshotSegment(BaseModel):
    """``[line, column]`` pairs: generated position → original position."""

    generated: tuple[int, int]
    original: tuple[int, int]


class SnapshotSourceMap(BaseModel):
    segments: list[SnapshotSegment] = []
    original_source: str | None = Field(None, alias="originalSource")

    model_config = {"populate_by_name": True}


class SnapshotError(BaseModel):
    """A raw build error as the bundler reported it."""

    name: str
    message: str = ""
    error_name: str = Field("Error", alias="errorName")
    module: str | None = None
    loc: SourceRange | None = None
    dependencies: list[DependencyRef] = []
    file_name: str | None = Field(None, alias="fileName")

    model_config = {"populate_by_name": True}


class BuildSnapshot(BaseModel):
    """Modules, issuer links, errors and source maps of one build."""

    root_directory: str = Field(alias="rootDirectory")
    modules: list[SnapshotModule] = []
    errors: list[SnapshotError] = []
    source_maps: dict[str, SnapshotSourceMap] = Field({}, alias="sourceMaps")

    model_config = {"populate_by_name": True}
