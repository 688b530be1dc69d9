"""Rebuild a compilation context and its raw errors from a snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from bundlediag.classifier.context import CompilationContext
from bundlediag.graph.module_graph import ModuleGraph
from bundlediag.models.errors import RawBuildError, SourcePosition, UnderlyingError
from bundlediag.models.module import BuildModule, RequestShortener
from bundlediag.resolver.location import LocationResolver
from bundlediag.resolver.static import MappingSegment, StaticSourceMapper
from bundlediag.settings import Settings
from bundlediag.snapshot.loader import PositionMap, SnapshotLoader
from bundlediag.snapshot.schema import BuildSnapshot

logger = logging.getLogger("bundlediag.snapshot")


class InvalidSnapshotError(Exception):
    """Raised when a snapshot does not describe a consistent build."""

    def __init__(
        self, message: str, path: str | None = None, position: SourcePosition | None = None
    ) -> None:
        self.path = path
        self.position = position
        where = f" (line {position.line}, column {position.column})" if position else ""
        super().__init__(f"{message}{where}")


@dataclass
class Replay:
    """A recorded build ready to be classified again."""

    context: CompilationContext
    errors: list[RawBuildError]
    modules: dict[str, BuildModule] = field(default_factory=dict)


def _loc_path(loc: tuple[int | str, ...]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else part
    return path


def build_replay(
    raw: dict[str, Any], positions: PositionMap, settings: Settings | None = None
) -> Replay:
    """Validate the snapshot dict and wire modules, issuers, maps and errors."""
    try:
        snapshot = BuildSnapshot.model_validate(raw)
    except ValidationError as exc:
        first = exc.errors()[0]
        path = _loc_path(tuple(first["loc"]))
        raise InvalidSnapshotError(
            f"Invalid snapshot at '{path}': {first['msg']}", path, positions.get(path)
        ) from exc

    modules: dict[str, BuildModule] = {}
    for index, module in enumerate(snapshot.modules):
        if module.id in modules:
            path = f"modules[{index}].id"
            raise InvalidSnapshotError(
                f"Duplicate module id '{module.id}'", path, positions.get(path)
            )
        modules[module.id] = BuildModule(
            identifier=module.identifier or module.id,
            raw_request=module.raw_request,
            resource=module.resource,
            source=module.source,
        )

    graph = ModuleGraph()
    for index, module in enumerate(snapshot.modules):
        issuer = None
        if module.issuer is not None:
            issuer = modules.get(module.issuer)
            if issuer is None:
                path = f"modules[{index}].issuer"
                raise InvalidSnapshotError(
                    f"Unknown issuer '{module.issuer}'", path, positions.get(path)
                )
        graph.set_issuer(modules[module.id], issuer)
    shortener = RequestShortener(snapshot.root_directory)
    for cycle in graph.find_cycles():
        names = " -> ".join(m.readable_identifier(shortener) for m in cycle)
        logger.warning("Issuer cycle in snapshot: %s", names)

    mapper = StaticSourceMapper()
    for module_path, source_map in snapshot.source_maps.items():
        mapper.add_mapping(
            module_path,
            [
                MappingSegment(
                    generated_line=seg.generated[0],
                    generated_column=seg.generated[1],
                    original_line=seg.original[0],
                    original_column=seg.original[1],
                )
                for seg in source_map.segments
            ],
            source_map.original_source,
        )

    errors: list[RawBuildError] = []
    for index, error in enumerate(snapshot.errors):
        module_ref = None
        if error.module is not None:
            module_ref = modules.get(error.module)
            if module_ref is None:
                path = f"errors[{index}].module"
                raise InvalidSnapshotError(
                    f"Unknown module '{error.module}'", path, positions.get(path)
                )
        errors.append(
            RawBuildError(
                name=error.name,
                error=UnderlyingError(name=error.error_name, message=error.message),
                loc=error.loc,
                dependencies=error.dependencies,
                module=module_ref,
                file_name=error.file_name,
            )
        )

    context = CompilationContext(
        graph=graph,
        root_directory=snapshot.root_directory,
        resolver=LocationResolver(mapper),
        settings=settings or Settings(),
    )
    return Replay(context=context, errors=errors, modules=modules)


def load_replay(path: Path, settings: Settings | None = None) -> Replay:
    """Load a snapshot file and build its replay."""
    raw, positions = SnapshotLoader().load(path)
    return build_replay(raw, positions, settings)
