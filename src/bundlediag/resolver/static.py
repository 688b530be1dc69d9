"""Table-driven source mapper for recorded builds and tests."""

from __future__ import annotations

from dataclasses import dataclass, field

from bundlediag.resolver.code_frame import render_code_frame
from bundlediag.resolver.location import MappedFrame


class SourceMapError(Exception):
    """Raised when a mapping table is malformed."""

    def __init__(self, module_path: str, reason: str) -> None:
        self.module_path = module_path
        self.reason = reason
        super().__init__(f"Invalid source map for '{module_path}': {reason}")


@dataclass(frozen=True)
class MappingSegment:
    """Generated (line, column) → original (line, column); lines 1-based, columns 0-based."""

    generated_line: int
    generated_column: int
    original_line: int
    original_column: int


@dataclass
class _ModuleMap:
    segments: list[MappingSegment] = field(default_factory=list)
    original_source: str | None = None


class StaticSourceMapper:
    """Looks locations up in in-memory segment tables keyed by module path.

    A lookup picks the segment on the requested generated line with the
    greatest generated column not past the requested column.
    """

    def __init__(self) -> None:
        self._maps: dict[str, _ModuleMap] = {}

    def add_mapping(
        self,
        module_path: str,
        segments: list[MappingSegment],
        original_source: str | None = None,
    ) -> None:
        self._maps[module_path] = _ModuleMap(list(segments), original_source)

    async def map_location(
        self,
        *,
        line: int,
        column: int,
        source: str | None,
        root_directory: str,
        module_path: str,
    ) -> MappedFrame | None:
        module_map = self._maps.get(module_path)
        if module_map is None:
            return None

        best: MappingSegment | None = None
        for segment in module_map.segments:
            if segment.original_line < 1 or segment.original_column < 0:
                raise SourceMapError(module_path, f"segment {segment} points before the source")
            if segment.generated_line != line or segment.generated_column > column:
                continue
            if best is None or segment.generated_column > best.generated_column:
                best = segment
        if best is None:
            return None

        original = module_map.original_source if module_map.original_source is not None else source
        frame = ""
        if original:
            frame = render_code_frame(original, best.original_line, best.original_column)
        return MappedFrame(line=best.original_line, column=best.original_column, code_frame=frame)
