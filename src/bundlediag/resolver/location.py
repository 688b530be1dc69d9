"""Map generated-source locations back to original source through a source mapper."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger("bundlediag.resolver")


@dataclass(frozen=True)
class MappedFrame:
    """What a source mapper reports for a successful lookup."""

    line: int | None
    column: int | None
    code_frame: str | None = None


@dataclass(frozen=True)
class ResolvedLocation:
    """An original-source location plus the code frame around it (may be empty)."""

    line: int | None
    column: int | None
    code_frame: str = ""


class SourceMapper(Protocol):
    """Source-map lookup engine.

    Returns ``None`` when no mapping exists and may raise on internal failure
    (corrupt or missing map).
    """

    async def map_location(
        self,
        *,
        line: int,
        column: int,
        source: str | None,
        root_directory: str,
        module_path: str,
    ) -> MappedFrame | None: ...


class LocationResolver:
    """Resolves generated locations to original ones without ever raising."""

    def __init__(self, mapper: SourceMapper) -> None:
        self._mapper = mapper

    async def resolve(
        self,
        line: int,
        column: int,
        source: str | None,
        root_directory: str,
        module_path: str,
    ) -> ResolvedLocation | None:
        """Return the original location, or ``None`` if it cannot be resolved.

        Mapper failures are treated the same as a missing mapping: the caller
        falls back to the unmapped error.
        """
        try:
            frame = await self._mapper.map_location(
                line=line,
                column=column,
                source=source,
                root_directory=root_directory,
                module_path=module_path,
            )
        except Exception:
            logger.debug(
                "Source map lookup failed for %s:%d:%d", module_path, line, column, exc_info=True
            )
            return None
        if frame is None:
            return None
        return ResolvedLocation(
            line=frame.line,
            column=frame.column,
            code_frame=frame.code_frame or "",
        )
