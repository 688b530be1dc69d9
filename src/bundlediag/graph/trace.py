"""Import trace reconstruction: walk issuers outward from a failing module."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from bundlediag.models.module import Module, RequestShortener
from bundlediag.settings import DEFAULT_INTERNAL_LOADER_PATTERN

IssuerLookup = Callable[[Module], Module | None]

INTERNAL_LOADER_RE = re.compile(DEFAULT_INTERNAL_LOADER_PATTERN)

IMPORT_TRACE_HEADER = "Import trace for requested module:"


@dataclass(frozen=True)
class TraceEntry:
    """One hop of the import chain: ``origin`` pulled in ``module``."""

    origin: Module
    module: Module


def get_module_trace(module: Module | None, get_issuer: IssuerLookup) -> list[TraceEntry]:
    """Return the chain of importers, innermost hop first.

    Stops at the entry module (no issuer) or on revisiting a module, so a
    malformed graph truncates the trace instead of looping.
    """
    visited: set[int] = set()
    trace: list[TraceEntry] = []
    current = module
    while current is not None:
        if id(current) in visited:
            break
        visited.add(id(current))
        origin = get_issuer(current)
        if origin is None:
            break
        trace.append(TraceEntry(origin=origin, module=current))
        current = origin
    return trace


def filter_internal_identifiers(
    names: Iterable[str | None], pattern: re.Pattern[str] = INTERNAL_LOADER_RE
) -> list[str]:
    """Drop empty names and framework loader wrappers from a list of identifiers."""
    return [name for name in names if name and not pattern.search(name)]


def format_import_trace(
    trace: Iterable[TraceEntry],
    shortener: RequestShortener,
    pattern: re.Pattern[str] = INTERNAL_LOADER_RE,
) -> str:
    """Render the trace section of a diagnostic body, or ``""`` if nothing remains."""
    names = filter_internal_identifiers(
        (entry.origin.readable_identifier(shortener) for entry in trace), pattern
    )
    if not names:
        return ""
    return f"\n{IMPORT_TRACE_HEADER}\n" + "\n".join(names) + "\n\n"
