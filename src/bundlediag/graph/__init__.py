"""Module graph and import trace reconstruction."""

from bundlediag.graph.module_graph import ModuleGraph
from bundlediag.graph.trace import (
    TraceEntry,
    filter_internal_identifiers,
    format_import_trace,
    get_module_trace,
)

__all__ = [
    "ModuleGraph",
    "TraceEntry",
    "filter_internal_identifiers",
    "format_import_trace",
    "get_module_trace",
]
