"""Original-source location resolution."""

from bundlediag.resolver.code_frame import render_code_frame
from bundlediag.resolver.location import (
    LocationResolver,
    MappedFrame,
    ResolvedLocation,
    SourceMapper,
)
from bundlediag.resolver.static import MappingSegment, SourceMapError, StaticSourceMapper

__all__ = [
    "LocationResolver",
    "MappedFrame",
    "MappingSegment",
    "ResolvedLocation",
    "SourceMapError",
    "SourceMapper",
    "StaticSourceMapper",
    "render_code_frame",
]
