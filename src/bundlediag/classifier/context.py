"""Per-build context handed to the classifiers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import cached_property
from typing import Protocol

from bundlediag.formatting.emphasis import Emphasizer, get_emphasizer
from bundlediag.models.module import Module, RequestShortener
from bundlediag.resolver.location import LocationResolver
from bundlediag.settings import Settings


class IssuerGraph(Protocol):
    def get_issuer(self, module: Module) -> Module | None: ...


@dataclass
class CompilationContext:
    """Everything a classifier may read about one build. Never mutated by classifiers."""

    graph: IssuerGraph
    root_directory: str
    resolver: LocationResolver
    settings: Settings = field(default_factory=Settings)
    emphasizer: Emphasizer | None = None
    request_shortener: RequestShortener | None = None

    def __post_init__(self) -> None:
        if self.emphasizer is None:
            self.emphasizer = get_emphasizer(self.settings.color)
        if self.request_shortener is None:
            self.request_shortener = RequestShortener(self.root_directory)

    @cached_property
    def internal_loader_re(self) -> re.Pattern[str]:
        return re.compile(self.settings.internal_loader_pattern)

    @property
    def emph(self) -> Emphasizer:
        assert self.emphasizer is not None
        return self.emphasizer

    @property
    def shortener(self) -> RequestShortener:
        assert self.request_shortener is not None
        return self.request_shortener
