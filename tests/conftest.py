"""Shared test fixtures for bundlediag."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from bundlediag.classifier.context import CompilationContext
from bundlediag.formatting.emphasis import PlainEmphasizer
from bundlediag.graph.module_graph import ModuleGraph
from bundlediag.models.module import BuildModule
from bundlediag.resolver.location import LocationResolver, MappedFrame
from bundlediag.settings import Settings
from bundlediag.snapshot.loader import SnapshotLoader

FIXTURES_DIR = Path(__file__).parent / "fixtures"
SNAPSHOT_PATH = FIXTURES_DIR / "build_snapshot.yaml"
ROOT = "/app"


@dataclass
class FakeMapper:
    """Source mapper returning a fixed frame and recording its calls."""

    frame: MappedFrame | None = None
    calls: list[dict[str, Any]] = field(default_factory=list)

    async def map_location(self, **kwargs: Any) -> MappedFrame | None:
        self.calls.append(kwargs)
        return self.frame


class BrokenMapper:
    """Source mapper whose map is corrupt."""

    async def map_location(self, **kwargs: Any) -> MappedFrame | None:
        raise ValueError("corrupt source map")


@dataclass
class Chain:
    """``page`` imports ``header`` imports ``util``."""

    page: BuildModule
    header: BuildModule
    util: BuildModule
    graph: ModuleGraph


def make_context(
    graph: ModuleGraph, mapper: Any, settings: Settings | None = None
) -> CompilationContext:
    return CompilationContext(
        graph=graph,
        root_directory=ROOT,
        resolver=LocationResolver(mapper),
        settings=settings or Settings(color=False),
        emphasizer=PlainEmphasizer(),
    )


@pytest.fixture
def chain() -> Chain:
    page = BuildModule(
        identifier="/app/pages/index.js",
        raw_request="private-next-pages/index.js",
        resource="/app/pages/index.js",
        source="import Header from '../components/header'\nexport default Header\n",
    )
    header = BuildModule(
        identifier="/app/components/header.js",
        raw_request="../components/header",
        resource="/app/components/header.js",
        source="import util from './util'\nimport _ from 'lodash'\n",
    )
    util = BuildModule(
        identifier="/app/components/util.js",
        raw_request="./util",
        resource="/app/components/util.js",
        source="export default 1\n",
    )
    graph = ModuleGraph()
    graph.set_issuer(page, None)
    graph.set_issuer(header, page)
    graph.set_issuer(util, header)
    return Chain(page=page, header=header, util=util, graph=graph)


@pytest.fixture
def mapper() -> FakeMapper:
    frame = MappedFrame(line=2, column=7, code_frame="> 2 | import _ from 'lodash'")
    return FakeMapper(frame=frame)


@pytest.fixture
def loader() -> SnapshotLoader:
    return SnapshotLoader()
