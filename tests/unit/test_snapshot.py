"""Tests for snapshot loading, YAML safeguards and replay wiring."""

from __future__ import annotations

import logging

import pytest

from bundlediag.classifier.dispatch import ErrorProcessor
from bundlediag.models.diagnostic import SimpleDiagnostic
from bundlediag.models.errors import RawBuildError
from bundlediag.settings import Settings
from bundlediag.snapshot.loader import _MAX_DOCUMENT_SIZE, SnapshotLoader, SnapshotSafetyError
from bundlediag.snapshot.replay import InvalidSnapshotError, build_replay, load_replay
from tests.conftest import SNAPSHOT_PATH

PLAIN = Settings(color=False)


def _snapshot_with_source(source_line: str) -> str:
    return (
        "rootDirectory: /app\n"
        "modules:\n"
        "  - id: pages/index.js\n"
        "    source: |\n"
        f"      {source_line}\n"
    )


class TestEmbeddedSource:
    """Module source is arbitrary code; only real YAML anchors are refused."""

    @pytest.mark.parametrize(
        "source_line",
        [
            "export default () => <p>Tom &amp; Jerry</p>",
            "const m = flags &mask",
            "if (a && *ptr) run()",
        ],
    )
    def test_ampersand_and_star_in_source_accepted(
        self, loader: SnapshotLoader, source_line: str
    ) -> None:
        raw, _ = loader.load_string(_snapshot_with_source(source_line))
        assert raw["modules"][0]["source"] == source_line + "\n"

    def test_entity_in_source_replays(self, loader: SnapshotLoader) -> None:
        raw, positions = loader.load_string(
            _snapshot_with_source("export default () => <p>Tom &amp; Jerry</p>")
        )
        replay = build_replay(raw, positions, PLAIN)
        assert "&amp;" in (replay.modules["pages/index.js"].source or "")

    def test_issuer_alias_rejected(self, loader: SnapshotLoader) -> None:
        yaml = (
            "rootDirectory: /app\n"
            "modules:\n"
            "  - id: &page pages/index.js\n"
            "  - id: components/header.js\n"
            "    issuer: *page\n"
        )
        with pytest.raises(SnapshotSafetyError, match="anchors/aliases"):
            loader.load_string(yaml)

    def test_anchored_mapping_rejected(self, loader: SnapshotLoader) -> None:
        yaml = "rootDirectory: /app\nsourceMaps: &maps {}\n"
        with pytest.raises(SnapshotSafetyError, match="anchors/aliases"):
            loader.load_string(yaml)

    def test_ampersand_in_comment_accepted(self, loader: SnapshotLoader) -> None:
        raw, _ = loader.load_string("# recorded by R&D\nrootDirectory: /app\n")
        assert raw["rootDirectory"] == "/app"


class TestLimits:
    def test_oversized_document_rejected(self, loader: SnapshotLoader) -> None:
        yaml = "rootDirectory: " + "x" * (_MAX_DOCUMENT_SIZE + 1) + "\n"
        with pytest.raises(SnapshotSafetyError, match="maximum size"):
            loader.load_string(yaml)

    def test_too_many_modules_rejected(self, loader: SnapshotLoader) -> None:
        yaml = "modules:\n" + "".join(f"  - {{id: m{i}.js}}\n" for i in range(20_000))
        with pytest.raises(SnapshotSafetyError, match="node count"):
            loader.load_string(yaml)

    def test_deep_nesting_rejected(self, loader: SnapshotLoader) -> None:
        yaml = "rootDirectory: /app\nsourceMaps: " + "[" * 25 + "]" * 25 + "\n"
        with pytest.raises(SnapshotSafetyError, match="nesting depth"):
            loader.load_string(yaml)

    def test_empty_document(self, loader: SnapshotLoader) -> None:
        raw, positions = loader.load_string("")
        assert raw == {}
        assert positions.paths == []


class TestPositions:
    def test_key_and_item_positions(self, loader: SnapshotLoader) -> None:
        raw, positions = loader.load(SNAPSHOT_PATH)
        assert raw["rootDirectory"] == "/app"
        root = positions.get("rootDirectory")
        assert root is not None
        assert (root.line, root.column) == (3, 1)
        assert positions.get("modules[1].issuer") is not None

    def test_block_scalars_are_plain_strings(self, loader: SnapshotLoader) -> None:
        raw, _ = loader.load(SNAPSHOT_PATH)
        source = raw["modules"][0]["source"]
        assert type(source) is str
        assert source.startswith("import Header from '../components/header'\n")


class TestReplay:
    def test_wires_modules_and_issuers(self) -> None:
        replay = load_replay(SNAPSHOT_PATH, PLAIN)
        page = replay.modules["pages/index.js"]
        header = replay.modules["components/header.js"]
        assert replay.context.graph.get_issuer(header) is page
        assert replay.context.graph.get_issuer(page) is None
        assert len(replay.errors) == 3
        assert replay.errors[0].module is header

    async def test_enriches_recorded_errors(self) -> None:
        replay = load_replay(SNAPSHOT_PATH, PLAIN)
        results = await ErrorProcessor(replay.context).process(replay.errors)

        not_found, image, other = results
        assert isinstance(not_found, SimpleDiagnostic)
        assert not_found.label == "./components/header.js:2:0"
        assert "Can't resolve 'lodash'" in not_found.message
        assert "> 2 | import _ from 'lodash'" in not_found.message
        assert "Import trace for requested module:\n./pages/index.js\n" in not_found.message

        assert isinstance(image, SimpleDiagnostic)
        assert image.label == "./pages/index.js:1"
        assert '"../public/logo.png"' in image.message

        assert isinstance(other, RawBuildError)
        assert other.name == "ModuleParseError"

    def test_unknown_issuer(self, loader: SnapshotLoader) -> None:
        raw, positions = loader.load_string(
            "rootDirectory: /app\nmodules:\n  - id: a.js\n    issuer: b.js\n"
        )
        with pytest.raises(InvalidSnapshotError, match="Unknown issuer 'b.js'") as excinfo:
            build_replay(raw, positions, PLAIN)
        assert excinfo.value.path == "modules[0].issuer"
        assert excinfo.value.position is not None
        assert excinfo.value.position.line == 4

    def test_issuer_cycle_is_logged(
        self, loader: SnapshotLoader, caplog: pytest.LogCaptureFixture
    ) -> None:
        raw, positions = loader.load_string(
            "rootDirectory: /app\n"
            "modules:\n"
            "  - {id: a.js, identifier: /app/a.js, issuer: b.js}\n"
            "  - {id: b.js, identifier: /app/b.js, issuer: a.js}\n"
        )
        with caplog.at_level(logging.WARNING, logger="bundlediag.snapshot"):
            replay = build_replay(raw, positions, PLAIN)
        assert len(replay.modules) == 2
        assert "Issuer cycle in snapshot" in caplog.text
        assert "./a.js" in caplog.text

    def test_unknown_error_module(self, loader: SnapshotLoader) -> None:
        raw, positions = loader.load_string(
            "rootDirectory: /app\nerrors:\n  - name: ModuleNotFoundError\n    module: nope.js\n"
        )
        with pytest.raises(InvalidSnapshotError, match="Unknown module 'nope.js'"):
            build_replay(raw, positions, PLAIN)

    def test_duplicate_module_id(self, loader: SnapshotLoader) -> None:
        raw, positions = loader.load_string(
            "rootDirectory: /app\nmodules:\n  - id: a.js\n  - id: a.js\n"
        )
        with pytest.raises(InvalidSnapshotError, match="Duplicate module id"):
            build_replay(raw, positions, PLAIN)

    def test_schema_violation_points_at_source(self, loader: SnapshotLoader) -> None:
        raw, positions = loader.load_string("modules: []\n")
        with pytest.raises(InvalidSnapshotError, match="rootDirectory") as excinfo:
            build_replay(raw, positions, PLAIN)
        assert excinfo.value.path == "rootDirectory"
