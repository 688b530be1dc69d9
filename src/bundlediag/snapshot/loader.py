"""YAML loader for recorded build snapshots, with position tracking for error reporting."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.events import AliasEvent, CollectionEndEvent, CollectionStartEvent, NodeEvent

from bundlediag.models.errors import SourcePosition

_MAX_DOCUMENT_SIZE = 5_000_000  # characters
_MAX_NODE_COUNT = 50_000
_MAX_DEPTH = 20


class SnapshotSafetyError(Exception):
    """Raised when snapshot YAML violates safety constraints.

    Distinct from parse errors: oversized documents, anchors/aliases,
    excessive nesting or node counts.
    """


class PositionMap:
    """Maps YAML key paths (``modules[0].issuer``) to 1-based positions."""

    def __init__(self) -> None:
        self._positions: dict[str, SourcePosition] = {}

    def add(self, path: str, position: SourcePosition) -> None:
        self._positions[path] = position

    def get(self, path: str) -> SourcePosition | None:
        return self._positions.get(path)

    @property
    def paths(self) -> list[str]:
        return list(self._positions.keys())


class SnapshotLoader:
    """Loads snapshot YAML with ruamel.yaml, which keeps line/column info per node.

    Snapshots embed arbitrary module source (``&&``, ``&amp;``, ``*ptr``), so
    anchors and aliases are detected on the parse events, never in raw text.
    """

    def __init__(self) -> None:
        self._yaml = YAML()
        self._yaml.preserve_quotes = True

    def load(self, path: Path) -> tuple[dict[str, Any], PositionMap]:
        """Load a snapshot file and return the parsed dict + position map."""
        with path.open("r", encoding="utf-8") as handle:
            content = handle.read()
        return self.load_string(content)

    def load_string(self, content: str) -> tuple[dict[str, Any], PositionMap]:
        if len(content) > _MAX_DOCUMENT_SIZE:
            raise SnapshotSafetyError(
                f"Snapshot exceeds maximum size "
                f"({len(content):,} chars > {_MAX_DOCUMENT_SIZE:,} limit)"
            )
        self._scan_events(content)
        data = self._yaml.load(content)
        if not isinstance(data, CommentedMap):
            return {}, PositionMap()
        positions = PositionMap()
        return self._walk(data, "", positions), positions

    def _scan_events(self, content: str) -> None:
        """Reject anchors, aliases, deep nesting and huge documents before construction."""
        depth = 0
        nodes = 0
        for event in self._yaml.parse(content):
            if isinstance(event, AliasEvent) or (
                isinstance(event, NodeEvent) and event.anchor is not None
            ):
                raise SnapshotSafetyError("YAML anchors/aliases are not supported in snapshots")
            if isinstance(event, CollectionEndEvent):
                depth -= 1
                continue
            if not isinstance(event, NodeEvent):
                continue
            nodes += 1
            if nodes > _MAX_NODE_COUNT:
                raise SnapshotSafetyError(
                    f"Snapshot exceeds maximum node count ({_MAX_NODE_COUNT:,})"
                )
            if isinstance(event, CollectionStartEvent):
                depth += 1
                if depth > _MAX_DEPTH:
                    raise SnapshotSafetyError(
                        f"Snapshot exceeds maximum nesting depth ({_MAX_DEPTH})"
                    )

    def _walk(self, node: Any, path: str, positions: PositionMap) -> Any:
        """Convert ruamel containers to plain values, recording each key's position."""
        if isinstance(node, CommentedMap):
            plain: dict[str, Any] = {}
            for key, value in node.items():
                child = f"{path}.{key}" if path else str(key)
                self._record(node, key, child, positions)
                plain[str(key)] = self._walk(value, child, positions)
            return plain
        if isinstance(node, CommentedSeq):
            items = []
            for index, value in enumerate(node):
                child = f"{path}[{index}]"
                self._record(node, index, child, positions)
                items.append(self._walk(value, child, positions))
            return items
        if isinstance(node, str):
            return str(node)
        return node

    @staticmethod
    def _record(container: Any, key: Any, path: str, positions: PositionMap) -> None:
        entries = container.lc.data
        entry = entries.get(key) if entries else None
        if entry:
            positions.add(path, SourcePosition(line=entry[0] + 1, column=entry[1] + 1))
