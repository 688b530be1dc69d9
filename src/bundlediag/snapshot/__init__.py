"""Recorded build snapshots: loading and replay."""

from bundlediag.snapshot.loader import PositionMap, SnapshotLoader, SnapshotSafetyError
from bundlediag.snapshot.replay import InvalidSnapshotError, Replay, build_replay, load_replay
from bundlediag.snapshot.schema import BuildSnapshot

__all__ = [
    "BuildSnapshot",
    "InvalidSnapshotError",
    "PositionMap",
    "Replay",
    "SnapshotLoader",
    "SnapshotSafetyError",
    "build_replay",
    "load_replay",
]
