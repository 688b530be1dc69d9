"""Text emphasis for rendered diagnostics."""

from bundlediag.formatting.emphasis import (
    ClickEmphasizer,
    Emphasizer,
    PlainEmphasizer,
    Style,
    get_emphasizer,
)

__all__ = [
    "ClickEmphasizer",
    "Emphasizer",
    "PlainEmphasizer",
    "Style",
    "get_emphasizer",
]
