"""Cosmetic text emphasis: plain text or ANSI styling via click."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Protocol

import click


class Style(StrEnum):
    BOLD = "bold"
    ERROR = "error"
    SUCCESS = "success"
    PATH = "path"
    POSITION = "position"
    IDENTIFIER = "identifier"


class Emphasizer(Protocol):
    def emphasize(self, text: str, *styles: Style) -> str: ...


class PlainEmphasizer:
    """Returns text unchanged; nothing semantic is lost without styling."""

    def emphasize(self, text: str, *styles: Style) -> str:
        return text


_COLORS: dict[Style, str] = {
    Style.ERROR: "red",
    Style.SUCCESS: "green",
    Style.PATH: "cyan",
    Style.POSITION: "yellow",
    Style.IDENTIFIER: "green",
}


class ClickEmphasizer:
    """ANSI styling through ``click.style``."""

    def emphasize(self, text: str, *styles: Style) -> str:
        kwargs: dict[str, Any] = {}
        for style in styles:
            if style is Style.BOLD:
                kwargs["bold"] = True
            else:
                kwargs["fg"] = _COLORS[style]
        if not kwargs:
            return text
        return click.style(text, **kwargs)


def get_emphasizer(color: bool) -> Emphasizer:
    return ClickEmphasizer() if color else PlainEmphasizer()
