"""Module nodes of the dependency graph and request shortening."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Protocol, runtime_checkable


class RequestShortener:
    """Shortens absolute module requests relative to the build root.

    ``/app/components/a.js`` becomes ``./components/a.js`` for root ``/app``.
    Loader chains (``loader!resource``) are shortened segment by segment.
    """

    def __init__(self, root_directory: str) -> None:
        self._root = root_directory.rstrip("/")

    def shorten(self, request: str) -> str:
        return "!".join(self._shorten_part(part) for part in request.split("!"))

    def _shorten_part(self, part: str) -> str:
        if not self._root:
            return part
        if part == self._root:
            return "."
        if part.startswith(self._root + "/"):
            return "." + part[len(self._root) :]
        return part


@runtime_checkable
class Module(Protocol):
    """What the diagnostic core reads from a bundler module."""

    @property
    def raw_request(self) -> str | None: ...

    @property
    def resource(self) -> str | None: ...

    def readable_identifier(self, shortener: RequestShortener) -> str: ...

    def original_source(self) -> str | None: ...


@dataclass(eq=False)
class BuildModule:
    """In-memory module; equality and hashing are by identity."""

    identifier: str
    raw_request: str | None = None
    resource: str | None = None
    source: str | None = None

    def readable_identifier(self, shortener: RequestShortener) -> str:
        return shortener.shorten(self.identifier)

    def original_source(self) -> str | None:
        return self.source

    def __repr__(self) -> str:
        return f"BuildModule({self.identifier!r})"


def module_path_for(module: Module, root_directory: str) -> str:
    """Return the ``./relative/path`` of a module's resource under the root.

    Modules without a resource fall back to their shortened identifier.
    """
    shortener = RequestShortener(root_directory)
    if not module.resource:
        return module.readable_identifier(shortener)
    resource = PurePosixPath(module.resource.replace("\\", "/"))
    try:
        relative = resource.relative_to(root_directory)
    except ValueError:
        return str(resource)
    return f"./{relative}"
