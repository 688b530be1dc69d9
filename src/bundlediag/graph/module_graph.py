"""Module graph: modules as nodes, issuer relations as edges. Uses networkx."""

from __future__ import annotations

from collections.abc import Iterator

import networkx as nx

from bundlediag.models.module import Module


class ModuleGraph:
    """Read-mostly view of which module caused which to be included.

    Edges point from issuer to module; a module has at most one issuer.
    Nodes are the module objects themselves, so identity decides equality.
    """

    def __init__(self) -> None:
        self._graph: nx.DiGraph[Module] = nx.DiGraph()

    def add_module(self, module: Module) -> None:
        self._graph.add_node(module)

    def set_issuer(self, module: Module, issuer: Module | None) -> None:
        """Record ``issuer`` as the module that pulled in ``module``.

        Any previous issuer is replaced; ``None`` marks an entry module.
        """
        self._graph.add_node(module)
        for previous in list(self._graph.predecessors(module)):
            self._graph.remove_edge(previous, module)
        if issuer is not None:
            self._graph.add_edge(issuer, module)

    def get_issuer(self, module: Module) -> Module | None:
        if module not in self._graph:
            return None
        for issuer in self._graph.predecessors(module):
            return issuer
        return None

    def modules(self) -> Iterator[Module]:
        return iter(self._graph.nodes)

    def find_cycles(self) -> list[list[Module]]:
        """Issuer cycles; a recorded build may contain them, tracing tolerates them."""
        return list(nx.simple_cycles(self._graph))
