"""Immutable story graph structures used by the runtime."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Sequence, Tuple

from slaytion.domain.errors import GraphError, NotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Edge:
    """A labeled transition to another node, referenced by id."""

    label: str
    target_id: str


@dataclass(frozen=True, slots=True)
class StoryNode:
    """Single narrative unit with its score effect and outgoing choices."""

    id: str
    text: str
    score_delta: int = 0
    choices: Tuple[Edge, ...] = ()

    def __post_init__(self) -> None:
        # Lists are accepted and stored as a tuple.
        object.__setattr__(self, "choices", tuple(self.choices))

    @property
    def is_terminal(self) -> bool:
        return not self.choices


class StoryGraph:
    """Read-only registry of story nodes keyed by id.

    Construction checks every invariant up front and raises GraphError
    instead of returning a graph that breaks them. Nothing mutates a graph
    once built, so one graph may back any number of sessions.
    """

    __slots__ = ("_nodes", "_start_id")

    def __init__(
        self,
        nodes: Iterable[StoryNode] | Mapping[str, StoryNode],
        start_id: str,
        edges: Mapping[str, Sequence[Edge]] | None = None,
    ) -> None:
        by_id = _index_and_check(nodes, edges or {}, start_id)
        logger.debug("Built story graph: nodes=%d start=%s", len(by_id), start_id)
        self._nodes: Mapping[str, StoryNode] = MappingProxyType(by_id)
        self._start_id = start_id

    @classmethod
    def build(
        cls,
        nodes: Iterable[StoryNode],
        edges: Mapping[str, Sequence[Edge]] | None = None,
        *,
        start_id: str,
    ) -> StoryGraph:
        """Validate nodes and edges and return a graph, or raise GraphError.

        ``edges`` maps a source node id to extra choices appended after the
        node's own ``choices``. All problems are gathered before raising.
        """
        return cls(nodes, start_id, edges)

    @property
    def start_id(self) -> str:
        return self._start_id

    @property
    def start_node(self) -> StoryNode:
        return self._nodes[self._start_id]

    @property
    def nodes_by_id(self) -> Mapping[str, StoryNode]:
        return self._nodes

    def node_by_id(self, node_id: str) -> StoryNode:
        """Return a node by id."""
        try:
            return self._nodes[node_id]
        except KeyError as exc:
            raise NotFoundError(f"Story node '{node_id}' does not exist.") from exc

    def follow(self, edge: Edge) -> StoryNode:
        """Return the node an edge leads to."""
        return self._nodes[edge.target_id]

    def terminal_nodes(self) -> List[StoryNode]:
        return [node for node in self._nodes.values() if node.is_terminal]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[StoryNode]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"StoryGraph(nodes={len(self._nodes)}, start_id={self._start_id!r})"


class StoryGraphBuilder:
    """Imperative authoring helper: add nodes, connect them, then build."""

    def __init__(self) -> None:
        self._nodes: List[StoryNode] = []
        self._edges: Dict[str, List[Edge]] = {}

    def add_node(self, node_id: str, text: str, score_delta: int = 0) -> StoryGraphBuilder:
        self._nodes.append(StoryNode(id=node_id, text=text, score_delta=score_delta))
        return self

    def connect(self, source_id: str, label: str, target_id: str) -> StoryGraphBuilder:
        self._edges.setdefault(source_id, []).append(Edge(label=label, target_id=target_id))
        return self

    def build(self, start_id: str) -> StoryGraph:
        return StoryGraph.build(self._nodes, self._edges, start_id=start_id)


def _index_and_check(
    nodes: Iterable[StoryNode] | Mapping[str, StoryNode],
    edges: Mapping[str, Sequence[Edge]],
    start_id: str,
) -> Dict[str, StoryNode]:
    problems: List[str] = []
    if isinstance(nodes, Mapping):
        for key, node in nodes.items():
            if key != node.id:
                problems.append(f"node '{node.id}' is registered under key '{key}'")
        nodes = nodes.values()

    by_id: Dict[str, StoryNode] = {}
    for node in nodes:
        if node.id in by_id:
            problems.append(f"duplicate node id '{node.id}'")
            continue
        by_id[node.id] = node

    for source_id, extra in edges.items():
        if source_id not in by_id:
            problems.append(f"edges given for unknown node '{source_id}'")
            continue
        if extra:
            source = by_id[source_id]
            by_id[source_id] = replace(source, choices=source.choices + tuple(extra))

    for node in by_id.values():
        for index, edge in enumerate(node.choices):
            if edge.target_id not in by_id:
                problems.append(
                    f"node '{node.id}' choice {index} targets unknown node '{edge.target_id}'"
                )

    if start_id not in by_id:
        problems.append(f"start node '{start_id}' is not defined")

    if problems:
        raise GraphError(problems)
    return by_id
