"""Static story graph validation utilities."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Set

from slaytion.domain.story_graph import StoryGraph


Severity = str


@dataclass(frozen=True, slots=True)
class Issue:
    severity: Severity
    code: str
    message: str
    context: dict[str, str]


def format_issue(issue: Issue) -> str:
    context = " ".join(f"{key}={value}" for key, value in issue.context.items())
    suffix = f" ({context})" if context else ""
    return f"[{issue.severity}] {issue.code}: {issue.message}{suffix}"


def validate_story_graph(graph: StoryGraph) -> list[Issue]:
    """Lint a built graph for authoring problems the build invariants allow."""
    issues: list[Issue] = []
    adjacency: Dict[str, List[str]] = {
        node.id: [edge.target_id for edge in node.choices] for node in graph
    }

    for node in graph:
        if not node.text.strip():
            issues.append(
                Issue(
                    severity="WARN",
                    code="EMPTY_TEXT",
                    message="Node has no narration text.",
                    context={"node_id": node.id},
                )
            )
        seen_labels: Set[str] = set()
        for index, edge in enumerate(node.choices):
            if edge.label in seen_labels:
                issues.append(
                    Issue(
                        severity="WARN",
                        code="DUPLICATE_CHOICE_LABEL",
                        message="Two choices on the node share a label.",
                        context={"node_id": node.id, "field_path": f"choices[{index}].label"},
                    )
                )
            seen_labels.add(edge.label)

    terminal_ids = {node.id for node in graph.terminal_nodes()}
    if not terminal_ids:
        issues.append(
            Issue(
                severity="ERROR",
                code="NO_TERMINAL_NODE",
                message="Story has no ending node; sessions can never finish.",
                context={},
            )
        )

    reachable = _reachable_from(graph.start_id, adjacency)
    for node_id in sorted(set(adjacency) - reachable):
        issues.append(
            Issue(
                severity="WARN",
                code="UNREACHABLE_NODE",
                message="Node is unreachable from the start node.",
                context={"node_id": node_id},
            )
        )

    if terminal_ids:
        can_finish = _reachable_from_any(terminal_ids, _reverse(adjacency))
        for node_id in sorted(reachable - can_finish):
            issues.append(
                Issue(
                    severity="ERROR",
                    code="NO_ENDING_REACHABLE",
                    message="No ending can be reached from this node.",
                    context={"node_id": node_id},
                )
            )
    return issues


def _reachable_from(start_id: str, adjacency: Mapping[str, List[str]]) -> set[str]:
    return _reachable_from_any({start_id}, adjacency)


def _reachable_from_any(roots: Set[str], adjacency: Mapping[str, List[str]]) -> set[str]:
    reachable: set[str] = set()
    stack: list[str] = list(roots)
    while stack:
        node_id = stack.pop()
        if node_id in reachable:
            continue
        reachable.add(node_id)
        stack.extend(adjacency.get(node_id, []))
    return reachable


def _reverse(adjacency: Mapping[str, List[str]]) -> Dict[str, List[str]]:
    reverse: Dict[str, List[str]] = {node_id: [] for node_id in adjacency}
    for node_id, targets in adjacency.items():
        for target_id in targets:
            reverse[target_id].append(node_id)
    return reverse
