"""Text rendering of hierarchy trees and time windows."""

from __future__ import annotations

from collections.abc import Sequence

from eventscope.api.events import Event, HierarchyNode, NodeKind, TimeWindow
from eventscope.core.hierarchy import find_node, node_path
from eventscope.core.windows import format_precise


def node_tag(node: HierarchyNode) -> str:
    if node.kind is NodeKind.CONTAINER and node.container_type is not None:
        tag = node.container_type.value
        return f"{tag}*" if node.orphaned else tag
    return node.kind.value


def node_to_line(node: HierarchyNode, depth: int) -> str:
    indent = "  " * depth
    stamp = node.timestamp_ms
    if stamp is None:
        return f"{indent}[{node_tag(node)}] {node.label}"
    return f"{indent}[{node_tag(node)}] {format_precise(stamp)} {node.label}"


def render_tree_lines(trees: Sequence[HierarchyNode], *, depth: int = 0) -> list[str]:
    lines: list[str] = []
    for node in trees:
        lines.append(node_to_line(node, depth))
        lines.extend(render_tree_lines(node.children, depth=depth + 1))
    return lines


def render_window_lines(windows: Sequence[TimeWindow], *, with_hierarchy: bool = True) -> list[str]:
    lines: list[str] = []
    for window in windows:
        lines.append(f"window {window.window_id} {window.label} ({window.total_items} items)")
        if with_hierarchy:
            lines.extend(render_tree_lines(window.hierarchy, depth=1))
    return lines


def render_node_lines(trees: Sequence[HierarchyNode], node_id: str) -> list[str]:
    """Root-to-node path followed by the node's subtree."""
    node = find_node(trees, node_id)
    if node is None:
        return [f"Node {node_id} not found."]
    lines = [f"path={' → '.join(node_path(trees, node_id))}"]
    lines.append(node_to_line(node, 0))
    lines.extend(render_tree_lines(node.children, depth=1))
    return lines


def event_to_payload(event: Event) -> dict:
    return {
        "id": event.id,
        "timestamp_ms": event.timestamp_ms,
        "tab_id": event.tab_id,
        "scope": event.scope.value,
        "action": event.action,
        "label": event.label,
    }


def node_to_payload(node: HierarchyNode) -> dict:
    return {
        "node_id": node.node_id,
        "kind": node.kind.value,
        "label": node.label,
        "event_id": node.source_event.id if node.source_event is not None else None,
        "container_type": node.container_type.value if node.container_type is not None else None,
        "orphaned": node.orphaned,
        "children": [node_to_payload(child) for child in node.children],
    }
