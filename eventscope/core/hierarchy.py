"""Tab -> container -> widget -> action tree reconstruction from parent pointers."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from eventscope.api.events import ContainerType, Event, HierarchyNode, NodeKind, Scope

_CONTAINER_TYPES = {Scope.PAGE: ContainerType.PAGE, Scope.LEFT: ContainerType.LEFT}


def event_sort_key(event: Event) -> tuple[bool, int, int]:
    """Time ascending, ties by id; untimed events sort last."""
    timestamp = event.timestamp_ms
    return (timestamp is None, timestamp if timestamp is not None else 0, event.id)


def tab_node_id(tab_id: int) -> str:
    return f"tab:{tab_id}"


def event_node_id(event: Event) -> str:
    return f"event:{event.id}"


def orphan_node_id(widget: Event) -> str:
    return f"orphan:{widget.id}"


def build_hierarchy(events: Iterable[Event]) -> list[HierarchyNode]:
    """Build one tree per distinct tab id, ascending by tab id.

    Parent ids are resolved once, one level deep, against an id index of the current
    tab partition. Widgets whose container is not in the partition are wrapped in a
    synthetic orphaned container; actions whose parent does not resolve to a container
    or widget become independent actions under the tab.
    """
    partitions: dict[int, list[Event]] = {}
    for event in events:
        partitions.setdefault(event.tab_id, []).append(event)
    return [_build_tab(tab_id, partitions[tab_id]) for tab_id in sorted(partitions)]


def _build_tab(tab_id: int, events: list[Event]) -> HierarchyNode:
    ordered = sorted(events, key=event_sort_key)
    tab = HierarchyNode(node_id=tab_node_id(tab_id), kind=NodeKind.TAB, label=f"Tab {tab_id}")

    # Arena: one node per event, plus a first-wins id index for parent lookups.
    index: dict[int, HierarchyNode] = {}
    nodes: list[tuple[Event, HierarchyNode]] = []
    for event in ordered:
        node = _event_node(event)
        nodes.append((event, node))
        index.setdefault(event.id, node)

    # (anchor event, node) pairs for tab-level children; the anchor decides ordering.
    top_level: list[tuple[Event, HierarchyNode]] = []
    for event, node in nodes:
        if node.kind is NodeKind.CONTAINER:
            top_level.append((event, node))
            continue
        parent = index.get(event.parent_id) if event.parent_id is not None else None
        if node.kind is NodeKind.WIDGET:
            if parent is not None and parent.kind is NodeKind.CONTAINER:
                parent.children.append(node)
            else:
                top_level.append((event, _orphaned_container(event, node)))
            continue
        if parent is not None and parent.kind in (NodeKind.CONTAINER, NodeKind.WIDGET):
            parent.children.append(node)
        else:
            top_level.append((event, node))

    # Children were appended in (time, id) order already; only tab level mixes anchors.
    top_level.sort(key=lambda item: event_sort_key(item[0]))
    tab.children = [node for _, node in top_level]
    return tab


def _event_node(event: Event) -> HierarchyNode:
    if event.scope.is_container:
        return HierarchyNode(
            node_id=event_node_id(event),
            kind=NodeKind.CONTAINER,
            label=event.label,
            source_event=event,
            container_type=_CONTAINER_TYPES[event.scope],
        )
    kind = NodeKind.WIDGET if event.scope is Scope.WIDGET else NodeKind.ACTION
    return HierarchyNode(
        node_id=event_node_id(event),
        kind=kind,
        label=event.label,
        source_event=event,
    )


def _orphaned_container(widget: Event, widget_node: HierarchyNode) -> HierarchyNode:
    return HierarchyNode(
        node_id=orphan_node_id(widget),
        kind=NodeKind.CONTAINER,
        label=f"orphaned_container_{widget.label}",
        container_type=ContainerType.PAGE,
        children=[widget_node],
        orphaned=True,
    )


def iter_nodes(trees: Iterable[HierarchyNode]) -> Iterator[HierarchyNode]:
    """Depth-first, pre-order traversal over every node."""
    stack = list(reversed(list(trees)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def find_node(trees: Iterable[HierarchyNode], node_id: str) -> HierarchyNode | None:
    for node in iter_nodes(trees):
        if node.node_id == node_id:
            return node
    return None


def node_path(trees: Iterable[HierarchyNode], node_id: str) -> list[str]:
    """Root-to-node label path, empty when the node is unknown."""
    for root in trees:
        path = _path_from(root, node_id)
        if path:
            return path
    return []


def _path_from(root: HierarchyNode, node_id: str) -> list[str]:
    stack: list[tuple[HierarchyNode, list[str]]] = [(root, [root.label])]
    while stack:
        node, labels = stack.pop()
        if node.node_id == node_id:
            return labels
        for child in node.children:
            stack.append((child, [*labels, child.label]))
    return []


def hierarchy_path(event: Event) -> str:
    """Breadcrumb label for tooltips, e.g. ``Tab 1 → page → open``."""
    parts = [f"Tab {event.tab_id}"]
    if event.scope is not Scope.NONE:
        parts.append(event.scope.value)
    parts.append(event.action or event.label)
    return " → ".join(parts)
