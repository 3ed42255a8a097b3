"""Blast radius trees: counting, expiry warnings and text rendering."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .prober import days_until_expiry
from .tracker import Node

_WARN_DAYS = 30


@dataclass
class ImpactNode:
    """One asset in a blast radius tree and the assets that depend on it."""

    node_id: str
    node: Node | None = None
    edge_type: str = ""
    children: list[ImpactNode] = field(default_factory=list)

    def walk(self) -> Iterator[ImpactNode]:
        """Yield this node and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


def count_tree_nodes(node: ImpactNode) -> int:
    """Number of nodes in the tree, the root included."""
    return sum(1 for _ in node.walk())


def _days_left(item: ImpactNode) -> int | None:
    if item.node is None or item.node.expires_at is None:
        return None
    return days_until_expiry(item.node.expires_at)


def collect_warnings(node: ImpactNode) -> list[str]:
    """Warnings for every node in the tree expiring within 30 days."""
    warnings = []
    for item in node.walk():
        days = _days_left(item)
        if days is not None and days <= _WARN_DAYS:
            warnings.append(f"{item.node_id} expires in {days} days")
    return warnings


def _label(item: ImpactNode) -> str:
    if item.node is None:
        return item.node_id
    label = f"{item.node_id} ({item.node.type})"
    days = _days_left(item)
    if days is not None and days <= _WARN_DAYS:
        label += f" [!] expires in {days}d"
    return label


def print_tree(node: ImpactNode, prefix: str = "", is_root: bool = True) -> None:
    """Print the tree with box-drawing connectors and edge types."""
    if is_root:
        print(f"{prefix}{_label(node)}")
    last = len(node.children) - 1
    for i, child in enumerate(node.children):
        if i == last:
            connector, child_prefix = "\u2514\u2500\u2500 ", prefix + "    "
        else:
            connector, child_prefix = "\u251c\u2500\u2500 ", prefix + "\u2502   "
        print(f"{prefix}{connector}[{child.edge_type}] {_label(child)}")
        print_tree(child, child_prefix, False)