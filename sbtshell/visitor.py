"""Visitor dispatch over the sbt shell AST.

Nodes pick the handler (``node.accept(visitor)``), so a visitor only needs
to override the kinds it cares about. Anything not overridden lands in
``visit_node``.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any

from .ast_nodes import (
    ASTNode, Command, Config, Intask, Key, ProjectId, ScopedKey, Uri,
)
from .tokens import Span


class ShellVisitor:
    def visit_command(self, node: Command) -> Any:
        return self.visit_node(node)

    def visit_config(self, node: Config) -> Any:
        return self.visit_node(node)

    def visit_intask(self, node: Intask) -> Any:
        return self.visit_node(node)

    def visit_key(self, node: Key) -> Any:
        return self.visit_node(node)

    def visit_project_id(self, node: ProjectId) -> Any:
        return self.visit_node(node)

    def visit_scoped_key(self, node: ScopedKey) -> Any:
        return self.visit_node(node)

    def visit_uri(self, node: Uri) -> Any:
        return self.visit_node(node)

    def visit_node(self, node: ASTNode) -> Any:
        """Generic fallback for every node kind."""
        return None


def walk(node: ASTNode, visitor: ShellVisitor) -> None:
    """Pre-order traversal: each node is dispatched to the visitor exactly once."""
    node.accept(visitor)
    for child in node.children():
        walk(child, visitor)


# ============================================================
# Span collection (what a highlighter consumes)
# ============================================================

@dataclass(frozen=True)
class NodeSpan:
    kind: str
    span: Span
    text: str


class SpanCollector(ShellVisitor):
    """Records the kind, span and source text of every node it is handed."""

    def __init__(self, source: str):
        self.source = source
        self.spans: list[NodeSpan] = []

    def visit_node(self, node: ASTNode) -> Any:
        self.spans.append(NodeSpan(type(node).__name__, node.span, node.span.slice(self.source)))


def collect_spans(command: Command) -> list[NodeSpan]:
    collector = SpanCollector(command.source)
    walk(command, collector)
    return collector.spans
