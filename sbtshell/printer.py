"""Indented text dump of a parsed line, used by the CLI."""
from __future__ import annotations
from typing import Any

from .ast_nodes import ASTNode, Command, ScopedKey, Uri
from .visitor import ShellVisitor


class TreePrinter(ShellVisitor):
    def __init__(self, indent: str = "  "):
        self.indent = indent
        self.depth = 0
        self.lines: list[str] = []

    def emit(self, node: ASTNode, label: str):
        self.lines.append(f"{self.indent * self.depth}{label} @{node.span.start}..{node.span.end}")

    def descend(self, node: ASTNode):
        self.depth += 1
        for child in node.children():
            child.accept(self)
        self.depth -= 1

    def visit_command(self, node: Command) -> Any:
        self.emit(node, f"Command [{node.kind.value}]")
        self.descend(node)
        if node.free_text:
            self.lines.append(f"{self.indent * (self.depth + 1)}text {node.free_text!r}")

    def visit_scoped_key(self, node: ScopedKey) -> Any:
        self.emit(node, f"ScopedKey {node.render()!r}")
        self.descend(node)

    def visit_uri(self, node: Uri) -> Any:
        suffix = " (malformed)" if node.malformed else ""
        self.emit(node, f"Uri {node.text!r}{suffix}")

    def visit_node(self, node: ASTNode) -> Any:
        self.emit(node, f"{type(node).__name__} {getattr(node, 'text', '')!r}")


def format_tree(command: Command, indent: str = "  ") -> str:
    printer = TreePrinter(indent)
    command.accept(printer)
    return "\n".join(printer.lines)
