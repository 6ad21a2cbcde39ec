"""AST node definitions for sbt shell lines.

Nodes are frozen once the parser builds them. Spans are kept for
highlighting but do not take part in equality, so two nodes compare equal
when they are the same kind with equal text and equal children.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterator, Optional

from .tokens import Span, Token

if TYPE_CHECKING:
    from .visitor import ShellVisitor


# ============================================================
# Base
# ============================================================

@dataclass(frozen=True)
class ASTNode:
    """Base for all AST nodes."""
    span: Span = field(default=Span(0, 0), compare=False, kw_only=True)

    def children(self) -> Iterator[ASTNode]:
        return iter(())

    def accept(self, visitor: ShellVisitor) -> Any:
        return visitor.visit_node(self)


@dataclass(frozen=True)
class Leaf(ASTNode):
    """A node holding exactly one token of text."""
    text: str = ""


# ============================================================
# Leaves
# ============================================================

@dataclass(frozen=True)
class Uri(Leaf):
    """{file:/path/to/build}: the body between the braces, scheme unchecked."""
    malformed: bool = False  # no closing brace

    def render(self) -> str:
        return "{" + self.text + ("" if self.malformed else "}")

    def accept(self, visitor: ShellVisitor) -> Any:
        return visitor.visit_uri(self)


@dataclass(frozen=True)
class ProjectId(Leaf):
    def accept(self, visitor: ShellVisitor) -> Any:
        return visitor.visit_project_id(self)


@dataclass(frozen=True)
class Config(Leaf):
    def accept(self, visitor: ShellVisitor) -> Any:
        return visitor.visit_config(self)


@dataclass(frozen=True)
class Key(Leaf):
    def accept(self, visitor: ShellVisitor) -> Any:
        return visitor.visit_key(self)


@dataclass(frozen=True)
class Intask(Leaf):
    def accept(self, visitor: ShellVisitor) -> Any:
        return visitor.visit_intask(self)


# ============================================================
# Composites
# ============================================================

@dataclass(frozen=True)
class ScopedKey(ASTNode):
    """{uri}project/config:key::intask. Only the key is mandatory."""
    key: Key
    uri: Optional[Uri] = None
    project: Optional[ProjectId] = None
    config: Optional[Config] = None
    intask: Optional[Intask] = None

    def children(self) -> Iterator[ASTNode]:
        # Always source order
        for child in (self.uri, self.project, self.config, self.key, self.intask):
            if child is not None:
                yield child

    def render(self) -> str:
        """Canonical source form of the scoped key."""
        parts = []
        if self.uri:
            parts.append(self.uri.render())
        if self.project:
            parts.append(self.project.text + "/")
        if self.config:
            parts.append(self.config.text + ":")
        parts.append(self.key.text)
        if self.intask:
            parts.append("::" + self.intask.text)
        return "".join(parts)

    def accept(self, visitor: ShellVisitor) -> Any:
        return visitor.visit_scoped_key(self)


class CommandKind(Enum):
    SCOPED_KEY = "scoped_key"
    OPAQUE = "opaque"


@dataclass(frozen=True)
class Command(ASTNode):
    """One full shell line.

    A SCOPED_KEY command holds the parsed key address, the whitespace in
    front of it (``leading``) and whatever follows it (``trailing``). An
    OPAQUE command keeps every token in ``trailing``; if the line opened
    with a brace segment before giving up, that Uri is kept in ``uri``.
    """
    kind: CommandKind = CommandKind.OPAQUE
    scoped_key: Optional[ScopedKey] = None
    uri: Optional[Uri] = None
    leading: tuple[Token, ...] = ()
    trailing: tuple[Token, ...] = ()
    tokens: tuple[Token, ...] = field(default=(), compare=False)

    @property
    def is_opaque(self) -> bool:
        return self.kind is CommandKind.OPAQUE

    @property
    def source(self) -> str:
        """The input line, rebuilt from tokens."""
        return "".join(t.text for t in self.tokens)

    @property
    def free_text(self) -> str:
        """Text after the scoped key, or the whole line when opaque."""
        return "".join(t.text for t in self.trailing)

    @property
    def arguments(self) -> list[str]:
        return self.free_text.split()

    def children(self) -> Iterator[ASTNode]:
        if self.scoped_key is not None:
            yield self.scoped_key
        elif self.uri is not None:
            yield self.uri

    def accept(self, visitor: ShellVisitor) -> Any:
        return visitor.visit_command(self)
