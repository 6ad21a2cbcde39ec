"""Recursive descent parser for sbt shell lines.

    Command        := ScopedKeyInvocation | OpaqueRemainder
    ScopedKey      := Uri? ProjectSegment? ConfigSegment? Key Intask?
    ProjectSegment := ProjectId '/'
    ConfigSegment  := Config ':'
    Uri            := '{' URI_BODY '}'
    Intask         := '::' IDENTIFIER

The parser runs on every keystroke, so it makes one forward pass with at
most two tokens of lookahead and never raises: input that has no key falls
back to an OPAQUE command holding the whole line.
"""
from __future__ import annotations
import logging
from enum import Enum, auto
from typing import Optional

from .ast_nodes import (
    Command, CommandKind, Config, Intask, Key, Leaf, ProjectId, ScopedKey, Uri,
)
from .lexer import tokenize
from .tokens import Span, Token, TokenType

log = logging.getLogger("sbtshell.parser")


class ShellSyntaxError(Exception):
    """Raised by check_command only. parse_command never raises."""

    def __init__(self, message: str, column: int):
        super().__init__(f"[sbt-shell C{column}] Syntax error: {message}")
        self.column = column


class ParseState(Enum):
    START = auto()
    URI = auto()
    PROJECT = auto()
    CONFIG = auto()
    REQUIRE_KEY = auto()
    INTASK = auto()
    DONE = auto()
    OPAQUE = auto()


class Parser:
    def __init__(self, tokens: list[Token]):
        if not tokens or tokens[-1].type != TokenType.EOF:
            end = tokens[-1].end if tokens else 0
            tokens = list(tokens) + [Token(TokenType.EOF, "", end)]
        self.tokens = tokens
        self.pos = 0
        self.state = ParseState.START
        # Why and where the parse gave up, when it did
        self.fallback_reason: Optional[str] = None
        self.fallback_column: int = 0

    # ================================================
    # Utilities
    # ================================================

    @property
    def current(self) -> Token:
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[self.pos]

    def peek(self, offset: int = 1) -> Token:
        p = self.pos + offset
        if p >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[p]

    def advance(self) -> Token:
        tok = self.current
        if tok.type != TokenType.EOF:
            self.pos += 1
        return tok

    def check(self, *types: TokenType) -> bool:
        return self.current.type in types

    def enter(self, state: ParseState):
        self.state = state

    @property
    def body(self) -> tuple[Token, ...]:
        """Every token of the line except EOF."""
        return tuple(self.tokens[:-1])

    # ================================================
    # Top-level
    # ================================================

    def parse(self) -> Command:
        """Parse one line. Always returns a Command; safe to call again."""
        self.pos = 0
        self.state = ParseState.START
        self.fallback_reason = None
        self.fallback_column = 0

        leading = []
        while self.check(TokenType.WHITESPACE):
            leading.append(self.advance())
        start = self.current.start

        uri = None
        if self.check(TokenType.LBRACE):
            self.enter(ParseState.URI)
            uri = self.parse_uri()
            if uri is None:
                return self.opaque(None, "expected a build URI between braces")
            if uri.malformed:
                return self.opaque(uri, "unterminated build URI")

        project = None
        if self.check(TokenType.IDENTIFIER) and self.peek().type == TokenType.SLASH:
            self.enter(ParseState.PROJECT)
            project = self.parse_leaf(ProjectId)
            self.advance()  # '/'

        # DOUBLE_COLON is its own token, so "a::b" never reaches this branch
        config = None
        if self.check(TokenType.IDENTIFIER) and self.peek().type == TokenType.COLON:
            self.enter(ParseState.CONFIG)
            config = self.parse_leaf(Config)
            self.advance()  # ':'

        self.enter(ParseState.REQUIRE_KEY)
        if not self.check(TokenType.IDENTIFIER):
            return self.opaque(uri, "expected a key")
        key = self.parse_leaf(Key)

        intask = None
        if self.check(TokenType.DOUBLE_COLON) and self.peek().type == TokenType.IDENTIFIER:
            self.enter(ParseState.INTASK)
            self.advance()  # '::'
            intask = self.parse_leaf(Intask)

        self.enter(ParseState.DONE)
        scoped_key = ScopedKey(
            key=key, uri=uri, project=project, config=config, intask=intask,
            span=Span(start, self.tokens[self.pos - 1].end),
        )
        return Command(
            kind=CommandKind.SCOPED_KEY,
            scoped_key=scoped_key,
            leading=tuple(leading),
            trailing=tuple(self.tokens[self.pos : -1]),
            tokens=self.body,
            span=Span(0, self.tokens[-1].start),
        )

    def opaque(self, uri: Optional[Uri], reason: str) -> Command:
        """Give up on structure and keep the whole line as free text."""
        self.enter(ParseState.OPAQUE)
        self.fallback_reason = reason
        self.fallback_column = self.current.column
        log.debug("opaque line at C%d: %s", self.fallback_column, reason)
        return Command(
            kind=CommandKind.OPAQUE,
            uri=uri,
            trailing=self.body,
            tokens=self.body,
            span=Span(0, self.tokens[-1].start),
        )

    # ================================================
    # Segments
    # ================================================

    def parse_leaf(self, node_type: type[Leaf]) -> Leaf:
        tok = self.advance()
        return node_type(tok.text, span=tok.span)

    def parse_uri(self) -> Optional[Uri]:
        """'{' URI_BODY '}'. An unterminated body becomes a malformed Uri."""
        lbrace = self.advance()
        if not self.check(TokenType.URI_BODY):
            return None
        body = self.advance()
        if body.malformed:
            return Uri(body.text, malformed=True, span=Span(lbrace.start, body.end))
        if not self.check(TokenType.RBRACE):
            return None
        rbrace = self.advance()
        return Uri(body.text, span=Span(lbrace.start, rbrace.end))


def parse_command(text: str) -> Command:
    """Parse one shell line. Never raises; unparseable input comes back OPAQUE."""
    return Parser(tokenize(text)).parse()


def check_command(text: str) -> Command:
    """Like parse_command, but raise ShellSyntaxError unless the line is a scoped key."""
    parser = Parser(tokenize(text))
    command = parser.parse()
    if command.is_opaque:
        raise ShellSyntaxError(parser.fallback_reason or "expected a key", parser.fallback_column)
    return command
