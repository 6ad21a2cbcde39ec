"""Lexer for sbt shell lines: turns one line of input into a stream of Tokens.

The lexer never fails: every character ends up in exactly one token, so
joining the token texts gives back the original line.
"""
from __future__ import annotations
from typing import Iterator

from .tokens import Token, TokenType, PUNCTUATION


def is_identifier_start(ch: str) -> bool:
    return ch.isalpha()


def is_identifier_part(ch: str) -> bool:
    return ch.isalnum() or ch in ("-", "_")


class Lexer:
    def __init__(self, source: str):
        self.source = source

    def __iter__(self) -> Iterator[Token]:
        # Every iteration starts over, so a Lexer can be scanned any number of times
        return self._scan()

    def tokenize(self) -> list[Token]:
        """Tokenize the whole line. The last token is always EOF."""
        return list(self)

    # ================================================
    # Scanners. Each takes a start offset and returns the end offset.
    # ================================================

    def read_identifier(self, pos: int) -> int:
        end = pos + 1
        while end < len(self.source) and is_identifier_part(self.source[end]):
            end += 1
        return end

    def read_whitespace(self, pos: int) -> int:
        end = pos + 1
        while end < len(self.source) and self.source[end].isspace():
            end += 1
        return end

    def read_uri_body(self, pos: int) -> int:
        """Scan up to (not including) the first '}' or the end of input."""
        end = self.source.find("}", pos)
        return len(self.source) if end == -1 else end

    # ================================================
    # Main loop
    # ================================================

    def _scan(self) -> Iterator[Token]:
        source = self.source
        pos = 0

        while pos < len(source):
            ch = source[pos]

            if ch.isspace():
                end = self.read_whitespace(pos)
                yield Token(TokenType.WHITESPACE, source[pos:end], pos)
                pos = end
                continue

            if is_identifier_start(ch):
                end = self.read_identifier(pos)
                yield Token(TokenType.IDENTIFIER, source[pos:end], pos)
                pos = end
                continue

            # "::" before ":"
            if ch == ":" and source.startswith("::", pos):
                yield Token(TokenType.DOUBLE_COLON, "::", pos)
                pos += 2
                continue

            if ch == "{":
                yield Token(TokenType.LBRACE, "{", pos)
                pos += 1
                end = self.read_uri_body(pos)
                terminated = end < len(source)
                # An unterminated body is emitted even when empty; "{}" has no body token
                if end > pos or not terminated:
                    yield Token(TokenType.URI_BODY, source[pos:end], pos, malformed=not terminated)
                pos = end
                if terminated:
                    yield Token(TokenType.RBRACE, "}", pos)
                    pos += 1
                continue

            if ch in PUNCTUATION:
                yield Token(PUNCTUATION[ch], ch, pos)
                pos += 1
                continue

            yield Token(TokenType.OTHER, ch, pos)
            pos += 1

        yield Token(TokenType.EOF, "", pos)


def tokenize(source: str) -> list[Token]:
    return Lexer(source).tokenize()
