"""Token types for the sbt shell command line."""
from enum import Enum, auto
from dataclasses import dataclass


class TokenType(Enum):
    IDENTIFIER = auto()

    # === Punctuation ===
    SLASH = auto()            # /
    COLON = auto()            # :
    DOUBLE_COLON = auto()     # ::

    # === Build URI ===
    LBRACE = auto()
    RBRACE = auto()
    URI_BODY = auto()         # raw text between { and }

    # === Everything else ===
    WHITESPACE = auto()
    OTHER = auto()            # one unrecognized character, kept verbatim
    EOF = auto()


@dataclass(frozen=True)
class Span:
    """Half-open range of offsets into the input line."""
    start: int
    end: int

    def slice(self, source: str) -> str:
        return source[self.start : self.end]


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str
    start: int
    # Set on a URI_BODY whose closing brace never came
    malformed: bool = False

    @property
    def end(self) -> int:
        return self.start + len(self.text)

    @property
    def span(self) -> Span:
        return Span(self.start, self.end)

    @property
    def column(self) -> int:
        return self.start + 1

    def __repr__(self):
        flag = ", malformed" if self.malformed else ""
        return f"Token({self.type.name}, {self.text!r}, C{self.column}{flag})"


PUNCTUATION: dict[str, TokenType] = {
    "/": TokenType.SLASH,
    ":": TokenType.COLON,
    "}": TokenType.RBRACE,
}
