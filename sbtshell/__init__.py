# sbtshell: grammar for lines typed into the sbt shell
__version__ = "0.1.0"

from .tokens import Token, TokenType, Span
from .lexer import Lexer, tokenize
from .ast_nodes import (
    ASTNode, Command, CommandKind, Config, Intask, Key, ProjectId, ScopedKey, Uri,
)
from .parser import Parser, ShellSyntaxError, check_command, parse_command
from .visitor import ShellVisitor, walk, collect_spans
