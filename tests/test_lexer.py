"""Tests for the sbt shell lexer."""
import pytest
from sbtshell.lexer import Lexer
from sbtshell.tokens import TokenType


def lex(source: str) -> list:
    return Lexer(source).tokenize()


def token_types(source: str) -> list[TokenType]:
    return [t.type for t in lex(source) if t.type != TokenType.EOF]


class TestIdentifiers:
    def test_simple(self):
        toks = lex("compile")
        assert toks[0].type == TokenType.IDENTIFIER
        assert toks[0].text == "compile"

    def test_dashes_and_underscores(self):
        toks = lex("my-project_2")
        assert len(toks) == 2
        assert toks[0].text == "my-project_2"

    def test_must_start_with_letter(self):
        toks = lex("1abc")
        assert toks[0].type == TokenType.OTHER
        assert toks[0].text == "1"
        assert toks[1].type == TokenType.IDENTIFIER
        assert toks[1].text == "abc"

    def test_leading_underscore_is_other(self):
        assert token_types("_x") == [TokenType.OTHER, TokenType.IDENTIFIER]


class TestPunctuation:
    def test_slash(self):
        assert token_types("a/b") == [TokenType.IDENTIFIER, TokenType.SLASH, TokenType.IDENTIFIER]

    def test_colon(self):
        assert token_types("a:b") == [TokenType.IDENTIFIER, TokenType.COLON, TokenType.IDENTIFIER]

    def test_double_colon_before_colon(self):
        assert token_types("a::b") == [TokenType.IDENTIFIER, TokenType.DOUBLE_COLON, TokenType.IDENTIFIER]

    def test_triple_colon(self):
        assert token_types(":::") == [TokenType.DOUBLE_COLON, TokenType.COLON]

    def test_stray_rbrace(self):
        assert token_types("}") == [TokenType.RBRACE]

    def test_whitespace_run_is_one_token(self):
        toks = lex("a \t b")
        assert toks[1].type == TokenType.WHITESPACE
        assert toks[1].text == " \t "

    def test_unknown_characters(self):
        types = token_types("a;=.")
        assert types == [TokenType.IDENTIFIER, TokenType.OTHER, TokenType.OTHER, TokenType.OTHER]


class TestUri:
    def test_terminated(self):
        toks = lex("{file:/x}")
        assert [t.type for t in toks] == [
            TokenType.LBRACE, TokenType.URI_BODY, TokenType.RBRACE, TokenType.EOF,
        ]
        assert toks[1].text == "file:/x"
        assert not toks[1].malformed

    def test_body_is_verbatim(self):
        toks = lex("{ a b::c/d }")
        assert toks[1].text == " a b::c/d "

    def test_unterminated(self):
        toks = lex("{unterminated")
        assert toks[1].type == TokenType.URI_BODY
        assert toks[1].text == "unterminated"
        assert toks[1].malformed

    def test_empty_braces(self):
        assert token_types("{}") == [TokenType.LBRACE, TokenType.RBRACE]

    def test_lone_brace(self):
        toks = lex("{")
        assert [t.type for t in toks] == [TokenType.LBRACE, TokenType.URI_BODY, TokenType.EOF]
        assert toks[1].text == ""
        assert toks[1].malformed
        assert (toks[1].start, toks[1].end) == (1, 1)

    def test_first_rbrace_terminates(self):
        toks = lex("{a{b}c}")
        assert toks[1].text == "a{b"
        assert token_types("{a{b}c}") == [
            TokenType.LBRACE, TokenType.URI_BODY, TokenType.RBRACE,
            TokenType.IDENTIFIER, TokenType.RBRACE,
        ]


class TestStream:
    def test_empty_input(self):
        toks = lex("")
        assert len(toks) == 1
        assert toks[0].type == TokenType.EOF
        assert toks[0].start == 0

    def test_eof_at_end(self):
        toks = lex("abc")
        assert toks[-1].type == TokenType.EOF
        assert toks[-1].start == 3

    def test_offsets(self):
        toks = lex("proj/compile")
        assert [(t.start, t.end) for t in toks[:3]] == [(0, 4), (4, 5), (5, 12)]
        assert toks[2].column == 6

    def test_restartable(self):
        lexer = Lexer("a/b c")
        assert list(lexer) == list(lexer)

    def test_lazy(self):
        it = iter(Lexer("a b"))
        assert next(it).text == "a"
        assert next(it).type == TokenType.WHITESPACE

    @pytest.mark.parametrize("source", [
        "",
        "compile",
        "  {file:/x}proj/Compile:compile::test  -- extra ",
        "{unterminated",
        "héllo wörld;;; ::: }}{",
        "\t\n/é",
    ])
    def test_lossless(self, source):
        assert "".join(t.text for t in lex(source)) == source
