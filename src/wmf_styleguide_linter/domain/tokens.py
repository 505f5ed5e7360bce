"""Token model for pre-lexed manifests. The host lexer produces these; the core only reads them."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wmf_styleguide_linter.domain.entities import Edit


class TokenKind(Enum):
    """Lexical tags, named after the host lexer's token types."""

    NAME = "NAME"
    FUNCTION_NAME = "FUNCTION_NAME"
    VARIABLE = "VARIABLE"
    STRING = "STRING"
    SSTRING = "SSTRING"
    REGEX = "REGEX"
    CLASSREF = "CLASSREF"
    NUMBER = "NUMBER"
    CLASS = "CLASS"
    DEFINE = "DEFINE"
    NODE = "NODE"
    INHERITS = "INHERITS"
    DEFAULT = "DEFAULT"
    FUNCTION = "FUNCTION"
    IF = "IF"
    ELSIF = "ELSIF"
    ELSE = "ELSE"
    UNLESS = "UNLESS"
    CASE = "CASE"
    TRUE = "TRUE"
    FALSE = "FALSE"
    UNDEF = "UNDEF"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    LBRACK = "LBRACK"
    RBRACK = "RBRACK"
    COMMA = "COMMA"
    COLON = "COLON"
    SEMIC = "SEMIC"
    DOT = "DOT"
    EQUALS = "EQUALS"
    FARROW = "FARROW"
    ISEQUAL = "ISEQUAL"
    NOTEQUAL = "NOTEQUAL"
    MATCH = "MATCH"
    NOMATCH = "NOMATCH"
    IN_EDGE = "IN_EDGE"
    OUT_EDGE = "OUT_EDGE"
    PLUS = "PLUS"
    MINUS = "MINUS"
    TIMES = "TIMES"
    DIV = "DIV"
    NOT = "NOT"
    QMARK = "QMARK"
    PIPE = "PIPE"
    AT = "AT"
    WHITESPACE = "WHITESPACE"
    NEWLINE = "NEWLINE"
    INDENT = "INDENT"
    COMMENT = "COMMENT"
    MLCOMMENT = "MLCOMMENT"
    SLASH_COMMENT = "SLASH_COMMENT"


FORMATTING_KINDS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.WHITESPACE,
        TokenKind.NEWLINE,
        TokenKind.INDENT,
        TokenKind.COMMENT,
        TokenKind.MLCOMMENT,
        TokenKind.SLASH_COMMENT,
    }
)


@dataclass
class Token:
    """
    One lexical unit.

    Only ``text`` is ever written after construction, and only by applying
    an autofix Edit through the owning TokenStream.
    """

    kind: TokenKind
    text: str
    line: int
    column: int

    @property
    def is_formatting(self) -> bool:
        return self.kind in FORMATTING_KINDS


class TokenStream:
    """
    Index-addressed token arena.

    Next/previous code-token links are computed once at construction, so every
    neighbour lookup is a list access. ``None`` means the start or end of the
    stream was reached.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens: list[Token] = list(tokens)
        size = len(self._tokens)
        self._next_code: list[int | None] = [None] * size
        self._prev_code: list[int | None] = [None] * size

        following: int | None = None
        for i in range(size - 1, -1, -1):
            self._next_code[i] = following
            if not self._tokens[i].is_formatting:
                following = i

        preceding: int | None = None
        for i in range(size):
            self._prev_code[i] = preceding
            if not self._tokens[i].is_formatting:
                preceding = i

    def __len__(self) -> int:
        return len(self._tokens)

    def __getitem__(self, index: int) -> Token:
        return self._tokens[index]

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def next_code(self, index: int | None) -> int | None:
        """Index of the nearest code token after ``index``."""
        if index is None or not 0 <= index < len(self._tokens):
            return None
        return self._next_code[index]

    def prev_code(self, index: int | None) -> int | None:
        """Index of the nearest code token before ``index``."""
        if index is None or not 0 <= index < len(self._tokens):
            return None
        return self._prev_code[index]

    def kind_at(self, index: int | None) -> TokenKind | None:
        if index is None:
            return None
        return self._tokens[index].kind

    def text_at(self, index: int | None) -> str | None:
        if index is None:
            return None
        return self._tokens[index].text

    def apply(self, edit: "Edit") -> None:
        """Replace the text of the token an Edit targets."""
        self._tokens[edit.token_index].text = edit.replacement
