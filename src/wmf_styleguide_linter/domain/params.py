"""Parameter-list parsing for class and defined type declarations."""

from collections.abc import Iterable

from wmf_styleguide_linter.domain.entities import Parameter
from wmf_styleguide_linter.domain.tokens import TokenKind, TokenStream

_OPENERS: frozenset[TokenKind] = frozenset({TokenKind.LPAREN, TokenKind.LBRACK, TokenKind.LBRACE})
_CLOSERS: frozenset[TokenKind] = frozenset({TokenKind.RPAREN, TokenKind.RBRACK, TokenKind.RBRACE})


class ParameterParser:
    """
    Turns the tokens between a declaration's parentheses into an ordered
    name -> Parameter mapping.

    State is (current parameter, inside a default value). A VARIABLE starts
    a parameter, '=' opens its value, a top-level ',' closes it. Commas and
    variables nested in brackets of a default (``lookup('a', {...})``)
    belong to the value. Formatting tokens are skipped. A repeated name
    keeps its first declaring token; its later default replaces the
    earlier one.
    """

    @staticmethod
    def normalize_name(text: str) -> str:
        return text[1:] if text.startswith("$") else text

    @staticmethod
    def parse(stream: TokenStream, indices: Iterable[int]) -> dict[str, Parameter]:
        params: dict[str, Parameter] = {}
        current: str | None = None
        in_value = False
        depth = 0
        for i in indices:
            token = stream[i]
            if token.is_formatting:
                continue
            nested = in_value and depth > 0
            if token.kind == TokenKind.VARIABLE and not nested:
                current = ParameterParser.normalize_name(token.text)
                if current not in params:
                    params[current] = Parameter(declaring_index=i)
                in_value = False
            elif token.kind == TokenKind.COMMA and not nested:
                current = None
                in_value = False
            elif token.kind == TokenKind.EQUALS and not nested:
                in_value = True
                depth = 0
                if current is not None:
                    params[current].value_indices = []
            elif in_value and current is not None:
                if token.kind in _OPENERS:
                    depth += 1
                elif token.kind in _CLOSERS and depth > 0:
                    depth -= 1
                params[current].value_indices.append(i)
        return params
