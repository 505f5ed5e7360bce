"""Token classification using only neighbour links. No state beyond the stream and config."""

from typing import TYPE_CHECKING

from wmf_styleguide_linter.domain.constants import INCLUDE_KEYWORDS
from wmf_styleguide_linter.domain.tokens import TokenKind, TokenStream

if TYPE_CHECKING:
    from wmf_styleguide_linter.domain.config import ConfigurationLoader


CALLABLE_KINDS: frozenset[TokenKind] = frozenset({TokenKind.NAME, TokenKind.FUNCTION_NAME})
NODE_TITLE_KINDS: frozenset[TokenKind] = frozenset(
    {TokenKind.STRING, TokenKind.SSTRING, TokenKind.NAME, TokenKind.REGEX}
)
# Keywords whose following NAME starts a declaration body, not a resource.
DECLARATION_KEYWORDS: frozenset[TokenKind] = frozenset(
    {TokenKind.CLASS, TokenKind.DEFINE, TokenKind.NODE, TokenKind.INHERITS}
)


class TokenPredicates:
    """
    Answers questions about the token at a stream index.

    Every lookahead/lookback that runs off either end of the stream is a
    non-match; nothing here raises on odd token patterns.
    """

    def __init__(self, stream: TokenStream, config: "ConfigurationLoader") -> None:
        self._stream = stream
        self._config = config

    @property
    def stream(self) -> TokenStream:
        return self._stream

    @property
    def config(self) -> "ConfigurationLoader":
        return self._config

    def is_function_call(self, index: int) -> bool:
        """A name immediately followed (ignoring formatting) by '('."""
        if self._stream.kind_at(index) not in CALLABLE_KINDS:
            return False
        return self._stream.kind_at(self._stream.next_code(index)) == TokenKind.LPAREN

    def is_legacy_lookup_call(self, index: int) -> bool:
        return (
            self.is_function_call(index)
            and self._stream[index].text in self._config.legacy_lookup_functions
        )

    def is_lookup_call(self, index: int) -> bool:
        return (
            self.is_function_call(index)
            and self._stream[index].text == self._config.lookup_function
        )

    def is_any_lookup_call(self, index: int) -> bool:
        return self.is_lookup_call(index) or self.is_legacy_lookup_call(index)

    def is_legacy_validate_call(self, index: int) -> bool:
        return self.is_function_call(index) and self._stream[index].text.startswith(
            self._config.legacy_validate_prefix
        )

    def is_class_include(self, index: int) -> bool:
        """include/require/contain used as a statement, not as a hash key."""
        token = self._stream[index]
        if token.kind != TokenKind.NAME or token.text not in INCLUDE_KEYWORDS:
            return False
        following = self._stream.next_code(index)
        if following is None:
            return False
        return self._stream.kind_at(following) != TokenKind.FARROW

    def included_class_of(self, index: int) -> int | None:
        """Index of the token naming the included class, if ``index`` is an include."""
        if not self.is_class_include(index):
            return None
        following = self._stream.next_code(index)
        if self._stream.kind_at(following) == TokenKind.LPAREN:
            return self._stream.next_code(following)
        return following

    def declared_class_of(self, index: int) -> int | None:
        """Index of the title in ``class { 'title': }``, if ``index`` is that CLASS keyword."""
        if self._stream.kind_at(index) != TokenKind.CLASS:
            return None
        following = self._stream.next_code(index)
        if self._stream.kind_at(following) != TokenKind.LBRACE:
            return None
        return self._stream.next_code(following)

    def is_declared_resource_type(self, index: int) -> bool:
        """``foo::bar { ... }`` as opposed to the name of a class/define/node being declared."""
        if self._stream.kind_at(index) != TokenKind.NAME:
            return False
        if self._stream.kind_at(self._stream.next_code(index)) != TokenKind.LBRACE:
            return False
        return self._stream.kind_at(self._stream.prev_code(index)) not in DECLARATION_KEYWORDS

    def is_node_title_candidate(self, index: int) -> bool:
        return self._stream.kind_at(index) in NODE_TITLE_KINDS

    def first_argument_text(self, index: int) -> str:
        """Text of the code token two hops after a call name: ``hiera ( 'label' )``."""
        argument = self._stream.next_code(self._stream.next_code(index))
        return self._stream.text_at(argument) or ""
