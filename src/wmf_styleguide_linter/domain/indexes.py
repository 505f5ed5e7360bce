"""
Resource indexing over a full token stream.

NodeBlockScanner carves out node blocks with brace-depth tracking, so
braces of resources nested in a node body are never taken for the block
end. DefinitionIndexer reproduces the host's class/define indexer so the
check can also run on a bare token stream.
"""

from wmf_styleguide_linter.domain.entities import (
    DefinitionRecord,
    NodeRecord,
    ResourceKind,
)
from wmf_styleguide_linter.domain.predicates import NODE_TITLE_KINDS
from wmf_styleguide_linter.domain.tokens import TokenKind, TokenStream


class NodeBlockScanner:
    """Single left-to-right pass; tokens outside a node block are ignored."""

    def __init__(self, path: str = "", filename: str = "") -> None:
        self._path = path
        self._filename = filename

    def scan(self, stream: TokenStream) -> list[NodeRecord]:
        result: list[NodeRecord] = []
        in_node = False
        depth = 0
        start = 0
        title_indices: tuple[int, ...] = ()
        for i, token in enumerate(stream):
            if token.kind == TokenKind.NODE:
                in_node = True
                depth = 0
                start = i
                title_indices = ()
                continue
            if not in_node:
                continue
            if token.kind == TokenKind.LBRACE:
                if depth == 0:
                    title_indices = tuple(
                        j for j in range(start + 1, i) if stream[j].kind in NODE_TITLE_KINDS
                    )
                depth += 1
            elif token.kind == TokenKind.RBRACE:
                depth -= 1
                if depth == 0:
                    result.append(
                        NodeRecord(
                            start=start,
                            end=i,
                            title_indices=title_indices,
                            path=self._path,
                            filename=self._filename,
                        )
                    )
                    in_node = False
        return result


class DefinitionIndexer:
    """
    Finds class and defined type declarations.

    From each CLASS/DEFINE keyword scan forward tracking brace and
    parenthesis depth. The first brace pair closing at depth 0 outside the
    parameter list ends the declaration. ``class { 'x': }`` declares a class
    rather than defining one and yields no record; neither does a
    definition whose braces never balance.
    """

    _KINDS: dict[TokenKind, ResourceKind] = {
        TokenKind.CLASS: ResourceKind.CLASS,
        TokenKind.DEFINE: ResourceKind.DEFINED_TYPE,
    }

    def __init__(self, path: str = "", filename: str = "") -> None:
        self._path = path
        self._filename = filename

    def class_indexes(self, stream: TokenStream) -> list[DefinitionRecord]:
        return self._definitions(stream, TokenKind.CLASS)

    def defined_type_indexes(self, stream: TokenStream) -> list[DefinitionRecord]:
        return self._definitions(stream, TokenKind.DEFINE)

    def _definitions(self, stream: TokenStream, keyword: TokenKind) -> list[DefinitionRecord]:
        result: list[DefinitionRecord] = []
        for i, token in enumerate(stream):
            if token.kind != keyword:
                continue
            name_index = stream.next_code(i)
            if name_index is None or stream.kind_at(name_index) == TokenKind.LBRACE:
                continue
            end, inherited = self._find_end(stream, i)
            if end is None:
                continue
            result.append(
                DefinitionRecord(
                    kind=self._KINDS[keyword],
                    start=i,
                    end=end,
                    name_index=name_index,
                    param_span=self.param_span(stream, i, end),
                    inherited_index=inherited,
                    path=self._path,
                    filename=self._filename,
                )
            )
        return result

    @staticmethod
    def _find_end(stream: TokenStream, start: int) -> tuple[int | None, int | None]:
        brace_depth = 0
        paren_depth = 0
        in_params = False
        inherited: int | None = None
        for j in range(start + 1, len(stream)):
            kind = stream[j].kind
            if kind == TokenKind.INHERITS:
                inherited = stream.next_code(j)
            elif kind == TokenKind.LPAREN:
                if paren_depth == 0:
                    in_params = True
                paren_depth += 1
            elif kind == TokenKind.RPAREN:
                if paren_depth == 1:
                    in_params = False
                paren_depth -= 1
            elif kind == TokenKind.LBRACE:
                brace_depth += 1
            elif kind == TokenKind.RBRACE:
                brace_depth -= 1
                if brace_depth == 0 and not in_params:
                    return j, inherited
        return None, inherited

    @staticmethod
    def param_span(stream: TokenStream, start: int, end: int) -> tuple[int, int] | None:
        """Half-open range inside the first top-level parentheses before the body opens."""
        depth = 0
        lparen: int | None = None
        for j in range(start, end + 1):
            kind = stream[j].kind
            if kind == TokenKind.LPAREN:
                depth += 1
                if depth == 1:
                    lparen = j
            elif kind == TokenKind.RPAREN:
                depth -= 1
                if depth == 0 and lparen is not None:
                    return (lparen + 1, j)
            elif kind == TokenKind.LBRACE and depth == 0:
                return None
        return None
