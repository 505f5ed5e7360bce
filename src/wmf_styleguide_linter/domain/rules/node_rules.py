"""Node declaration rules (E7020-E7028): nodes only pick a role, and match hosts by anchored regex."""

import re
from typing import ClassVar

from wmf_styleguide_linter.domain.constants import NODE_DEFAULT_TITLE
from wmf_styleguide_linter.domain.entities import Edit, FixType
from wmf_styleguide_linter.domain.resource import PuppetNode, PuppetResource
from wmf_styleguide_linter.domain.rule_msgs import RuleMsgBuilder
from wmf_styleguide_linter.domain.rules import FixNotSupportedError, StyleguideRule, Violation
from wmf_styleguide_linter.domain.tokens import TokenKind, TokenStream


class NodeBodyRule(StyleguideRule):
    """
    Rule for E7020-E7024: a node body holds nothing but the role() call.

    Each token reports at most one problem: lookup, legacy lookup, class
    inclusion, class declaration, then resource declaration.
    """

    code: str = "E7020"
    legacy_code: str = "E7021"
    include_code: str = "E7022"
    class_code: str = "E7023"
    resource_code: str = "E7024"
    description: str = "Node bodies must not look up data, include classes or declare resources."

    def check(self, node: PuppetNode) -> list[Violation]:
        predicates = node.predicates
        stream = node.stream
        allowed = self._config.node_allowed_resources
        title = node.title
        violations: list[Violation] = []
        for index in node.token_indices:
            if predicates.is_lookup_call(index):
                violations.append(self._at_token(stream, index, title, path=node.path))
                continue
            if predicates.is_legacy_lookup_call(index):
                violations.append(
                    self._at_token(
                        stream, index, title, stream[index].text,
                        path=node.path, code=self.legacy_code,
                    )
                )
                continue
            included = predicates.included_class_of(index)
            if included is not None:
                violations.append(
                    self._at_token(
                        stream, index, title, PuppetResource.normalize(stream[included].text),
                        path=node.path, code=self.include_code,
                    )
                )
                continue
            declared = predicates.declared_class_of(index)
            if declared is not None:
                violations.append(
                    self._at_token(
                        stream, index, title, PuppetResource.normalize(stream[declared].text),
                        path=node.path, code=self.class_code,
                    )
                )
                continue
            if predicates.is_declared_resource_type(index):
                resource_type = PuppetResource.normalize(stream[index].text)
                if resource_type in allowed:
                    continue
                violations.append(
                    self._at_token(
                        stream, index, title, resource_type,
                        path=node.path, code=self.resource_code,
                    )
                )
        return violations


class NodeTitleRule(StyleguideRule):
    """
    Rule for E7025-E7028: node titles are regexes anchored at the start, not
    at the end, and without the site TLD.

    The three regex problems are fixable; each fix touches only its own
    part of the regex so they can be applied one after another.
    """

    code: str = "E7025"
    start_code: str = "E7026"
    end_code: str = "E7027"
    tld_code: str = "E7028"
    description: str = "Node definitions must use a start-anchored regex without TLD."

    FIX_TYPES: ClassVar[dict[str, FixType]] = {
        "E7026": FixType.ANCHOR_START,
        "E7027": FixType.STRIP_END_ANCHOR,
        "E7028": FixType.STRIP_TLD,
    }

    @staticmethod
    def tld_pattern(tld: str) -> re.Pattern[str]:
        """A '.tld' label in regex source, escaped or not, not followed by more label characters."""
        return re.compile(r"(\\?\.)" + re.escape(tld) + r"(?![\w-])")

    @staticmethod
    def has_end_anchor(text: str) -> bool:
        return text.endswith("$") and not text.endswith("\\$")

    @property
    def fix_tags(self) -> dict[str, str]:
        """Fix tag (rule symbol) -> rule code, for the problems the registry marks fixable."""
        return {
            self._symbol_for(code): code
            for code in self.FIX_TYPES
            if RuleMsgBuilder.is_fixable(self._registry, code)
        }

    def _symbol_for(self, code: str) -> str:
        return RuleMsgBuilder.get_symbol(self._registry, code)

    def check(self, node: PuppetNode) -> list[Violation]:
        stream = node.stream
        violations: list[Violation] = []
        for index in node.title_indices:
            token = stream[index]
            if token.kind == TokenKind.REGEX:
                violations.extend(self._check_regex(node, index))
            elif token.text != NODE_DEFAULT_TITLE:
                violations.append(self._at_token(stream, index, token.text, path=node.path))
        return violations

    def _check_regex(self, node: PuppetNode, index: int) -> list[Violation]:
        stream = node.stream
        text = stream[index].text
        violations: list[Violation] = []
        if not text.startswith("^"):
            violations.append(self._fixable(stream, index, self.start_code, text, path=node.path))
        if self.has_end_anchor(text):
            violations.append(self._fixable(stream, index, self.end_code, text, path=node.path))
        for tld in self._config.node_disallowed_tlds:
            if self.tld_pattern(tld).search(text):
                violations.append(
                    self._fixable(stream, index, self.tld_code, tld, text, path=node.path)
                )
        return violations

    def _fixable(self, stream: TokenStream, index: int, code: str, *args: str, path: str) -> Violation:
        fix_tag = self._symbol_for(code) if RuleMsgBuilder.is_fixable(self._registry, code) else None
        return self._at_token(stream, index, *args, path=path, code=code, fix_tag=fix_tag)

    def fix(self, violation: Violation, stream: TokenStream) -> Edit:
        """Plan the Edit for one fixable node regex problem against the token's current text."""
        fix_type = self.FIX_TYPES.get(violation.code)
        if fix_type is None or violation.token_index is None:
            raise FixNotSupportedError(f"No fix for {violation.code} ({violation.fix_tag}).")
        token = stream[violation.token_index]
        if token.kind != TokenKind.REGEX:
            raise FixNotSupportedError(
                f"{violation.fix_tag} targets a {token.kind.value} token, not a regex."
            )
        text = token.text
        if fix_type == FixType.ANCHOR_START:
            replacement = text if text.startswith("^") else "^" + text
        elif fix_type == FixType.STRIP_END_ANCHOR:
            replacement = text
            while self.has_end_anchor(replacement):
                replacement = replacement[:-1]
        else:
            replacement = text
            for tld in self._config.node_disallowed_tlds:
                replacement = self.tld_pattern(tld).sub(r"\1", replacement)
        return Edit(
            token_index=violation.token_index,
            original=text,
            replacement=replacement,
            fix_type=fix_type,
        )
