"""Domain models for rules and violations."""

from collections.abc import Mapping
from dataclasses import dataclass

__all__ = [
    "Checkable",
    "FixNotSupportedError",
    "Fixable",
    "StyleguideRule",
    "Violation",
]

from typing import TYPE_CHECKING, Protocol

from wmf_styleguide_linter.domain.constants import (
    CHECK_NAME,
    PLACEHOLDER_COLUMN,
    PLACEHOLDER_LINE,
)
from wmf_styleguide_linter.domain.rule_msgs import RuleMsgBuilder

if TYPE_CHECKING:
    from wmf_styleguide_linter.domain.config import ConfigurationLoader
    from wmf_styleguide_linter.domain.entities import Edit, Problem
    from wmf_styleguide_linter.domain.registry_types import RuleRegistryEntry
    from wmf_styleguide_linter.domain.tokens import TokenStream


class FixNotSupportedError(ValueError):
    """Raised when a fix is requested for a violation no planner handles."""


@dataclass(frozen=True)
class Violation:
    """A rule violation with code, message, position and optional fix tag."""

    code: str
    message: str
    line: int
    column: int
    token_index: int | None = None
    path: str = ""
    fix_tag: str | None = None
    message_args: tuple[str, ...] | None = None
    """Arguments the message template was rendered with."""

    @classmethod
    def from_token(
        cls,
        *,
        code: str,
        message: str,
        stream: "TokenStream",
        index: int,
        path: str = "",
        fix_tag: str | None = None,
        message_args: tuple[str, ...] | None = None,
    ) -> "Violation":
        """Build a Violation positioned at a stream token. Prefer over manual line=/column=."""
        token = stream[index]
        return cls(
            code=code,
            message=message,
            line=token.line,
            column=token.column,
            token_index=index,
            path=path,
            fix_tag=fix_tag,
            message_args=message_args,
        )

    @classmethod
    def for_declaration(
        cls,
        *,
        code: str,
        message: str,
        path: str = "",
        message_args: tuple[str, ...] | None = None,
    ) -> "Violation":
        """A violation of the declaration as a whole, reported at the placeholder position."""
        return cls(
            code=code,
            message=message,
            line=PLACEHOLDER_LINE,
            column=PLACEHOLDER_COLUMN,
            path=path,
            message_args=message_args,
        )

    def to_problem(self) -> "Problem":
        """Payload for the host's notify sink."""
        return {
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "fix_tag": self.fix_tag,
            "token_index": self.token_index,
            "check": CHECK_NAME,
            "path": self.path,
        }


# -----------------------------------------------------------------------------
# Rule protocols: Checkable (inspect a resource, return violations) and
# Fixable (plan a token Edit for a violation it produced).
# -----------------------------------------------------------------------------


class Checkable(Protocol):
    """One-and-done check: given a resource, return violations."""

    code: str
    description: str

    def check(self, resource: object) -> list[Violation]:
        """Interrogate a resource for styleguide breaches."""
        ...


class Fixable(Protocol):
    """Optional capability: rule can plan a deterministic token edit."""

    @property
    def fix_tags(self) -> dict[str, str]:
        """Fix tag -> rule code for every problem this rule can repair."""
        ...

    def fix(self, violation: Violation, stream: "TokenStream") -> "Edit":
        """Return the Edit resolving ``violation`` against the current token text."""
        ...


class StyleguideRule:
    """
    Shared plumbing for registry-backed rules: message rendering and
    Violation construction. Subclasses set ``code``/``description`` and
    implement ``check``.
    """

    code: str = ""
    description: str = ""

    def __init__(
        self,
        config: "ConfigurationLoader",
        registry: Mapping[str, "RuleRegistryEntry"],
    ) -> None:
        self._config = config
        self._registry = registry

    @property
    def symbol(self) -> str:
        return RuleMsgBuilder.get_symbol(self._registry, self.code)

    def _message(self, *args: str, code: str | None = None) -> str:
        return RuleMsgBuilder.format_message(self._registry, code or self.code, args)

    def _at_token(
        self,
        stream: "TokenStream",
        index: int,
        *args: str,
        path: str = "",
        fix_tag: str | None = None,
        code: str | None = None,
    ) -> Violation:
        return Violation.from_token(
            code=code or self.code,
            message=self._message(*args, code=code),
            stream=stream,
            index=index,
            path=path,
            fix_tag=fix_tag,
            message_args=args,
        )

    def _at_declaration(self, *args: str, path: str = "") -> Violation:
        return Violation.for_declaration(
            code=self.code,
            message=self._message(*args),
            path=path,
            message_args=args,
        )
