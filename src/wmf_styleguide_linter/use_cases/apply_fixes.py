"""Autofix: resolve a problem's fix tag to its planner, plan the Edit, apply it to the stream."""

import logging
from collections.abc import Iterable

from wmf_styleguide_linter.domain.entities import Edit, Problem
from wmf_styleguide_linter.domain.rules import FixNotSupportedError, Fixable, Violation
from wmf_styleguide_linter.domain.tokens import TokenStream

logger = logging.getLogger(__name__)


class ApplyFixesUseCase:
    """
    Applies one fix per problem, after the diagnostic pass has completed.

    Only problems carrying a fix tag registered by a fixable rule can be
    fixed; anything else raises FixNotSupportedError rather than being
    skipped or applied to the wrong token.
    """

    def __init__(self, fixable_rules: Iterable[Fixable]) -> None:
        self._planners: dict[str, tuple[Fixable, str]] = {}
        for rule in fixable_rules:
            for tag, code in rule.fix_tags.items():
                self._planners[tag] = (rule, code)

    @property
    def fix_tags(self) -> frozenset[str]:
        return frozenset(self._planners)

    def _as_violation(self, problem: Problem | Violation) -> Violation:
        if isinstance(problem, Violation):
            tag = problem.fix_tag
            token_index = problem.token_index
        else:
            tag = problem.get("fix_tag")
            token_index = problem.get("token_index")
        if tag is None or tag not in self._planners:
            raise FixNotSupportedError(f"Problem is not fixable (fix tag: {tag!r}).")
        if token_index is None:
            raise FixNotSupportedError(f"Problem tagged {tag!r} does not point at a token.")
        if isinstance(problem, Violation):
            return problem
        _, code = self._planners[tag]
        return Violation(
            code=code,
            message=problem.get("message", ""),
            line=problem.get("line", 0),
            column=problem.get("column", 0),
            token_index=token_index,
            path=problem.get("path", ""),
            fix_tag=tag,
        )

    def plan(self, problem: Problem | Violation, stream: TokenStream) -> Edit:
        """Plan the Edit for ``problem`` without touching the stream."""
        violation = self._as_violation(problem)
        rule, _ = self._planners[str(violation.fix_tag)]
        return rule.fix(violation, stream)

    def execute(self, problem: Problem | Violation, stream: TokenStream) -> Edit:
        """Plan and apply the Edit for ``problem``; returns the applied Edit."""
        edit = self.plan(problem, stream)
        if not edit.is_noop:
            stream.apply(edit)
            logger.debug(
                "applied %s to token %d: %r -> %r",
                edit.fix_type.value, edit.token_index, edit.original, edit.replacement,
            )
        return edit
