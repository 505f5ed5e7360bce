"""Data lookup rules (E7001-E7004): where lookup() and the legacy hiera functions may appear."""

from collections.abc import Mapping
from typing import TYPE_CHECKING

from wmf_styleguide_linter.domain.resource import PuppetResource
from wmf_styleguide_linter.domain.rules import StyleguideRule, Violation

if TYPE_CHECKING:
    from wmf_styleguide_linter.domain.config import ConfigurationLoader
    from wmf_styleguide_linter.domain.registry_types import RuleRegistryEntry


class LookupCallRule(StyleguideRule):
    """
    Rule for E7001/E7002: lookup or legacy hiera calls in a class or define.

    With ``allow_in_parameters`` (profiles) calls inside parameter defaults
    are left to ParameterLookupRule.
    """

    code: str = "E7001"
    legacy_code: str = "E7002"
    description: str = "Data lookups belong in profile parameters only."

    def __init__(
        self,
        config: "ConfigurationLoader",
        registry: Mapping[str, "RuleRegistryEntry"],
        allow_in_parameters: bool = False,
    ) -> None:
        super().__init__(config, registry)
        self._allow_in_parameters = allow_in_parameters

    def check(self, resource: PuppetResource) -> list[Violation]:
        skipped = resource.param_value_indices if self._allow_in_parameters else frozenset()
        violations: list[Violation] = []
        for index in resource.all_lookup_calls:
            if index in skipped:
                continue
            violations.append(self._report(resource, index))
        return violations

    def _report(self, resource: PuppetResource, index: int) -> Violation:
        stream = resource.stream
        if resource.predicates.is_legacy_lookup_call(index):
            return self._at_token(
                stream, index, stream[index].text, resource.type, resource.name,
                path=resource.path, code=self.legacy_code,
            )
        argument = resource.predicates.first_argument_text(index)
        return self._at_token(
            stream, index, resource.type, resource.name, argument, path=resource.path,
        )


class ParameterLookupRule(StyleguideRule):
    """Rule for E7003/E7004: every profile parameter defaults to a lookup() call."""

    code: str = "E7003"
    legacy_code: str = "E7004"
    description: str = "Profile parameters must default to lookup()."

    def check(self, resource: PuppetResource) -> list[Violation]:
        predicates = resource.predicates
        violations: list[Violation] = []
        for name, param in resource.params.items():
            if any(predicates.is_lookup_call(i) for i in param.value_indices):
                continue
            legacy = any(predicates.is_legacy_lookup_call(i) for i in param.value_indices)
            violations.append(
                self._at_token(
                    resource.stream, param.declaring_index, name, resource.name,
                    path=resource.path,
                    code=self.legacy_code if legacy else self.code,
                )
            )
        return violations
