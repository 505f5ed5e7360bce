"""Deprecation rules (E7012, E7013)."""

from wmf_styleguide_linter.domain.resource import PuppetResource
from wmf_styleguide_linter.domain.rules import StyleguideRule, Violation


class LegacyValidateRule(StyleguideRule):
    """Rule for E7012: stdlib validate_* functions are deprecated in favour of data types."""

    code: str = "E7012"
    description: str = "Do not call legacy validate_* functions."

    def check(self, resource: PuppetResource) -> list[Violation]:
        stream = resource.stream
        return [
            self._at_token(
                stream, index, stream[index].text, resource.type, resource.name,
                path=resource.path,
            )
            for index in resource.legacy_validate_calls
        ]


class DeprecatedDefineRule(StyleguideRule):
    """Rule for E7013: deprecated defined types must not be declared."""

    code: str = "E7013"
    description: str = "Do not declare deprecated defined types."

    def check(self, resource: PuppetResource) -> list[Violation]:
        violations: list[Violation] = []
        for deprecated in self._config.deprecated_defines:
            for index in resource.find_resources(deprecated):
                violations.append(
                    self._at_token(
                        resource.stream, index, resource.name, resource.stream[index].text,
                        path=resource.path,
                    )
                )
        return violations
