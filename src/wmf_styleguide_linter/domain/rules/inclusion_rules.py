"""Class inclusion and declaration rules (E7005-E7008): cross-module coupling between layers."""

from wmf_styleguide_linter.domain.resource import PuppetResource
from wmf_styleguide_linter.domain.rules import StyleguideRule, Violation


class ProfileIncludeRule(StyleguideRule):
    """Rule for E7005: profiles include other profiles and a short allow-list only."""

    code: str = "E7005"
    description: str = "Profiles may only include profiles and allow-listed classes."

    def check(self, resource: PuppetResource) -> list[Violation]:
        allowed_classes = self._config.profile_include_classes
        allowed_modules = self._config.profile_include_modules
        violations: list[Violation] = []
        for index in resource.included_classes:
            class_name = PuppetResource.normalize(resource.stream[index].text)
            if class_name in allowed_classes:
                continue
            if PuppetResource.module_of(class_name) in allowed_modules:
                continue
            violations.append(
                self._at_token(resource.stream, index, resource.name, class_name, path=resource.path)
            )
        return violations


class RoleIncludeRule(StyleguideRule):
    """Rule for E7006: roles include only roles and profiles."""

    code: str = "E7006"
    description: str = "Roles may only include roles and profiles."

    def check(self, resource: PuppetResource) -> list[Violation]:
        allowed_modules = self._config.role_include_modules
        violations: list[Violation] = []
        for index in resource.included_classes:
            class_name = PuppetResource.normalize(resource.stream[index].text)
            if PuppetResource.module_of(class_name) in allowed_modules:
                continue
            violations.append(
                self._at_token(resource.stream, index, resource.name, class_name, path=resource.path)
            )
        return violations


class ModuleIncludeRule(StyleguideRule):
    """Rule for E7007: classes and defines include classes of their own module only."""

    code: str = "E7007"
    description: str = "Do not include classes from another module."

    def check(self, resource: PuppetResource) -> list[Violation]:
        violations: list[Violation] = []
        for index in resource.included_classes:
            class_name = PuppetResource.normalize(resource.stream[index].text)
            if PuppetResource.module_of(class_name) == resource.module_name:
                continue
            violations.append(
                self._at_token(
                    resource.stream, index, resource.type, resource.name, class_name,
                    path=resource.path,
                )
            )
        return violations


class ClassDeclarationRule(StyleguideRule):
    """
    Rule for E7008: classes and defines never declare classes from another module.

    A class that needs several such declarations should be a profile.
    """

    code: str = "E7008"
    description: str = "Do not declare classes from another module."

    def check(self, resource: PuppetResource) -> list[Violation]:
        violations: list[Violation] = []
        for index in resource.declared_classes:
            class_name = PuppetResource.normalize(resource.stream[index].text)
            if PuppetResource.module_of(class_name) == resource.module_name:
                continue
            violations.append(
                self._at_token(
                    resource.stream, index, resource.type, resource.name, class_name,
                    path=resource.path,
                )
            )
        return violations
