"""system::role rules (E7009-E7011): the role declaration lives in roles, exactly once."""

from wmf_styleguide_linter.domain.resource import PuppetResource
from wmf_styleguide_linter.domain.rules import StyleguideRule, Violation


class NoSystemRoleRule(StyleguideRule):
    """Rule for E7009: only roles declare system::role."""

    code: str = "E7009"
    description: str = "system::role should only be declared in roles."

    def check(self, resource: PuppetResource) -> list[Violation]:
        resource_name = self._config.system_role_resource
        return [
            self._at_token(
                resource.stream, index, resource.type, resource.name, resource_name,
                path=resource.path,
            )
            for index in resource.find_resources(resource_name)
        ]


class SystemRoleOnceRule(StyleguideRule):
    """Rule for E7010: a role declares system::role exactly once."""

    code: str = "E7010"
    description: str = "A role declares system::role exactly once."

    def check(self, resource: PuppetResource) -> list[Violation]:
        resource_name = self._config.system_role_resource
        if len(resource.find_resources(resource_name)) == 1:
            return []
        return [self._at_declaration(resource.name, resource_name, path=resource.path)]


class RoleNoDefinesRule(StyleguideRule):
    """Rule for E7011: apart from system::role, roles declare no resources."""

    code: str = "E7011"
    description: str = "Roles should not declare defined types."

    def check(self, resource: PuppetResource) -> list[Violation]:
        allowed = set(resource.find_resources(self._config.system_role_resource))
        if all(index in allowed for index in resource.declared_resources):
            return []
        return [self._at_declaration(resource.name, path=resource.path)]
