"""Unit tests for the class inclusion and declaration rules (E7005-E7008)."""

from linter_test_utils import resource_for

from wmf_styleguide_linter.domain.config import ConfigurationLoader
from wmf_styleguide_linter.domain.rules.inclusion_rules import (
    ClassDeclarationRule,
    ModuleIncludeRule,
    ProfileIncludeRule,
    RoleIncludeRule,
)


def _messages(violations) -> list[str]:
    return [v.message for v in violations]


class TestProfileIncludeRule:
    CODE = """class profile::foo {
  include ::profile::bar
  include passwords::mysql
  require ::lvs::configuration
  include network::constants
  contain ::apache2::common
  include lvs::realserver
}
"""

    def test_allow_list(self, registry) -> None:
        violations = ProfileIncludeRule(ConfigurationLoader(), registry).check(resource_for(self.CODE))
        assert _messages(violations) == [
            "wmf-style: profile 'profile::foo' includes non-profile class apache2::common",
            "wmf-style: profile 'profile::foo' includes non-profile class lvs::realserver",
        ]
        assert [(v.line, v.column) for v in violations] == [(6, 11), (7, 11)]

    def test_configured_allow_list(self, registry) -> None:
        config_dict = {"profile_include_modules": ["apache2", "lvs"]}
        rule = ProfileIncludeRule(ConfigurationLoader(config_dict), registry)
        violations = rule.check(resource_for(self.CODE, config_dict))
        assert _messages(violations) == [
            "wmf-style: profile 'profile::foo' includes non-profile class passwords::mysql"
        ]


class TestRoleIncludeRule:
    def test_roles_and_profiles_only(self, registry) -> None:
        code = "class role::foo {\n  include ::role::bar\n  include profile::a\n  include ::monitoring::host\n}\n"
        violations = RoleIncludeRule(ConfigurationLoader(), registry).check(resource_for(code))
        assert _messages(violations) == [
            "wmf-style: role 'role::foo' includes monitoring::host which is neither a role nor a profile"
        ]


class TestModuleIncludeRule:
    def test_own_module_only(self, registry) -> None:
        code = "class foo::bar {\n  include foo\n  include ::foo::baz\n  include ::passwords::redis\n}\n"
        violations = ModuleIncludeRule(ConfigurationLoader(), registry).check(resource_for(code))
        assert _messages(violations) == [
            "wmf-style: class 'foo::bar' includes passwords::redis from another module"
        ]

    def test_defined_type_label(self, registry) -> None:
        code = "define foo::d () {\n  include bar\n}\n"
        violations = ModuleIncludeRule(ConfigurationLoader(), registry).check(resource_for(code))
        assert _messages(violations) == ["wmf-style: defined type 'foo::d' includes bar from another module"]


class TestClassDeclarationRule:
    def test_other_module_declarations(self, registry) -> None:
        code = "class foo {\n  class { 'foo::params': }\n  class { '::bar': }\n}\n"
        violations = ClassDeclarationRule(ConfigurationLoader(), registry).check(resource_for(code))
        assert _messages(violations) == ["wmf-style: class 'foo' declares class bar from another module"]
        assert (violations[0].line, violations[0].column) == (3, 11)

    def test_single_segment_declaration_in_submodule_class(self, registry) -> None:
        code = "class foo::fixme {\n  class { '::bar': }\n}\n"
        violations = ClassDeclarationRule(ConfigurationLoader(), registry).check(resource_for(code))
        assert violations[0].message_args == ("class", "foo::fixme", "bar")
