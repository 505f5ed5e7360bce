"""End-to-end styleguide runs over whole manifests: lex, index, check, fix, render."""

import pytest
from linter_test_utils import located, messages, run_check

CLASS_OK = """class foo {
      notice("foo!")
      include ::foo::configuration
      sysctl::setting { 'something':
          value => 10,
      }
}
"""

CLASS_KO = """class foo($t=hiera('foo::title')) {
       $msg = lookup( "foo::bar")
       notice($msg)
       notice($t)
       include ::passwords::redis
       class { 'bar': }
       validate_foobar($param)
       validate_re($param, '^.*$')
       hiera('foobar')
       hiera_hash('foobar')
       hiera_array('foobar')
}
"""

PROFILE_OK = """class profile::foobar (
      $test=lookup('profile::foobar::test'),
) {
      require ::profile::foo
      include ::passwords::redis
      class { '::bar': }
}
"""

PROFILE_KO = """class profile::fixme (
      $test1,
      $test2=hiera('profile::foobar::foo')
      $test3=hiera_array('profile::foobar::foo')
      $test4=hiera_hash('profile::foobar::foo')
) {
    include ::apache2::common
    $role = lookup('role')
    system::role { $role: }
}
"""

ROLE_OK = """class role::fizzbuz {
      include ::profile::base
      include ::profile::bar
      system::role { 'fizzbuzz': }
}
"""

ROLE_KO = """class role::fixme () {
      include ::monitoring::host
      include ::profile::base
      class { '::role::something': }
}
"""

DEFINE_OK = """define foo::bar (
       sysctl::setting { 'test': }
       file { 'something':
          content => template('something.erb')
       }
)
"""

DEFINE_KO = """define foo::fixme ($a=hiera('something')) {
       include ::foo
       class { '::bar': }
       validate_foobar($param)
       validate_re($param, '^.*$')
       hiera('foobar')
       hiera_hash('foobar')
       hiera_array('foobar')
}
"""

NODE_OK = r"""node /^test1.*\.eqiad\./ {
     role(spare::system)
}
"""

NODE_OK_WIKIMEDIA = r"""node /^test1.*\.wikimedia\./ {
     role(spare::system)
}
"""

NODE_DEFAULT = """node default {
     role(spare::system)
}
"""

NODE_KO = """node 'fixme' {
     include base::firewall
     interface::mapped { 'eth0':
        foo => 'bar'
     }
     lookup('foobar')
     hiera('foobar')
     hiera_array('foobar')
     hiera_hash('foobar')
}
"""

NODE_REGEX_WITH_WMF_TLD = r"""node /^test1.*\.eqiad\.wmnet/ {
     role(spare::system)
}
"""

NODE_REGEX_WITH_ORG_TLD = r"""node /^test1.*\.wikimedia\.org/ {
     role(spare::system)
}
"""

NODE_REGEX_MISSING_START = r"""node /test1.*\.eqiad\./ {
     role(spare::system)
}
"""

NODE_REGEX_WITH_END = r"""node /^test1.*\.eqiad\.wmnet$/ {
     role(spare::system)
}
"""

NODE_REGEX_FIXED = r"""node /^test1.*\.eqiad\./ {
     role(spare::system)
}
"""

DEPRECATION_KO = """define test() {
   base::service_unit{ 'test2': }
}
"""


@pytest.mark.parametrize(
    "code",
    [CLASS_OK, PROFILE_OK, ROLE_OK, DEFINE_OK, NODE_OK, NODE_OK_WIKIMEDIA, NODE_DEFAULT],
    ids=["class", "profile", "role", "define", "node", "node-wikimedia", "node-default"],
)
def test_correct_manifests_have_no_problems(code) -> None:
    problems, _ = run_check(code)
    assert problems == []


class TestClassWithErrors:
    def setup_method(self) -> None:
        self.problems, _ = run_check(CLASS_KO)
        self.located = located(self.problems)

    def test_hiera_and_lookup_calls(self) -> None:
        assert (
            "wmf-style: Found deprecated function (hiera) in class 'foo', use lookup instead", 1, 14
        ) in self.located
        assert ("wmf-style: Found lookup call in class 'foo' for 'foo::bar'", 2, 15) in self.located

    def test_included_and_declared_classes(self) -> None:
        assert (
            "wmf-style: class 'foo' includes passwords::redis from another module", 5, 16
        ) in self.located
        assert ("wmf-style: class 'foo' declares class bar from another module", 6, 16) in self.located

    def test_validate_functions(self) -> None:
        assert ("wmf-style: Found legacy function (validate_foobar) call in class 'foo'", 7, 8) in self.located
        assert ("wmf-style: Found legacy function (validate_re) call in class 'foo'", 8, 8) in self.located

    @pytest.mark.parametrize(
        ("function", "line"), [("hiera", 9), ("hiera_hash", 10), ("hiera_array", 11)]
    )
    def test_legacy_lookup_functions_in_body(self, function, line) -> None:
        message = f"wmf-style: Found deprecated function ({function}) in class 'foo', use lookup instead"
        assert (message, line, 8) in self.located

    def test_every_problem_is_an_error(self) -> None:
        assert len(self.problems) == 9
        assert {p["kind"] for p in self.problems} == {"error"}
        assert {p["check"] for p in self.problems} == {"wmf_styleguide"}


class TestProfileWithErrors:
    def setup_method(self) -> None:
        self.problems, _ = run_check(PROFILE_KO)
        self.located = located(self.problems)

    def test_parameters_without_lookup_defaults(self) -> None:
        assert (
            "wmf-style: Parameter 'test1' of class 'profile::fixme' has no call to lookup", 2, 7
        ) in self.located
        for line, name in [(3, "test2"), (4, "test3"), (5, "test4")]:
            assert (
                f"wmf-style: Parameter '{name}' of class 'profile::fixme' hiera is deprecated use lookup",
                line,
                7,
            ) in self.located

    def test_lookup_in_body(self) -> None:
        assert ("wmf-style: Found lookup call in class 'profile::fixme' for 'role'", 8, 13) in self.located

    def test_system_role_in_profile(self) -> None:
        assert (
            "wmf-style: class 'profile::fixme' declares system::role, which should only be used in roles",
            9,
            5,
        ) in self.located

    def test_non_profile_inclusion(self) -> None:
        assert (
            "wmf-style: profile 'profile::fixme' includes non-profile class apache2::common", 7, 13
        ) in self.located

    def test_legacy_calls_in_parameter_defaults_are_not_reported_twice(self) -> None:
        assert not any("Found deprecated function" in m for m in messages(self.problems))
        assert len(self.problems) == 7


def test_role_with_errors() -> None:
    problems, _ = run_check(ROLE_KO)
    assert messages(problems) == [
        "wmf-style: role 'role::fixme' includes monitoring::host which is neither a role nor a profile",
        "wmf-style: role 'role::fixme' should declare system::role once",
    ]
    assert (problems[1]["line"], problems[1]["column"]) == (1, 1)


class TestDefineWithErrors:
    def setup_method(self) -> None:
        self.problems, _ = run_check(DEFINE_KO)

    def test_hiera_in_parameters(self) -> None:
        first = self.problems[0]
        assert first["message"] == (
            "wmf-style: Found deprecated function (hiera) in defined type 'foo::fixme', use lookup instead"
        )
        assert first["line"] == 1

    def test_declares_class_from_another_module(self) -> None:
        found = [p for p in self.problems if "declares class" in p["message"]]
        assert [(p["message"], p["line"]) for p in found] == [
            ("wmf-style: defined type 'foo::fixme' declares class bar from another module", 3)
        ]

    def test_include_of_own_module_is_allowed(self) -> None:
        assert not any("includes" in m for m in messages(self.problems))

    def test_validate_and_legacy_lookups(self) -> None:
        result = located(self.problems)
        assert (
            "wmf-style: Found legacy function (validate_foobar) call in defined type 'foo::fixme'", 4, 8
        ) in result
        assert (
            "wmf-style: Found legacy function (validate_re) call in defined type 'foo::fixme'", 5, 8
        ) in result
        for function, line in [("hiera", 6), ("hiera_hash", 7), ("hiera_array", 8)]:
            assert (
                f"wmf-style: Found deprecated function ({function}) in defined type 'foo::fixme', use lookup instead",
                line,
                8,
            ) in result


def test_node_with_violations() -> None:
    problems, _ = run_check(NODE_KO)
    assert messages(problems) == [
        "wmf-style: node 'fixme' includes class base::firewall",
        "wmf-style: node 'fixme' declares interface::mapped",
        "wmf-style: node 'fixme' calls lookup function",
        "wmf-style: node 'fixme' calls legacy hiera function",
        "wmf-style: node 'fixme' calls legacy hiera_array function",
        "wmf-style: node 'fixme' calls legacy hiera_hash function",
        "wmf-style: node definition must use a regex, got: fixme",
    ]


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        (
            NODE_REGEX_WITH_WMF_TLD,
            r"wmf-style: node regex must not contain the '.wmnet' tld got: ^test1.*\.eqiad\.wmnet",
        ),
        (
            NODE_REGEX_WITH_ORG_TLD,
            r"wmf-style: node regex must not contain the '.org' tld got: ^test1.*\.wikimedia\.org",
        ),
        (
            NODE_REGEX_MISSING_START,
            r"wmf-style: node regex must match the start of the hostname with '^' got: test1.*\.eqiad\.",
        ),
        (
            NODE_REGEX_WITH_END,
            r"wmf-style: node regex must not match the end of the hostname with '$' got: ^test1.*\.eqiad\.wmnet$",
        ),
    ],
    ids=["wmnet", "org", "start", "end"],
)
def test_node_regex_violations(code, expected) -> None:
    problems, _ = run_check(code)
    assert expected in messages(problems)
    assert all(p["fix_tag"] for p in problems)


def test_define_with_deprecations() -> None:
    problems, _ = run_check(DEPRECATION_KO)
    assert messages(problems) == [
        "wmf-style: 'test' should not include the deprecated define 'base::service_unit'"
    ]


class TestWithFixEnabled:
    @pytest.mark.parametrize(
        "code",
        [NODE_REGEX_MISSING_START, NODE_REGEX_WITH_END, NODE_REGEX_WITH_WMF_TLD],
        ids=["start", "end", "tld"],
    )
    def test_node_regex_is_normalized(self, code) -> None:
        problems, manifest = run_check(code, fix=True)
        assert manifest == NODE_REGEX_FIXED
        assert {p["kind"] for p in problems} == {"fixed"}

    def test_fixed_manifest_checks_clean(self) -> None:
        _, manifest = run_check(NODE_REGEX_WITH_END, fix=True)
        problems, again = run_check(manifest, fix=True)
        assert problems == []
        assert again == manifest

    def test_unfixable_problems_leave_manifest_untouched(self) -> None:
        problems, manifest = run_check(NODE_KO, fix=True)
        assert manifest == NODE_KO
        assert {p["kind"] for p in problems} == {"error"}
