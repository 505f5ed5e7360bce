"""Rule engine: classify each indexed declaration and run the rule set for its layer."""

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from wmf_styleguide_linter.domain.entities import (
    Classification,
    DefinitionRecord,
    NodeRecord,
)
from wmf_styleguide_linter.domain.predicates import TokenPredicates
from wmf_styleguide_linter.domain.resource import PuppetNode, PuppetResource
from wmf_styleguide_linter.domain.rules import Checkable, Violation
from wmf_styleguide_linter.domain.rules.deprecation_rules import (
    DeprecatedDefineRule,
    LegacyValidateRule,
)
from wmf_styleguide_linter.domain.rules.inclusion_rules import (
    ClassDeclarationRule,
    ModuleIncludeRule,
    ProfileIncludeRule,
    RoleIncludeRule,
)
from wmf_styleguide_linter.domain.rules.lookup_rules import (
    LookupCallRule,
    ParameterLookupRule,
)
from wmf_styleguide_linter.domain.rules.node_rules import NodeBodyRule, NodeTitleRule
from wmf_styleguide_linter.domain.rules.system_role_rules import (
    NoSystemRoleRule,
    RoleNoDefinesRule,
    SystemRoleOnceRule,
)

if TYPE_CHECKING:
    from wmf_styleguide_linter.domain.config import ConfigurationLoader
    from wmf_styleguide_linter.domain.registry_types import RuleRegistryEntry
    from wmf_styleguide_linter.domain.tokens import TokenStream

logger = logging.getLogger(__name__)


class StyleguideRuleEngine:
    """
    Fixed dispatch table from Classification to an ordered rule list.

    Rules are independent: each inspects the resource view and returns its
    own violations, and no rule's result suppresses another's.
    """

    def __init__(
        self,
        config: "ConfigurationLoader",
        registry: Mapping[str, "RuleRegistryEntry"],
    ) -> None:
        self._config = config
        lookups = LookupCallRule(config, registry)
        module_include = ModuleIncludeRule(config, registry)
        class_declaration = ClassDeclarationRule(config, registry)
        no_system_role = NoSystemRoleRule(config, registry)
        self._node_title_rule = NodeTitleRule(config, registry)

        self._dispatch: dict[Classification, list[Checkable]] = {
            Classification.PROFILE: [
                ParameterLookupRule(config, registry),
                LookupCallRule(config, registry, allow_in_parameters=True),
                ProfileIncludeRule(config, registry),
                no_system_role,
            ],
            Classification.ROLE: [
                lookups,
                RoleIncludeRule(config, registry),
                SystemRoleOnceRule(config, registry),
                RoleNoDefinesRule(config, registry),
            ],
            Classification.CLASS: [
                lookups,
                module_include,
                class_declaration,
                no_system_role,
            ],
            Classification.DEFINED_TYPE: [
                lookups,
                module_include,
                class_declaration,
            ],
            Classification.NODE: [
                NodeBodyRule(config, registry),
                self._node_title_rule,
            ],
        }
        self._deprecation_rules: list[Checkable] = [
            LegacyValidateRule(config, registry),
            DeprecatedDefineRule(config, registry),
        ]

    @property
    def node_title_rule(self) -> NodeTitleRule:
        """The rule owning the fixable node regex problems."""
        return self._node_title_rule

    def rules_for(self, classification: Classification) -> list[Checkable]:
        return list(self._dispatch[classification])

    def check_definition(self, resource: PuppetResource) -> list[Violation]:
        classification = resource.classification
        violations: list[Violation] = []
        for rule in self._dispatch[classification]:
            if self._skips(rule, resource):
                continue
            violations.extend(rule.check(resource))
        for rule in self._deprecation_rules:
            violations.extend(rule.check(resource))
        return violations

    def _skips(self, rule: Checkable, resource: PuppetResource) -> bool:
        """Defines in the profile module may declare classes from any module."""
        return (
            isinstance(rule, ClassDeclarationRule)
            and resource.classification == Classification.DEFINED_TYPE
            and resource.module_name == self._config.profile_module
        )

    def check_node(self, node: PuppetNode) -> list[Violation]:
        violations: list[Violation] = []
        for rule in self._dispatch[Classification.NODE]:
            violations.extend(rule.check(node))
        return violations

    def evaluate(
        self,
        stream: "TokenStream",
        class_records: Iterable[DefinitionRecord],
        define_records: Iterable[DefinitionRecord],
        node_records: Iterable[NodeRecord],
    ) -> list[Violation]:
        """Classes, then defined types, then nodes; violations in emission order."""
        predicates = TokenPredicates(stream, self._config)
        violations: list[Violation] = []
        for record in class_records:
            violations.extend(self.check_definition(PuppetResource(record, predicates)))
        for record in define_records:
            violations.extend(self.check_definition(PuppetResource(record, predicates)))
        for record in node_records:
            violations.extend(self.check_node(PuppetNode(record, predicates)))
        logger.debug("styleguide evaluation produced %d violation(s)", len(violations))
        return violations
