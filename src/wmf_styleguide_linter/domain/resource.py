"""Read-only view over an indexed class or defined type."""

from functools import cached_property

from wmf_styleguide_linter.domain.entities import (
    Classification,
    DefinitionRecord,
    NodeRecord,
    Parameter,
    ResourceKind,
)
from wmf_styleguide_linter.domain.params import ParameterParser
from wmf_styleguide_linter.domain.predicates import TokenPredicates
from wmf_styleguide_linter.domain.tokens import TokenStream


class PuppetResource:
    """
    Wraps a DefinitionRecord and derives the facts rules ask about: its
    name and module, its classification, its parameters and the calls,
    inclusions and declarations appearing inside it.
    """

    def __init__(self, record: DefinitionRecord, predicates: TokenPredicates) -> None:
        self._record = record
        self._predicates = predicates
        self._config = predicates.config

    @staticmethod
    def normalize(name: str) -> str:
        """Strip a leading top-scope '::'."""
        return name[2:] if name.startswith("::") else name

    @staticmethod
    def module_of(name: str) -> str:
        """First '::' segment of a normalized name."""
        return PuppetResource.normalize(name).split("::")[0]

    @property
    def record(self) -> DefinitionRecord:
        return self._record

    @property
    def stream(self) -> TokenStream:
        return self._predicates.stream

    @property
    def predicates(self) -> TokenPredicates:
        return self._predicates

    @property
    def path(self) -> str:
        return self._record.path

    @property
    def filename(self) -> str:
        return self._record.filename

    @property
    def is_class(self) -> bool:
        return self._record.kind == ResourceKind.CLASS

    @property
    def type(self) -> str:
        """Label used in messages: 'class' or 'defined type'."""
        return self._record.kind.value

    @cached_property
    def name(self) -> str:
        return self.normalize(self.stream[self._record.name_index].text)

    @property
    def module_name(self) -> str:
        return self.name.split("::")[0]

    @property
    def is_profile(self) -> bool:
        return self.is_class and self.module_name == self._config.profile_module

    @property
    def is_role(self) -> bool:
        return self.is_class and self.module_name == self._config.role_module

    @property
    def classification(self) -> Classification:
        if not self.is_class:
            return Classification.DEFINED_TYPE
        if self.is_profile:
            return Classification.PROFILE
        if self.is_role:
            return Classification.ROLE
        return Classification.CLASS

    @cached_property
    def params(self) -> dict[str, Parameter]:
        return ParameterParser.parse(self.stream, self._record.param_indices)

    @cached_property
    def param_value_indices(self) -> frozenset[int]:
        """Every token index lying in some parameter's default value."""
        return frozenset(i for p in self.params.values() for i in p.value_indices)

    def _select(self, predicate) -> list[int]:
        return [i for i in self._record.token_indices if predicate(i)]

    @cached_property
    def lookup_calls(self) -> list[int]:
        return self._select(self._predicates.is_lookup_call)

    @cached_property
    def legacy_hiera_calls(self) -> list[int]:
        return self._select(self._predicates.is_legacy_lookup_call)

    @cached_property
    def all_lookup_calls(self) -> list[int]:
        """Current and legacy lookup calls, in stream order."""
        return self._select(self._predicates.is_any_lookup_call)

    @cached_property
    def legacy_validate_calls(self) -> list[int]:
        return self._select(self._predicates.is_legacy_validate_call)

    @cached_property
    def included_classes(self) -> list[int]:
        found = (self._predicates.included_class_of(i) for i in self._record.token_indices)
        return [i for i in found if i is not None]

    @cached_property
    def declared_classes(self) -> list[int]:
        found = (self._predicates.declared_class_of(i) for i in self._record.token_indices)
        return [i for i in found if i is not None]

    @cached_property
    def declared_resources(self) -> list[int]:
        return self._select(self._predicates.is_declared_resource_type)

    def find_resources(self, type_name: str) -> list[int]:
        """Declarations of the resource type ``type_name`` inside this resource."""
        return [
            i for i in self.declared_resources
            if self.normalize(self.stream[i].text) == type_name
        ]


class PuppetNode:
    """View over a NodeRecord: its match title and the tokens of its block."""

    def __init__(self, record: NodeRecord, predicates: TokenPredicates) -> None:
        self._record = record
        self._predicates = predicates

    @property
    def record(self) -> NodeRecord:
        return self._record

    @property
    def stream(self) -> TokenStream:
        return self._predicates.stream

    @property
    def predicates(self) -> TokenPredicates:
        return self._predicates

    @property
    def path(self) -> str:
        return self._record.path

    @property
    def classification(self) -> Classification:
        return Classification.NODE

    @property
    def title_indices(self) -> tuple[int, ...]:
        return self._record.title_indices

    @property
    def title(self) -> str:
        """Title token texts joined with ', ' as shown in messages."""
        return ", ".join(self.stream[i].text for i in self._record.title_indices)

    @property
    def token_indices(self) -> range:
        return self._record.token_indices
