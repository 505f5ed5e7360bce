from dataclasses import dataclass, field
from enum import Enum
from typing import TypedDict


class ResourceKind(Enum):
    """Kinds of indexed declarations."""
    CLASS = "class"
    DEFINED_TYPE = "defined type"
    NODE = "node"


class Classification(Enum):
    """Rule-set selector for an indexed declaration."""
    PROFILE = "profile"
    ROLE = "role"
    CLASS = "class"
    DEFINED_TYPE = "defined type"
    NODE = "node"


@dataclass(frozen=True)
class DefinitionRecord:
    """
    A class or defined type carved out of the token stream.

    ``start``/``end`` are inclusive stream indices running from the
    declaration keyword to its closing brace. ``param_span`` is the
    half-open range of tokens between the parameter parentheses.
    """
    kind: ResourceKind
    start: int
    end: int
    name_index: int
    param_span: tuple[int, int] | None = None
    inherited_index: int | None = None
    path: str = ""
    filename: str = ""

    @property
    def token_indices(self) -> range:
        return range(self.start, self.end + 1)

    @property
    def param_indices(self) -> range:
        if self.param_span is None:
            return range(0)
        return range(*self.param_span)


@dataclass(frozen=True)
class NodeRecord:
    """A node block: NODE keyword through the matching closing brace."""
    start: int
    end: int
    title_indices: tuple[int, ...] = ()
    path: str = ""
    filename: str = ""

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.NODE

    @property
    def token_indices(self) -> range:
        return range(self.start, self.end + 1)


@dataclass
class Parameter:
    """One declared parameter: its VARIABLE token and the code tokens of its default."""
    declaring_index: int
    value_indices: list[int] = field(default_factory=list)


class FixType(Enum):
    """Token-level repairs the autofix knows how to plan."""
    ANCHOR_START = "anchor_start"
    STRIP_END_ANCHOR = "strip_end_anchor"
    STRIP_TLD = "strip_tld"


@dataclass(frozen=True)
class Edit:
    """
    Pure description of a token text replacement.

    Returned by the fix planner instead of mutating the token; the owner of
    the TokenStream applies it.
    """
    token_index: int
    original: str
    replacement: str
    fix_type: FixType

    @property
    def is_noop(self) -> bool:
        return self.original == self.replacement


class Problem(TypedDict, total=False):
    """Payload handed to the host's notify sink."""
    message: str
    line: int
    column: int
    fix_tag: str | None
    token_index: int | None
    check: str
    path: str
