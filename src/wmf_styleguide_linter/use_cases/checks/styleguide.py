"""WMF styleguide check (E7001-E7028). Thin: delegates to StyleguideRuleEngine."""

import logging
from collections.abc import Callable, Iterable, Mapping

from wmf_styleguide_linter.domain.config import ConfigurationLoader
from wmf_styleguide_linter.domain.constants import CHECK_NAME, DEFAULT_SEVERITY
from wmf_styleguide_linter.domain.entities import DefinitionRecord, Edit, Problem
from wmf_styleguide_linter.domain.indexes import DefinitionIndexer, NodeBlockScanner
from wmf_styleguide_linter.domain.registry_types import RuleRegistryEntry
from wmf_styleguide_linter.domain.rule_msgs import RuleMsgBuilder
from wmf_styleguide_linter.domain.rules import FixNotSupportedError, Violation
from wmf_styleguide_linter.domain.tokens import TokenStream
from wmf_styleguide_linter.use_cases.apply_fixes import ApplyFixesUseCase
from wmf_styleguide_linter.use_cases.check_styleguide import StyleguideRuleEngine

logger = logging.getLogger(__name__)

NotifySink = Callable[[str, Problem], None]


class WmfStyleguideCheck:
    """
    Per-file entry point called by the host.

    ``evaluate`` runs every rule over one token stream and reports each
    violation through ``notify``; ``fix`` repairs one previously reported
    problem in the stream that was last evaluated.
    """

    name: str = CHECK_NAME
    CODES = [
        "E7001", "E7002", "E7003", "E7004", "E7005", "E7006", "E7007",
        "E7008", "E7009", "E7010", "E7011", "E7012", "E7013",
        "E7020", "E7021", "E7022", "E7023", "E7024", "E7025", "E7026",
        "E7027", "E7028",
    ]

    def __init__(
        self,
        notify: NotifySink,
        config: ConfigurationLoader,
        registry: Mapping[str, RuleRegistryEntry],
        engine: StyleguideRuleEngine | None = None,
    ) -> None:
        self.msgs = RuleMsgBuilder.build_msgs_for_codes(registry, self.CODES)
        self._notify = notify
        self.config_loader = config
        self._engine = engine or StyleguideRuleEngine(config, registry)
        self._fixer = ApplyFixesUseCase([self._engine.node_title_rule])
        self._stream: TokenStream | None = None

    @property
    def engine(self) -> StyleguideRuleEngine:
        return self._engine

    @property
    def stream(self) -> TokenStream | None:
        """The token stream of the last evaluated file."""
        return self._stream

    def evaluate(
        self,
        stream: TokenStream,
        class_records: Iterable[DefinitionRecord] | None = None,
        define_records: Iterable[DefinitionRecord] | None = None,
        path: str = "",
        filename: str = "",
    ) -> list[Violation]:
        """Check one file. Records not supplied by the host are indexed from the stream."""
        self._stream = stream
        indexer = DefinitionIndexer(path, filename)
        if class_records is None:
            class_records = indexer.class_indexes(stream)
        if define_records is None:
            define_records = indexer.defined_type_indexes(stream)
        node_records = NodeBlockScanner(path, filename).scan(stream)

        violations = self._engine.evaluate(stream, class_records, define_records, node_records)
        for violation in violations:
            self._notify(DEFAULT_SEVERITY, violation.to_problem())
        logger.debug("%s: %d problem(s)", path or filename or "<stream>", len(violations))
        return violations

    def fix(self, problem: Problem | Violation) -> Edit:
        """Apply the fix for one reported problem to the last evaluated stream."""
        if self._stream is None:
            raise FixNotSupportedError("No token stream has been evaluated yet.")
        return self._fixer.execute(problem, self._stream)
