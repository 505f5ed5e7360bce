"""Pytest configuration shared by the unit and functional suites.

pythonpath in pyproject.toml puts src/ and tests/ on sys.path, so the
test helpers (puppet_lexer, linter_test_utils) import as top-level modules.
"""

import pytest
from puppet_lexer import tokenize

from wmf_styleguide_linter.domain.config import ConfigurationLoader
from wmf_styleguide_linter.domain.predicates import TokenPredicates
from wmf_styleguide_linter.infrastructure.di.container import StyleguideContainer
from wmf_styleguide_linter.infrastructure.services.rule_registry_service import (
    RuleRegistryService,
)


@pytest.fixture
def registry() -> dict:
    """The packaged rule registry."""
    return RuleRegistryService().get_registry()


@pytest.fixture
def config() -> ConfigurationLoader:
    return ConfigurationLoader()


@pytest.fixture
def predicates_for(config):
    """Factory: TokenPredicates over a lexed manifest."""
    def _make(code: str) -> TokenPredicates:
        return TokenPredicates(tokenize(code), config)

    return _make


@pytest.fixture(autouse=True)
def _reset_container():
    yield
    StyleguideContainer.reset()
