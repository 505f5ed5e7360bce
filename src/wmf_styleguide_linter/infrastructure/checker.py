"""
Host plugin entry point - composition root for the styleguide check.
Lives in infrastructure as it creates the container and wires dependencies.
"""

from typing import Protocol

from wmf_styleguide_linter.domain.constants import CHECK_NAME
from wmf_styleguide_linter.infrastructure.di.container import StyleguideContainer
from wmf_styleguide_linter.use_cases.checks.styleguide import NotifySink, WmfStyleguideCheck


class CheckHost(Protocol):
    """The part of the host linter a plugin talks to."""

    def register_check(self, name: str, factory: "CheckFactory") -> None: ...


class CheckFactory(Protocol):
    def __call__(self, notify: NotifySink) -> WmfStyleguideCheck: ...


def register(host: CheckHost) -> None:
    """Register the styleguide check."""
    container = StyleguideContainer.get_instance()
    host.register_check(CHECK_NAME, container.create_check)
