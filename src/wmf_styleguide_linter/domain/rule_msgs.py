"""Pure message-building from a registry dict. No I/O or infrastructure imports."""

from collections.abc import Mapping
from typing import cast

from wmf_styleguide_linter.domain.constants import MESSAGE_PREFIX, RULE_PREFIX
from wmf_styleguide_linter.domain.registry_types import RuleRegistryEntry


class RuleMsgBuilder:
    """Builds rule messages from a registry mapping keyed by 'wmf-style.<code>'."""

    @staticmethod
    def get_entry(
        registry: Mapping[str, RuleRegistryEntry], rule_code: str
    ) -> RuleRegistryEntry | None:
        """Return registry entry for a rule by code or symbol (public API)."""
        entry = registry.get(f"{RULE_PREFIX}{rule_code}")
        if isinstance(entry, dict):
            return cast(RuleRegistryEntry, dict(entry))
        for rid, e in registry.items():
            if not rid.startswith(RULE_PREFIX):
                continue
            if isinstance(e, dict) and e.get("symbol") == rule_code:
                return cast(RuleRegistryEntry, dict(e))
        return None

    @staticmethod
    def get_symbol(registry: Mapping[str, RuleRegistryEntry], rule_code: str) -> str:
        entry = RuleMsgBuilder.get_entry(registry, rule_code)
        if entry and entry.get("symbol"):
            return str(entry["symbol"])
        return rule_code

    @staticmethod
    def is_fixable(registry: Mapping[str, RuleRegistryEntry], rule_code: str) -> bool:
        entry = RuleMsgBuilder.get_entry(registry, rule_code)
        return bool(entry and entry.get("fixable"))

    @staticmethod
    def format_message(
        registry: Mapping[str, RuleRegistryEntry],
        rule_code: str,
        args: tuple[str, ...],
    ) -> str:
        """Render the rule's %-template with ``args``; ``code: args`` when no template exists."""
        entry = RuleMsgBuilder.get_entry(registry, rule_code)
        template = entry.get("message_template") if entry else None
        if not template:
            return f"{MESSAGE_PREFIX}{rule_code}: {', '.join(args)}"
        try:
            body = str(template) % args
        except (TypeError, ValueError):
            body = f"{template} ({', '.join(args)})"
        return f"{MESSAGE_PREFIX}{body}"

    @staticmethod
    def build_msgs_for_codes(
        registry: Mapping[str, RuleRegistryEntry], codes: list[str]
    ) -> dict[str, tuple[str, str, str]]:
        """Return { code: (message_template, symbol, description) } for the given codes.

        Codes without a message_template in the registry are skipped.
        """
        result: dict[str, tuple[str, str, str]] = {}
        for code in codes:
            entry = RuleMsgBuilder.get_entry(registry, code)
            if entry and entry.get("message_template"):
                msg = entry["message_template"]
                symbol = entry.get("symbol") or code
                desc = (
                    entry.get("display_name")
                    or entry.get("short_description")
                    or code
                )
                result[code] = (str(msg), str(symbol), str(desc))
        return result
