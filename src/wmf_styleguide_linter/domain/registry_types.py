from typing import TypedDict


class RuleRegistryEntry(TypedDict, total=False):
    symbol: str
    message_template: str
    short_description: str
    display_name: str
    applies_to: list[str]
    fixable: bool
