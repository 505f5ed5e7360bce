"""
Check identity, message prefixes and the styleguide defaults: module names,
lookup functions, rule allow-lists and placeholder positions.
"""

CHECK_NAME: str = "wmf_styleguide"
MESSAGE_PREFIX: str = "wmf-style: "
RULE_PREFIX: str = "wmf-style."
DEFAULT_SEVERITY: str = "error"

DEFAULT_PROFILE_MODULE: str = "profile"
DEFAULT_ROLE_MODULE: str = "role"
DEFAULT_SYSTEM_ROLE_RESOURCE: str = "system::role"

DEFAULT_LOOKUP_FUNCTION: str = "lookup"
DEFAULT_LEGACY_LOOKUP_FUNCTIONS: tuple[str, ...] = ("hiera", "hiera_array", "hiera_hash")
DEFAULT_LEGACY_VALIDATE_PREFIX: str = "validate_"
INCLUDE_KEYWORDS: frozenset[str] = frozenset({"include", "require", "contain"})

# Profiles may include other profiles plus these modules and classes.
DEFAULT_PROFILE_INCLUDE_MODULES: tuple[str, ...] = ("passwords",)
DEFAULT_PROFILE_INCLUDE_CLASSES: tuple[str, ...] = (
    "lvs::configuration",
    "network::constants",
)

DEFAULT_DEPRECATED_DEFINES: tuple[str, ...] = ("base::service_unit",)
DEFAULT_NODE_ALLOWED_RESOURCES: tuple[str, ...] = ("interface::add_ip6_mapped",)
DEFAULT_NODE_DISALLOWED_TLDS: tuple[str, ...] = ("wmnet", "org")

# Node title that matches every host; exempt from the regex requirement.
NODE_DEFAULT_TITLE: str = "default"

# Whole-declaration violations have no single token to point at.
PLACEHOLDER_LINE: int = 1
PLACEHOLDER_COLUMN: int = 1

CONFIG_SECTION: str = "wmf-styleguide"
