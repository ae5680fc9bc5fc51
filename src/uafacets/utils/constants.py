"""uafacets Constants and Default Values."""

# Reserved family tokens
SPIDER = "spider"
SPIDER_DEVICE_FAMILY = "Spider"
OTHER = "Other"
UNKNOWN = "unknown"

# Literal rule version extraction
DEFAULT_VERSION_SEPARATOR = "/"
VERSION_DELIMITERS = " ;/,)"
MAX_LITERAL_VERSION_COMPONENTS = 3

# Highest capture group index usable in device replacement templates
MAX_TEMPLATE_GROUP = 9

# Result cache bounds
MIN_CACHE_SIZE = 1000
MAX_CACHE_SIZE = 150000

# Rule source sections
USER_AGENT_SECTION = "user_agent_parsers"
OS_SECTION = "os_parsers"
DEVICE_SECTION = "device_parsers"
MOBILE_USER_AGENT_FAMILIES = "mobile_user_agent_families"
MOBILE_OS_FAMILIES = "mobile_os_families"

REQUIRED_SECTIONS: tuple[str, ...] = (
    USER_AGENT_SECTION,
    OS_SECTION,
    DEVICE_SECTION,
)

# YAML key names per section, mapped onto RuleDescriptor fields
SECTION_KEY_MAP: dict[str, dict[str, str]] = {
    USER_AGENT_SECTION: {
        "family_replacement": "family_replacement",
        "v1_replacement": "v1_replacement",
        "v2_replacement": "v2_replacement",
    },
    OS_SECTION: {
        "os_replacement": "family_replacement",
        "os_v1_replacement": "v1_replacement",
        "os_v2_replacement": "v2_replacement",
        "os_v3_replacement": "v3_replacement",
        "os_v4_replacement": "v4_replacement",
    },
    DEVICE_SECTION: {
        "device_replacement": "family_replacement",
        "brand_replacement": "brand_replacement",
        "model_replacement": "model_replacement",
    },
}

# Bundled rule sets (file names inside uafacets/rules/)
RULE_SET_FULL = "full"
RULE_SET_MINIMAL = "minimal"

BUNDLED_RULE_FILES: dict[str, str] = {
    RULE_SET_FULL: "regexes.yaml",  # precise, regex-only, slower
    RULE_SET_MINIMAL: "regexes.minimal.yaml",  # literal rules first, faster
}
