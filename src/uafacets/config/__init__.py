"""
uafacets Configuration Module

Key components:
    - ParserConfig: cache bounds and rule set selection
    - get_parser_config(): process-wide config built from UAFACETS_* env vars
"""

from .parser_config import (
    ENV_PREFIX,
    ParserConfig,
    get_parser_config,
    set_parser_config,
)

__all__ = [
    "ENV_PREFIX",
    "ParserConfig",
    "get_parser_config",
    "set_parser_config",
]
