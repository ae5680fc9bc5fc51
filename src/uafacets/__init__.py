"""
uafacets: rule-based User-Agent classification.

Splits a raw User-Agent string into user agent (client), operating system
and device facets using an ordered, first-match-wins rule set.
"""

from .classifier import DeviceClassifier, OSClassifier, UserAgentClassifier
from .cache import ResultCache
from .config import ParserConfig, get_parser_config
from .exceptions import ConfigurationError, RuleCompilationError, RuleSourceError
from .models import OS, Client, Device, UserAgent
from .parser import Parser, classify, get_parser
from .rules import RuleDescriptor, RuleKind, RuleSource

__version__ = '1.0.0'

__all__ = [
    'Parser',
    'classify',
    'get_parser',
    'Client',
    'UserAgent',
    'OS',
    'Device',
    'UserAgentClassifier',
    'OSClassifier',
    'DeviceClassifier',
    'ResultCache',
    'ParserConfig',
    'get_parser_config',
    'RuleDescriptor',
    'RuleKind',
    'RuleSource',
    'ConfigurationError',
    'RuleSourceError',
    'RuleCompilationError',
]
