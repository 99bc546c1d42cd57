"""
Configuration module for spacer options and timezone resolution.
"""

from .spacer_config import DEFAULT_CONFIG, SpacerConfig, create_config, get_spacer_config
from .timezone import parse_timezone, resolve_timezone

__all__ = [
    "DEFAULT_CONFIG",
    "SpacerConfig",
    "create_config",
    "get_spacer_config",
    "parse_timezone",
    "resolve_timezone",
]
