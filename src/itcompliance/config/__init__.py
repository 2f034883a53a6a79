"""
itcompliance configuration.

Environment settings (ITCOMPLIANCE_ prefix, .env files) via pydantic-settings.
Policy threshold overrides live in a YAML file named by ``policy_file``.
"""

from itcompliance.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
