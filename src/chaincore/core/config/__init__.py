"""Configuration for chaincore.

Modules
-------
settings    ChaincoreSettings (pydantic-settings) and the cached get_settings()

Tags:
    chaincore, configuration

Doc-Types:
    package-overview
"""

from chaincore.core.config.settings import ChaincoreSettings, clear_settings_cache, get_settings

__all__ = ["ChaincoreSettings", "get_settings", "clear_settings_cache"]
