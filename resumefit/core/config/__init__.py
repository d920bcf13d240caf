from .scoring import get_scoring_config, get_scoring_value, reset_scoring_config_cache
from .settings import Settings, load_settings, settings

__all__ = [
    "Settings",
    "settings",
    "load_settings",
    "get_scoring_config",
    "get_scoring_value",
    "reset_scoring_config_cache",
]
