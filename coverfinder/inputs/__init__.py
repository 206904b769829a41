# coverfinder/inputs/__init__.py
from .settings import DEFAULT_ENV_PREFIX, SettingsLoader, credentials_from_env, load_settings

__all__ = [
    "DEFAULT_ENV_PREFIX",
    "SettingsLoader",
    "load_settings",
    "credentials_from_env",
]
