from config.bootstrap import ClientBootstrap
from config.log_setup import configure_logging
from config.settings import ConfigurationError, Settings, load_settings

__all__ = [
    "ClientBootstrap",
    "ConfigurationError",
    "Settings",
    "configure_logging",
    "load_settings",
]
