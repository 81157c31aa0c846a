#!filepath: shutility/config/__init__.py
from .app_config import AppConfig, settings, configure
from .array_config import ArrayConfig, Collation
from .date_config import DateConfig
from .log_config import LogConfig

__all__ = [
    "AppConfig", "settings", "configure",
    "ArrayConfig", "Collation",
    "DateConfig",
    "LogConfig",
]
