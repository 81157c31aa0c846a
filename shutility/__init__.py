#!filepath: shutility/__init__.py

from .utils.logger import Logging, logs
from .config import AppConfig, settings, configure
from .utils.errors import (
    ErrorKind,
    ShellUtilityError,
    InvalidArgument,
    NotFound,
    PredicateFalse,
    ExternalOperationFailed,
    CallbackFailed,
    CommandFailed,
)
from .utils.array_utils import ArrayUtils
from .utils.collection_utils import CollectionUtils
from .utils.datetime_utils import DateUtils
from .utils.command import CommandCallback

__version__ = "0.1.0"

# alias 简化调用：array.contains(...) / collection.filter(...) / date.now()
array = ArrayUtils
collection = CollectionUtils
date = DateUtils

__all__ = [
    "logs", "Logging",
    "AppConfig", "settings", "configure",
    "array", "collection", "date",
    "ArrayUtils", "CollectionUtils", "DateUtils",
    "CommandCallback",
    "ErrorKind", "ShellUtilityError", "InvalidArgument", "NotFound",
    "PredicateFalse", "ExternalOperationFailed", "CallbackFailed", "CommandFailed",
]
