"""
Utility modules for xkpasswd.

``xkpasswd.utils.config`` depends on the core settings types and is imported
directly where needed.
"""

from .exceptions import (
    XkpasswdError,
    ConfigError,
    InvalidSettingsError,
    NoCandidatesError,
    DictionaryNotFoundError,
)
from .logger import Logger, debug
