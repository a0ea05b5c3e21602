"""
Custom exceptions for the xkpasswd passphrase generator.
"""

from typing import Optional


class XkpasswdError(Exception):
    """Base exception for xkpasswd errors"""
    pass


class ConfigError(XkpasswdError):
    """Error in configuration file or configuration value"""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        self.message = message
        if field:
            super().__init__(f"Invalid config '{field}': {message}")
        else:
            super().__init__(message)


class InvalidSettingsError(XkpasswdError):
    """Settings that cannot produce a password"""
    pass


class NoCandidatesError(XkpasswdError):
    """No dictionary words match the requested word lengths"""
    pass


class DictionaryNotFoundError(XkpasswdError):
    """Dictionary asset for a language is missing"""
    pass
