"""Errors raised by auth providers.

``get_auth_result`` maps the authentication errors to 401; configuration
errors surface at startup.
"""

from __future__ import annotations


class AuthProviderError(Exception):
    pass


class AuthenticationError(AuthProviderError):
    """The caller could not be identified."""


class TokenExpiredError(AuthenticationError):
    pass


class TokenInvalidError(AuthenticationError):
    """Bad signature, claims or scheme, or no token at all."""


class ConfigurationError(AuthProviderError):
    """The selected mode cannot run with the current settings."""
